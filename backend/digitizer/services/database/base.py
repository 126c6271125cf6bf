"""
Abstract base class for document store adapters.
All store implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ...models.document import NewspaperDocument


class DatabaseInterface(ABC):
    """
    Abstract interface for the processed-document store.
    The store is the only shared mutable state in the service; adapters are
    responsible for serializing their own mutations.
    """

    @abstractmethod
    async def create_document(self, document: NewspaperDocument) -> NewspaperDocument:
        """Append a new document record."""
        pass

    @abstractmethod
    async def get_document(self, doc_id: str) -> Optional[NewspaperDocument]:
        """Get a document by ID."""
        pass

    @abstractmethod
    async def get_all_documents(self) -> List[NewspaperDocument]:
        """Get all documents in insertion order."""
        pass

    @abstractmethod
    async def update_document(self, doc_id: str, updates: Dict[str, Any]) -> Optional[NewspaperDocument]:
        """Replace the given attributes of a document. None if the id is unknown."""
        pass

    @abstractmethod
    async def delete_document(self, doc_id: str) -> Optional[NewspaperDocument]:
        """Remove a document and return the removed record (None if unknown)."""
        pass

    @abstractmethod
    async def search_documents(self, query: Optional[str]) -> List[NewspaperDocument]:
        """Case-insensitive substring search over every text field."""
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize the store (load files, create directories, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close the store."""
        pass

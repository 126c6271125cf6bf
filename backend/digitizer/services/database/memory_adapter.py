"""
In-memory adapter implementing DatabaseInterface.
Stores processed documents for the lifetime of the process; data is lost on restart.
"""
import asyncio
from typing import Any, Dict, List, Optional

from .base import DatabaseInterface
from ...models.document import NewspaperDocument
from ...utils.search_utils import matches_query, normalize_query
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class MemoryAdapter(DatabaseInterface):
    """
    In-memory document store.
    Documents are kept in an insertion-ordered dict keyed by id; every
    mutation runs under one asyncio.Lock and callers only ever see copies.
    """

    def __init__(self):
        self._documents: Dict[str, NewspaperDocument] = {}
        self._lock = asyncio.Lock()

    async def initialize(self):
        """Initialize store (clears any existing data)."""
        async with self._lock:
            self._documents.clear()

    async def close(self):
        """Close store (no-op for in-memory)."""
        pass

    async def create_document(self, document: NewspaperDocument) -> NewspaperDocument:
        """Append a new document record."""
        async with self._lock:
            if document.id in self._documents:
                logger.warning(f"Document id collision for {document.id}, replacing existing record")
            snapshot = dict(self._documents)
            self._documents[document.id] = document.model_copy(deep=True)
            await self._commit(snapshot)
            return document.model_copy(deep=True)

    async def get_document(self, doc_id: str) -> Optional[NewspaperDocument]:
        """Get a document by ID."""
        doc = self._documents.get(doc_id)
        return doc.model_copy(deep=True) if doc else None

    async def get_all_documents(self) -> List[NewspaperDocument]:
        """Get all documents in insertion order."""
        return [doc.model_copy(deep=True) for doc in list(self._documents.values())]

    async def update_document(self, doc_id: str, updates: Dict[str, Any]) -> Optional[NewspaperDocument]:
        """Replace the given attributes of a document."""
        async with self._lock:
            doc = self._documents.get(doc_id)
            if doc is None:
                return None
            snapshot = dict(self._documents)
            updated = doc.model_copy(update=updates, deep=True)
            self._documents[doc_id] = updated
            await self._commit(snapshot)
            return updated.model_copy(deep=True)

    async def delete_document(self, doc_id: str) -> Optional[NewspaperDocument]:
        """Delete a document and return it."""
        async with self._lock:
            snapshot = dict(self._documents)
            removed = self._documents.pop(doc_id, None)
            if removed is not None:
                await self._commit(snapshot)
            return removed

    async def search_documents(self, query: Optional[str]) -> List[NewspaperDocument]:
        """Case-insensitive substring search over every text field."""
        normalized = normalize_query(query)
        if normalized is None:
            return []
        return [
            doc.model_copy(deep=True)
            for doc in list(self._documents.values())
            if matches_query(doc, normalized)
        ]

    async def _after_write(self):
        """Hook run under the write lock after every mutation."""
        pass

    async def _commit(self, snapshot: Dict[str, NewspaperDocument]):
        """Run the write hook; on failure put the previous records back and re-raise."""
        try:
            await self._after_write()
        except Exception:
            self._documents.clear()
            self._documents.update(snapshot)
            raise

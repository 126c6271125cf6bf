"""
Abstract base class for file storage adapters.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from fastapi import UploadFile


class FileStorageInterface(ABC):
    """
    Abstract interface for file storage operations.
    Uploaded newspaper photos and their processed derivatives go through here.
    """

    @abstractmethod
    async def save_file(self, file: UploadFile, file_path: str) -> str:
        """
        Save an uploaded file to storage.

        Args:
            file: FastAPI UploadFile object
            file_path: Relative path where file should be stored

        Returns:
            Storage path where file was saved (for retrieval)
        """
        pass

    @abstractmethod
    async def delete_file(self, file_path: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if file was deleted, False if not found
        """
        pass

    @abstractmethod
    async def file_exists(self, file_path: str) -> bool:
        """Check if a file exists in storage."""
        pass

    @abstractmethod
    def get_full_path(self, file_path: str) -> Path:
        """Filesystem path for a storage path (the image preprocessor needs one)."""
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize storage (create directories, verify access, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close storage (cleanup)."""
        pass

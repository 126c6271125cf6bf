"""
Local filesystem storage adapter implementing FileStorageInterface.
Stores uploads in UPLOAD_DIR, which is also mounted as the static /uploads route.
"""
import shutil
import asyncio
from pathlib import Path
from typing import Optional
from fastapi import UploadFile

from .base import FileStorageInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class LocalFileStorage(FileStorageInterface):
    """
    Local filesystem storage adapter.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize local file storage.

        Args:
            base_dir: Base directory for file storage (defaults to UPLOAD_DIR)
        """
        if base_dir is None:
            from ...core.config import UPLOAD_DIR
            base_dir = UPLOAD_DIR

        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    async def initialize(self):
        """Initialize storage - ensure base directory exists."""
        self.base_dir.mkdir(parents=True, exist_ok=True)

    async def close(self):
        """Close storage (no-op for local filesystem)."""
        pass

    def get_full_path(self, file_path: str) -> Path:
        """Get full filesystem path from storage path."""
        # Keep only the final component to prevent directory traversal
        normalized = Path(file_path).name
        return self.base_dir / normalized

    async def save_file(self, file: UploadFile, file_path: str) -> str:
        """Save an uploaded file to local filesystem."""
        full_path = self.get_full_path(file_path)

        def _save():
            with open(full_path, "wb") as buffer:
                shutil.copyfileobj(file.file, buffer)

        # Run in executor to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _save)

        logger.debug(f"Saved upload to {full_path}")
        return full_path.name

    async def delete_file(self, file_path: str) -> bool:
        """Delete a file from local filesystem."""
        full_path = self.get_full_path(file_path)

        def _delete() -> bool:
            try:
                full_path.unlink()
            except FileNotFoundError:
                return False
            return True

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _delete)

    async def file_exists(self, file_path: str) -> bool:
        """Check if a file exists in local filesystem."""
        return self.get_full_path(file_path).exists()

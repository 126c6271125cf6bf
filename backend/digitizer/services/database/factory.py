"""
Database Factory for creating document store adapters.
Implements Factory Pattern for plug-and-play store support.
"""
from pathlib import Path
from typing import Optional

from .base import DatabaseInterface
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONAdapter
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseFactory:
    """
    Factory for creating document store adapters.
    Supports Memory (in-memory, default) and JSON (file-based) backends.
    """

    @staticmethod
    def create(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """
        Create a store adapter instance.

        Args:
            database_type: 'memory', 'json', or None for the configured DATABASE_TYPE
            **kwargs: Additional arguments for specific adapters (data_dir for JSON)

        Examples:
            db = DatabaseFactory.create('memory')
            db = DatabaseFactory.create('json', data_dir=Path('data/json_db'))
        """
        if database_type is None:
            from ...core.config import DATABASE_TYPE
            database_type = DATABASE_TYPE

        database_type = database_type.lower()

        if database_type == "memory":
            return MemoryAdapter()
        elif database_type == "json":
            data_dir = kwargs.get("data_dir")
            if data_dir:
                data_dir = Path(data_dir) if isinstance(data_dir, str) else data_dir
            return JSONAdapter(data_dir=data_dir)
        else:
            raise ValueError(
                f"Unsupported database type: {database_type}. "
                f"Supported types: 'memory', 'json'"
            )

    @staticmethod
    async def create_and_initialize(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """
        Create store adapter and initialize it.
        """
        db = DatabaseFactory.create(database_type, **kwargs)
        await db.initialize()
        return db

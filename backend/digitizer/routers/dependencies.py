"""
Shared dependencies for routers.
Provides store, storage and service initialization.
"""
from pathlib import Path
from typing import Optional

from ..services.database import DatabaseFactory
from ..services.document_service import DocumentService
from ..services.pipeline import NewspaperPipeline
from ..services.providers import AIProvider, AIProviderFactory
from ..services.storage import LocalFileStorage
from ..core.config import DATABASE_TYPE, JSON_DB_PATH
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global services (initialized on startup, shared across request handlers)
db_service = None
storage_service = None
ai_provider = None
document_service = None


async def initialize_database(database_type: Optional[str] = None):
    """Initialize the document store adapter based on configuration."""
    global db_service

    database_type = (database_type or DATABASE_TYPE).lower()
    logger.info(f"Initializing database: {database_type}")

    if database_type == "json":
        data_dir = Path(JSON_DB_PATH) if JSON_DB_PATH else None
        logger.info("  → Database Type: JSON (file-based)")
        db_service = await DatabaseFactory.create_and_initialize("json", data_dir=data_dir)
        logger.info("  ✅ JSON Database initialized")
    elif database_type == "memory":
        logger.info("  → Database Type: Memory (in-memory, non-persistent)")
        db_service = await DatabaseFactory.create_and_initialize("memory")
        logger.info("  ✅ Memory Database initialized")
    else:
        raise ValueError(f"Unsupported DATABASE_TYPE: {database_type}. Supported types: 'json', 'memory'")


async def initialize_services(provider: Optional[AIProvider] = None):
    """
    Initialize all services after the store is ready.

    Args:
        provider: AI provider to use instead of the configured one
    """
    global storage_service, ai_provider, document_service

    if db_service is None:
        await initialize_database()

    logger.info("Initializing services...")

    logger.info("  → Starting File Storage...")
    storage_service = LocalFileStorage()
    await storage_service.initialize()
    logger.info(f"  ✅ File Storage initialized ({storage_service.base_dir})")

    logger.info("  → Starting AI Provider...")
    ai_provider = provider or AIProviderFactory.get_provider()
    logger.info(f"  ✅ AI Provider initialized ({type(ai_provider).__name__})")

    document_service = DocumentService(db_service, storage_service, NewspaperPipeline(ai_provider))
    logger.info("✅ All services initialized successfully")


async def shutdown_services():
    """Flush and release services on shutdown."""
    global db_service
    if db_service is not None:
        await db_service.close()
        db_service = None
    if storage_service is not None:
        await storage_service.close()


def get_document_service() -> DocumentService:
    """Get document service (dependency injection)."""
    if document_service is None:
        raise RuntimeError("Document service not initialized")
    return document_service

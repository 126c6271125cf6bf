import sys

from .gateway import APIGateway
from .routers import documents, info, search, uploads
from .routers.dependencies import initialize_database, initialize_services, shutdown_services
from .core.config import (
    AI_PROVIDER,
    CORS_ORIGINS,
    DATABASE_TYPE,
    ENVIRONMENT,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_PER_MINUTE,
    UPLOAD_DIR,
    UPLOAD_URL_PREFIX,
)
from .core.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway()

# Setup middleware (CORS, logging, error handling)
gateway.setup_middleware()

# Every route is served under /api and at the root
API_PREFIXES = ["/api", ""]

gateway.register_router(info.router, tags=["Info"])
gateway.register_router(uploads.router, prefixes=API_PREFIXES, tags=["Uploads"])
gateway.register_router(documents.router, prefixes=API_PREFIXES, tags=["Documents"])
gateway.register_router(search.router, prefixes=API_PREFIXES, tags=["Search"])

gateway.register_health_endpoints()

# Originals and processed images
gateway.mount_static(UPLOAD_URL_PREFIX, UPLOAD_DIR, name="uploads")

app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting Bengali Newspaper Digitizer backend...")
    logger.info("বাংলা সংবাদপত্র ডিজিটাইজার সার্ভার চালু")
    logger.info("=" * 60)

    logger.info(f"  → Python Version: {sys.version.split()[0]}")
    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → CORS Origins: {', '.join(CORS_ORIGINS)}")
    logger.info(f"  → Rate Limiting: {f'{RATE_LIMIT_PER_MINUTE}/minute on uploads' if RATE_LIMIT_ENABLED else 'disabled'}")
    logger.info(f"  → Upload directory: {UPLOAD_DIR}")
    logger.info(f"  → Database Backend: {DATABASE_TYPE.upper()}")
    logger.info(f"  → AI Provider (configured): {AI_PROVIDER}")

    await initialize_database()
    await initialize_services()

    logger.info(f"  → Routes: {len(gateway.routes_registered)} registered")
    logger.info("=" * 60)
    logger.info("✅ Backend initialized successfully")
    logger.info("=" * 60)


@app.on_event("shutdown")
async def shutdown_event():
    """Flush the store on shutdown."""
    logger.info("Shutting down...")
    await shutdown_services()
    logger.info("Shutdown complete")

"""
API Gateway

Main gateway class that owns the FastAPI application, its middleware stack,
router registration, static upload serving and health endpoints.
"""
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ..core.config import CORS_ORIGINS, ENVIRONMENT
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import (
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing and middleware.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Register routers, optionally under more than one prefix
    - Serve uploaded images as static files
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "Bengali Newspaper Digitizer API",
        description: str = "OCR, structuring and summarization of Bengali newspaper pages",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else ENVIRONMENT != "production"
        self.routes_registered: List[str] = []

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )

        self.app.state.limiter = limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        register_exception_handlers(self.app)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware. The last one added runs first."""
        logger.info("Setting up middleware...")

        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        # Credentials cannot be combined with a wildcard origin
        allow_credentials = "*" not in CORS_ORIGINS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("✅ All middleware configured")

    def register_router(
        self,
        router: APIRouter,
        prefixes: Optional[List[str]] = None,
        tags: Optional[List[str]] = None
    ):
        """
        Register a router under each of the given prefixes.

        Args:
            router: FastAPI router instance
            prefixes: URL prefixes, e.g. ["/api", ""]; defaults to the root only
            tags: OpenAPI tags for documentation
        """
        for prefix in prefixes or [""]:
            self.app.include_router(router, prefix=prefix, tags=tags or [])
            self.routes_registered.extend(f"{prefix}{route.path}" for route in router.routes)
            logger.info(f"Registered {', '.join(tags or ['router'])} at prefix '{prefix or '/'}'")

    def mount_static(self, url_path: str, directory: Path, name: str = "static"):
        """Serve files from ``directory`` under ``url_path``."""
        Path(directory).mkdir(parents=True, exist_ok=True)
        self.app.mount(url_path, StaticFiles(directory=str(directory)), name=name)
        logger.info(f"Serving {directory} at {url_path}")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy"
            }

        @self.app.get("/health")
        async def health_check():
            """
            Liveness probe. 503 until the store and services are initialized.
            """
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Health check failed: Database not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Database not initialized"}
                )
            if dependencies.document_service is None:
                logger.warning("Health check failed: Services not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Services not initialized"}
                )

            return {
                "status": "healthy",
                "database": "connected",
                "services": "initialized",
                "ai_provider": type(dependencies.ai_provider).__name__
            }

        @self.app.get("/ready")
        async def readiness_check():
            """
            Readiness probe. Verifies the store answers a read.
            """
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Readiness check failed: Database not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"ready": False, "reason": "Database not initialized"}
                )
            try:
                await dependencies.db_service.get_all_documents()
            except Exception as e:
                logger.error(f"Readiness check failed: {e}", exc_info=True)
                return JSONResponse(
                    status_code=503,
                    content={"ready": False, "reason": str(e)}
                )
            return {"ready": True}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app

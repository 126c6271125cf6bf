"""
Error Handling

Every error leaves the API as {"error": ..., "details": ...}:
- HTTPException raised by routers → its status code; a dict detail is the body
- Request validation errors → 422
- Anything unexpected → 500 (traceback text only outside production)
"""
import traceback

from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def error_body(detail) -> dict:
    """Normalize an HTTPException detail into the error body."""
    if isinstance(detail, dict):
        body = dict(detail)
        body.setdefault("error", "Request failed")
        return body
    return {"error": str(detail)}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Validation Error", "details": str(exc.errors())}
    )


def register_exception_handlers(app: FastAPI):
    """Install the error-body handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Last line of defense: converts exceptions that escaped every route
    handler into a 500 JSON response.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"
            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}")
            if is_development:
                logger.debug(f"Traceback:\n{traceback.format_exc()}")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "details": str(e) if is_development else None,
                    "request_id": getattr(request.state, "request_id", None)
                }
            )

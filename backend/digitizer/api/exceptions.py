"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class InvalidUploadError(Exception):
    """Raised when the upload is missing or is not an image."""
    pass


class DocumentNotFoundError(Exception):
    """Raised when document is not found."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__("Document not found")


class ImagePreprocessingError(Exception):
    """Raised when the uploaded image cannot be normalized."""
    pass


class UpstreamFailure(Exception):
    """Base class for failures of the generative-AI side of the pipeline."""
    pass


class AIProviderError(UpstreamFailure):
    """Raised when a call to the AI provider fails."""
    pass


class TextExtractionError(UpstreamFailure):
    """Raised when the raw text extraction stage fails. Fatal to an upload."""
    pass


class AIResponseParseError(UpstreamFailure):
    """Raised when a model response holds no usable JSON object."""
    pass


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, InvalidUploadError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)}
        )
    elif isinstance(e, DocumentNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": str(e)}
        )
    elif isinstance(e, (UpstreamFailure, ImagePreprocessingError)):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Upstream processing failed", "details": str(e)}
        )
    else:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error", "details": str(e)}
        )

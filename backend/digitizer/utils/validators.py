"""
Validation utilities - Pure validation functions.
"""
from typing import Optional

from ..api.exceptions import InvalidUploadError


def validate_image_upload(filename: Optional[str], content_type: Optional[str]) -> None:
    """
    Validate an uploaded newspaper photo.

    Raises:
        InvalidUploadError: If no file was sent or it is not an image
    """
    if not filename or not filename.strip():
        raise InvalidUploadError("No file uploaded")

    if not content_type or not content_type.startswith("image/"):
        raise InvalidUploadError("Only image files are allowed!")

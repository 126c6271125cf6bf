"""
Utility functions - Pure functions with no service dependencies.
These can be used across all layers.
"""
from .json_utils import extract_json_object
from .search_utils import build_search_text, matches_query, normalize_query
from .validators import validate_image_upload

__all__ = [
    "extract_json_object",
    "build_search_text",
    "matches_query",
    "normalize_query",
    "validate_image_upload",
]

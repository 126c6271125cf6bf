"""
Search Router - Substring search over documents.

Example Usage:
    GET /search?q=নির্বাচন
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .dependencies import get_document_service
from ..api.exceptions import handle_business_exception
from ..api.mappers import DocumentMapper
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/search")
async def search_documents(q: Optional[str] = Query(None, description="Search query")):
    """
    Case-insensitive substring search.

    Looks through the full extracted text, headlines, article headlines and
    bodies, and every summary field. A missing or blank query returns [].
    """
    try:
        results = await get_document_service().search(q)
        logger.debug(f"Search '{q}' matched {len(results)} documents")
        return DocumentMapper.to_dict_list(results)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Search error: {e}")
        raise handle_business_exception(e)

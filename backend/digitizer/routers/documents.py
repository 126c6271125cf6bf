"""
Documents Router - Handles newspaper document read, regenerate and delete.

Architecture:
- Router handles HTTP request/response only
- Business logic delegated to DocumentService

Example Usage:
    GET /documents - List all documents
    GET /documents/{doc_id} - Get specific document
    GET /documents/{doc_id}/summary - Summary view of a document
    POST /documents/{doc_id}/generate-summary - Re-run summarization
    DELETE /documents/{doc_id} - Delete document and its images
"""
from fastapi import APIRouter, HTTPException, status

from .dependencies import get_document_service
from ..api.dto import DeleteResponseDTO, RegenerateSummaryResponseDTO
from ..api.exceptions import DocumentNotFoundError, UpstreamFailure, handle_business_exception
from ..api.mappers import DocumentMapper
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

REGENERATE_ERROR = "Failed to regenerate summary"


@router.get("/documents")
async def get_documents():
    """
    Get all documents in upload order.

    Returns:
        List of full document records (camelCase)
    """
    try:
        documents = await get_document_service().list_documents()
        return DocumentMapper.to_dict_list(documents)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error listing documents: {e}")
        raise handle_business_exception(e)


@router.get("/documents/{doc_id}")
async def get_document(doc_id: str):
    """
    Get a specific document by ID.

    Status Codes:
        200: Success
        404: Document not found
    """
    try:
        document = await get_document_service().get_document(doc_id)
        return DocumentMapper.to_dict(document)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_business_exception(e)


@router.get("/documents/{doc_id}/summary")
async def get_document_summary(doc_id: str):
    """
    Get only the summary view of a document.

    Example Response:
        {
            "id": "1718000000000",
            "originalName": "page1.jpg",
            "uploadDate": "2024-06-10T06:13:20.000Z",
            "summaryData": {...},
            "headlinesCount": 4,
            "articlesCount": 3
        }
    """
    try:
        projection = await get_document_service().get_summary(doc_id)
        return projection.model_dump(by_alias=True, mode="json")
    except HTTPException:
        raise
    except Exception as e:
        raise handle_business_exception(e)


@router.post("/documents/{doc_id}/generate-summary")
async def regenerate_summary(doc_id: str):
    """
    Re-run the summary stage for a stored document.

    Only summaryData changes. Unlike an upload there is no placeholder
    fallback: if the model call fails the document keeps its old summary.

    Status Codes:
        200: Summary replaced
        404: Document not found
        500: Regeneration failed (AI call, unusable output or store write)
    """
    try:
        summary = await get_document_service().regenerate_summary(doc_id)
        return RegenerateSummaryResponseDTO(
            message="Summary regenerated successfully",
            summary_data=summary
        ).model_dump(by_alias=True, mode="json")
    except HTTPException:
        raise
    except DocumentNotFoundError as e:
        raise handle_business_exception(e)
    except Exception as e:
        logger.error(f"Error regenerating summary for {doc_id}: {e}", exc_info=not isinstance(e, UpstreamFailure))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": REGENERATE_ERROR, "details": str(e)}
        )


@router.delete("/documents/{doc_id}")
async def delete_document(doc_id: str):
    """
    Delete a document and its original and processed images.

    Status Codes:
        200: Deleted
        404: Document not found
    """
    try:
        await get_document_service().delete_document(doc_id)
        return DeleteResponseDTO(message="Document and associated files deleted.").model_dump()
    except HTTPException:
        raise
    except Exception as e:
        raise handle_business_exception(e)

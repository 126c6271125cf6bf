"""
Upload Router - Accepts a newspaper page image and digitizes it.

The whole pipeline runs inside the request:
preprocess → extract text → structure → summarize → store.

Example Usage:
    POST /upload (multipart field "newspaper")
"""
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from .dependencies import get_document_service
from ..api.dto import UploadResponseDTO
from ..api.exceptions import InvalidUploadError, handle_business_exception
from ..core.logging_config import get_logger
from ..middleware.rate_limit import rate_limit_per_minute

logger = get_logger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "বাংলা সংবাদপত্র সফলভাবে প্রক্রিয়া করা হয়েছে"
FATAL_ERROR = "Failed to process Bengali image"
FATAL_ERROR_BN = "বাংলা ছবি প্রক্রিয়া করতে মারাত্মক ত্রুটি ঘটেছে"


@router.post("/upload")
@rate_limit_per_minute
async def upload_newspaper(
    request: Request,
    newspaper: Optional[UploadFile] = File(None)
):
    """
    Upload and process a Bengali newspaper image.

    Stages 2 (structure) and 3 (summarize) degrade to fallbacks instead of
    failing; extractionMethod and summaryMethod report which path ran.

    Status Codes:
        200: Processed and stored
        400: No file, or not an image
        429: Rate limit exceeded
        500: Preprocessing, text extraction or the store write failed
    """
    try:
        result = await get_document_service().process_upload(newspaper)
    except HTTPException:
        raise
    except InvalidUploadError as e:
        raise handle_business_exception(e)
    except Exception as e:
        logger.error(f"Fatal error in upload: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": FATAL_ERROR, "details": str(e), "bangla_error": FATAL_ERROR_BN}
        )

    document = result.document
    return UploadResponseDTO(
        document=document,
        message=SUCCESS_MESSAGE,
        headlines_found=len(document.extracted_data.headlines),
        extraction_method=document.extracted_data.extraction_method.value,
        summary_method="ai_generated" if result.summary.succeeded else "fallback",
        overall_summary=document.summary_data.overall_summary,
    ).model_dump(by_alias=True, mode="json")

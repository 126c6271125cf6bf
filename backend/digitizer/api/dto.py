"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel

from ..models.document import CamelModel, NewspaperDocument, SummaryData


class UploadResponseDTO(CamelModel):
    """Response DTO for a processed upload."""
    success: bool = True
    document: NewspaperDocument
    message: str
    headlines_found: int
    summaries_generated: bool = True
    extraction_method: str
    summary_method: str
    overall_summary: str


class SummaryProjectionDTO(CamelModel):
    """Summary-only view of a document."""
    id: str
    original_name: str
    upload_date: str
    summary_data: SummaryData
    headlines_count: int
    articles_count: int


class RegenerateSummaryResponseDTO(CamelModel):
    success: bool = True
    message: str
    summary_data: SummaryData


class DeleteResponseDTO(BaseModel):
    success: bool = True
    message: str

"""
Mappers between domain models and DTOs.
Separates domain layer from API layer.
"""
from typing import List

from ..models.document import NewspaperDocument
from .dto import SummaryProjectionDTO


class DocumentMapper:
    """Maps NewspaperDocument to its API representations."""

    @staticmethod
    def to_dict(document: NewspaperDocument) -> dict:
        return document.to_response()

    @staticmethod
    def to_dict_list(documents: List[NewspaperDocument]) -> List[dict]:
        return [DocumentMapper.to_dict(doc) for doc in documents]

    @staticmethod
    def to_summary_projection(document: NewspaperDocument) -> SummaryProjectionDTO:
        """Project a document onto its summary view."""
        extracted = document.extracted_data
        return SummaryProjectionDTO(
            id=document.id,
            original_name=document.original_name,
            upload_date=document.upload_date,
            summary_data=document.summary_data,
            headlines_count=len(extracted.headlines),
            articles_count=len(extracted.articles),
        )

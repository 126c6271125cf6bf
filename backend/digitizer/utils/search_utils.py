"""
Search utility functions for full-text substring matching over documents.
"""
from typing import Optional

from ..models.document import NewspaperDocument
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def build_search_text(doc: NewspaperDocument) -> str:
    """
    Concatenate every searchable text field of a document.

    Covers the full extracted text, headlines, article headlines and bodies,
    the overall summary, and the per-headline and per-article summaries.
    """
    extracted = doc.extracted_data
    summary = doc.summary_data
    parts = [
        extracted.all_text,
        " ".join(extracted.headlines),
        " ".join(f"{a.headline} {a.content}" for a in extracted.articles),
        summary.overall_summary,
        " ".join(s.summary for s in summary.headline_summaries),
        " ".join(s.summary for s in summary.article_summaries),
    ]
    return " ".join(parts)


def normalize_query(query: Optional[str]) -> Optional[str]:
    """Case-fold and trim a query; None when nothing is left to search for."""
    if query is None:
        return None
    query = query.strip()
    if not query:
        return None
    return query.casefold()


def matches_query(doc: NewspaperDocument, normalized_query: str) -> bool:
    """
    Case-insensitive substring test of a normalized query against a document.

    A document whose fields cannot be aggregated is logged and treated as a
    non-match so one bad record cannot fail the whole search.
    """
    try:
        return normalized_query in build_search_text(doc).casefold()
    except Exception as e:
        logger.error(f"Search error for document {doc.id}: {e}")
        return False

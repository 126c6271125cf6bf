from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_BN = "অজানা"  # "unknown"


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# Model output frequently carries null where a string belongs
LenientStr = Annotated[str, BeforeValidator(_none_to_empty)]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ExtractionMethod(str, Enum):
    AI_STRUCTURED = "ai_structured"
    REGEX_FALLBACK = "regex_fallback"
    FALLBACK = "fallback"


class Article(CamelModel):
    headline: LenientStr = ""
    content: LenientStr = ""
    category: LenientStr = ""
    summary: Optional[str] = None


class ExtractedData(CamelModel):
    date: LenientStr = UNKNOWN_BN
    headlines: List[LenientStr] = Field(default_factory=list)
    sub_headlines: List[LenientStr] = Field(default_factory=list)
    articles: List[Article] = Field(default_factory=list)
    all_text: LenientStr = ""
    language: str = "bengali"
    extraction_method: ExtractionMethod = ExtractionMethod.FALLBACK


class HeadlineSummary(CamelModel):
    headline: LenientStr = ""
    summary: LenientStr = ""


class ArticleSummary(CamelModel):
    headline: LenientStr = ""
    summary: LenientStr = ""
    key_points: List[LenientStr] = Field(default_factory=list)
    category: LenientStr = ""


class SummaryData(CamelModel):
    overall_summary: LenientStr = ""
    headline_summaries: List[HeadlineSummary] = Field(default_factory=list)
    article_summaries: List[ArticleSummary] = Field(default_factory=list)
    important_topics: List[LenientStr] = Field(default_factory=list)


class NewspaperDocument(CamelModel):
    id: str
    filename: str
    original_name: str
    image_path: str  # public URL path, e.g. /uploads/<filename>
    processed_image_path: str
    upload_date: str
    extracted_data: ExtractedData
    summary_data: SummaryData
    raw_extracted_text: str = ""
    status: str = "processed"
    language: str = "bengali"

    def to_response(self) -> dict:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(by_alias=True, mode="json")

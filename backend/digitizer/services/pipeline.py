"""
Newspaper digitization pipeline.

Three calls to the AI provider, each built on the previous one:

1. extract   - image -> free text grouped by LARGE_TEXT/MEDIUM_TEXT/... markers
2. structure - free text -> ExtractedData (JSON mode), regex fallback on failure
3. summarize - ExtractedData -> SummaryData (JSON mode), synthesized fallback

Stages 2 and 3 never raise; they return a StageResult tagged success or
fallback so callers (and tests) can tell which path produced the data.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import ValidationError

from ..api.exceptions import AIResponseParseError, TextExtractionError, UpstreamFailure
from ..core.config import (
    FALLBACK_SUMMARY_CLIP,
    STRUCTURE_INPUT_LIMIT,
    SUMMARY_ARTICLE_LIMIT,
    SUMMARY_TEXT_LIMIT,
)
from ..core.logging_config import get_logger
from ..models.document import (
    ArticleSummary,
    ExtractedData,
    ExtractionMethod,
    HeadlineSummary,
    SummaryData,
    UNKNOWN_BN,
)
from ..utils.json_utils import extract_json_object
from .prompts import (
    TEXT_EXTRACTION_PROMPT,
    build_structure_prompt,
    build_summary_prompt,
    extract_marker_headlines,
)
from .providers.base import AIProvider, ImageInput

logger = get_logger(__name__)

T = TypeVar("T")

FALLBACK_OVERALL_SUMMARY = "সংবাদপত্রের বিষয়বস্তু সফলভাবে প্রক্রিয়া করা হয়েছে।"
FALLBACK_TOPIC = "বিষয়বস্তু বিশ্লেষণ করা হয়েছে"
FALLBACK_HEADLINE_SUMMARY = "এই শিরোনামের জন্য একটি স্বয়ংক্রিয় সারাংশ তৈরি করা যায়নি।"
FALLBACK_ARTICLE_HEADLINE = "অজানা শিরোনাম"
FALLBACK_ARTICLE_SUMMARY = "নিবন্ধের সারাংশ পাওয়া যায়নি।"
FALLBACK_KEY_POINT = "মূল বিষয়বস্তু নির্ধারণ করা যায়নি"

SNIPPET_LENGTH = 500


class StageStatus(str, Enum):
    SUCCESS = "success"
    FALLBACK = "fallback"


@dataclass
class StageResult(Generic[T]):
    """Outcome of a recoverable stage."""
    status: StageStatus
    data: T
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == StageStatus.SUCCESS



def build_fallback_summary(data: ExtractedData) -> SummaryData:
    """Placeholder summary derived from the structured data alone."""
    headline_summaries = [
        HeadlineSummary(headline=headline, summary=FALLBACK_HEADLINE_SUMMARY)
        for headline in data.headlines
    ]
    article_summaries = []
    for article in data.articles:
        if article.content:
            summary = article.content[:FALLBACK_SUMMARY_CLIP] + "..."
        else:
            summary = FALLBACK_ARTICLE_SUMMARY
        article_summaries.append(ArticleSummary(
            headline=article.headline or FALLBACK_ARTICLE_HEADLINE,
            summary=summary,
            key_points=[FALLBACK_KEY_POINT],
            category=article.category or UNKNOWN_BN,
        ))

    return SummaryData(
        overall_summary=FALLBACK_OVERALL_SUMMARY,
        headline_summaries=headline_summaries,
        article_summaries=article_summaries,
        important_topics=[FALLBACK_TOPIC],
    )


def summary_input(data: ExtractedData) -> dict:
    """Size-capped wire form of the structured data for the summary prompt."""
    payload = data.model_dump(by_alias=True, mode="json")
    payload["allText"] = data.all_text[:SUMMARY_TEXT_LIMIT]
    payload["articles"] = payload["articles"][:SUMMARY_ARTICLE_LIMIT]
    return payload


class NewspaperPipeline:
    """Runs the extract / structure / summarize stages against one provider."""

    def __init__(self, provider: AIProvider):
        self.provider = provider

    async def extract_text(self, image: ImageInput) -> str:
        """
        Stage 1: pull all text off the page image.

        Raises:
            TextExtractionError: the provider call failed. Fatal to an upload.
        """
        try:
            text = await self.provider.generate(TEXT_EXTRACTION_PROMPT, image=image)
        except UpstreamFailure as e:
            logger.error(f"Text extraction error: {e}")
            raise TextExtractionError("Failed to extract text from image") from e

        logger.info(f"Extracted text length: {len(text)}")
        return text

    async def structure_text(self, all_text: str) -> StageResult[ExtractedData]:
        """Stage 2: structure the raw text, falling back to marker headlines."""
        defaults = ExtractedData(all_text=all_text)
        try:
            response = await self.provider.generate(
                build_structure_prompt(all_text[:STRUCTURE_INPUT_LIMIT]),
                json_mode=True,
            )
            logger.debug(f"Raw structured response: {response[:SNIPPET_LENGTH]}")

            parsed = extract_json_object(response)
            if parsed is None:
                raise AIResponseParseError("Failed to parse structured data from AI response")

            merged = {**defaults.model_dump(by_alias=True), **parsed}
            data = ExtractedData.model_validate(merged)
        except (UpstreamFailure, ValidationError) as e:
            logger.error(f"Structure parsing error: {e}")
            return self._structure_fallback(defaults, str(e))

        data = data.model_copy(update={
            "all_text": all_text,
            "language": "bengali",
            "extraction_method": ExtractionMethod.AI_STRUCTURED,
        })
        logger.info(f"Structured {len(data.headlines)} headlines, {len(data.articles)} articles")
        return StageResult(status=StageStatus.SUCCESS, data=data)

    def _structure_fallback(self, defaults: ExtractedData, error: str) -> StageResult[ExtractedData]:
        headlines = extract_marker_headlines(defaults.all_text)
        if headlines:
            logger.info(f"Regex fallback recovered {len(headlines)} headlines")
            data = defaults.model_copy(update={
                "headlines": headlines,
                "extraction_method": ExtractionMethod.REGEX_FALLBACK,
            })
        else:
            logger.warning("Regex fallback found no headlines")
            data = defaults
        return StageResult(status=StageStatus.FALLBACK, data=data, error=error)

    async def generate_summary(self, data: ExtractedData) -> SummaryData:
        """
        One summary call with sanitizing and validation, no fallback.

        Raises:
            UpstreamFailure: provider failure or an unusable response
        """
        response = await self.provider.generate(
            build_summary_prompt(summary_input(data)),
            json_mode=True,
        )
        logger.debug(f"Raw summary response: {response[:SNIPPET_LENGTH]}")

        parsed = extract_json_object(response)
        if parsed is None:
            raise AIResponseParseError("Failed to parse summary data from AI response")
        try:
            return SummaryData.model_validate(parsed)
        except ValidationError as e:
            raise AIResponseParseError(f"Summary data does not match the schema: {e}") from e

    async def summarize(self, data: ExtractedData) -> StageResult[SummaryData]:
        """Stage 3: summarize, synthesizing a placeholder summary on failure."""
        try:
            summary = await self.generate_summary(data)
        except UpstreamFailure as e:
            logger.error(f"Summary generation error: {e}")
            return StageResult(
                status=StageStatus.FALLBACK,
                data=build_fallback_summary(data),
                error=str(e),
            )

        logger.info("Successfully generated AI summaries")
        return StageResult(status=StageStatus.SUCCESS, data=summary)

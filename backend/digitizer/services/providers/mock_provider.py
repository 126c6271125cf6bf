"""
Mock AI Provider.

Provides deterministic responses for development and for running without
API keys. Does not make actual API calls.
"""
import json
from typing import Optional

from ...core.logging_config import get_logger
from ...models.document import UNKNOWN_BN
from ..prompts import HEADLINE_MARKER, extract_marker_headlines
from .base import AIProvider, ImageInput

logger = get_logger(__name__)

MOCK_PAGE_TEXT = (
    f"{HEADLINE_MARKER} ঢাকায় নতুন মেট্রো লাইন চালু\n"
    "MEDIUM_TEXT: যাত্রীদের জন্য সুখবর\n"
    "SMALL_TEXT: আজ থেকে নতুন মেট্রো লাইনে যাত্রী পরিবহন শুরু হয়েছে।\n"
    "===\n"
    f"{HEADLINE_MARKER} বন্যা পরিস্থিতির উন্নতি\n"
    "SMALL_TEXT: উত্তরাঞ্চলে পানি কমতে শুরু করেছে।\n"
)


class MockProvider(AIProvider):
    """
    Mock AI Provider for offline development.

    - Image prompts return a fixed marker-formatted page.
    - Structuring prompts return the marker headlines as JSON.
    - Summary prompts return a fixed summary JSON.
    """

    async def generate(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        json_mode: bool = False
    ) -> str:
        if image is not None:
            logger.debug("MockProvider: returning fixed page text")
            return MOCK_PAGE_TEXT

        if "EXTRACTED TEXT:" in prompt:
            headlines = extract_marker_headlines(prompt)
            return json.dumps({
                "date": UNKNOWN_BN,
                "headlines": headlines,
                "subHeadlines": [],
                "articles": [
                    {"headline": h, "content": h, "category": "সাধারণ"} for h in headlines
                ],
                "allText": "",
            }, ensure_ascii=False)

        return json.dumps({
            "overallSummary": "এটি একটি পরীক্ষামূলক (MOCK) সারাংশ।",
            "headlineSummaries": [],
            "articleSummaries": [],
            "importantTopics": ["পরীক্ষা"],
        }, ensure_ascii=False)

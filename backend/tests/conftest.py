import asyncio
import io
import os
import tempfile
from typing import List, Optional, Union

# Configure before the app modules read their environment
_TMP_ROOT = tempfile.mkdtemp(prefix="digitizer-tests-")
os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_ROOT, "uploads")
os.environ["JSON_DB_PATH"] = os.path.join(_TMP_ROOT, "json_db")
os.environ["DATABASE_TYPE"] = "memory"
os.environ["AI_PROVIDER"] = "mock"
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from digitizer.api.exceptions import AIProviderError
from digitizer.services.providers.base import AIProvider, ImageInput

PAGE_TEXT = (
    "LARGE_TEXT: নির্বাচনে নতুন সরকার\n"
    "MEDIUM_TEXT: ভোটার উপস্থিতি রেকর্ড\n"
    "SMALL_TEXT: দেশজুড়ে শান্তিপূর্ণ ভোটগ্রহণ সম্পন্ন হয়েছে।\n"
    "===\n"
    "LARGE_TEXT: Padma Bridge traffic doubles\n"
    "SMALL_TEXT: সেতুতে যান চলাচল বেড়েছে।\n"
)

STRUCTURED_JSON = """```json
{
  "date": "১০ জুন ২০২৪",
  "headlines": ["নির্বাচনে নতুন সরকার", "Padma Bridge traffic doubles"],
  "subHeadlines": ["ভোটার উপস্থিতি রেকর্ড"],
  "articles": [
    {"headline": "নির্বাচনে নতুন সরকার", "content": "দেশজুড়ে শান্তিপূর্ণ ভোটগ্রহণ সম্পন্ন হয়েছে।", "category": "রাজনীতি"},
    {"headline": "Padma Bridge traffic doubles", "content": "সেতুতে যান চলাচল বেড়েছে।", "category": "যোগাযোগ"}
  ],
  "allText": "ignored"
}
```"""

SUMMARY_JSON = """{
  "overallSummary": "নির্বাচন ও যোগাযোগ নিয়ে প্রধান খবর।",
  "headlineSummaries": [{"headline": "নির্বাচনে নতুন সরকার", "summary": "নতুন সরকার গঠিত হয়েছে।"}],
  "articleSummaries": [
    {"headline": "নির্বাচনে নতুন সরকার", "summary": "শান্তিপূর্ণ ভোট।", "keyPoints": ["রেকর্ড উপস্থিতি"], "category": "রাজনীতি"}
  ],
  "importantTopics": ["নির্বাচন", "যোগাযোগ"]
}"""

Reply = Union[str, Exception]


class ScriptedProvider(AIProvider):
    """
    Fake provider with one scripted reply per stage.

    A reply that is an exception is raised instead of returned.
    """

    def __init__(
        self,
        extract: Reply = PAGE_TEXT,
        structure: Reply = STRUCTURED_JSON,
        summary: Reply = SUMMARY_JSON
    ):
        self.replies = {"extract": extract, "structure": structure, "summary": summary}
        self.calls: List[dict] = []

    @staticmethod
    def stage_of(prompt: str, image: Optional[ImageInput]) -> str:
        if image is not None:
            return "extract"
        if "EXTRACTED TEXT:" in prompt:
            return "structure"
        return "summary"

    async def generate(self, prompt: str, image: Optional[ImageInput] = None, json_mode: bool = False) -> str:
        stage = self.stage_of(prompt, image)
        self.calls.append({"stage": stage, "prompt": prompt, "image": image, "json_mode": json_mode})
        reply = self.replies[stage]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def stages(self) -> List[str]:
        return [call["stage"] for call in self.calls]


def provider_failure(message: str = "model unavailable") -> AIProviderError:
    return AIProviderError(message)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider()


@pytest.fixture
def make_provider():
    """Factory for providers with custom per-stage replies."""
    return ScriptedProvider


@pytest.fixture
def fail():
    return provider_failure


@pytest.fixture
def png_bytes():
    """A small page-like image."""
    image = Image.new("RGB", (120, 80), color=(235, 230, 220))
    for x in range(10, 110):
        for y in range(30, 34):
            image.putpixel((x, y), (20, 20, 20))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def app_with_provider():
    """
    Returns a function that resets the store and wires ``provider`` into the
    app, giving back a TestClient.
    """
    from digitizer.main import app
    from digitizer.routers import dependencies

    def _setup(provider: AIProvider) -> TestClient:
        dependencies.db_service = None
        asyncio.run(dependencies.initialize_services(provider=provider))
        return TestClient(app)

    yield _setup

    dependencies.db_service = None
    dependencies.document_service = None


@pytest.fixture
def client(app_with_provider, scripted_provider):
    return app_with_provider(scripted_provider)


@pytest.fixture
def page_text():
    return PAGE_TEXT

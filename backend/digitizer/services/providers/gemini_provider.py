"""
Gemini AI Provider.

Provides AI capabilities using Google's Generative AI (Gemini) API.
Gemini handles both the image OCR prompt and the text-only JSON prompts.
"""
from typing import Optional
import google.generativeai as genai

from ...api.exceptions import AIProviderError
from ...core.config import GEMINI_API_KEY, GEMINI_MODEL, AI_REQUEST_TIMEOUT_SECONDS
from ...core.logging_config import get_logger
from .base import AIProvider, ImageInput

logger = get_logger(__name__)


class GeminiProvider(AIProvider):
    """
    AI Provider using the Google Generative AI SDK.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """Initialize Gemini provider with API key."""
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model_name or GEMINI_MODEL
        self.timeout = timeout if timeout is not None else AI_REQUEST_TIMEOUT_SECONDS
        if self.api_key:
            genai.configure(api_key=self.api_key)

    async def generate(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        json_mode: bool = False
    ) -> str:
        if not self.api_key:
            raise AIProviderError("Gemini API key not configured")

        generation_config = {"response_mime_type": "application/json"} if json_mode else None
        model = genai.GenerativeModel(self.model_name, generation_config=generation_config)

        contents = [prompt]
        if image is not None:
            contents.append({"mime_type": image.mime_type, "data": image.data})

        request_options = {"timeout": self.timeout} if self.timeout else None

        try:
            response = await model.generate_content_async(contents, request_options=request_options)
            # .text raises ValueError when the candidate was blocked or empty
            return response.text
        except Exception as e:
            logger.error(f"Gemini API Error ({self.model_name}): {e}")
            raise AIProviderError(f"Gemini API error: {e}") from e

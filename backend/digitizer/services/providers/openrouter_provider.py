"""
OpenRouter AI Provider.

Provides AI capabilities through OpenRouter's OpenAI-compatible API, so any
vision-capable model it hosts can stand in for Gemini.
"""
from typing import Optional
import openai
from openai import AsyncOpenAI

from ...api.exceptions import AIProviderError
from ...core.config import (
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    OPENROUTER_MODEL,
    AI_REQUEST_TIMEOUT_SECONDS
)
from ...core.logging_config import get_logger
from .base import AIProvider, ImageInput

logger = get_logger(__name__)


class OpenRouterProvider(AIProvider):
    """
    AI Provider using OpenRouter API via the OpenAI SDK.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """Initialize OpenRouter provider with API key."""
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model_name = model_name or OPENROUTER_MODEL
        if self.api_key:
            self.client = AsyncOpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key,
                timeout=AI_REQUEST_TIMEOUT_SECONDS
            )
        else:
            self.client = None

    async def generate(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        json_mode: bool = False
    ) -> str:
        if not self.client:
            raise AIProviderError("OpenRouter API key not configured")

        content = [{"type": "text", "text": prompt}]
        if image is not None:
            content.append({
                "type": "image_url",
                "image_url": {"url": f"data:{image.mime_type};base64,{image.to_base64()}"}
            })

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": content}],
                **kwargs
            )
        except openai.APIError as e:
            logger.error(f"OpenRouter API Error ({self.model_name}): {e}")
            raise AIProviderError(f"OpenRouter API error: {e}") from e

        if not response.choices or response.choices[0].message.content is None:
            raise AIProviderError("OpenRouter returned an empty response")
        return response.choices[0].message.content

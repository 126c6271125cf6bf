"""
Anthropic AI Provider.

Provides AI capabilities using Anthropic's Claude API directly.
Claude has no JSON response mode; the pipeline's sanitizer copes with prose.
"""
from typing import Optional
import anthropic

from ...api.exceptions import AIProviderError
from ...core.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL, AI_REQUEST_TIMEOUT_SECONDS
from ...core.logging_config import get_logger
from .base import AIProvider, ImageInput

logger = get_logger(__name__)

MAX_TOKENS = 4096


class AnthropicProvider(AIProvider):
    """
    AI Provider using Anthropic Claude API directly.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """Initialize Anthropic provider with API key."""
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model_name = model_name or ANTHROPIC_MODEL
        if self.api_key:
            kwargs = {"api_key": self.api_key}
            if AI_REQUEST_TIMEOUT_SECONDS:
                kwargs["timeout"] = AI_REQUEST_TIMEOUT_SECONDS
            self.client = anthropic.AsyncAnthropic(**kwargs)
        else:
            self.client = None

    async def generate(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        json_mode: bool = False
    ) -> str:
        if not self.client:
            raise AIProviderError("Anthropic API key not configured")

        content = []
        if image is not None:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.mime_type,
                    "data": image.to_base64(),
                },
            })
        content.append({"type": "text", "text": prompt})

        try:
            message = await self.client.messages.create(
                model=self.model_name,
                max_tokens=MAX_TOKENS,
                messages=[{"role": "user", "content": content}]
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic API Error ({self.model_name}): {e}")
            raise AIProviderError(f"Anthropic API error: {e}") from e

        text_blocks = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        if not text_blocks:
            raise AIProviderError("Anthropic returned an empty response")
        return "".join(text_blocks)

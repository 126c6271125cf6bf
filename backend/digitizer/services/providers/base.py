"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
all abstract methods.
"""
import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ImageInput:
    """An image sent alongside a prompt."""
    data: bytes
    mime_type: str = "image/jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    The pipeline treats the model as an opaque completion service: one prompt
    (optionally with an image) in, free text out.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        json_mode: bool = False
    ) -> str:
        """
        Run one completion.

        Args:
            prompt: Instruction text
            image: Optional image the prompt refers to
            json_mode: Ask the model for a JSON-only response. A hint, not a
                guarantee; callers still sanitize the output.

        Returns:
            Raw response text

        Raises:
            AIProviderError: on any provider failure
        """
        pass

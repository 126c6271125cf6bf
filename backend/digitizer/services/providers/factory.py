"""
AI Provider Factory.

Manages provider selection and initialization based on configuration.
Uses the Factory pattern to provide plug-and-play AI provider support.
"""
from ...core import config
from ...core.logging_config import get_logger
from .base import AIProvider
from .gemini_provider import GeminiProvider
from .openrouter_provider import OpenRouterProvider
from .anthropic_provider import AnthropicProvider
from .mock_provider import MockProvider

logger = get_logger(__name__)


class AIProviderFactory:
    """
    Factory for creating AI provider instances.

    Selection order:
    1. The configured AI_PROVIDER if its API key is set
    2. Otherwise the first provider that has a key (Gemini, OpenRouter, Anthropic)
    3. MockProvider when no key is available at all
    """

    @staticmethod
    def _available() -> dict:
        return {
            "gemini": (config.GEMINI_API_KEY, GeminiProvider),
            "openrouter": (config.OPENROUTER_API_KEY, OpenRouterProvider),
            "anthropic": (config.ANTHROPIC_API_KEY, AnthropicProvider),
        }

    @staticmethod
    def get_provider(provider_type: str = None) -> AIProvider:
        """
        Get the appropriate AI provider based on configuration.

        Returns:
            AIProvider instance
        """
        provider_type = (provider_type or config.AI_PROVIDER).lower()

        if provider_type == "mock":
            logger.info("Using MockProvider (configured)")
            return MockProvider()

        available = AIProviderFactory._available()

        if provider_type in available:
            api_key, provider_cls = available[provider_type]
            if api_key:
                logger.info(f"Using {provider_cls.__name__}")
                return provider_cls()
            logger.warning(f"⚠️  {provider_type} API key not configured, checking other providers...")
        else:
            logger.warning(f"⚠️  Unknown provider '{provider_type}', checking available API keys...")

        for name, (api_key, provider_cls) in available.items():
            if api_key:
                logger.info(f"✓ Using {provider_cls.__name__} as fallback")
                return provider_cls()

        logger.warning("⚠️  No API keys configured, using MockProvider")
        return MockProvider()

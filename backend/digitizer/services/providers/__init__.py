"""
AI Providers Module - Modular AI provider implementations.

To add a new AI provider:
1. Create a new provider class inheriting from AIProvider
2. Implement generate()
3. Register it in AIProviderFactory
"""
from .base import AIProvider, ImageInput
from .factory import AIProviderFactory
from .gemini_provider import GeminiProvider
from .openrouter_provider import OpenRouterProvider
from .anthropic_provider import AnthropicProvider
from .mock_provider import MockProvider

__all__ = [
    "AIProvider",
    "ImageInput",
    "AIProviderFactory",
    "GeminiProvider",
    "OpenRouterProvider",
    "AnthropicProvider",
    "MockProvider",
]

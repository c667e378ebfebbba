"""LLM providers module."""

from lesson_forge.llm.providers.anthropic import AnthropicProvider
from lesson_forge.llm.providers.gemini import GeminiProvider
from lesson_forge.llm.providers.openai import OpenAIProvider

__all__ = [
    "OpenAIProvider",
    "AnthropicProvider",
    "GeminiProvider",
]

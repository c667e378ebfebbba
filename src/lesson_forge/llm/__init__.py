"""LLM integration module.

Provides:
- LLMProvider abstract base class for different LLM backends
- Concrete providers for Gemini, OpenAI, Anthropic
- TextGenerationClient for ordered provider failover
- ResponseDecoder for staged JSON extraction and repair
- Retry utilities for transient provider failures
"""

from lesson_forge.llm.base import GenerationConfig, LLMProvider, LLMResponse, get_provider
from lesson_forge.llm.decoder import ResponseDecoder
from lesson_forge.llm.failover import FailoverResult, TextGenerationClient
from lesson_forge.llm.providers import AnthropicProvider, GeminiProvider, OpenAIProvider
from lesson_forge.llm.retry import RetryPolicy, call_with_retry, with_retry

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "GenerationConfig",
    "get_provider",
    "GeminiProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "TextGenerationClient",
    "FailoverResult",
    "ResponseDecoder",
    "RetryPolicy",
    "call_with_retry",
    "with_retry",
]

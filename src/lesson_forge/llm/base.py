"""Base types and abstract classes for LLM integration."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_ANTHROPIC,
    DEFAULT_MODEL_GEMINI,
    DEFAULT_MODEL_OPENAI,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
)


@dataclass
class LLMResponse:
    """Response from an LLM provider.

    Attributes:
        content: The text content of the response.
        model: The model used for generation.
        input_tokens: Number of input tokens.
        output_tokens: Number of output tokens.
    """

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        """Total tokens used (input + output)."""
        return self.input_tokens + self.output_tokens


@dataclass
class GenerationConfig:
    """Sampling parameters passed to every provider call.

    Providers ignore parameters their API does not support (OpenAI has no top_k).
    """

    temperature: float = DEFAULT_TEMPERATURE
    top_k: int = DEFAULT_TOP_K
    top_p: float = DEFAULT_TOP_P
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS

    def to_kwargs(self) -> dict[str, Any]:
        return asdict(self)


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations should handle:
    - API authentication (key injected at construction or read from env)
    - Mapping GenerationConfig parameters onto the SDK call

    Retries and failover are NOT a provider concern; see
    lesson_forge.llm.failover and lesson_forge.llm.retry.
    """

    model: str

    @property
    def name(self) -> str:
        """Identifier used in failover diagnostics."""
        return getattr(self, "model", type(self).__name__)

    @abstractmethod
    def complete(self, prompt: str, **kwargs) -> LLMResponse:
        """Execute a completion request.

        Args:
            prompt: The prompt text to send to the LLM.
            **kwargs: temperature, top_k, top_p, max_output_tokens.

        Returns:
            LLMResponse with the completion result.
        """
        pass

    def complete_json(self, prompt: str, **kwargs) -> dict:
        """Execute a completion request expecting a JSON object.

        The raw text goes through the staged ResponseDecoder, so prose
        wrappers and common syntax slips are repaired.

        Raises:
            DecodeError: If no JSON object can be recovered.
        """
        from lesson_forge.llm.decoder import ResponseDecoder

        response = self.complete(prompt, **kwargs)
        return ResponseDecoder().decode(response.content)


# Default models for each provider
DEFAULT_MODELS = {
    "openai": DEFAULT_MODEL_OPENAI,
    "anthropic": DEFAULT_MODEL_ANTHROPIC,
    "gemini": DEFAULT_MODEL_GEMINI,
}


def get_provider(provider_name: str, model: str | None = None, **kwargs) -> LLMProvider:
    """Factory function to get an LLM provider.

    Args:
        provider_name: Name of provider ("openai", "anthropic", "gemini")
        model: Optional model name. Uses default if not specified.
        **kwargs: Additional provider-specific arguments (api_key, client).

    Returns:
        Configured LLMProvider instance.

    Raises:
        ValueError: If provider_name is unknown.

    Examples:
        >>> provider = get_provider("gemini")  # default model
        >>> provider = get_provider("gemini", "gemini-2.0-flash", api_key="...")
    """
    # Import here to avoid circular imports
    from lesson_forge.llm.providers.anthropic import AnthropicProvider
    from lesson_forge.llm.providers.gemini import GeminiProvider
    from lesson_forge.llm.providers.openai import OpenAIProvider

    providers = {
        "openai": OpenAIProvider,
        "anthropic": AnthropicProvider,
        "gemini": GeminiProvider,
    }

    if provider_name not in providers:
        raise ValueError(
            f"Unknown provider: {provider_name}. Available: {list(providers.keys())}"
        )

    provider_class = providers[provider_name]
    model = model or DEFAULT_MODELS.get(provider_name)

    return provider_class(model=model, **kwargs)

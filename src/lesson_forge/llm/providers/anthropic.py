"""Anthropic provider implementation."""

import os

from anthropic import Anthropic

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_ANTHROPIC,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
)
from lesson_forge.llm.base import LLMProvider, LLMResponse


class AnthropicProvider(LLMProvider):
    """Anthropic API provider.

    Args:
        api_key: Anthropic API key. If not provided, reads from ANTHROPIC_API_KEY env var.
        model: Model to use. Defaults to claude-3-5-haiku.
        temperature: Default sampling temperature.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL_ANTHROPIC,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY not found. Set it as environment variable or pass api_key."
            )

        self.model = model
        self.temperature = temperature
        self.client = Anthropic(api_key=self.api_key)

    def complete(self, prompt: str, **kwargs) -> LLMResponse:
        """Execute a completion request.

        Args:
            prompt: The prompt text to send.
            **kwargs: temperature, top_k, max_output_tokens.

        Returns:
            LLMResponse with the completion result.
        """
        # Anthropic rejects temperature and top_p together on newer models; top_p is dropped
        response = self.client.messages.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=kwargs.get("temperature", self.temperature),
            top_k=kwargs.get("top_k", DEFAULT_TOP_K),
            max_tokens=kwargs.get("max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS),
        )

        content = response.content[0].text if response.content else ""

        return LLMResponse(
            content=content,
            model=response.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )

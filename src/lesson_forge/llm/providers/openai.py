"""OpenAI provider implementation."""

import os

from openai import OpenAI

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_OPENAI,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)
from lesson_forge.llm.base import LLMProvider, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI API provider.

    Args:
        api_key: OpenAI API key. If not provided, reads from OPENAI_API_KEY env var.
        model: Model to use. Defaults to gpt-4.1-mini.
        temperature: Default sampling temperature.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL_OPENAI,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "OPENAI_API_KEY not found. Set it as environment variable or pass api_key."
            )

        self.model = model
        self.temperature = temperature
        self.client = OpenAI(api_key=self.api_key)

    def complete(self, prompt: str, **kwargs) -> LLMResponse:
        """Execute a completion request.

        Args:
            prompt: The prompt text to send.
            **kwargs: temperature, top_p, max_output_tokens (top_k is not supported).

        Returns:
            LLMResponse with the completion result.
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=kwargs.get("temperature", self.temperature),
            top_p=kwargs.get("top_p", DEFAULT_TOP_P),
            max_tokens=kwargs.get("max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS),
        )

        content = response.choices[0].message.content or ""

        return LLMResponse(
            content=content,
            model=response.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )

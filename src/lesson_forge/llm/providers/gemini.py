"""Gemini provider implementation."""

import os

from google import genai
from google.genai import types

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_GEMINI,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
)
from lesson_forge.llm.base import LLMProvider, LLMResponse


class GeminiProvider(LLMProvider):
    """Google Gemini API provider.

    Several providers (one per model of a fallback chain) can share one
    ``genai.Client`` by passing ``client``.

    Args:
        api_key: Google API key. If not provided, reads from GOOGLE_API_KEY env var.
        model: Model to use. Defaults to gemini-2.5-flash.
        temperature: Default sampling temperature.
        client: Optional pre-built genai.Client.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL_GEMINI,
        temperature: float = DEFAULT_TEMPERATURE,
        client: "genai.Client | None" = None,
    ):
        self.model = model
        self.temperature = temperature

        if client is not None:
            self._client = client
            return

        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError(
                "GOOGLE_API_KEY not found. Set it as environment variable or pass api_key."
            )
        self._client = genai.Client(api_key=self.api_key)

    def complete(self, prompt: str, **kwargs) -> LLMResponse:
        """Execute a completion request.

        Args:
            prompt: The prompt text to send.
            **kwargs: temperature, top_k, top_p, max_output_tokens.

        Returns:
            LLMResponse with the completion result.
        """
        config_kwargs: dict = {
            "temperature": kwargs.get("temperature", self.temperature),
            "top_k": kwargs.get("top_k", DEFAULT_TOP_K),
            "top_p": kwargs.get("top_p", DEFAULT_TOP_P),
            "max_output_tokens": kwargs.get("max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS),
        }

        # 2.5+ flash models think by default; lesson JSON does not need it
        if "flash" in self.model and "2.0" not in self.model:
            config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=0)

        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(**config_kwargs),
        )

        content = response.text or ""

        input_tokens = 0
        output_tokens = 0
        if hasattr(response, "usage_metadata") and response.usage_metadata:
            input_tokens = response.usage_metadata.prompt_token_count or 0
            output_tokens = response.usage_metadata.candidates_token_count or 0

        return LLMResponse(
            content=content,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

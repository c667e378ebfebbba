"""Tests for LLM base module: response types, configuration, provider factory."""

from dataclasses import asdict
from unittest.mock import patch

import pytest

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_GEMINI,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
)
from lesson_forge.errors import DecodeError
from lesson_forge.llm.base import GenerationConfig, LLMProvider, LLMResponse, get_provider


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_create_response(self):
        response = LLMResponse(content='{"a": 1}', model="gemini-2.5-flash", input_tokens=100, output_tokens=50)
        assert response.content == '{"a": 1}'
        assert response.model == "gemini-2.5-flash"
        assert asdict(response)["input_tokens"] == 100

    def test_response_total_tokens(self):
        response = LLMResponse(content="x", model="m", input_tokens=100, output_tokens=50)
        assert response.total_tokens == 150


class TestGenerationConfig:
    """Tests for GenerationConfig defaults."""

    def test_defaults(self):
        config = GenerationConfig()
        assert config.to_kwargs() == {
            "temperature": DEFAULT_TEMPERATURE,
            "top_k": DEFAULT_TOP_K,
            "top_p": DEFAULT_TOP_P,
            "max_output_tokens": DEFAULT_MAX_OUTPUT_TOKENS,
        }
        assert (DEFAULT_TEMPERATURE, DEFAULT_TOP_K, DEFAULT_TOP_P, DEFAULT_MAX_OUTPUT_TOKENS) == (
            0.1,
            40,
            0.95,
            8192,
        )


class TestLLMProviderABC:
    """Tests for LLMProvider abstract base class."""

    def test_cannot_instantiate_directly(self):
        with pytest.raises(TypeError):
            LLMProvider()

    def test_complete_json_repairs_response(self, make_provider):
        provider = make_provider("m", 'Here you go: {"topics": ["a", "b",],}')
        assert provider.complete_json("prompt") == {"topics": ["a", "b"]}

    def test_complete_json_raises_decode_error(self, make_provider):
        provider = make_provider("m", "no json here")
        with pytest.raises(DecodeError):
            provider.complete_json("prompt")

    def test_name_is_model(self, make_provider):
        assert make_provider("gemini-2.0-flash", "x").name == "gemini-2.0-flash"


class TestGetProvider:
    """Tests for the provider factory."""

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("mistral")

    def test_default_model(self):
        with patch("lesson_forge.llm.providers.gemini.genai.Client"):
            provider = get_provider("gemini", api_key="key")
        assert provider.model == DEFAULT_MODEL_GEMINI

    def test_explicit_model(self):
        with patch("lesson_forge.llm.providers.openai.OpenAI"):
            provider = get_provider("openai", "gpt-4.1", api_key="key")
        assert provider.model == "gpt-4.1"

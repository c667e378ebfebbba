"""Tests for environment settings and provider chain construction."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from lesson_forge.constants.llm_config import DEFAULT_GEMINI_CHAIN
from lesson_forge.llm.providers.gemini import GeminiProvider
from lesson_forge.llm.providers.openai import OpenAIProvider
from lesson_forge.settings import Settings, build_providers, load_settings, parse_provider_chain
from lesson_forge.validation.dialogue import DialogueEnforcement


class TestParseProviderChain:
    def test_explicit_models(self):
        assert parse_provider_chain("gemini:gemini-2.5-pro, openai:gpt-4.1") == [
            ("gemini", "gemini-2.5-pro"),
            ("openai", "gpt-4.1"),
        ]

    def test_missing_model_uses_default(self):
        assert parse_provider_chain("Anthropic") == [("anthropic", "claude-3-5-haiku-20241022")]

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider in chain: mistral"):
            parse_provider_chain("gemini,mistral:large")

    def test_empty_chain(self):
        with pytest.raises(ValueError, match="empty"):
            parse_provider_chain(" , ")


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(environ={})
        assert [model for _, model in settings.provider_chain] == list(DEFAULT_GEMINI_CHAIN)
        assert settings.api_keys == {}
        assert settings.generation.temperature == 0.1
        assert settings.retry_attempts == 3
        assert settings.dialogue_enforcement == DialogueEnforcement.LOG

    def test_values_from_environment(self):
        settings = load_settings(
            environ={
                "GOOGLE_API_KEY": "g-key",
                "OPENAI_API_KEY": "",
                "LESSON_PROVIDER_CHAIN": "openai:gpt-4.1,gemini",
                "LESSON_TEMPERATURE": "0.4",
                "LESSON_TOP_K": "20",
                "LESSON_RETRY_ATTEMPTS": "1",
                "LESSON_DIALOGUE_ENFORCEMENT": "REJECT",
            }
        )
        assert settings.provider_chain == [("openai", "gpt-4.1"), ("gemini", "gemini-2.5-flash")]
        assert settings.api_keys == {"gemini": "g-key"}
        assert settings.generation.temperature == 0.4
        assert settings.generation.top_k == 20
        assert settings.retry_attempts == 1
        assert settings.dialogue_enforcement == DialogueEnforcement.REJECT

    @pytest.mark.parametrize(
        "name,value",
        [
            ("LESSON_TOP_K", "many"),
            ("LESSON_DIALOGUE_ENFORCEMENT", "ignore"),
            ("LESSON_LOG_LEVEL", "chatty"),
        ],
    )
    def test_invalid_values(self, name, value):
        with pytest.raises(ValueError, match=f"Invalid value for {name}"):
            load_settings(environ={name: value})

    def test_log_settings(self):
        settings = load_settings(environ={"LESSON_LOG_LEVEL": "debug", "LESSON_LOG_FILE": "logs/run.log"})
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "logs/run.log"

    def test_log_settings_default(self):
        settings = load_settings(environ={})
        assert settings.log_level == "INFO"
        assert settings.log_file is None

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LESSON_TOP_K", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LESSON_TOP_K=12\n")
        try:
            settings = load_settings(env_file)
        finally:
            monkeypatch.delenv("LESSON_TOP_K", raising=False)
        assert settings.generation.top_k == 12


class TestBuildProviders:
    def test_gemini_entries_share_one_client(self):
        settings = Settings(
            provider_chain=[("gemini", "gemini-2.5-flash"), ("gemini", "gemini-2.0-flash")],
            api_keys={"gemini": "g-key"},
        )
        with patch("lesson_forge.settings.genai.Client", return_value=MagicMock()) as mock_cls:
            providers = build_providers(settings)

        mock_cls.assert_called_once_with(api_key="g-key")
        assert all(isinstance(p, GeminiProvider) for p in providers)
        assert [p.name for p in providers] == ["gemini-2.5-flash", "gemini-2.0-flash"]
        assert providers[0]._client is providers[1]._client

    def test_missing_key_skips_entry(self, caplog):
        settings = Settings(
            provider_chain=[("anthropic", "claude-3-5-haiku-20241022"), ("openai", "gpt-4.1")],
            api_keys={"openai": "o-key"},
        )
        with patch("lesson_forge.llm.providers.openai.OpenAI"):
            with caplog.at_level(logging.WARNING):
                providers = build_providers(settings)

        assert len(providers) == 1
        assert isinstance(providers[0], OpenAIProvider)
        assert "ANTHROPIC_API_KEY not set" in caplog.text

"""Runtime configuration read from the environment.

Values come from environment variables, optionally loaded from a ``.env``
file first. Defaults live in ``lesson_forge.constants``.

Environment variables:
    GOOGLE_API_KEY, OPENAI_API_KEY, ANTHROPIC_API_KEY: provider credentials
    LESSON_PROVIDER_CHAIN: comma-separated "provider:model" entries, in failover order
    LESSON_TEMPERATURE, LESSON_TOP_K, LESSON_TOP_P, LESSON_MAX_OUTPUT_TOKENS: sampling
    LESSON_RETRY_ATTEMPTS: attempts around the failover call (1 disables retry)
    LESSON_DIALOGUE_ENFORCEMENT: "log" or "reject"
    LESSON_LOG_LEVEL, LESSON_LOG_FILE: passed to setup_logging by host applications
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv
from google import genai

from lesson_forge.constants.llm_config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_PROVIDER_CHAIN,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
)
from lesson_forge.llm.base import DEFAULT_MODELS, GenerationConfig, LLMProvider, get_provider
from lesson_forge.validation.dialogue import DialogueEnforcement

logger = logging.getLogger(__name__)

API_KEY_VARS = {
    "gemini": "GOOGLE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass
class Settings:
    """Pipeline configuration.

    Attributes:
        provider_chain: Ordered (provider, model) pairs for failover.
        api_keys: Provider name -> API key (missing keys are absent).
        generation: Sampling parameters for every provider call.
        retry_attempts: Attempts around the whole failover call.
        dialogue_enforcement: What to do with turn-taking violations.
        log_level: Level name for setup_logging.
        log_file: Optional log file for setup_logging.
    """

    provider_chain: list[tuple[str, str]] = field(
        default_factory=lambda: parse_provider_chain(DEFAULT_PROVIDER_CHAIN)
    )
    api_keys: dict[str, str] = field(default_factory=dict)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    dialogue_enforcement: DialogueEnforcement = DialogueEnforcement.LOG
    log_level: str = "INFO"
    log_file: str | None = None


def parse_provider_chain(value: str) -> list[tuple[str, str]]:
    """Parse "provider:model,provider:model" into ordered pairs.

    An entry without a model uses the provider's default model.

    Raises:
        ValueError: If an entry names an unknown provider or the chain is empty.
    """
    chain: list[tuple[str, str]] = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        provider, _, model = entry.partition(":")
        provider = provider.strip().lower()
        if provider not in DEFAULT_MODELS:
            raise ValueError(
                f"Unknown provider in chain: {provider}. Available: {list(DEFAULT_MODELS)}"
            )
        chain.append((provider, model.strip() or DEFAULT_MODELS[provider]))
    if not chain:
        raise ValueError("Provider chain is empty")
    return chain


def _get(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


def _log_level(value: str) -> str:
    name = value.upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(name)
    return name


def load_settings(
    env_file: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Load settings from the environment.

    Args:
        env_file: Optional .env file loaded (without overriding) before reading.
        environ: Mapping to read instead of os.environ; no .env file is loaded then.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    settings = Settings(
        provider_chain=parse_provider_chain(environ.get("LESSON_PROVIDER_CHAIN") or DEFAULT_PROVIDER_CHAIN),
        api_keys={
            provider: environ[var] for provider, var in API_KEY_VARS.items() if environ.get(var)
        },
        generation=GenerationConfig(
            temperature=_get(environ, "LESSON_TEMPERATURE", DEFAULT_TEMPERATURE, float),
            top_k=_get(environ, "LESSON_TOP_K", DEFAULT_TOP_K, int),
            top_p=_get(environ, "LESSON_TOP_P", DEFAULT_TOP_P, float),
            max_output_tokens=_get(environ, "LESSON_MAX_OUTPUT_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS, int),
        ),
        retry_attempts=_get(environ, "LESSON_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS, int),
        dialogue_enforcement=_get(
            environ, "LESSON_DIALOGUE_ENFORCEMENT", DialogueEnforcement.LOG,
            lambda v: DialogueEnforcement(v.lower()),
        ),
        log_level=_get(environ, "LESSON_LOG_LEVEL", "INFO", _log_level),
        log_file=environ.get("LESSON_LOG_FILE") or None,
    )
    logger.debug(
        f"Loaded settings: chain={settings.provider_chain}, "
        f"enforcement={settings.dialogue_enforcement.value}"
    )
    return settings


def build_providers(settings: Settings) -> list[LLMProvider]:
    """Instantiate the provider chain.

    Gemini entries share a single ``genai.Client``. Entries whose provider has
    no API key are skipped with a warning.
    """
    providers: list[LLMProvider] = []
    gemini_client = None
    for provider_name, model in settings.provider_chain:
        api_key = settings.api_keys.get(provider_name)
        if not api_key:
            logger.warning(
                f"Skipping {provider_name}:{model}: {API_KEY_VARS[provider_name]} not set"
            )
            continue
        if provider_name == "gemini":
            if gemini_client is None:
                gemini_client = genai.Client(api_key=api_key)
            providers.append(get_provider("gemini", model, client=gemini_client))
        else:
            providers.append(get_provider(provider_name, model, api_key=api_key))
    return providers

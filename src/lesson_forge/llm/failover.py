"""Provider failover for a single prompt.

Tries an ordered chain of providers until one returns non-empty text. If all
fail, raises AllProvidersFailedError with every provider's error. Providers are
attempted strictly one after another, never in parallel, so failure order is
deterministic and no duplicate billed calls are made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from lesson_forge.errors import AllProvidersFailedError, ProviderFailure
from lesson_forge.llm.base import GenerationConfig, LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


@dataclass
class FailoverResult:
    """Text produced by the first provider that succeeded."""

    provider_used: str
    raw_text: str
    response: LLMResponse | None = None


class TextGenerationClient:
    """Failover client over an explicitly injected provider chain.

    Args:
        providers: Ordered providers, most preferred first.
        config: Default generation parameters for every call.
    """

    def __init__(
        self,
        providers: Sequence[LLMProvider],
        config: GenerationConfig | None = None,
    ):
        self.providers = list(providers)
        self.config = config or GenerationConfig()

    def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
        providers: Sequence[LLMProvider] | None = None,
    ) -> FailoverResult:
        """Generate text for prompt using the first provider that succeeds.

        Args:
            prompt: Prompt text.
            config: Generation parameters; defaults to the client's config.
            providers: Ordered chain for this call; defaults to the client's chain.

        Returns:
            FailoverResult naming the provider used and its raw text.

        Raises:
            AllProvidersFailedError: If every provider raised or returned empty text.
        """
        chain = list(providers) if providers is not None else self.providers
        params = (config or self.config).to_kwargs()
        failures: list[ProviderFailure] = []

        for provider in chain:
            try:
                response = provider.complete(prompt, **params)
                text = response.content
                if not text or not text.strip():
                    raise ValueError("Empty response text")
            except Exception as e:
                failures.append(ProviderFailure(provider=provider.name, error=str(e)))
                logger.warning(f"Provider {provider.name} failed: {e}")
                continue

            if failures:
                logger.info(
                    f"Provider {provider.name} succeeded after {len(failures)} failed attempt(s)"
                )
            return FailoverResult(provider_used=provider.name, raw_text=text, response=response)

        raise AllProvidersFailedError(failures)

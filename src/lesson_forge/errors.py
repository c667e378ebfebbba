"""Exception types raised by the lesson generation pipeline.

Input errors (unsupported tier, bad duration) fail fast. Provider and decode
errors surface only after local recovery (failover, repair stages) is
exhausted. Validation findings and continuity lookups never raise.
"""

from __future__ import annotations

from dataclasses import dataclass


class LessonGenerationError(Exception):
    """Base class for all pipeline errors."""

    pass


@dataclass
class ProviderFailure:
    """A single backend that errored or returned empty text during failover."""

    provider: str
    error: str

    def __str__(self) -> str:
        return f"{self.provider}: {self.error}"


class AllProvidersFailedError(LessonGenerationError):
    """Raised when every provider in the failover chain failed."""

    def __init__(self, failures: list[ProviderFailure]) -> None:
        self.failures = list(failures)
        if self.failures:
            details = "\n".join(str(failure) for failure in self.failures)
            message = f"All providers failed. Details:\n{details}"
        else:
            message = "All providers failed. Details:\nno providers configured"
        super().__init__(message)


class DecodeError(LessonGenerationError):
    """Raised when provider text cannot be turned into a JSON object.

    Attributes:
        position: Offset of the syntax error in the final repaired candidate, if any.
        context: Text window around the error offset, for diagnostics.
    """

    def __init__(self, message: str, position: int | None = None, context: str = "") -> None:
        self.position = position
        self.context = context
        if context:
            message = f"{message}\nContext: ...{context}..."
        super().__init__(message)


class UnsupportedTierError(LessonGenerationError, ValueError):
    """Raised when a learner's tier has no registered level policy."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Unsupported CEFR level: {level}")


class LessonRejectedError(LessonGenerationError):
    """Raised in strict dialogue enforcement when a lesson breaks turn-taking."""

    def __init__(self, message: str, violations: list | None = None) -> None:
        self.violations = list(violations or [])
        super().__init__(message)


class RetryCancelledError(LessonGenerationError):
    """Raised when a retry wait is cancelled by the surrounding request."""

    pass

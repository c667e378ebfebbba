"""Retry-with-backoff for transient provider failures.

Applied by the caller around a whole operation (typically one failover call),
not inside the failover client. Only errors whose message carries a retryable
marker ("overloaded", "unavailable", ...) are retried; anything else
propagates on the first attempt.
"""

from __future__ import annotations

import functools
import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from lesson_forge.constants.llm_config import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_BASE_DELAY,
    DEFAULT_RETRY_JITTER,
    DEFAULT_RETRY_MAX_DELAY,
    RETRYABLE_ERROR_MARKERS,
)
from lesson_forge.errors import RetryCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Bounded exponential backoff with jitter.

    Attributes:
        max_attempts: Total attempts including the first one.
        base_delay: Delay before the second attempt, doubled afterwards (seconds).
        max_delay: Upper bound for the exponential part of the delay.
        jitter: Upper bound of the uniform random delay added to each wait.
        retryable_markers: Lowercase substrings that mark an error as transient.
    """

    max_attempts: int = DEFAULT_RETRY_ATTEMPTS
    base_delay: float = DEFAULT_RETRY_BASE_DELAY
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    jitter: float = DEFAULT_RETRY_JITTER
    retryable_markers: tuple[str, ...] = RETRYABLE_ERROR_MARKERS

    def is_retryable(self, error: BaseException) -> bool:
        message = str(error).lower()
        return any(marker in message for marker in self.retryable_markers)

    def delay_for(self, attempt: int) -> float:
        """Delay before the attempt following attempt number ``attempt`` (1-based)."""
        delay = min(self.max_delay, self.base_delay * (2 ** (attempt - 1)))
        if self.jitter > 0:
            delay += random.uniform(0, self.jitter)
        return delay


def _wait(delay: float, cancel_event: threading.Event | None) -> None:
    if cancel_event is None:
        time.sleep(delay)
        return
    if cancel_event.wait(delay):
        raise RetryCancelledError("Retry wait cancelled")


def call_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy | None = None,
    cancel_event: threading.Event | None = None,
    on_retry: Callable[[int, Exception], None] | None = None,
) -> T:
    """Run operation, retrying transient failures with exponential backoff.

    Args:
        operation: Zero-argument callable to run.
        policy: Retry policy (defaults to RetryPolicy()).
        cancel_event: If set while waiting, the wait aborts with RetryCancelledError.
        on_retry: Optional callback called before each retry (attempt_num, error).

    Returns:
        The operation's result.

    Raises:
        RetryCancelledError: If cancel_event is set before or during a wait.
        Exception: The last error when it is not retryable or attempts are exhausted.
    """
    policy = policy or RetryPolicy()
    attempts = max(1, policy.max_attempts)

    for attempt in range(1, attempts + 1):
        if cancel_event is not None and cancel_event.is_set():
            raise RetryCancelledError("Operation cancelled before attempt")
        try:
            return operation()
        except Exception as e:
            if not policy.is_retryable(e) or attempt >= attempts:
                if attempt > 1:
                    logger.error(f"Operation failed after {attempt} attempt(s): {e}")
                raise

            delay = policy.delay_for(attempt)
            logger.warning(
                f"Transient failure (attempt {attempt}/{attempts}): {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            if on_retry:
                on_retry(attempt, e)
            _wait(delay, cancel_event)

    raise AssertionError("unreachable")


def with_retry(
    policy: RetryPolicy | None = None,
    cancel_event: threading.Event | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator form of call_with_retry.

    Example:
        >>> @with_retry(RetryPolicy(max_attempts=2))
        ... def fetch():
        ...     return client.generate(prompt)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return call_with_retry(
                lambda: func(*args, **kwargs), policy=policy, cancel_event=cancel_event
            )

        return wrapper

    return decorator

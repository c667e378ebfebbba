"""Tests for retry-with-backoff around provider calls."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from lesson_forge.errors import AllProvidersFailedError, ProviderFailure, RetryCancelledError
from lesson_forge.llm.retry import RetryPolicy, call_with_retry, with_retry


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_retryable_markers_are_case_insensitive(self):
        policy = RetryPolicy()
        assert policy.is_retryable(RuntimeError("Model is OVERLOADED"))
        assert policy.is_retryable(RuntimeError("503 Service Unavailable"))
        assert not policy.is_retryable(ValueError("invalid api key"))

    def test_aggregated_failover_error_is_retryable(self):
        error = AllProvidersFailedError([ProviderFailure("gemini-2.5-flash", "model overloaded")])
        assert RetryPolicy().is_retryable(error)

    def test_delay_grows_exponentially_and_is_capped(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=3.0, jitter=0)
        assert [policy.delay_for(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]

    def test_jitter_is_bounded(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=8.0, jitter=0.5)
        for _ in range(20):
            assert 1.0 <= policy.delay_for(1) <= 1.5


class TestCallWithRetry:
    """Tests for call_with_retry."""

    @pytest.fixture
    def policy(self):
        return RetryPolicy(max_attempts=3, base_delay=0.01, max_delay=0.01, jitter=0)

    def test_success_first_try(self, policy):
        operation = MagicMock(return_value="ok")
        assert call_with_retry(operation, policy) == "ok"
        assert operation.call_count == 1

    def test_retries_transient_errors(self, policy):
        operation = MagicMock(side_effect=[RuntimeError("overloaded"), RuntimeError("503"), "ok"])
        on_retry = MagicMock()

        with patch("lesson_forge.llm.retry.time.sleep") as mock_sleep:
            assert call_with_retry(operation, policy, on_retry=on_retry) == "ok"

        assert operation.call_count == 3
        assert mock_sleep.call_count == 2
        assert [c.args[0] for c in on_retry.call_args_list] == [1, 2]

    def test_non_retryable_error_propagates_immediately(self, policy):
        operation = MagicMock(side_effect=ValueError("invalid api key"))
        with patch("lesson_forge.llm.retry.time.sleep") as mock_sleep:
            with pytest.raises(ValueError, match="invalid api key"):
                call_with_retry(operation, policy)
        assert operation.call_count == 1
        mock_sleep.assert_not_called()

    def test_gives_up_after_max_attempts(self, policy):
        operation = MagicMock(side_effect=RuntimeError("overloaded"))
        with patch("lesson_forge.llm.retry.time.sleep"):
            with pytest.raises(RuntimeError, match="overloaded"):
                call_with_retry(operation, policy)
        assert operation.call_count == 3

    def test_cancel_during_wait(self):
        policy = RetryPolicy(max_attempts=3, base_delay=5.0, max_delay=5.0, jitter=0)
        cancel = threading.Event()

        def operation():
            cancel.set()
            raise RuntimeError("overloaded")

        with pytest.raises(RetryCancelledError):
            call_with_retry(operation, policy, cancel_event=cancel)

    def test_cancel_before_first_attempt(self, policy):
        cancel = threading.Event()
        cancel.set()
        operation = MagicMock()
        with pytest.raises(RetryCancelledError):
            call_with_retry(operation, policy, cancel_event=cancel)
        operation.assert_not_called()

    def test_decorator(self, policy):
        calls = []

        @with_retry(policy)
        def flaky(value):
            calls.append(value)
            if len(calls) < 2:
                raise RuntimeError("rate limit")
            return value * 2

        with patch("lesson_forge.llm.retry.time.sleep"):
            assert flaky(21) == 42
        assert calls == [21, 21]

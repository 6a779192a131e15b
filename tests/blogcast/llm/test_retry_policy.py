"""
Unit Tests: RetryPolicy

Retry decisions per status and exception, and the capped exponential
backoff with jitter.
"""

import asyncio

import httpx
import pytest

from blogcast.llm.config import RetryConfig
from blogcast.llm.retry import (
    RetryPolicy,
    RetryState,
    RETRYABLE_STATUS_CODES,
    describe_status,
    is_network_error,
)


def no_jitter(low, high):
    return 0.0


def max_jitter(low, high):
    return high


# ============================================================================
# Test: should_retry
# ============================================================================

@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_transient_statuses_are_retried(status):
    assert RetryPolicy().should_retry(status, attempt=1) is True


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 501])
def test_terminal_statuses_are_not_retried(status):
    assert RetryPolicy().should_retry(status, attempt=1) is False


def test_retryable_status_set():
    assert RETRYABLE_STATUS_CODES == {429, 500, 502, 503, 504}


def test_no_retry_once_attempts_are_spent():
    policy = RetryPolicy(max_retries=6)
    assert policy.should_retry(503, attempt=5) is True
    assert policy.should_retry(503, attempt=6) is False


# ============================================================================
# Test: network error classification
# ============================================================================

@pytest.mark.parametrize("error", [
    httpx.ConnectError("All connection attempts failed"),
    httpx.ReadTimeout("timed out"),
    httpx.RemoteProtocolError("Server disconnected without sending a response."),
    asyncio.TimeoutError(),
    ConnectionResetError("[Errno 104] Connection reset by peer"),
    OSError("getaddrinfo ENOTFOUND gemini.test"),
    RuntimeError("fetch failed"),
])
def test_network_errors_are_recognised(error):
    assert is_network_error(error) is True
    assert RetryPolicy().should_retry_on_exception(error, attempt=1) is True


@pytest.mark.parametrize("error", [
    ValueError("bad payload"),
    KeyError("candidates"),
    RuntimeError("something else went wrong"),
])
def test_other_errors_are_not_network_errors(error):
    assert is_network_error(error) is False
    assert RetryPolicy().should_retry_on_exception(error, attempt=1) is False


def test_network_retry_respects_attempt_budget():
    policy = RetryPolicy(max_retries=3)
    assert policy.should_retry_on_exception(httpx.ConnectError("refused"), attempt=3) is False


# ============================================================================
# Test: delay_for
# ============================================================================

def test_delays_double_per_attempt_without_jitter():
    policy = RetryPolicy(uniform=no_jitter)
    assert [policy.delay_for(n) for n in range(1, 6)] == [1000, 2000, 4000, 8000, 16000]


def test_delay_is_capped():
    policy = RetryPolicy(uniform=max_jitter)
    assert policy.delay_for(6) == 30000
    assert policy.delay_for(50) == 30000


def test_jitter_is_added_within_bound():
    policy = RetryPolicy(uniform=max_jitter)
    assert policy.delay_for(1) == 1300
    assert policy.delay_for(2) == 2300


def test_jitter_uses_zero_to_jitter_range():
    calls = []

    def recording_uniform(low, high):
        calls.append((low, high))
        return 0.0

    RetryPolicy(uniform=recording_uniform).delay_for(1)
    assert calls == [(0, 300)]


def test_huge_attempt_numbers_do_not_overflow():
    policy = RetryPolicy(backoff_factor=10.0)
    assert policy.delay_for(10_000) == 30000


def test_from_config_copies_settings():
    policy = RetryPolicy.from_config(RetryConfig(max_retries=3, base_delay_ms=50, max_delay_ms=400, backoff_factor=3))
    assert policy.max_retries == 3
    assert policy.base_delay_ms == 50
    assert policy.max_delay_ms == 400
    assert policy.backoff_factor == 3
    assert policy.jitter_ms == 300


# ============================================================================
# Test: helpers
# ============================================================================

def test_describe_status():
    assert describe_status(429) == "rate limiting"
    assert describe_status(503) == "service unavailable"
    assert describe_status(418) == "HTTP 418"


def test_retry_state_starts_empty():
    state = RetryState()
    assert state.attempt == 0
    assert state.last_error is None

"""
Retry Policy with Exponential Backoff

Decides whether a failed generation API attempt should be retried and how
long to wait first. Delays grow exponentially per attempt, carry a small
random jitter so concurrent callers do not retry in lockstep, and are capped
at a maximum delay.

Attempts are numbered from 1. With the default configuration:
    - Attempt 1 fails: wait ~1s
    - Attempt 2 fails: wait ~2s
    - Attempt 3 fails: wait ~4s
    - ...capped at 30s
"""

import random
from dataclasses import dataclass
from typing import Callable, Optional

from blogcast.llm.config import RetryConfig


# HTTP statuses that indicate a transient failure
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

# Lower-cased fragments that identify a transport-level failure
NETWORK_ERROR_MARKERS = (
    "fetch failed",
    "network",
    "connection",
    "connect",
    "timeout",
    "timed out",
    "reset",
    "econnreset",
    "enotfound",
    "etimedout",
    "name or service not known",
    "aborted",
    "readerror",
    "writeerror",
    "remoteprotocolerror",
)

STATUS_DESCRIPTIONS = {
    429: "rate limiting",
    500: "internal server error",
    502: "bad gateway",
    503: "service unavailable",
    504: "gateway timeout",
}

JITTER_MS = 300


def describe_status(status_code: int) -> str:
    """Short human description of a retryable status, for log lines."""
    return STATUS_DESCRIPTIONS.get(status_code, f"HTTP {status_code}")


def is_network_error(error: BaseException) -> bool:
    """Check whether an exception is a network/transport-level failure.

    Matches the exception type name and message against NETWORK_ERROR_MARKERS,
    so both ``httpx.ConnectError`` and a bare ``TimeoutError`` qualify.

    Args:
        error: Exception raised while performing a request

    Returns:
        True if the error looks like a transport failure
    """
    text = f"{type(error).__name__}: {error}".lower()
    return any(marker in text for marker in NETWORK_ERROR_MARKERS)


@dataclass
class RetryState:
    """Per-call retry bookkeeping, discarded when the call returns."""
    attempt: int = 0
    last_error: Optional[Exception] = None


@dataclass(frozen=True)
class RetryPolicy:
    """Retry decisions and backoff delays for generation API calls.

    Attributes:
        max_retries: Total number of attempts allowed
        base_delay_ms: Delay after the first failed attempt
        max_delay_ms: Ceiling for any single delay
        backoff_factor: Growth factor per attempt
        jitter_ms: Upper bound of the uniform random jitter
        uniform: Random source, ``random.uniform`` unless a test pins it

    Example:
        >>> policy = RetryPolicy()
        >>> policy.should_retry(503, attempt=1)
        True
        >>> policy.should_retry(401, attempt=1)
        False
    """
    max_retries: int = 6
    base_delay_ms: float = 1000
    max_delay_ms: float = 30000
    backoff_factor: float = 2.0
    jitter_ms: float = JITTER_MS
    uniform: Callable[[float, float], float] = random.uniform

    @classmethod
    def from_config(cls, config: RetryConfig) -> 'RetryPolicy':
        """Build a policy from the retry section of the Gemini config."""
        return cls(
            max_retries=config.max_retries,
            base_delay_ms=config.base_delay_ms,
            max_delay_ms=config.max_delay_ms,
            backoff_factor=config.backoff_factor,
        )

    def should_retry(self, status_code: int, attempt: int) -> bool:
        """Check if an HTTP failure on ``attempt`` should be retried."""
        return attempt < self.max_retries and status_code in RETRYABLE_STATUS_CODES

    def should_retry_on_exception(self, error: BaseException, attempt: int) -> bool:
        """Check if an exception raised on ``attempt`` should be retried.

        Only network/transport-level failures are retried; anything else
        terminates the call.
        """
        return attempt < self.max_retries and is_network_error(error)

    def delay_for(self, attempt: int) -> float:
        """Calculate the delay in milliseconds before retrying after ``attempt``.

        Uses ``min(base * factor^(attempt-1) + jitter, max_delay)``.

        Args:
            attempt: The attempt that just failed (1-indexed)

        Returns:
            Delay in milliseconds, never above max_delay_ms
        """
        exponent = max(attempt - 1, 0)
        try:
            delay = self.base_delay_ms * (self.backoff_factor ** exponent)
        except OverflowError:
            return float(self.max_delay_ms)
        jitter = self.uniform(0, self.jitter_ms)
        return float(min(delay + jitter, self.max_delay_ms))

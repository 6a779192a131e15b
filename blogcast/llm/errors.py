"""
Gemini Client Error Classes

This module defines the exception hierarchy for generation API errors.
All errors inherit from LLMError so callers can catch them in one place.

The string form of every error is a short, non-technical message that is safe
to show to end users. Diagnostic detail (HTTP status, raw error body) travels
on the ``status_code`` and ``details`` attributes and is only ever logged.

Error Hierarchy:
    LLMError (base)
    ├── ConfigurationError
    │   └── MissingCredentialError (no API key, never retried)
    └── ProviderError (generic service error)
        ├── InvalidRequestError (400, payload rejected)
        ├── AuthenticationError (401, 403)
        ├── RateLimitError (429, retryable)
        ├── ServiceUnavailableError (500/502/503/504, retryable)
        ├── NetworkError (transport failure or timeout, retryable)
        └── MalformedResponseError (no usable text in the response)

Usage:
    >>> from blogcast.llm.errors import error_for_status
    >>> raise error_for_status(503, "Service Unavailable", body)
"""

from typing import Optional


class LLMError(Exception):
    """Base exception for all generation API errors.

    Attributes:
        status_code: HTTP status that produced the error, if any
        details: Raw diagnostic text (error body, transport message)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ConfigurationError(LLMError):
    """Raised when client configuration is invalid or missing."""
    pass


class MissingCredentialError(ConfigurationError):
    """Raised when no Gemini API key is configured.

    This is a fatal precondition: it is raised before any network call
    and is never retried.

    Example:
        >>> raise MissingCredentialError(
        >>>     "Gemini API key is not configured. Set GEMINI_API_KEY."
        >>> )
    """
    pass


class ProviderError(LLMError):
    """Raised when the remote service reports a failure.

    Used directly for statuses with no dedicated subclass; the message
    then carries the status code and reason phrase.
    """
    pass


class InvalidRequestError(ProviderError):
    """Raised when the provider rejects the request payload (HTTP 400).

    This is a permanent error that should NOT trigger retry logic.
    """
    pass


class AuthenticationError(ProviderError):
    """Raised when the API key is invalid or lacks permissions (401/403).

    This is a permanent error that should NOT trigger retry logic.
    """
    pass


class RateLimitError(ProviderError):
    """Raised when the provider rate limit is exceeded (HTTP 429).

    Retried with exponential backoff until the retry budget is spent.
    """
    pass


class ServiceUnavailableError(ProviderError):
    """Raised on 500/502/503/504 responses.

    Retried with exponential backoff until the retry budget is spent.
    """
    pass


class NetworkError(ProviderError):
    """Raised when the request could not complete at the transport level.

    Common scenarios:
    - DNS resolution failures
    - Connection refused or reset
    - Per-attempt timeout reached (the request is cancelled)
    """
    pass


class MalformedResponseError(ProviderError):
    """Raised when a response carries no usable text.

    Indicates an unexpected change in the provider's response contract,
    so it is never retried.
    """
    pass


AUTH_FAILED_MESSAGE = "Invalid API key. Please check your Gemini API configuration."
FORBIDDEN_MESSAGE = "Access forbidden. Your API key may not have the required permissions."
RATE_LIMITED_MESSAGE = "Too many requests. Please wait a moment before trying again."
UNAVAILABLE_MESSAGE = (
    "Gemini service is temporarily unavailable. Please try again in a few minutes."
)
UNSUPPORTED_FILE_MESSAGE = (
    "The uploaded file format is not supported or the file may be corrupted."
)
INVALID_REQUEST_MESSAGE = "Invalid request. Please check your file and try again."
NETWORK_FAILURE_MESSAGE = (
    "Could not reach the Gemini service. Please check your connection and try again."
)
MALFORMED_RESPONSE_MESSAGE = "Failed to extract text from Gemini response"
MISSING_CREDENTIAL_MESSAGE = (
    "Gemini API key is not configured. Set the GEMINI_API_KEY environment variable."
)


def error_for_status(status_code: int, reason: str, details: str) -> ProviderError:
    """Translate a non-success HTTP status into a typed error.

    Args:
        status_code: HTTP status code of the failed response
        reason: HTTP reason phrase (e.g. "Service Unavailable")
        details: Error body text, used to detect unsupported-file rejections

    Returns:
        ProviderError subclass whose message is safe to show to users
    """
    if status_code == 401:
        return AuthenticationError(AUTH_FAILED_MESSAGE, status_code, details)
    if status_code == 403:
        return AuthenticationError(FORBIDDEN_MESSAGE, status_code, details)
    if status_code == 429:
        return RateLimitError(RATE_LIMITED_MESSAGE, status_code, details)
    if status_code in (500, 502, 503, 504):
        return ServiceUnavailableError(UNAVAILABLE_MESSAGE, status_code, details)
    if status_code == 400:
        lowered = (details or "").lower()
        if "file" in lowered or "audio" in lowered:
            return InvalidRequestError(UNSUPPORTED_FILE_MESSAGE, status_code, details)
        return InvalidRequestError(INVALID_REQUEST_MESSAGE, status_code, details)
    return ProviderError(
        f"Gemini service error: {status_code} {reason}. Please try again.",
        status_code,
        details
    )

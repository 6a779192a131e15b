"""
Cloud Gemini Generation Client

Calls the Gemini generateContent REST endpoint over httpx with retry,
per-attempt timeouts and error translation.

Each call:
1. Fails fast with MissingCredentialError when no API key is configured
2. Posts the request, cancelling it if the attempt exceeds the timeout
3. Retries 429/5xx responses and transport failures with exponential backoff
4. Translates terminal failures into typed errors with user-facing messages

File naming follows pattern: cloud_{provider}.py
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from blogcast.llm.config import GeminiConfig
from blogcast.llm.errors import (
    LLMError,
    MissingCredentialError,
    MalformedResponseError,
    NetworkError,
    ProviderError,
    error_for_status,
    MALFORMED_RESPONSE_MESSAGE,
    MISSING_CREDENTIAL_MESSAGE,
    NETWORK_FAILURE_MESSAGE,
)
from blogcast.llm.providers.base import BaseGenerationClient, GenerationRequest
from blogcast.llm.retry import RetryPolicy, RetryState, describe_status


logger = logging.getLogger(__name__)

ERROR_BODY_PLACEHOLDER = "Could not read error response"
MAX_LOGGED_BODY = 2000


class CloudGeminiClient(BaseGenerationClient):
    """Gemini generateContent client with retry and timeout handling.

    The client holds no per-call state; RetryState lives inside ``invoke``,
    so one instance can serve concurrent requests.

    Example:
        >>> config = GeminiConfig(api_key="AIza...")
        >>> client = CloudGeminiClient(config)
        >>> body = await client.invoke(request, "transcription", config.transcribe_model)
    """

    def __init__(
        self,
        config: GeminiConfig,
        policy: Optional[RetryPolicy] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the client.

        Args:
            config: Gemini configuration (credential, models, timeout, retry)
            policy: Retry policy; built from config.retry when omitted
            http_client: Shared httpx client; a client per call is opened otherwise
            sleep: Coroutine used for backoff waits, takes seconds
            clock: Monotonic clock used for the total-time ceiling
        """
        self.config = config
        self.policy = policy or RetryPolicy.from_config(config.retry)
        self._http_client = http_client
        self._sleep = sleep
        self._clock = clock

    def build_url(self, model: str) -> str:
        """Endpoint URL for ``model``."""
        base = self.config.base_url.rstrip('/')
        return f"{base}/models/{quote(model, safe='')}:generateContent"

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                yield client

    async def invoke(
        self,
        request: GenerationRequest,
        operation: str = "transcription",
        model: Optional[str] = None
    ) -> Dict[str, Any]:
        """Send ``request`` to Gemini, retrying transient failures.

        Args:
            request: Request to send
            operation: Label used in log lines
            model: Model name, defaults to the configured transcription model

        Returns:
            Decoded JSON response object

        Raises:
            MissingCredentialError: No API key configured (no request is made)
            AuthenticationError: 401/403 response
            InvalidRequestError: 400 response
            RateLimitError: 429 after the retry budget is spent
            ServiceUnavailableError: 5xx after the retry budget is spent
            NetworkError: Any exception raised while sending (timeouts included)
                after the retry budget is spent
            MalformedResponseError: Success status with a non-JSON body
            ProviderError: Any other non-success status
        """
        if not self.config.api_key:
            raise MissingCredentialError(MISSING_CREDENTIAL_MESSAGE)

        model = model or self.config.transcribe_model
        url = self.build_url(model)
        payload = request.to_payload()
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key,
        }
        max_attempts = self.policy.max_retries
        state = RetryState()
        started = self._clock()

        async with self._session() as client:
            while state.attempt < max_attempts:
                state.attempt += 1
                attempt = state.attempt
                logger.info(
                    f"Sending {operation} request to Gemini "
                    f"(attempt {attempt}/{max_attempts}) using model '{model}'"
                )

                try:
                    response = await asyncio.wait_for(
                        client.post(url, json=payload, headers=headers),
                        timeout=self.config.timeout
                    )
                except Exception as e:
                    # Any failure while sending counts as a network failure
                    state.last_error = NetworkError(
                        NETWORK_FAILURE_MESSAGE,
                        details=f"{type(e).__name__}: {e}"
                    )
                    logger.error(
                        f"Gemini {operation} request failed on attempt {attempt}: "
                        f"{type(e).__name__}: {e}"
                    )
                    if (self.policy.should_retry_on_exception(e, attempt)
                            and await self._wait_before_retry(attempt, "network error", started)):
                        continue
                    raise state.last_error from e

                if response.is_success:
                    logger.info(f"{operation} request successful on attempt {attempt}")
                    return self._decode(response)

                error = await self._error_from_response(response, attempt)
                state.last_error = error
                if (self.policy.should_retry(response.status_code, attempt)
                        and await self._wait_before_retry(
                            attempt, describe_status(response.status_code), started)):
                    continue
                raise error

        raise state.last_error or ProviderError("Unknown error during Gemini API call")

    async def _wait_before_retry(self, attempt: int, reason: str, started: float) -> bool:
        """Sleep before the next attempt; False if the total ceiling forbids it."""
        delay_ms = self.policy.delay_for(attempt)
        ceiling = self.config.retry.max_total_seconds
        if ceiling is not None:
            elapsed = self._clock() - started
            if elapsed + delay_ms / 1000 > ceiling:
                logger.warning(
                    f"Not retrying after {reason}: next attempt would exceed "
                    f"the {ceiling}s ceiling ({elapsed:.1f}s elapsed)"
                )
                return False

        logger.warning(f"Retrying in {delay_ms / 1000:.2f} seconds due to {reason}...")
        await self._sleep(delay_ms / 1000)
        return True

    async def _error_from_response(self, response: httpx.Response, attempt: int) -> LLMError:
        try:
            await response.aread()
            details = response.text
        except (httpx.HTTPError, UnicodeDecodeError) as e:
            logger.debug(f"Failed to read Gemini error body: {e}")
            details = ERROR_BODY_PLACEHOLDER

        logger.error(
            f"Gemini API error (attempt {attempt}): status={response.status_code} "
            f"reason={response.reason_phrase} details={details[:MAX_LOGGED_BODY]}"
        )
        return error_for_status(response.status_code, response.reason_phrase, details)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                MALFORMED_RESPONSE_MESSAGE,
                status_code=response.status_code,
                details=f"Response body is not JSON: {e}"
            ) from e

        if not isinstance(body, dict):
            raise MalformedResponseError(
                MALFORMED_RESPONSE_MESSAGE,
                status_code=response.status_code,
                details=f"Response body is not an object: {type(body).__name__}"
            )
        return body

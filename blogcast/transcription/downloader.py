"""
Media downloader.

Fetches the raw bytes of an uploaded file from the upload service's URL.
Makes a fixed number of attempts with a linear backoff (1s, 2s, ...)
between them.

The body is streamed and the size limit from TranscriptionConfig is
enforced while reading: a declared Content-Length over the limit is
rejected before any bytes are read, and an undeclared body is abandoned
as soon as it crosses the limit.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional

import httpx

from blogcast.transcription.config import TranscriptionConfig, BYTES_PER_MB
from blogcast.transcription.errors import DownloadError, FileTooLargeError


logger = logging.getLogger(__name__)


class MediaDownloader:
    """Downloads uploaded media with a small retry budget."""

    def __init__(
        self,
        config: TranscriptionConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.config = config
        self._http_client = http_client
        self._sleep = sleep

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(
                timeout=self.config.download_timeout,
                follow_redirects=True
            ) as client:
                yield client

    async def fetch(self, url: str) -> bytes:
        """Download ``url`` and return its body.

        Args:
            url: File URL from the upload descriptor

        Returns:
            Raw file bytes

        Raises:
            FileTooLargeError: If the body exceeds the size limit (not retried)
            DownloadError: If every attempt fails or returns a non-OK status
        """
        attempts = self.config.download_attempts
        last_failure = "no response"

        async with self._session() as client:
            for attempt in range(1, attempts + 1):
                try:
                    async with client.stream("GET", url) as response:
                        if response.is_success:
                            content = await self._read_limited(response)
                            logger.info(f"File downloaded successfully: {len(content) / BYTES_PER_MB:.2f}MB")
                            return content
                        last_failure = f"{response.status_code} - {response.reason_phrase}"
                    logger.warning(f"Download attempt {attempt}/{attempts} returned {last_failure}")
                except httpx.HTTPError as e:
                    logger.warning(f"Download attempt {attempt}/{attempts} failed: {type(e).__name__}: {e}")
                    if attempt == attempts:
                        raise DownloadError(f"Failed to download file: {e}") from e

                if attempt < attempts:
                    await self._sleep(self.config.download_backoff_ms * attempt / 1000)

        raise DownloadError(f"Failed to download file: {last_failure}")

    async def _read_limited(self, response: httpx.Response) -> bytes:
        limit = self.config.max_file_size_bytes

        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            logger.warning(f"Rejecting download: Content-Length {declared} exceeds {limit} bytes")
            raise FileTooLargeError(int(declared), self.config.max_file_size_mb)

        chunks: List[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > limit:
                logger.warning(f"Abandoning download after {received} bytes, limit is {limit}")
                raise FileTooLargeError(received, self.config.max_file_size_mb)
            chunks.append(chunk)
        return b"".join(chunks)

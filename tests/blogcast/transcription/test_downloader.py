"""
Unit Tests: MediaDownloader
"""

import httpx
import pytest

from blogcast.transcription.config import BYTES_PER_MB, TranscriptionConfig
from blogcast.transcription.downloader import MediaDownloader
from blogcast.transcription.errors import DownloadError, FileTooLargeError
from tests.fixtures.mock_gemini_responses import scripted_client


FILE_URL = "https://uploads.test/f/episode.mp3"


@pytest.mark.asyncio
async def test_returns_file_bytes(transcription_config, fake_sleep):
    http_client, transport = scripted_client([httpx.Response(200, content=b"ID3audio")])
    downloader = MediaDownloader(transcription_config, http_client=http_client, sleep=fake_sleep)

    assert await downloader.fetch(FILE_URL) == b"ID3audio"
    assert str(transport.requests[0].url) == FILE_URL
    assert fake_sleep.delays == []


@pytest.mark.asyncio
async def test_retries_with_linear_backoff(transcription_config, fake_sleep):
    http_client, transport = scripted_client([
        httpx.ConnectError("connection reset"),
        httpx.Response(502),
        httpx.Response(200, content=b"data"),
    ])
    downloader = MediaDownloader(transcription_config, http_client=http_client, sleep=fake_sleep)

    assert await downloader.fetch(FILE_URL) == b"data"
    assert transport.calls == 3
    assert fake_sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_persistent_bad_status_raises(transcription_config, fake_sleep):
    http_client, transport = scripted_client([httpx.Response(404) for _ in range(3)])
    downloader = MediaDownloader(transcription_config, http_client=http_client, sleep=fake_sleep)

    with pytest.raises(DownloadError) as exc_info:
        await downloader.fetch(FILE_URL)

    assert str(exc_info.value) == "Failed to download file: 404 - Not Found"
    assert transport.calls == 3


@pytest.mark.asyncio
async def test_persistent_transport_error_raises(fake_sleep):
    config = TranscriptionConfig(download_attempts=2)
    http_client, transport = scripted_client([httpx.ConnectError("refused"), httpx.ConnectError("refused")])
    downloader = MediaDownloader(config, http_client=http_client, sleep=fake_sleep)

    with pytest.raises(DownloadError) as exc_info:
        await downloader.fetch(FILE_URL)

    assert "Failed to download file: refused" == str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert fake_sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_declared_oversized_body_is_rejected_without_retry(fake_sleep):
    config = TranscriptionConfig(max_file_size_mb=1)
    http_client, transport = scripted_client([
        httpx.Response(200, content=b"\x00" * (2 * BYTES_PER_MB)),
    ])
    downloader = MediaDownloader(config, http_client=http_client, sleep=fake_sleep)

    with pytest.raises(FileTooLargeError) as exc_info:
        await downloader.fetch(FILE_URL)

    assert str(exc_info.value) == "File too large (2.00MB). Please use files smaller than 1MB."
    assert transport.calls == 1
    assert fake_sleep.delays == []


@pytest.mark.asyncio
async def test_undeclared_body_is_abandoned_once_over_limit(fake_sleep):
    config = TranscriptionConfig(max_file_size_mb=64 / BYTES_PER_MB)
    produced = []

    async def chunks():
        for _ in range(10):
            produced.append(32)
            yield b"x" * 32

    http_client, _ = scripted_client([httpx.Response(200, content=chunks())])
    downloader = MediaDownloader(config, http_client=http_client, sleep=fake_sleep)

    with pytest.raises(FileTooLargeError) as exc_info:
        await downloader.fetch(FILE_URL)

    assert exc_info.value.size_bytes == 96
    assert len(produced) == 3


@pytest.mark.asyncio
async def test_body_at_the_limit_is_returned(fake_sleep):
    config = TranscriptionConfig(max_file_size_mb=1)
    body = b"\x01" * BYTES_PER_MB
    http_client, _ = scripted_client([httpx.Response(200, content=body)])
    downloader = MediaDownloader(config, http_client=http_client, sleep=fake_sleep)

    assert await downloader.fetch(FILE_URL) == body

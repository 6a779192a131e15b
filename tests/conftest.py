"""
Pytest configuration and fixtures for test isolation.
"""
import os

import pytest

from blogcast.llm.config import GeminiConfig, RetryConfig
from blogcast.transcription.config import TranscriptionConfig
from blogcast.utils.logging_config import logging_config


BLOGCAST_ENV_PREFIXES = ("GEMINI_", "BLOGCAST_", "API_")


@pytest.fixture(autouse=True, scope="function")
def reset_environment():
    """Reset environment variables between tests.

    Variables read by blogcast are removed up front so a developer's shell
    (or a loaded .env file) cannot leak into configuration tests.
    """
    original_env = os.environ.copy()
    for name in list(os.environ):
        if name.startswith(BLOGCAST_ENV_PREFIXES):
            del os.environ[name]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_logging():
    """Let each test configure logging from scratch."""
    yield
    logging_config.reset()


class RecordingSleep:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def gemini_config():
    """Gemini configuration with a test credential and the default retry policy."""
    return GeminiConfig(
        api_key="test-gemini-key",
        base_url="https://gemini.test/v1beta",
        transcribe_model="gemini-2.0-flash",
        blog_model="gemini-2.0-flash",
        timeout=60.0,
        retry=RetryConfig(),
    )


@pytest.fixture
def transcription_config():
    return TranscriptionConfig(max_file_size_mb=20, download_attempts=3, download_backoff_ms=1000)

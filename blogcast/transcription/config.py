"""
Transcription Configuration

Limits and download behaviour for the transcription workflow.
Values are resolved with precedence: environment > config file > defaults.

Environment variables:
    BLOGCAST_MAX_FILE_SIZE_MB, BLOGCAST_DOWNLOAD_ATTEMPTS,
    BLOGCAST_DOWNLOAD_BACKOFF_MS, BLOGCAST_DOWNLOAD_TIMEOUT
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any


BYTES_PER_MB = 1024 * 1024


@dataclass
class TranscriptionConfig:
    """Configuration for the transcription workflow.

    Attributes:
        max_file_size_mb: Largest file accepted for inline transport
        download_attempts: Attempts made to fetch the uploaded file
        download_backoff_ms: Linear backoff unit between download attempts
        download_timeout: Timeout for a single download attempt, in seconds
    """
    max_file_size_mb: float = 20
    download_attempts: int = 3
    download_backoff_ms: int = 1000
    download_timeout: float = 60.0

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * BYTES_PER_MB)

    @classmethod
    def load_from_dict(cls, section: Optional[Dict[str, Any]] = None) -> 'TranscriptionConfig':
        """Load transcription configuration from the ``transcription`` config section."""
        section = section or {}
        return cls(
            max_file_size_mb=float(_resolve_value(
                section.get('max_file_size_mb'), 'BLOGCAST_MAX_FILE_SIZE_MB', 20
            )),
            download_attempts=int(_resolve_value(
                section.get('download_attempts'), 'BLOGCAST_DOWNLOAD_ATTEMPTS', 3
            )),
            download_backoff_ms=int(_resolve_value(
                section.get('download_backoff_ms'), 'BLOGCAST_DOWNLOAD_BACKOFF_MS', 1000
            )),
            download_timeout=float(_resolve_value(
                section.get('download_timeout'), 'BLOGCAST_DOWNLOAD_TIMEOUT', 60.0
            )),
        )


def _resolve_value(config_value: Any, env_var: str, default: Any) -> Any:
    env_value = os.getenv(env_var)
    if env_value:
        return env_value
    if config_value is not None:
        return config_value
    return default

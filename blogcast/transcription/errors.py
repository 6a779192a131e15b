"""
Transcription Error Classes

This module defines the exceptions raised inside the transcription workflow.
The workflow catches all of them at its boundary and reports them as a
failed TranscriptionResult, so they never reach callers.

The string form of each error is the message shown to the user.
"""

from blogcast.transcription.config import BYTES_PER_MB


class TranscriptionError(Exception):
    """Base exception class for all transcription-related errors.

    Example:
        try:
            transcript = normalize_transcript(raw_text)
        except TranscriptionError as e:
            logger.error(f"Transcription failed: {e}")
    """
    pass


class InvalidInputError(TranscriptionError):
    """Raised when the upload descriptors are missing or incomplete.

    This is a caller error and is never retried.
    """
    pass


class DownloadError(TranscriptionError):
    """Raised when the uploaded file cannot be fetched from its URL.

    Raised after the download retry budget is spent.
    """
    pass


class AudioFileError(TranscriptionError):
    """Raised when the downloaded file cannot be sent for transcription.

    Example:
        if size > limit:
            raise FileTooLargeError(size, config.max_file_size_mb)
    """
    pass


class EmptyTranscriptError(TranscriptionError):
    """Raised when the model returns only whitespace."""
    pass


class NoSpeechDetectedError(TranscriptionError):
    """Raised when the model reports that the media contains no speech."""
    pass


class FileTooLargeError(AudioFileError):
    """Raised when an upload exceeds the inline payload size limit.

    The downloader raises it as soon as the declared or received size
    crosses the limit, so oversized bodies are never fully buffered.
    """

    def __init__(self, size_bytes: int, limit_mb: float):
        self.size_bytes = size_bytes
        self.limit_mb = limit_mb
        super().__init__(
            f"File too large ({size_bytes / BYTES_PER_MB:.2f}MB). "
            f"Please use files smaller than {limit_mb:g}MB."
        )

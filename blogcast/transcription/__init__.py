"""
Transcription

Downloads uploaded media, classifies it, sends it inline to Gemini and
validates the returned transcript.

Key Components:
    - workflow.py: TranscriptionWorkflow (never raises, returns TranscriptionResult)
    - downloader.py: MediaDownloader with linear-backoff retries
    - mime.py: extension-based MIME classification
    - models.py: UploadDescriptor and TranscriptionResult
"""

from blogcast.transcription.config import TranscriptionConfig
from blogcast.transcription.downloader import MediaDownloader
from blogcast.transcription.mime import MediaKind, MimeClassification, classify
from blogcast.transcription.models import (
    FileInfo,
    TranscriptionData,
    TranscriptionResult,
    UploadDescriptor,
)
from blogcast.transcription.workflow import (
    NO_SPEECH_MARKER,
    TranscriptionStage,
    TranscriptionWorkflow,
    normalize_transcript,
)
from blogcast.transcription.errors import (
    TranscriptionError,
    InvalidInputError,
    DownloadError,
    AudioFileError,
    FileTooLargeError,
    EmptyTranscriptError,
    NoSpeechDetectedError,
)

__all__ = [
    "TranscriptionConfig",
    "MediaDownloader",
    "MediaKind",
    "MimeClassification",
    "classify",
    "FileInfo",
    "TranscriptionData",
    "TranscriptionResult",
    "UploadDescriptor",
    "NO_SPEECH_MARKER",
    "TranscriptionStage",
    "TranscriptionWorkflow",
    "normalize_transcript",
    "TranscriptionError",
    "InvalidInputError",
    "DownloadError",
    "AudioFileError",
    "FileTooLargeError",
    "EmptyTranscriptError",
    "NoSpeechDetectedError",
]

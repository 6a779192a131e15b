"""
MIME type detection for uploaded media.

Maps a file name's extension to a MIME type and classifies it as audio,
video or unknown. Pure and total: any input, including None, yields a
classification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(str, Enum):
    """Broad media category of an upload."""
    AUDIO = "audio"
    VIDEO = "video"
    UNKNOWN = "unknown"


DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    # Audio formats
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
    "aac": "audio/aac",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "wma": "audio/x-ms-wma",
    # Video formats
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    "flv": "video/x-flv",
}


@dataclass(frozen=True)
class MimeClassification:
    """MIME type and media kind derived from a file name."""
    mime_type: str
    kind: MediaKind


def extension_of(file_name: Optional[str]) -> str:
    """Lower-cased text after the last '.', or '' when there is none."""
    if not file_name or "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[1].lower()


def classify(file_name: Optional[str]) -> MimeClassification:
    """Classify a file by its extension.

    Example:
        >>> classify("episode.MP3")
        MimeClassification(mime_type='audio/mpeg', kind=<MediaKind.AUDIO: 'audio'>)
        >>> classify("notes").mime_type
        'application/octet-stream'
    """
    mime_type = MIME_TYPES.get(extension_of(file_name), DEFAULT_MIME_TYPE)
    if mime_type.startswith("audio/"):
        kind = MediaKind.AUDIO
    elif mime_type.startswith("video/"):
        kind = MediaKind.VIDEO
    else:
        kind = MediaKind.UNKNOWN
    return MimeClassification(mime_type=mime_type, kind=kind)

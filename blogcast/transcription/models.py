"""
Transcription data models.

Pydantic models for the workflow's input and result. Field names are
snake_case in Python and camelCase on the wire (``userId``, ``fileUrl``...),
matching what the upload service produces and the web client consumes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from blogcast.transcription.mime import MediaKind


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadDescriptor(_CamelModel):
    """A file accepted by the upload service.

    Attributes:
        user_id: Owner of the upload
        file_url: Where the stored file can be downloaded
        file_name: Original client-side file name, used for MIME detection
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    user_id: str
    file_url: str = ""
    file_name: Optional[str] = None


class FileInfo(_CamelModel):
    """Facts about the transcribed file reported back to the caller."""
    file_name: str
    file_size: str
    mime_type: str
    kind: MediaKind


class TranscriptionData(_CamelModel):
    """Payload of a successful transcription."""
    transcription: str
    user_id: str
    file_info: FileInfo


class TranscriptionResult(_CamelModel):
    """Terminal value of the transcription workflow.

    ``data`` is present exactly when ``success`` is true, and a successful
    result always carries a non-blank transcript.
    """
    success: bool
    message: str
    data: Optional[TranscriptionData] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> 'TranscriptionResult':
        if self.success and self.data is None:
            raise ValueError("A successful transcription result must carry data")
        if not self.success and self.data is not None:
            raise ValueError("A failed transcription result must not carry data")
        if self.data is not None and not self.data.transcription.strip():
            raise ValueError("A successful transcription result needs a non-empty transcript")
        return self

    @classmethod
    def failure(cls, message: str) -> 'TranscriptionResult':
        return cls(success=False, message=message, data=None)

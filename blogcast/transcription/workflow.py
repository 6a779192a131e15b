"""
Transcription Workflow

Turns an uploaded media file into a transcript using the Gemini API.

Stages:
    VALIDATE -> DOWNLOAD -> SIZE_CHECK -> ENCODE -> BUILD_REQUEST
    -> INVOKE -> EXTRACT_TEXT -> NORMALIZE -> DONE | FAILED

The workflow never raises past ``transcribe``: every failure, expected or
not, is logged and reported as a TranscriptionResult with success=False.
"""

import base64
import logging
from enum import Enum
from typing import Optional, Sequence

from blogcast.llm.errors import LLMError
from blogcast.llm.providers.base import BaseGenerationClient, GenerationRequest, GenerationSettings
from blogcast.llm.response import extract_text
from blogcast.prompts import PromptLoader, PromptRenderer, PromptError
from blogcast.transcription.config import TranscriptionConfig, BYTES_PER_MB
from blogcast.transcription.downloader import MediaDownloader
from blogcast.transcription.errors import (
    TranscriptionError,
    InvalidInputError,
    FileTooLargeError,
    EmptyTranscriptError,
    NoSpeechDetectedError,
)
from blogcast.transcription.mime import MediaKind, MimeClassification, classify
from blogcast.transcription.models import (
    FileInfo,
    TranscriptionData,
    TranscriptionResult,
    UploadDescriptor,
)


logger = logging.getLogger(__name__)

NO_SPEECH_MARKER = "NO_SPEECH_DETECTED"
SHORT_TRANSCRIPT_CHARS = 10
UNEXPECTED_ERROR_MESSAGE = "Unknown error occurred during transcription"


class TranscriptionStage(Enum):
    """Workflow stage, recorded so failures can be attributed in logs."""
    VALIDATE = "validate"
    DOWNLOAD = "download"
    SIZE_CHECK = "size_check"
    ENCODE = "encode"
    BUILD_REQUEST = "build_request"
    INVOKE = "invoke"
    EXTRACT_TEXT = "extract_text"
    NORMALIZE = "normalize"


def normalize_transcript(text: str) -> str:
    """Validate raw model output and return the trimmed transcript.

    Raises:
        EmptyTranscriptError: If nothing but whitespace came back
        NoSpeechDetectedError: If the model reported the no-speech marker
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise EmptyTranscriptError("Empty transcription returned from Gemini API")

    if NO_SPEECH_MARKER in trimmed.upper():
        raise NoSpeechDetectedError(
            "No speech detected in the uploaded file. "
            "Please upload a file with clear spoken content."
        )

    if len(trimmed) < SHORT_TRANSCRIPT_CHARS:
        logger.warning(
            "Very short transcription received. This might indicate poor "
            "audio quality or processing issues."
        )
    return trimmed


class TranscriptionWorkflow:
    """Downloads an upload, sends it inline to Gemini and validates the transcript.

    Example:
        >>> workflow = TranscriptionWorkflow(client, TranscriptionConfig(), "gemini-2.0-flash")
        >>> result = await workflow.transcribe([UploadDescriptor(user_id="u1", file_url=url)])
        >>> result.success
        True
    """

    def __init__(
        self,
        client: BaseGenerationClient,
        config: TranscriptionConfig,
        model: str,
        downloader: Optional[MediaDownloader] = None,
        prompt_loader: Optional[PromptLoader] = None,
        renderer: Optional[PromptRenderer] = None
    ):
        self.client = client
        self.config = config
        self.model = model
        self.downloader = downloader or MediaDownloader(config)
        self.prompt_loader = prompt_loader or PromptLoader()
        self.renderer = renderer or PromptRenderer()

    async def transcribe(self, uploads: Sequence[UploadDescriptor]) -> TranscriptionResult:
        """Transcribe the first upload in ``uploads``.

        Args:
            uploads: Descriptors produced by the upload service

        Returns:
            TranscriptionResult; failures are reported, never raised
        """
        stage = TranscriptionStage.VALIDATE
        try:
            upload = self._validate(uploads)
        except InvalidInputError as e:
            self._log_failure(stage, e)
            return TranscriptionResult.failure(str(e))

        stage = TranscriptionStage.DOWNLOAD
        try:
            logger.info(
                f"Starting transcription of '{upload.file_name or 'Unknown'}' "
                f"for user {upload.user_id}"
            )
            content = await self.downloader.fetch(upload.file_url)

            stage = TranscriptionStage.SIZE_CHECK
            size_mb = len(content) / BYTES_PER_MB
            if len(content) > self.config.max_file_size_bytes:
                raise FileTooLargeError(len(content), self.config.max_file_size_mb)

            stage = TranscriptionStage.ENCODE
            encoded = base64.b64encode(content).decode("ascii")
            logger.debug(f"Base64 conversion complete: {len(encoded) / 1024:.0f}KB encoded")

            stage = TranscriptionStage.BUILD_REQUEST
            media = classify(upload.file_name)
            logger.info(f"Detected MIME type: {media.mime_type} ({media.kind.value} file)")
            request = self.build_request(encoded, media)

            stage = TranscriptionStage.INVOKE
            response = await self.client.invoke(request, "transcription", self.model)

            stage = TranscriptionStage.EXTRACT_TEXT
            raw_text = extract_text(response)
            logger.debug(f"Raw transcription length: {len(raw_text)} characters")

            stage = TranscriptionStage.NORMALIZE
            transcript = normalize_transcript(raw_text)

        except (TranscriptionError, LLMError, PromptError) as e:
            self._log_failure(stage, e)
            return TranscriptionResult.failure(f"Transcription failed: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error during transcription stage {stage.value}: {e}")
            return TranscriptionResult.failure(f"Transcription failed: {UNEXPECTED_ERROR_MESSAGE}")

        logger.info(f"Transcription completed successfully ({len(transcript)} characters)")
        return TranscriptionResult(
            success=True,
            message="Transcription completed successfully",
            data=TranscriptionData(
                transcription=transcript,
                user_id=upload.user_id,
                file_info=FileInfo(
                    file_name=upload.file_name or "Unknown",
                    file_size=f"{size_mb:.2f}MB",
                    mime_type=media.mime_type,
                    kind=media.kind,
                ),
            ),
        )

    @staticmethod
    def _validate(uploads: Sequence[UploadDescriptor]) -> UploadDescriptor:
        if not uploads:
            raise InvalidInputError("File upload failed")
        upload = uploads[0]
        if not upload.file_url:
            raise InvalidInputError("No file URL")
        return upload

    def build_request(self, encoded: str, media: MimeClassification) -> GenerationRequest:
        """Build the inline-media transcription request."""
        if media.kind == MediaKind.UNKNOWN:
            logger.warning(
                f"Unrecognized media type, sending as {media.mime_type}; "
                "Gemini may reject the file"
            )
        template = self.prompt_loader.load_prompt("transcription")
        prompt = self.renderer.render(
            template,
            media_label=media.kind.value if media.kind != MediaKind.UNKNOWN else "media",
            no_speech_marker=NO_SPEECH_MARKER,
        )
        return GenerationRequest.with_inline_media(
            data_b64=encoded,
            mime_type=media.mime_type,
            prompt=prompt,
            settings=GenerationSettings.from_dict(template["generation"]),
        )

    @staticmethod
    def _log_failure(stage: TranscriptionStage, error: Exception):
        details = getattr(error, "details", None)
        logger.error(
            f"Transcription failed at stage {stage.value}: {type(error).__name__}: {error}"
            + (f" ({details})" if details else "")
        )

"""
Unit Tests: TranscriptionWorkflow

The workflow runs against a fake generation client and a scripted HTTP
transport for the download, so every stage can be exercised offline.
"""

import base64
import logging

import httpx
import pytest

from blogcast.llm.errors import MissingCredentialError, ServiceUnavailableError, UNAVAILABLE_MESSAGE
from blogcast.llm.providers.base import BaseGenerationClient
from blogcast.transcription.config import BYTES_PER_MB, TranscriptionConfig
from blogcast.transcription.downloader import MediaDownloader
from blogcast.transcription.errors import EmptyTranscriptError, NoSpeechDetectedError
from blogcast.transcription.mime import MediaKind
from blogcast.transcription.models import TranscriptionResult, UploadDescriptor
from blogcast.transcription.workflow import (
    NO_SPEECH_MARKER,
    TranscriptionWorkflow,
    normalize_transcript,
)
from tests.fixtures.mock_gemini_responses import (
    TRANSCRIPT_TEXT,
    content_parts_response,
    flat_text_response,
    scripted_client,
)


AUDIO_BYTES = b"ID3" + b"\x00" * 61


class FakeGenerationClient(BaseGenerationClient):
    """Returns canned bodies (or raises) and records every call."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    async def invoke(self, request, operation, model=None):
        self.calls.append((request, operation, model))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_workflow(client, config=None, download_steps=None, fake_sleep=None):
    config = config or TranscriptionConfig()
    http_client, transport = scripted_client(
        download_steps if download_steps is not None else [httpx.Response(200, content=AUDIO_BYTES)]
    )
    downloader = MediaDownloader(config, http_client=http_client, sleep=fake_sleep)
    return TranscriptionWorkflow(client, config, "gemini-2.0-flash", downloader=downloader), transport


def upload(file_name="episode.mp3", file_url="https://uploads.test/f/episode.mp3"):
    return UploadDescriptor(user_id="user_123", file_url=file_url, file_name=file_name)


# ============================================================================
# Test: Successful transcription
# ============================================================================

@pytest.mark.asyncio
async def test_mp3_upload_is_transcribed(fake_sleep):
    client = FakeGenerationClient(content_parts_response("Hello world"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.success is True
    assert result.message == "Transcription completed successfully"
    assert result.data.transcription == "Hello world"
    assert result.data.user_id == "user_123"
    assert result.data.file_info.file_name == "episode.mp3"
    assert result.data.file_info.mime_type == "audio/mpeg"
    assert result.data.file_info.kind == MediaKind.AUDIO
    assert result.data.file_info.file_size == "0.00MB"


@pytest.mark.asyncio
async def test_request_carries_inline_media_and_prompt(fake_sleep):
    client = FakeGenerationClient(content_parts_response(TRANSCRIPT_TEXT))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    await workflow.transcribe([upload(file_name="talk.mov")])

    request, operation, model = client.calls[0]
    assert operation == "transcription"
    assert model == "gemini-2.0-flash"
    media_part, text_part = request.parts
    assert media_part == {
        "inlineData": {"data": base64.b64encode(AUDIO_BYTES).decode("ascii"), "mimeType": "video/quicktime"}
    }
    assert "from this video file" in text_part["text"]
    assert f'"{NO_SPEECH_MARKER}"' in text_part["text"]
    assert request.settings.temperature == 0.1
    assert request.settings.max_output_tokens == 4096
    assert request.settings.top_p == 0.8
    assert request.settings.top_k == 40


@pytest.mark.asyncio
async def test_transcript_is_trimmed(fake_sleep):
    client = FakeGenerationClient(flat_text_response("\n  " + TRANSCRIPT_TEXT + "  \n"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.data.transcription == TRANSCRIPT_TEXT


@pytest.mark.asyncio
async def test_unknown_extension_is_still_sent(fake_sleep, caplog):
    client = FakeGenerationClient(content_parts_response(TRANSCRIPT_TEXT))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    with caplog.at_level(logging.WARNING):
        result = await workflow.transcribe([upload(file_name="recording.bin")])

    assert result.success is True
    assert result.data.file_info.mime_type == "application/octet-stream"
    assert "from this media file" in client.calls[0][0].parts[1]["text"]
    assert "Unrecognized media type" in caplog.text


@pytest.mark.asyncio
async def test_short_transcript_succeeds_with_warning(fake_sleep, caplog):
    client = FakeGenerationClient(content_parts_response("Hi there"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    with caplog.at_level(logging.WARNING):
        result = await workflow.transcribe([upload()])

    assert result.success is True
    assert result.data.transcription == "Hi there"
    assert "Very short transcription" in caplog.text


# ============================================================================
# Test: Failures are returned, never raised
# ============================================================================

@pytest.mark.asyncio
async def test_no_speech_marker_fails(fake_sleep):
    client = FakeGenerationClient(content_parts_response("NO_SPEECH_DETECTED"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.data is None
    assert result.message == (
        "Transcription failed: No speech detected in the uploaded file. "
        "Please upload a file with clear spoken content."
    )


@pytest.mark.asyncio
async def test_empty_upload_list(fake_sleep):
    client = FakeGenerationClient()
    workflow, transport = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([])

    assert result == TranscriptionResult(success=False, message="File upload failed")
    assert transport.calls == 0
    assert client.calls == []


@pytest.mark.asyncio
async def test_missing_file_url(fake_sleep):
    workflow, transport = make_workflow(FakeGenerationClient(), fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload(file_url="")])

    assert result.success is False
    assert result.message == "No file URL"
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_oversized_file_is_rejected_before_invoking(fake_sleep):
    client = FakeGenerationClient()
    config = TranscriptionConfig(max_file_size_mb=0.00005)
    workflow, _ = make_workflow(client, config=config, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.message.startswith("Transcription failed: File too large (0.00MB).")
    assert "smaller than 5e-05MB" in result.message
    assert client.calls == []


@pytest.mark.asyncio
async def test_25_mib_upload_is_rejected_with_default_limit(fake_sleep):
    client = FakeGenerationClient()
    workflow, transport = make_workflow(
        client,
        download_steps=[httpx.Response(200, content=b"\x00" * (25 * BYTES_PER_MB))],
        fake_sleep=fake_sleep,
    )

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.message == (
        "Transcription failed: File too large (25.00MB). Please use files smaller than 20MB."
    )
    assert client.calls == []
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_upload_of_exactly_20_mib_is_accepted(fake_sleep):
    client = FakeGenerationClient(content_parts_response(TRANSCRIPT_TEXT))
    workflow, _ = make_workflow(
        client,
        download_steps=[httpx.Response(200, content=b"\x00" * (20 * BYTES_PER_MB))],
        fake_sleep=fake_sleep,
    )

    result = await workflow.transcribe([upload()])

    assert result.success is True
    assert result.data.file_info.file_size == "20.00MB"
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_download_failure(fake_sleep):
    workflow, transport = make_workflow(
        FakeGenerationClient(),
        download_steps=[httpx.Response(403) for _ in range(3)],
        fake_sleep=fake_sleep,
    )

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.message == "Transcription failed: Failed to download file: 403 - Forbidden"
    assert transport.calls == 3


@pytest.mark.asyncio
async def test_generation_error_message_is_surfaced(fake_sleep):
    client = FakeGenerationClient(ServiceUnavailableError(UNAVAILABLE_MESSAGE, 503, "overloaded"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.message == f"Transcription failed: {UNAVAILABLE_MESSAGE}"


@pytest.mark.asyncio
async def test_missing_credential_is_reported(fake_sleep):
    client = FakeGenerationClient(MissingCredentialError("Gemini API key is not configured."))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.message == "Transcription failed: Gemini API key is not configured."


@pytest.mark.asyncio
async def test_malformed_response_is_reported(fake_sleep):
    client = FakeGenerationClient({"candidates": []})
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.message == "Transcription failed: Failed to extract text from Gemini response"


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_generic_failure(fake_sleep):
    client = FakeGenerationClient(RuntimeError("boom"))
    workflow, _ = make_workflow(client, fake_sleep=fake_sleep)

    result = await workflow.transcribe([upload()])

    assert result.success is False
    assert result.message == "Transcription failed: Unknown error occurred during transcription"


# ============================================================================
# Test: normalize_transcript
# ============================================================================

@pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
def test_blank_text_is_empty_transcript(text):
    with pytest.raises(EmptyTranscriptError):
        normalize_transcript(text)


@pytest.mark.parametrize("text", ["NO_SPEECH_DETECTED", "  no_speech_detected.  ", "Result: NO_SPEECH_DETECTED"])
def test_marker_anywhere_is_no_speech(text):
    with pytest.raises(NoSpeechDetectedError):
        normalize_transcript(text)


def test_normalize_returns_trimmed_text():
    assert normalize_transcript("  Hello world  ") == "Hello world"


# ============================================================================
# Test: Result invariants
# ============================================================================

def test_success_without_data_is_rejected():
    with pytest.raises(ValueError):
        TranscriptionResult(success=True, message="ok")


def test_result_serializes_camel_case():
    result = TranscriptionResult.failure("File upload failed")
    assert result.model_dump(by_alias=True) == {"success": False, "message": "File upload failed", "data": None}

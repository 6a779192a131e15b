"""
Unit Tests: ContentOrchestrator

Blog generation outcomes (PostCreated / GenerationFailed) and the
upload-to-post flow, with the generator and transcriber mocked.
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from blogcast.blog.errors import EmptyGenerationError
from blogcast.config import AppConfig
from blogcast.llm.config import GeminiConfig
from blogcast.llm.errors import ServiceUnavailableError, UNAVAILABLE_MESSAGE
from blogcast.orchestrator import (
    ContentOrchestrator,
    GenerationFailed,
    PostCreated,
    UNEXPECTED_ERROR_MESSAGE,
)
from blogcast.posts import InMemoryPostRepository, StorageError
from blogcast.transcription.models import (
    FileInfo,
    TranscriptionData,
    TranscriptionResult,
    UploadDescriptor,
)
from blogcast.transcription.mime import MediaKind
from tests.fixtures.mock_gemini_responses import (
    BLOG_MARKDOWN,
    TRANSCRIPT_TEXT,
    content_parts_response,
    scripted_client,
)


@pytest.fixture
def repository():
    return InMemoryPostRepository()


@pytest.fixture
def generator():
    mock = Mock()
    mock.generate = AsyncMock(return_value=BLOG_MARKDOWN)
    return mock


@pytest.fixture
def transcriber():
    mock = Mock()
    mock.transcribe = AsyncMock()
    return mock


@pytest.fixture
def orchestrator(transcriber, generator, repository):
    return ContentOrchestrator(transcriber, generator, repository)


def successful_transcription(text=TRANSCRIPT_TEXT, user_id="user_1"):
    return TranscriptionResult(
        success=True,
        message="Transcription completed successfully",
        data=TranscriptionData(
            transcription=text,
            user_id=user_id,
            file_info=FileInfo(file_name="a.mp3", file_size="1.00MB", mime_type="audio/mpeg", kind=MediaKind.AUDIO),
        ),
    )


# ============================================================================
# Test: generate_post
# ============================================================================

@pytest.mark.asyncio
async def test_generated_post_is_saved_and_returned(orchestrator, generator, repository):
    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert isinstance(outcome, PostCreated)
    assert outcome.title == "Ship Small, Stay Calm"
    assert outcome == PostCreated(post_id=1, title="Ship Small, Stay Calm")
    post = await repository.get_post("user_1", outcome.post_id)
    assert post.content == BLOG_MARKDOWN
    generator.generate.assert_awaited_once_with(TRANSCRIPT_TEXT, [])


@pytest.mark.asyncio
async def test_three_newest_posts_are_the_style_reference(orchestrator, generator, repository):
    for n in range(4):
        await repository.save_post("user_1", f"T{n}", f"post {n}")

    await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    generator.generate.assert_awaited_once_with(TRANSCRIPT_TEXT, ["post 3", "post 2", "post 1"])


@pytest.mark.asyncio
async def test_transcript_is_trimmed_before_generation(orchestrator, generator):
    await orchestrator.generate_post(f"  {TRANSCRIPT_TEXT}\n", "user_1")
    assert generator.generate.await_args.args[0] == TRANSCRIPT_TEXT


@pytest.mark.parametrize("text", [None, "", "   "])
@pytest.mark.asyncio
async def test_missing_transcript(orchestrator, generator, text):
    outcome = await orchestrator.generate_post(text, "user_1")

    assert outcome == GenerationFailed("No transcription text provided")
    assert outcome.success is False
    generator.generate.assert_not_awaited()


@pytest.mark.asyncio
async def test_blank_generation_is_not_saved(orchestrator, generator, repository):
    generator.generate.return_value = "   "

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert outcome == GenerationFailed("Blog post generation failed, please try again...")
    assert await repository.get_recent_posts("user_1") == []


@pytest.mark.asyncio
async def test_generation_errors_become_failures(orchestrator, generator):
    generator.generate.side_effect = ServiceUnavailableError(UNAVAILABLE_MESSAGE, 503)

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert outcome == GenerationFailed(f"Blog generation failed: {UNAVAILABLE_MESSAGE}")


@pytest.mark.asyncio
async def test_empty_generation_error(orchestrator, generator):
    generator.generate.side_effect = EmptyGenerationError("Invalid blog response from Gemini API")

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert outcome.message == "Blog generation failed: Invalid blog response from Gemini API"


@pytest.mark.asyncio
async def test_storage_error_is_reported(orchestrator, repository):
    repository.save_post = AsyncMock(side_effect=StorageError("Failed to save blog post"))

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert outcome.message == "Blog generation failed: Failed to save blog post"
    repository.save_post.assert_awaited_once()


@pytest.mark.asyncio
async def test_unexpected_error_is_generic(orchestrator, generator):
    generator.generate.side_effect = KeyError("candidates")

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert outcome == GenerationFailed(UNEXPECTED_ERROR_MESSAGE)


# ============================================================================
# Test: process_upload
# ============================================================================

@pytest.mark.asyncio
async def test_process_upload_creates_post(orchestrator, transcriber, generator):
    transcriber.transcribe.return_value = successful_transcription()
    uploads = [UploadDescriptor(user_id="user_1", file_url="https://uploads.test/a.mp3", file_name="a.mp3")]

    outcome = await orchestrator.process_upload(uploads)

    assert isinstance(outcome, PostCreated)
    transcriber.transcribe.assert_awaited_once_with(uploads)
    generator.generate.assert_awaited_once()


@pytest.mark.asyncio
async def test_process_upload_stops_on_failed_transcription(orchestrator, transcriber, generator):
    transcriber.transcribe.return_value = TranscriptionResult.failure("No file URL")

    outcome = await orchestrator.process_upload([UploadDescriptor(user_id="user_1")])

    assert outcome == GenerationFailed("No file URL")
    generator.generate.assert_not_awaited()


# ============================================================================
# Test: from_config wiring
# ============================================================================

@pytest.mark.asyncio
async def test_from_config_end_to_end():
    """Download, transcription and generation share one mocked HTTP client."""
    http_client, transport = scripted_client([
        httpx.Response(200, content=b"\x00" * 2048),
        httpx.Response(200, json=content_parts_response(TRANSCRIPT_TEXT)),
        httpx.Response(200, json=content_parts_response(BLOG_MARKDOWN)),
    ])
    config = AppConfig(gemini=GeminiConfig(api_key="test-gemini-key", blog_model="gemini-blog"))
    orchestrator = ContentOrchestrator.from_config(config, http_client=http_client)

    outcome = await orchestrator.process_upload(
        [UploadDescriptor(user_id="user_1", file_url="https://uploads.test/a.wav", file_name="a.wav")]
    )

    assert isinstance(outcome, PostCreated)
    assert outcome.title == "Ship Small, Stay Calm"
    assert transport.calls == 3
    assert transport.requests[1].url.path.endswith("/models/gemini-2.0-flash:generateContent")
    assert transport.requests[2].url.path.endswith("/models/gemini-blog:generateContent")
    assert isinstance(orchestrator.repository, InMemoryPostRepository)


@pytest.mark.asyncio
async def test_from_config_uses_custom_prompt_directory(tmp_path):
    (tmp_path / "blog_post.yaml").write_text(
        "name: blog_post\n"
        "generation:\n"
        "  temperature: 0.3\n"
        "  max_output_tokens: 1024\n"
        "template: 'House style. {{ transcript }}'\n"
    )
    http_client, transport = scripted_client([
        httpx.Response(200, json=content_parts_response(BLOG_MARKDOWN)),
    ])
    config = AppConfig(gemini=GeminiConfig(api_key="test-gemini-key"), prompts_dir=str(tmp_path))
    orchestrator = ContentOrchestrator.from_config(config, http_client=http_client)

    outcome = await orchestrator.generate_post(TRANSCRIPT_TEXT, "user_1")

    assert isinstance(outcome, PostCreated)
    body = transport.json_bodies()[0]
    assert body["contents"][0]["parts"][0]["text"] == f"House style. {TRANSCRIPT_TEXT}"
    assert body["generationConfig"]["temperature"] == 0.3
    assert orchestrator.transcriber.prompt_loader is orchestrator.generator.prompt_loader

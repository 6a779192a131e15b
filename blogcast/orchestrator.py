"""
Content Orchestrator

Wires the transcription workflow, the blog generator and post storage into
the two user-facing actions:

    transcribe(uploads)                  -> TranscriptionResult
    generate_post(transcript, user_id)   -> PostCreated | GenerationFailed

Navigation after a successful generation is a return value: the API turns
PostCreated into a redirect to the stored post, the CLI writes the post out.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import httpx

from blogcast.blog.errors import BlogGenerationError
from blogcast.blog.generator import BlogPostGenerator, derive_title
from blogcast.config import AppConfig
from blogcast.llm.errors import LLMError
from blogcast.llm.providers.base import BaseGenerationClient
from blogcast.llm.providers.cloud_gemini import CloudGeminiClient
from blogcast.posts.repository import (
    InMemoryPostRepository,
    PostRepository,
    StorageError,
    RECENT_POSTS_LIMIT,
)
from blogcast.prompts import PromptLoader
from blogcast.prompts.errors import PromptError
from blogcast.transcription.downloader import MediaDownloader
from blogcast.transcription.models import TranscriptionResult, UploadDescriptor
from blogcast.transcription.workflow import TranscriptionWorkflow
from blogcast.utils.logging_config import logging_config


logger = logging.getLogger(__name__)

NO_TRANSCRIPT_MESSAGE = "No transcription text provided"
EMPTY_POST_MESSAGE = "Blog post generation failed, please try again..."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


@dataclass(frozen=True)
class PostCreated:
    """A post was generated and stored; the caller should navigate to it."""
    post_id: int
    title: str


@dataclass(frozen=True)
class GenerationFailed:
    """Blog generation did not produce a stored post."""
    message: str
    success: bool = False


GenerationOutcome = Union[PostCreated, GenerationFailed]


class ContentOrchestrator:
    """Runs transcription and blog generation against one post repository.

    Example:
        >>> orchestrator = ContentOrchestrator.from_config(AppConfig.load_from_yaml())
        >>> outcome = await orchestrator.generate_post(transcript, user_id="user_123")
        >>> if isinstance(outcome, PostCreated):
        ...     print(outcome.post_id, outcome.title)
    """

    def __init__(
        self,
        transcriber: TranscriptionWorkflow,
        generator: BlogPostGenerator,
        repository: PostRepository
    ):
        self.transcriber = transcriber
        self.generator = generator
        self.repository = repository

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        repository: Optional[PostRepository] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        client: Optional[BaseGenerationClient] = None
    ) -> 'ContentOrchestrator':
        """Build an orchestrator with a shared Gemini client and prompt loader.

        Args:
            config: Application configuration
            repository: Post storage; an InMemoryPostRepository when omitted
            http_client: Optional shared httpx client for all outbound calls
            client: Generation client override; CloudGeminiClient otherwise
        """
        client = client or CloudGeminiClient(config.gemini, http_client=http_client)
        downloader = MediaDownloader(config.transcription, http_client=http_client)
        prompt_loader = PromptLoader(custom_prompts_dir=config.prompts_dir)
        return cls(
            transcriber=TranscriptionWorkflow(
                client,
                config.transcription,
                config.gemini.transcribe_model,
                downloader=downloader,
                prompt_loader=prompt_loader,
            ),
            generator=BlogPostGenerator(client, config.gemini.blog_model, prompt_loader=prompt_loader),
            repository=repository or InMemoryPostRepository(),
        )

    async def transcribe(self, uploads: Sequence[UploadDescriptor]) -> TranscriptionResult:
        """Transcribe the first upload; never raises."""
        started = time.monotonic()
        result = await self.transcriber.transcribe(uploads)
        logging_config.log_operation_timing("Transcription", time.monotonic() - started)
        return result

    async def generate_post(self, transcript_text: Optional[str], user_id: str) -> GenerationOutcome:
        """Generate a post from a transcript and store it.

        Prior posts (newest three) are used as the style reference. Storage
        is written at most once per call.

        Args:
            transcript_text: Transcript produced by ``transcribe``
            user_id: Owner of the new post

        Returns:
            PostCreated on success, GenerationFailed otherwise
        """
        transcript = (transcript_text or "").strip()
        if not transcript:
            return GenerationFailed(NO_TRANSCRIPT_MESSAGE)

        started = time.monotonic()
        try:
            prior_posts = await self.repository.get_recent_posts(user_id, limit=RECENT_POSTS_LIMIT)
            logger.info(f"Generating blog post for user {user_id} with {len(prior_posts)} prior posts")

            markdown = await self.generator.generate(transcript, prior_posts)
            if not markdown.strip():
                return GenerationFailed(EMPTY_POST_MESSAGE)

            title = derive_title(markdown)
            post_id = await self.repository.save_post(user_id, title, markdown)

        except (BlogGenerationError, LLMError, PromptError, StorageError) as e:
            logger.error(f"Blog generation failed for user {user_id}: {type(e).__name__}: {e}")
            return GenerationFailed(f"Blog generation failed: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error during blog generation: {e}")
            return GenerationFailed(UNEXPECTED_ERROR_MESSAGE)

        logging_config.log_operation_timing("Blog generation", time.monotonic() - started)
        logger.info(f"Created post {post_id} '{title}'")
        return PostCreated(post_id=post_id, title=title)

    async def process_upload(self, uploads: Sequence[UploadDescriptor]) -> GenerationOutcome:
        """Transcribe an upload and turn the transcript into a post."""
        result = await self.transcribe(uploads)
        if not result.success:
            return GenerationFailed(result.message)
        return await self.generate_post(result.data.transcription, result.data.user_id)

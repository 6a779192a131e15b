"""
Blog post generator.

Writes a Markdown blog post from a transcript, using the author's recent
posts as a style reference. Output structure:
- H1 title on the first line
- Introduction
- 3-5 H2 body sections
- Key Takeaways bullets
- Conclusion / call-to-action

Retries happen inside the generation client only; this layer makes one
logical call.
"""

import logging
import re
from typing import Optional, Sequence

from blogcast.blog.errors import EmptyGenerationError
from blogcast.llm.errors import MalformedResponseError
from blogcast.llm.providers.base import BaseGenerationClient, GenerationRequest, GenerationSettings
from blogcast.llm.response import extract_text
from blogcast.prompts import PromptLoader, PromptRenderer


logger = logging.getLogger(__name__)

NO_PREVIOUS_POSTS = "No previous posts"
DEFAULT_TITLE = "Generated Blog Post"
_HEADING_PREFIX = re.compile(r"^#+\s*")


def format_style_reference(prior_posts: Optional[Sequence[str]]) -> str:
    """Join prior posts into the style reference block."""
    posts = [post for post in (prior_posts or []) if post and post.strip()]
    if not posts:
        return NO_PREVIOUS_POSTS
    return "\n\n".join(posts)


def derive_title(markdown: str) -> str:
    """Title for a generated post: its first non-blank line without '#' markers.

    Example:
        >>> derive_title("# Shipping Faster\\n\\nIntro...")
        'Shipping Faster'
    """
    for line in markdown.splitlines():
        if line.strip():
            title = _HEADING_PREFIX.sub("", line.strip()).strip()
            return title or DEFAULT_TITLE
    return DEFAULT_TITLE


class BlogPostGenerator:
    """Generates Markdown blog posts from transcripts via Gemini.

    Example:
        >>> generator = BlogPostGenerator(client, model="gemini-2.0-flash")
        >>> markdown = await generator.generate(transcript, ["# Older post ..."])
    """

    def __init__(
        self,
        client: BaseGenerationClient,
        model: str,
        prompt_loader: Optional[PromptLoader] = None,
        renderer: Optional[PromptRenderer] = None
    ):
        self.client = client
        self.model = model
        self.prompt_loader = prompt_loader or PromptLoader()
        self.renderer = renderer or PromptRenderer()

    def build_request(
        self,
        transcript: str,
        prior_posts: Optional[Sequence[str]] = None
    ) -> GenerationRequest:
        """Build the blog generation request for ``transcript``."""
        template = self.prompt_loader.load_prompt("blog_post")
        prompt = self.renderer.render(
            template,
            style_reference=format_style_reference(prior_posts),
            transcript=transcript,
        )
        return GenerationRequest.text_only(
            prompt,
            GenerationSettings.from_dict(template["generation"]),
        )

    async def generate(
        self,
        transcript: str,
        prior_posts: Optional[Sequence[str]] = None
    ) -> str:
        """Generate a blog post.

        Args:
            transcript: Transcript text, embedded verbatim in the prompt
            prior_posts: Recent posts by the same author, newest first

        Returns:
            Raw Markdown as returned by the model

        Raises:
            EmptyGenerationError: If the response carries no usable text
            LLMError: If the generation call itself fails
        """
        request = self.build_request(transcript, prior_posts)
        response = await self.client.invoke(request, "blog generation", self.model)

        try:
            markdown = extract_text(response)
        except MalformedResponseError as e:
            logger.error(f"Blog generation returned no usable text: {e.details}")
            raise EmptyGenerationError("Invalid blog response from Gemini API") from e

        logger.info(f"Blog post generated ({len(markdown)} characters)")
        return markdown

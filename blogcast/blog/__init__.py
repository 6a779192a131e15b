"""
Blog Generation

Builds the style-conditioned blog prompt and turns the model output into
Markdown.
"""

from blogcast.blog.generator import BlogPostGenerator, derive_title, format_style_reference
from blogcast.blog.errors import BlogGenerationError, EmptyGenerationError

__all__ = [
    "BlogPostGenerator",
    "derive_title",
    "format_style_reference",
    "BlogGenerationError",
    "EmptyGenerationError",
]

"""
Prompt Templates

YAML prompt templates for transcription and blog generation, loaded by
PromptLoader and rendered with Jinja2 by PromptRenderer.
"""

from blogcast.prompts.loader import PromptLoader
from blogcast.prompts.renderer import PromptRenderer
from blogcast.prompts.errors import PromptError, PromptTemplateError, PromptRenderError

__all__ = [
    "PromptLoader",
    "PromptRenderer",
    "PromptError",
    "PromptTemplateError",
    "PromptRenderError",
]

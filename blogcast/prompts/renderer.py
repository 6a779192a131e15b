"""
Prompt Renderer

Renders prompt templates with Jinja2. Undefined variables raise instead of
rendering as empty strings, so a missing transcript can never produce a
silently truncated prompt.
"""

from jinja2 import Environment, StrictUndefined, TemplateError
from typing import Dict, Any

from blogcast.prompts.errors import PromptRenderError


class PromptRenderer:
    """Renders prompt templates with context variables.

    Attributes:
        env: Jinja2 environment with StrictUndefined
    """

    def __init__(self):
        self.env = Environment(undefined=StrictUndefined)

    def render(self, prompt_template: Dict[str, Any], **context: Any) -> str:
        """Render a loaded template with ``context``.

        Args:
            prompt_template: Template dict from PromptLoader
            **context: Template variables

        Returns:
            Rendered prompt with surrounding whitespace stripped

        Raises:
            PromptRenderError: If rendering fails
        """
        try:
            template = self.env.from_string(prompt_template["template"])
            return template.render(**context).strip()
        except TemplateError as e:
            raise PromptRenderError(f"Error rendering prompt template: {e}")
        except KeyError as e:
            raise PromptRenderError(f"Prompt template missing required field: {e}")

"""
Prompt Loader

Loads and validates the YAML prompt templates shipped with the package.
Supports a custom prompts directory with fallback to the defaults.

Each template file holds:
    name: template identifier
    generation: sampling parameters (temperature, max_output_tokens, top_p?, top_k?)
    template: Jinja2 prompt text
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from blogcast.prompts.errors import PromptTemplateError


TEMPLATE_FILES = {
    'transcription': 'transcription.yaml',
    'blog_post': 'blog_post.yaml',
}


class PromptLoader:
    """Loads and validates YAML prompt templates.

    Loaded templates are cached per loader instance.

    Attributes:
        default_prompts_dir: Directory containing default prompt templates
        custom_prompts_dir: Optional directory for custom templates
    """

    def __init__(
        self,
        default_prompts_dir: Optional[Path] = None,
        custom_prompts_dir: Optional[Path] = None
    ):
        if default_prompts_dir is None:
            default_prompts_dir = Path(__file__).parent

        self.default_prompts_dir = Path(default_prompts_dir)
        self.custom_prompts_dir = Path(custom_prompts_dir) if custom_prompts_dir else None
        self._prompt_cache: Dict[str, Dict[str, Any]] = {}

        if not self.default_prompts_dir.exists():
            raise PromptTemplateError(
                f"Default prompts directory does not exist: {self.default_prompts_dir}"
            )

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Load a prompt template by name.

        Checks the custom prompts directory first, then falls back to defaults.

        Args:
            prompt_name: Template name ('transcription' or 'blog_post')

        Returns:
            Template dictionary with 'name', 'generation' and 'template' keys

        Raises:
            PromptTemplateError: If the template cannot be loaded or is invalid
        """
        if prompt_name in self._prompt_cache:
            return self._prompt_cache[prompt_name]

        if prompt_name not in TEMPLATE_FILES:
            raise PromptTemplateError(
                f"Unknown prompt: {prompt_name}. "
                f"Must be one of: {list(TEMPLATE_FILES.keys())}"
            )

        filename = TEMPLATE_FILES[prompt_name]
        path = self.default_prompts_dir / filename
        if self.custom_prompts_dir and (self.custom_prompts_dir / filename).exists():
            path = self.custom_prompts_dir / filename

        if not path.exists():
            raise PromptTemplateError(
                f"No prompt template found for {prompt_name} at {path}"
            )

        prompt = self._load_yaml(path)
        self._validate_prompt(prompt, prompt_name)
        self._prompt_cache[prompt_name] = prompt
        return prompt

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PromptTemplateError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise PromptTemplateError(f"Error reading {path}: {e}")

        if not isinstance(data, dict):
            raise PromptTemplateError(
                f"YAML file must contain a dictionary, got {type(data).__name__}"
            )
        return data

    def _validate_prompt(self, prompt: Dict[str, Any], prompt_name: str):
        """Ensure the template has a non-empty body and sampling parameters."""
        template = prompt.get("template")
        if not isinstance(template, str) or not template.strip():
            raise PromptTemplateError(
                f"Prompt '{prompt_name}' must have a non-empty 'template' string"
            )

        generation = prompt.get("generation")
        if not isinstance(generation, dict):
            raise PromptTemplateError(
                f"Prompt '{prompt_name}' 'generation' field must be a dictionary"
            )

        for field in ("temperature", "max_output_tokens"):
            if field not in generation:
                raise PromptTemplateError(
                    f"Prompt '{prompt_name}' generation settings missing required field: {field}"
                )

    def clear_cache(self):
        """Clear the prompt cache."""
        self._prompt_cache.clear()

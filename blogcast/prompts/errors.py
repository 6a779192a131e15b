"""Prompt template error classes."""


class PromptError(Exception):
    """Base exception for prompt loading and rendering errors."""
    pass


class PromptTemplateError(PromptError):
    """Raised when a prompt template file is missing or invalid."""
    pass


class PromptRenderError(PromptError):
    """Raised when a prompt template cannot be rendered."""
    pass

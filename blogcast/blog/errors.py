"""Blog generation error classes."""


class BlogGenerationError(Exception):
    """Base exception for blog generation errors."""
    pass


class EmptyGenerationError(BlogGenerationError):
    """Raised when the model returns no usable blog text."""
    pass

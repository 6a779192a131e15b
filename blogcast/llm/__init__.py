"""
Generation API Infrastructure Layer

Shared infrastructure for calling the Gemini generation API. Workflows in
blogcast.transcription and blogcast.blog build requests and depend only on
this layer's public surface.

Key Components:
    - providers/: BaseGenerationClient and the CloudGeminiClient implementation
    - retry.py: RetryPolicy with exponential backoff and jitter
    - response.py: shape-tolerant text extraction from responses
    - config.py: GeminiConfig / RetryConfig with environment variable support
    - errors.py: error hierarchy with user-facing messages

Usage:
    >>> from blogcast.llm import CloudGeminiClient, GeminiConfig, GenerationRequest
    >>>
    >>> client = CloudGeminiClient(GeminiConfig.load_from_dict({}))
    >>> body = await client.invoke(request, "blog generation", "gemini-2.0-flash")
    >>> text = extract_text(body)
"""

from blogcast.llm.providers.base import (
    BaseGenerationClient,
    GenerationRequest,
    GenerationSettings,
)
from blogcast.llm.providers.cloud_gemini import CloudGeminiClient
from blogcast.llm.config import GeminiConfig, RetryConfig
from blogcast.llm.retry import RetryPolicy, RetryState
from blogcast.llm.response import ResponseShape, extract_text, match_shape
from blogcast.llm.errors import (
    LLMError,
    ConfigurationError,
    MissingCredentialError,
    ProviderError,
    InvalidRequestError,
    AuthenticationError,
    RateLimitError,
    ServiceUnavailableError,
    NetworkError,
    MalformedResponseError,
)

__all__ = [
    # Clients and requests
    "BaseGenerationClient",
    "GenerationRequest",
    "GenerationSettings",
    "CloudGeminiClient",

    # Configuration and retry
    "GeminiConfig",
    "RetryConfig",
    "RetryPolicy",
    "RetryState",

    # Response parsing
    "ResponseShape",
    "extract_text",
    "match_shape",

    # Errors
    "LLMError",
    "ConfigurationError",
    "MissingCredentialError",
    "ProviderError",
    "InvalidRequestError",
    "AuthenticationError",
    "RateLimitError",
    "ServiceUnavailableError",
    "NetworkError",
    "MalformedResponseError",
]

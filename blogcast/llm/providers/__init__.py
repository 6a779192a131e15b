"""
Generation Providers

Client implementations for the remote generation API, following the
{deployment}_{service}.py naming pattern.

Available Clients:
    - CloudGeminiClient: Gemini generateContent REST API (cloud_gemini.py)

All clients implement the BaseGenerationClient interface defined in base.py.
"""

from blogcast.llm.providers.base import (
    BaseGenerationClient,
    GenerationRequest,
    GenerationSettings,
)
from blogcast.llm.providers.cloud_gemini import CloudGeminiClient

__all__ = [
    "BaseGenerationClient",
    "GenerationRequest",
    "GenerationSettings",
    "CloudGeminiClient",
]

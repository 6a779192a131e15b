"""
Base Generation Client Protocol

Defines the request format and the abstract client that workflows depend on.
Workflows build a GenerationRequest and hand it to a BaseGenerationClient;
they never talk HTTP themselves, which keeps them testable with a fake client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class GenerationSettings:
    """Sampling parameters sent as ``generationConfig``.

    Attributes:
        temperature: Sampling temperature (0.0 = deterministic)
        max_output_tokens: Upper bound on generated tokens
        top_p: Optional nucleus sampling threshold
        top_k: Optional top-k sampling limit
    """
    temperature: float
    max_output_tokens: int
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    def __post_init__(self):
        """Validate settings."""
        if self.max_output_tokens <= 0:
            raise ValueError("max_output_tokens must be positive")
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError("temperature must be between 0.0 and 2.0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GenerationSettings':
        """Build settings from a prompt template's ``generation`` block."""
        return cls(
            temperature=float(data["temperature"]),
            max_output_tokens=int(data["max_output_tokens"]),
            top_p=data.get("top_p"),
            top_k=data.get("top_k"),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
        }
        if self.top_p is not None:
            payload["topP"] = self.top_p
        if self.top_k is not None:
            payload["topK"] = self.top_k
        return payload


@dataclass(frozen=True)
class GenerationRequest:
    """A single generateContent request.

    Built once by a workflow and never mutated afterwards. Use the
    ``text_only`` and ``with_inline_media`` constructors rather than
    assembling parts by hand.

    Attributes:
        parts: Content parts in send order (text and/or inlineData)
        settings: Sampling parameters
    """
    parts: Tuple[Dict[str, Any], ...]
    settings: GenerationSettings

    def __post_init__(self):
        """Validate request parts."""
        if not self.parts:
            raise ValueError("A generation request needs at least one part")

    @classmethod
    def text_only(cls, prompt: str, settings: GenerationSettings) -> 'GenerationRequest':
        if not prompt:
            raise ValueError("Prompt cannot be empty")
        return cls(parts=({"text": prompt},), settings=settings)

    @classmethod
    def with_inline_media(
        cls,
        data_b64: str,
        mime_type: str,
        prompt: str,
        settings: GenerationSettings
    ) -> 'GenerationRequest':
        """Request with a base64 media payload followed by an instruction prompt."""
        return cls(
            parts=(
                {"inlineData": {"data": data_b64, "mimeType": mime_type}},
                {"text": prompt},
            ),
            settings=settings,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Render the provider JSON body."""
        return {
            "contents": [{"parts": [dict(part) for part in self.parts]}],
            "generationConfig": self.settings.to_payload(),
        }


class BaseGenerationClient(ABC):
    """Abstract client for the remote generation API.

    Implementations are responsible for:
    - Checking that credentials are configured before calling
    - Retrying transient failures with backoff
    - Bounding each attempt with a timeout
    - Translating failures into blogcast.llm.errors types
    """

    @abstractmethod
    async def invoke(
        self,
        request: GenerationRequest,
        operation: str,
        model: Optional[str] = None
    ) -> Dict[str, Any]:
        """Issue one logical request and return the decoded response body.

        Args:
            request: The request to send
            operation: Label used in log lines ("transcription", "blog generation")
            model: Target model name; implementations supply a default

        Returns:
            Decoded JSON response object (shape not guaranteed)

        Raises:
            LLMError: Any subclass from blogcast.llm.errors
        """
        pass

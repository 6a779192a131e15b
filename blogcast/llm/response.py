"""
Gemini Response Text Extraction

The generateContent endpoint has returned several response shapes across API
versions. Rather than assume one schema, each known shape is listed here with
its own extractor, and the extractors are tried in a fixed priority order:

    1. CONTENT_PARTS  candidates[0].content.parts[0].text
    2. FLAT_TEXT      candidates[0].text
    3. OUTPUT_TEXT    candidates[0].output.text
    4. JOINED_PARTS   every non-empty candidates[0].content.parts[*].text, space-joined

The first shape that yields text which is non-empty after trimming wins. When
no shape matches, MalformedResponseError is raised.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Tuple

from blogcast.llm.errors import MalformedResponseError, MALFORMED_RESPONSE_MESSAGE


logger = logging.getLogger(__name__)


class ResponseShape(Enum):
    """Known response shapes, in extraction priority order."""
    CONTENT_PARTS = "content.parts[0].text"
    FLAT_TEXT = "text"
    OUTPUT_TEXT = "output.text"
    JOINED_PARTS = "content.parts[*].text"


@dataclass(frozen=True)
class ExtractedText:
    """Text pulled from a response, with the shape it was found in."""
    text: str
    shape: ResponseShape


def _usable(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _parts(candidate: Mapping[str, Any]) -> List[Any]:
    content = candidate.get("content")
    if not isinstance(content, Mapping):
        return []
    parts = content.get("parts")
    return parts if isinstance(parts, list) else []


def _first_part_text(candidate: Mapping[str, Any]) -> Optional[str]:
    parts = _parts(candidate)
    if parts and isinstance(parts[0], Mapping):
        return _usable(parts[0].get("text"))
    return None


def _flat_text(candidate: Mapping[str, Any]) -> Optional[str]:
    return _usable(candidate.get("text"))


def _output_text(candidate: Mapping[str, Any]) -> Optional[str]:
    output = candidate.get("output")
    if isinstance(output, Mapping):
        return _usable(output.get("text"))
    return None


def _joined_parts_text(candidate: Mapping[str, Any]) -> Optional[str]:
    texts = [
        part.get("text") for part in _parts(candidate)
        if isinstance(part, Mapping) and _usable(part.get("text"))
    ]
    return _usable(" ".join(texts))


EXTRACTION_ORDER: Tuple[Tuple[ResponseShape, Callable[[Mapping[str, Any]], Optional[str]]], ...] = (
    (ResponseShape.CONTENT_PARTS, _first_part_text),
    (ResponseShape.FLAT_TEXT, _flat_text),
    (ResponseShape.OUTPUT_TEXT, _output_text),
    (ResponseShape.JOINED_PARTS, _joined_parts_text),
)


def _first_candidate(response: Any) -> Mapping[str, Any]:
    if not isinstance(response, Mapping):
        raise MalformedResponseError(
            MALFORMED_RESPONSE_MESSAGE,
            details=f"Response is not an object: {type(response).__name__}"
        )

    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise MalformedResponseError(
            MALFORMED_RESPONSE_MESSAGE,
            details="No candidates in Gemini response"
        )

    candidate = candidates[0]
    if not isinstance(candidate, Mapping):
        raise MalformedResponseError(
            MALFORMED_RESPONSE_MESSAGE,
            details=f"First candidate is not an object: {type(candidate).__name__}"
        )
    return candidate


def match_shape(response: Any) -> ExtractedText:
    """Find the first known shape that carries usable text.

    Args:
        response: Decoded JSON body of a generateContent response

    Returns:
        ExtractedText with the raw (untrimmed) text and the matched shape

    Raises:
        MalformedResponseError: If candidates are missing or no shape matches
    """
    candidate = _first_candidate(response)

    for shape, extractor in EXTRACTION_ORDER:
        text = extractor(candidate)
        if text is not None:
            logger.debug(f"Extracted response text using shape {shape.value}")
            return ExtractedText(text=text, shape=shape)

    finish_reason = candidate.get("finishReason")
    raise MalformedResponseError(
        MALFORMED_RESPONSE_MESSAGE,
        details=f"No text content found in Gemini response structure (finishReason={finish_reason})"
    )


def extract_text(response: Any) -> str:
    """Extract the first usable text payload from a Gemini response.

    Example:
        >>> extract_text({"candidates": [{"content": {"parts": [{"text": "Hi"}]}}]})
        'Hi'
    """
    return match_shape(response).text

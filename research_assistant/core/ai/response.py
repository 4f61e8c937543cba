"""
Gemini Response Parsing

Typed view of the generateContent response envelope, plus the result value
that the gateway and research service pass around instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

NO_VALID_RESPONSE = "No valid response from AI."


class ErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass
class GenerationResult:
    """Outcome of one gateway call: the text to return and, on failure, why."""
    text: str
    error: Optional[ErrorKind] = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.error is None


class Part(BaseModel):
    text: Optional[str] = None


class Content(BaseModel):
    parts: Optional[List[Part]] = None


class Candidate(BaseModel):
    content: Optional[Content] = None


class GeminiResponse(BaseModel):
    candidates: Optional[List[Candidate]] = None


def extract_text(raw_body: str) -> GenerationResult:
    """
    Pull the generated text out of a raw response body.

    Only the first part of the first candidate is used, returned verbatim.
    A well-formed body without any text yields the "no valid response"
    sentinel; an unparseable body yields an "error parsing" message.
    """
    try:
        response = GeminiResponse.model_validate_json(raw_body)
    except ValidationError as e:
        logger.error(f"Failed to parse AI response: {e}")
        return GenerationResult(
            text=f"Error parsing AI response: {e}",
            error=ErrorKind.MALFORMED_RESPONSE
        )

    if response.candidates:
        content = response.candidates[0].content
        if content is not None and content.parts:
            text = content.parts[0].text
            if text is not None:
                return GenerationResult(text=text)

    logger.warning("AI response contained no candidate text")
    return GenerationResult(text=NO_VALID_RESPONSE, error=ErrorKind.MALFORMED_RESPONSE)

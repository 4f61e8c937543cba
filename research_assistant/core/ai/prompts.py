"""
Prompt Templates

Maps an operation tag and its content to the literal instruction string that
is sent to the generative-AI endpoint.
"""

from enum import Enum
from typing import Dict, Optional

from ..exceptions import RequestValidationError


class Operation(str, Enum):
    """Text transformations understood by the research service."""
    SUMMARIZE = "summarize"
    BULLET_SUMMARY = "bullet_summary"
    DETAILED_SUMMARY = "detailed_summary"
    ABSTRACT = "abstract"
    PARAPHRASE = "paraphrase"
    KEYPOINTS = "keypoints"
    SENTIMENT = "sentiment"
    KEYWORDS = "keywords"
    TOPICS = "topics"
    ORIGINALITY = "originality"
    SUGGEST = "suggest"
    TRANSLATE = "translate"
    MEANING = "meaning"
    MULTILANG_SUMMARY = "multilang_summary"
    DEFAULT = "default"


INSTRUCTIONS: Dict[Operation, str] = {
    Operation.SUMMARIZE: "Write a concise summary:",
    Operation.BULLET_SUMMARY: "Summarize the following text into bullet points:",
    Operation.DETAILED_SUMMARY: "Write a detailed, structured summary of the text:",
    Operation.ABSTRACT: "Write a research-paper style abstract for the text:",
    Operation.PARAPHRASE: "Paraphrase the following text:",
    Operation.KEYPOINTS: "List the key points of the following text:",
    Operation.SENTIMENT: "Analyze the sentiment (positive, negative, or neutral) of this text and explain briefly:",
    Operation.KEYWORDS: "Extract the top 10 most relevant keywords from the following text:",
    Operation.TOPICS: "Suggest a few potential research or discussion topics related to the following text:",
    Operation.ORIGINALITY: "Estimate the originality or uniqueness of the following text (percentage and explanation):",
    Operation.SUGGEST: "Suggest improvements to the clarity, structure and style of the following text:",
    Operation.DEFAULT: "Process the following text as per context:",
}

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "hi": "Hindi",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "zh": "Chinese (Simplified)",
}

DEFAULT_LANGUAGE_NAME = "English"


def language_name(code: Optional[str]) -> str:
    """Resolve a two-letter language code; unknown codes fall back to English."""
    if not code:
        return DEFAULT_LANGUAGE_NAME
    return LANGUAGE_NAMES.get(code.strip().lower(), DEFAULT_LANGUAGE_NAME)


def is_english(code: Optional[str]) -> bool:
    return not code or code.strip().lower() == "en"


def resolve_operation(tag: Optional[str], strict: bool = False) -> Operation:
    """
    Normalize an operation tag.

    Args:
        tag: Operation tag as sent by the client (case-insensitive)
        strict: Reject unknown tags instead of using the generic instruction

    Returns:
        The matching operation, or Operation.DEFAULT for unknown tags

    Raises:
        RequestValidationError: If the tag is empty, or unknown in strict mode
    """
    if not tag or not tag.strip():
        raise RequestValidationError("Operation is required")

    try:
        return Operation(tag.strip().lower())
    except ValueError:
        if strict:
            raise RequestValidationError(f"Unsupported operation: {tag}")
        return Operation.DEFAULT


def build_translation_prompt(content: str, target_language: Optional[str]) -> str:
    return (
        f"Translate the following text into {language_name(target_language)}. "
        f"Output only the translated text:\n\n{content}"
    )


def build_meaning_prompt(content: str, target_language: Optional[str]) -> str:
    return (
        f"Provide the meaning of the following word or phrase in {language_name(target_language)}. "
        f"Output only the meaning:\n\n{content}"
    )


def build_prompt(operation: Operation, content: Optional[str], target_language: Optional[str] = "en") -> str:
    """
    Build the prompt for a single AI call.

    multilang_summary has no prompt of its own; it is composed from the
    summarize and translate prompts by the research service.
    """
    content = content if content is not None else ""

    if operation == Operation.TRANSLATE:
        return build_translation_prompt(content, target_language)
    if operation == Operation.MEANING:
        return build_meaning_prompt(content, target_language)
    if operation == Operation.MULTILANG_SUMMARY:
        operation = Operation.SUMMARIZE

    return f"{INSTRUCTIONS[operation]}\n\n{content}"

"""
Research Service

Routes a processing request to the Gemini gateway: a single call for most
operations, a translation or meaning call, or the summarize-then-translate
pipeline, followed by an optional translation of the result.
"""

from typing import Optional
import logging

from ..exceptions import RequestValidationError
from .gemini_client import GeminiClient
from .prompts import (
    Operation,
    build_prompt,
    build_translation_prompt,
    is_english,
    resolve_operation,
)
from .response import GenerationResult

logger = logging.getLogger(__name__)

NO_OPERATION_SPECIFIED = "No operation specified."

# These produce output in the target language already.
SELF_TRANSLATING_OPERATIONS = {
    Operation.TRANSLATE,
    Operation.MEANING,
    Operation.MULTILANG_SUMMARY,
}


class ResearchService:
    """Dispatches research operations to the AI gateway."""

    def __init__(self, client: GeminiClient, strict_operations: bool = False):
        self.client = client
        self.strict_operations = strict_operations

    def validate(self, operation: Optional[str], content: Optional[str]) -> Operation:
        """
        Check a request before any network call is made.

        Raises:
            RequestValidationError: If the operation is missing or unknown
                (strict mode), or content is missing for an operation that
                needs it
        """
        if not operation or not operation.strip():
            raise RequestValidationError("Operation is required")

        resolved = resolve_operation(operation, strict=self.strict_operations)

        if resolved != Operation.ORIGINALITY and (content is None or not content.strip()):
            raise RequestValidationError("Content is required for this operation")

        return resolved

    async def process(
        self,
        operation: Optional[str],
        content: Optional[str],
        target_language: Optional[str] = "en",
    ) -> str:
        """
        Run one operation and return the text for the caller.

        Upstream failures come back as descriptive text; this method only
        raises on task cancellation.
        """
        if not operation or not operation.strip():
            return NO_OPERATION_SPECIFIED

        target_language = target_language or "en"

        try:
            resolved = resolve_operation(operation, strict=self.strict_operations)
            logger.info(f"Processing operation '{resolved.value}' (target language: {target_language})")

            result = await self._run(resolved, content, target_language)

            if result.ok and resolved not in SELF_TRANSLATING_OPERATIONS and not is_english(target_language):
                result = await self.translate(result.text, target_language)

            return result.text

        except RequestValidationError as e:
            return e.message
        except Exception as e:
            logger.exception(f"Failed to process operation '{operation}'")
            return f"Error processing request: {e}"

    async def _run(self, operation: Operation, content: Optional[str], target_language: str) -> GenerationResult:
        if operation == Operation.MULTILANG_SUMMARY:
            return await self.multilang_summary(content, target_language)

        return await self.client.generate(build_prompt(operation, content, target_language))

    async def translate(self, text: str, target_language: str) -> GenerationResult:
        return await self.client.generate(build_translation_prompt(text, target_language))

    async def multilang_summary(self, content: Optional[str], target_language: str) -> GenerationResult:
        """Summarize in English, then translate once if another language was asked for."""
        summary = await self.client.generate(build_prompt(Operation.SUMMARIZE, content))
        if not summary.ok or is_english(target_language):
            return summary
        return await self.translate(summary.text, target_language)

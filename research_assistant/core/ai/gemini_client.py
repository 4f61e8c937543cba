"""
Gemini Gateway

This client sends prompts to the hosted Gemini generateContent endpoint,
retrying with exponential backoff when the endpoint rate-limits us, and
unwraps the generated text from the response envelope.
"""

import aiohttp
import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional
import logging

from .config import AIServiceConfig
from .response import ErrorKind, GenerationResult, extract_text

logger = logging.getLogger(__name__)

RATE_LIMIT_EXCEEDED = "Error: Gemini API rate limit exceeded. Please wait and try again."
TOO_MANY_REQUESTS = 429


class GeminiClient:
    """Gateway to the Gemini generateContent API."""

    def __init__(
        self,
        config: AIServiceConfig,
        session: Optional[aiohttp.ClientSession] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Initialize the client.

        Args:
            config: Endpoint, credential and retry settings
            session: Optional externally managed aiohttp session
            sleep: Coroutine used to wait between retries
        """
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._sleep = sleep

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create an aiohttp session."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self.session

    @staticmethod
    def build_request_body(prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Send one prompt to the model.

        Rate-limited attempts (HTTP 429) are retried up to
        config.max_attempts times in total; every other failure ends the
        call immediately. Failures are reported in the returned result,
        never raised.

        The wait before each retry starts at config.initial_backoff and is
        multiplied by config.backoff_multiplier (2s, then 4s by default).
        No wait is taken after the final attempt; a last 429 returns the
        rate-limit result right away.

        Args:
            prompt: Full prompt text

        Returns:
            The generated text, or a descriptive error result
        """
        payload = self.build_request_body(prompt)
        delay = self.config.initial_backoff
        max_attempts = max(1, self.config.max_attempts)

        for attempt in range(1, max_attempts + 1):
            try:
                session = await self._get_session()

                async with session.post(
                    self.config.api_url,
                    params={"key": self.config.api_key},
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.config.request_timeout)
                ) as response:
                    if response.status == TOO_MANY_REQUESTS:
                        if attempt == max_attempts:
                            break
                        logger.warning(
                            f"Gemini API rate limit hit (429) on attempt {attempt}/{max_attempts}, "
                            f"retrying in {delay:.1f}s"
                        )
                        await self._sleep(delay)
                        delay *= self.config.backoff_multiplier
                        continue

                    # upstream bodies are not guaranteed to be valid UTF-8
                    body = (await response.read()).decode("utf-8", errors="replace")

                    if response.status >= 400:
                        logger.error(f"Gemini API error: {response.status} - {body}")
                        return GenerationResult(
                            text=f"Error calling AI API: {response.status} {response.reason}",
                            error=ErrorKind.UPSTREAM,
                            attempts=attempt
                        )

                    result = extract_text(body)
                    result.attempts = attempt
                    return result

            except asyncio.TimeoutError:
                logger.error("Gemini API request timed out")
                return GenerationResult(
                    text="Error calling AI API: request timed out",
                    error=ErrorKind.UPSTREAM,
                    attempts=attempt
                )
            except aiohttp.ClientError as e:
                logger.error(f"Gemini API connection error: {e}")
                return GenerationResult(
                    text=f"Error calling AI API: {e}",
                    error=ErrorKind.UPSTREAM,
                    attempts=attempt
                )

        logger.error(f"Gemini API rate limit exceeded after {max_attempts} attempts")
        return GenerationResult(
            text=RATE_LIMIT_EXCEEDED,
            error=ErrorKind.RATE_LIMITED,
            attempts=max_attempts
        )

    async def close(self):
        """Close the aiohttp session if this client created it."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def health_check(self) -> bool:
        """
        Check that a credential is configured and the endpoint answers.

        Returns:
            True if the service is available, False otherwise
        """
        if not self.config.api_key:
            logger.warning("Gemini API key is not configured")
            return False

        try:
            session = await self._get_session()
            # the model resource lives at the generateContent URL without the method suffix
            model_url = self.config.api_url.split(":generateContent")[0]
            async with session.get(
                model_url,
                params={"key": self.config.api_key},
                timeout=aiohttp.ClientTimeout(total=self.config.health_check_timeout)
            ) as response:
                return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Gemini health check failed: {e}")
            return False

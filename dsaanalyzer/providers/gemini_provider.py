"""
Gemini LLM provider.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import Settings
from .base import ProviderError


logger = logging.getLogger(__name__)


class GeminiProvider:
    """
    Gemini provider returning raw text for a prompt.
    """

    name = "gemini"

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: genai.Client | None = None
        self._model = settings.GEMINI_MODEL
        self._initialize()

    def _initialize(self) -> None:
        """Initialize Gemini client."""
        if not self._settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY not configured")
            return

        http_options = None
        if self._settings.GEMINI_BASE_URL:
            http_options = types.HttpOptions(base_url=self._settings.GEMINI_BASE_URL)

        try:
            self._client = genai.Client(
                api_key=self._settings.GEMINI_API_KEY,
                http_options=http_options,
            )
            logger.info("Gemini client initialized (model=%s)", self._model)
        except Exception as exc:
            logger.error("Failed to initialize Gemini client: %s", exc)

    def is_available(self) -> bool:
        return self._client is not None

    @property
    def model_name(self) -> str:
        return self._model

    async def close(self) -> None:
        """Close the async transport (SDK releases without ``aclose`` hold none)."""
        if self._client is None:
            return
        aclose = getattr(self._client.aio, "aclose", None)
        try:
            if aclose is not None:
                await aclose()
        finally:
            self._client = None

    async def _generate_once(self, prompt: str) -> Optional[str]:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._model,
                    contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                    config=types.GenerateContentConfig(
                        temperature=self._settings.TEMPERATURE,
                        max_output_tokens=self._settings.MAX_TOKENS,
                    ),
                ),
                timeout=self._settings.PROVIDER_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Gemini API timeout after %ss", self._settings.PROVIDER_TIMEOUT_SECONDS)
            raise TimeoutError(
                f"Gemini call timed out after {self._settings.PROVIDER_TIMEOUT_SECONDS}s"
            ) from exc

        text = response.text
        if not text:
            finish_reason = response.candidates[0].finish_reason if response.candidates else "Unknown"
            logger.warning("Empty response from Gemini. Finish reason: %s", finish_reason)
            return None
        return text

    async def generate_content(self, prompt: str) -> Optional[str]:
        """
        Send a prompt to Gemini.

        Args:
            prompt: Full prompt text

        Returns:
            Generated text, or None if the reply carried no text

        Raises:
            ProviderError: If the client is not configured or the API fails
            TimeoutError: If every attempt timed out
        """
        if not self._client:
            raise ProviderError("Gemini client not initialized - check GEMINI_API_KEY")

        logger.info("Calling Gemini API with prompt length: %d", len(prompt))
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.PROVIDER_MAX_ATTEMPTS),
                wait=wait_exponential(multiplier=1, min=1, max=4),
                retry=retry_if_exception_type((TimeoutError, ConnectionError)),
                reraise=True,
            ):
                with attempt:
                    return await self._generate_once(prompt)
        except (TimeoutError, ProviderError):
            raise
        except Exception as exc:
            logger.error("Gemini API error: %s", exc)
            raise ProviderError(f"Gemini API error: {exc}") from exc
        return None

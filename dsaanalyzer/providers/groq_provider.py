"""
Groq LLM provider.

OpenAI-compatible chat completions endpoint, JSON mode enabled.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import Settings
from .base import ProviderError


logger = logging.getLogger(__name__)


class GroqProvider:
    """
    Groq provider returning raw text for a prompt.
    """

    name = "groq"

    def __init__(self, settings: Settings):
        self._settings = settings
        self.api_key = settings.GROQ_API_KEY
        self.api_url = settings.GROQ_API_URL
        self._model = settings.GROQ_MODEL
        self._client: Optional[httpx.AsyncClient] = None
        if not self.api_key:
            logger.warning("GROQ_API_KEY not configured")

    def is_available(self) -> bool:
        return bool(self.api_key)

    @property
    def model_name(self) -> str:
        return self._model

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.PROVIDER_TIMEOUT_SECONDS),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _make_request(self, prompt: str) -> dict[str, Any]:
        client = await self._get_client()

        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._settings.MAX_TOKENS,
            "temperature": self._settings.TEMPERATURE,
            "response_format": {"type": "json_object"},
        }

        response = await client.post(self.api_url, json=payload)

        if response.status_code == 429:
            # Rate limit - wait and retry once
            await asyncio.sleep(2)
            response = await client.post(self.api_url, json=payload)

        if response.status_code != 200:
            error_detail = response.text
            try:
                error_detail = response.json().get("error", {}).get("message", error_detail)
            except (ValueError, AttributeError):
                pass
            raise ProviderError(
                f"API error ({response.status_code}): {error_detail}",
                status_code=response.status_code,
            )

        return response.json()

    async def generate_content(self, prompt: str) -> Optional[str]:
        """
        Send a prompt to Groq.

        Args:
            prompt: Full prompt text

        Returns:
            Message content of the first choice, or None if there is none

        Raises:
            ProviderError: If the key is missing or the API fails
        """
        if not self.api_key:
            raise ProviderError("GROQ_API_KEY environment variable not set")

        logger.info("Calling Groq API with prompt length: %d", len(prompt))
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.PROVIDER_MAX_ATTEMPTS),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
                reraise=True,
            ):
                with attempt:
                    data = await self._make_request(prompt)
        except httpx.HTTPError as exc:
            logger.error("Groq API error: %s", exc)
            raise ProviderError(f"Groq request failed: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Groq response had no message content")
            return None
        return content if isinstance(content, str) and content else None

"""
Provider contract shared by the LLM backends.
"""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


class ProviderError(Exception):
    """Exception for LLM provider errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@runtime_checkable
class ContentGenerator(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate_content(self, prompt: str) -> Optional[str]:
        """Return the model's text reply, or None when it produced nothing."""
        ...

"""LLM providers behind the ``ContentGenerator`` contract."""

from ..config import Settings
from .base import ContentGenerator, ProviderError
from .gemini_provider import GeminiProvider
from .groq_provider import GroqProvider


def create_provider(settings: Settings) -> GeminiProvider | GroqProvider:
    """Build the provider named by ``settings.LLM_PROVIDER``."""
    if settings.LLM_PROVIDER == "groq":
        return GroqProvider(settings)
    return GeminiProvider(settings)


__all__ = [
    "ContentGenerator",
    "ProviderError",
    "GeminiProvider",
    "GroqProvider",
    "create_provider",
]

"""
Configuration for the DSA Analyzer backend.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Provider selection
    LLM_PROVIDER: Literal["gemini", "groq"] = Field(default="gemini")

    # Gemini
    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash-lite")
    GEMINI_BASE_URL: Optional[str] = Field(default=None)

    # Groq
    GROQ_API_KEY: str = Field(default="")
    GROQ_MODEL: str = Field(default="meta-llama/llama-4-scout-17b-16e-instruct")
    GROQ_API_URL: str = Field(default="https://api.groq.com/openai/v1/chat/completions")

    # Generation
    MAX_TOKENS: int = Field(default=4096)
    TEMPERATURE: float = Field(default=0.3)  # Lower for more consistent JSON output
    PROVIDER_TIMEOUT_SECONDS: float = Field(default=30.0)
    PROVIDER_MAX_ATTEMPTS: int = Field(default=3, ge=1)

    # HTTP
    ALLOWED_ORIGINS: str = Field(default="http://localhost:3000,http://localhost:5173")
    MAX_CODE_LENGTH: int = Field(default=50_000)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins

    @property
    def model_name(self) -> str:
        return self.GEMINI_MODEL if self.LLM_PROVIDER == "gemini" else self.GROQ_MODEL


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logging and quiet chatty client libraries."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)

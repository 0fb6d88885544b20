"""
Configuration for ComplexityLens.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Anthropic
    ANTHROPIC_API_KEY: str = Field(default="")
    ANTHROPIC_BASE_URL: str = Field(default="https://api.anthropic.com/v1/messages")
    ANTHROPIC_VERSION: str = Field(default="2023-06-01")
    REQUEST_TIMEOUT_SECONDS: float = Field(default=60.0)

    # Inline label check: tiny answer, fast model
    QUICK_MODEL: str = Field(default="claude-haiku-20250219")
    QUICK_MAX_TOKENS: int = Field(default=100)

    # Full report
    ANALYSIS_MODEL: str = Field(default="claude-sonnet-4-20250514")
    ANALYSIS_MAX_TOKENS: int = Field(default=1500)

    # Limits
    CACHE_SIZE: int = Field(default=50, ge=1)
    MAX_CODE_LENGTH: int = Field(default=50_000)

    @property
    def has_api_key(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY.strip())


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level or get_settings().LOG_LEVEL),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

"""Configuration management for alignment, caching, and review settings."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from comparison.models import HighlightMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STATUTE_DIFF_",
        extra="ignore",
    )

    # Alignment
    lookahead_window: int = Field(
        default=15,
        ge=1,
        description="Number of paragraphs scanned ahead when re-syncing misaligned subsections",
    )
    low_similarity_warning_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Positional fallback pairs below this similarity (0.0-1.0) are logged as warnings",
    )

    # Review
    default_highlight_mode: HighlightMode = Field(
        default=HighlightMode.PLAIN,
        description="View-model rendering mode when none is requested: 'plain' or 'highlight'",
    )

    # Cache
    review_cache_max_entries: int = Field(
        default=32,
        ge=1,
        description="Maximum number of computed comparisons kept in the LRU review cache",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level used by the CLI")


def get_settings() -> Settings:
    """Return a cached settings instance."""
    return _get_settings()


@lru_cache()
def _get_settings() -> Settings:
    return Settings()


settings = get_settings()

"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CACHE_DIR = Path.home() / ".cache/github-history-aggregator"


class Settings(BaseSettings):
    """Settings for the history aggregator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_username: str | None = None
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"

    # Steady-state throttle: 1.3 req/sec = ~4,680/hour (under 5K limit)
    requests_per_second: float = 1.3

    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_days: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

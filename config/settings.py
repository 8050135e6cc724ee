"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CrawlerSettings(BaseSettings):
    """Crawler settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CRAWLER_", extra="ignore")

    # Max in-flight list/detail fetches (= max open browser pages)
    concurrency: int = Field(default=10, ge=1)

    # Pause inside each worker slot before navigating, in seconds
    request_delay: float = Field(default=0.5, ge=0)

    # Timeouts in milliseconds
    navigation_timeout_ms: int = Field(default=60000, gt=0)
    wait_timeout_ms: int = Field(default=30000, gt=0)
    browser_launch_timeout_ms: int = Field(default=30000, gt=0)

    headless: bool = True
    output_dir: Path = Path("outputs")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    crawler: CrawlerSettings = Field(default_factory=CrawlerSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Worker configuration.

Loaded from environment variables prefixed with FUSION_.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent.parent.parent.parent / ".env"


class Settings(BaseSettings):
    """Worker settings."""

    model_config = SettingsConfigDict(
        env_prefix="FUSION_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "info"

    database_url: str = "sqlite+aiosqlite:///fusion.db"
    redis_url: str = "redis://localhost:6379/0"

    # System default for fetching full article content
    auto_fetch_full_content: bool = False
    # Minimum time between two pulls of a healthy feed
    pull_interval_minutes: int = 30


settings = Settings()

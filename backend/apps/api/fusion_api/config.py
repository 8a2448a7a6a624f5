"""
API configuration.

Loaded from environment variables prefixed with FUSION_ and an optional
.env file in the project root.
"""

import secrets
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent.parent.parent.parent / ".env"


class Settings(BaseSettings):
    """API settings."""

    model_config = SettingsConfigDict(
        env_prefix="FUSION_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "info"

    host: str = "0.0.0.0"
    port: int = 8080

    database_url: str = "sqlite+aiosqlite:///fusion.db"
    redis_url: str = "redis://localhost:6379/0"

    # Login is required only when a password is configured
    password: str = ""
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    jwt_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24 * 30
    secure_cookie: bool = False

    cors_origins: list[str] = ["http://localhost:5173"]

    # System default for fetching full article content
    auto_fetch_full_content: bool = False


settings = Settings()

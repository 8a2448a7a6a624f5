"""
Development server configuration.

Loaded from environment variables prefixed with FUSION_DEV_.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class DevServerSettings(BaseSettings):
    """Development server settings."""

    model_config = SettingsConfigDict(env_prefix="FUSION_DEV_", extra="ignore")

    # Backend that receives everything under /api
    target: str = "http://localhost:8080"
    static_dir: str | None = None
    change_origin: bool = True

    host: str = "127.0.0.1"
    port: int = 5173
    log_level: str = "info"


settings = DevServerSettings()

"""
Outbound fetch configuration.

Settings shared by the feed puller and the full-content fetcher,
loaded from environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent.parent.parent.parent / ".env"


class FetcherConfig(BaseSettings):
    """
    Fetcher configuration from environment variables.

    All settings are prefixed with FUSION_FETCH_ in environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="FUSION_FETCH_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    feed_timeout_seconds: float = 30.0
    full_content_timeout_seconds: float = 30.0
    user_agent: str = "Mozilla/5.0 (compatible; FusionRSS/1.0)"
    # Upper bound of concurrent full-content fetches per feed pull
    max_concurrency: int = 3


# Global instance
fetcher_config = FetcherConfig()

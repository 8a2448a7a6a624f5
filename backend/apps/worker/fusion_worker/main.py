"""
arq worker entry point.

Run with: arq fusion_worker.main.WorkerSettings
"""

from arq import cron
from arq.connections import RedisSettings

from fusion_core import get_logger, init_logging
from fusion_database.session import close_database, create_tables, init_database

from .config import settings
from .tasks.feed_fetcher import fetch_all_feeds, fetch_feed_task, scheduled_fetch

logger = get_logger(__name__)


async def startup(ctx: dict) -> None:
    """Initialize logging and the database."""
    init_logging(settings.log_level, settings.debug)
    init_database(settings.database_url)
    await create_tables()
    logger.info("Fusion worker started")


async def shutdown(ctx: dict) -> None:
    """Release the database engine."""
    await close_database()
    logger.info("Fusion worker stopped")


class WorkerSettings:
    """arq worker configuration."""

    functions = [fetch_feed_task, fetch_all_feeds]
    cron_jobs = [
        cron(scheduled_fetch, minute=set(range(0, 60, 5)), run_at_startup=True),
    ]
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = RedisSettings.from_dsn(settings.redis_url)
    max_jobs = 10

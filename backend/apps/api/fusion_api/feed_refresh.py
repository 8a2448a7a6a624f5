"""Shared helpers for feed refresh enqueueing."""

from arq.connections import ArqRedis

from fusion_core import get_logger

logger = get_logger(__name__)


async def enqueue_feed_refresh_job(
    redis: ArqRedis, feed_id: int, feed_name: str, force: bool = True
) -> dict[str, str | int]:
    """Enqueue one feed pull job and return a unified payload."""
    job = await redis.enqueue_job("fetch_feed_task", feed_id, force)
    return {
        "feed_id": feed_id,
        "job_id": job.job_id if job else "unknown",
        "feed_name": feed_name,
    }


async def enqueue_feed_refresh_jobs(
    redis: ArqRedis, feeds: list[tuple[int, str]], force: bool = True
) -> list[dict[str, str | int]]:
    """Enqueue pulls for several (feed_id, feed_name) pairs."""
    jobs = []
    for feed_id, feed_name in feeds:
        jobs.append(await enqueue_feed_refresh_job(redis, feed_id, feed_name, force))
    logger.info("Queued feed refresh", extra={"count": len(jobs)})
    return jobs

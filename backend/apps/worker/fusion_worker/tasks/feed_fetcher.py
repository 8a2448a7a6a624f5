"""
Feed fetcher tasks.

Background tasks for pulling feeds, storing new items and fetching
full article content.
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fusion_core import get_logger
from fusion_core.config import fetcher_config
from fusion_core.services import should_auto_fetch
from fusion_database.models import Feed, Item
from fusion_database.session import get_session
from fusion_rss import ParsedEntry, fetch_feed, fetch_full_content, parse_feed

from ..config import settings
from ..pull_policy import FeedUpdateAction, decide_feed_update

logger = get_logger(__name__)


def _pull_interval() -> timedelta:
    return timedelta(minutes=settings.pull_interval_minutes)


async def _record_failure(session: AsyncSession, feed: Feed, error: Exception) -> None:
    await session.execute(
        update(Feed)
        .where(Feed.id == feed.id)
        .values(
            failure=str(error) or error.__class__.__name__,
            consecutive_failures=Feed.consecutive_failures + 1,
            last_fetched_at=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    await session.commit()


_DIALECT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


async def _insert_new_items(
    session: AsyncSession, feed: Feed, entries: list[ParsedEntry]
) -> list[Item]:
    """
    Insert entries not stored yet.

    Rows whose (feed_id, guid) already exists are skipped by the database,
    so concurrent pulls of the same feed never fail on the unique constraint.

    Returns:
        The inserted items.
    """
    now = datetime.now(timezone.utc)
    rows: dict[str, dict] = {}
    for entry in entries:
        if not entry.guid:
            logger.warning(
                "Skipping entry without guid or link",
                extra={"feed_id": feed.id, "title": entry.title},
            )
            continue
        rows.setdefault(
            entry.guid,
            {
                "feed_id": feed.id,
                "guid": entry.guid,
                "title": entry.title,
                "link": entry.link,
                "content": entry.content,
                "pub_date": entry.pub_date,
                "unread": True,
                "bookmark": False,
                "created_at": now,
                "updated_at": now,
            },
        )
    if not rows:
        return []

    insert = _DIALECT_INSERTS[session.get_bind().dialect.name]
    stmt = (
        insert(Item)
        .values(list(rows.values()))
        .on_conflict_do_nothing(index_elements=["feed_id", "guid"])
        .returning(Item.id)
    )
    inserted_ids = list((await session.execute(stmt)).scalars())
    if not inserted_ids:
        return []

    result = await session.scalars(select(Item).where(Item.id.in_(inserted_ids)))
    return list(result)


async def auto_fetch_full_content(
    session: AsyncSession,
    items: list[Item],
    req_proxy: str | None = None,
    max_concurrency: int | None = None,
    fetcher=fetch_full_content,
) -> int:
    """
    Fetch full content for freshly inserted items.

    At most ``max_concurrency`` pages are downloaded at once; results are
    written in one commit. Failed fetches are logged and skipped.

    Returns:
        Number of items that received full content.
    """
    semaphore = asyncio.Semaphore(max_concurrency or fetcher_config.max_concurrency)
    targets = [item for item in items if item.id and item.link]

    async def fetch_one(item: Item) -> tuple[Item, str | None]:
        async with semaphore:
            try:
                result = await fetcher(
                    item.link,
                    req_proxy=req_proxy,
                    timeout=fetcher_config.full_content_timeout_seconds,
                    user_agent=fetcher_config.user_agent,
                )
            except Exception as e:
                logger.warning(
                    "Failed to auto-fetch full content",
                    extra={"item_id": item.id, "link": item.link, "error": str(e)},
                )
                return item, None
            return item, result.content or None

    results = await asyncio.gather(*(fetch_one(item) for item in targets))

    updated = 0
    for item, content in results:
        if content:
            item.full_content = content
            updated += 1

    if updated:
        await session.commit()
    return updated


async def pull_feed(
    session: AsyncSession,
    feed_id: int,
    force: bool = False,
    system_auto_fetch: bool | None = None,
    interval: timedelta | None = None,
) -> dict[str, str | int]:
    """
    Pull one feed.

    Fetch errors are recorded on the feed rather than raised.

    Args:
        session: Database session.
        feed_id: Feed to pull.
        force: Ignore the refresh interval and failure backoff.
        system_auto_fetch: System default for full-content fetching.
        interval: Refresh interval of healthy feeds.

    Returns:
        Dictionary with pull results.
    """
    stmt = select(Feed).where(Feed.id == feed_id).options(selectinload(Feed.group))
    feed = await session.scalar(stmt)
    if feed is None:
        return {"status": "error", "message": "Feed not found"}

    action, reason = decide_feed_update(feed, interval=interval or _pull_interval(), force=force)
    if action is FeedUpdateAction.SKIP:
        logger.debug("Skipping feed", extra={"feed_id": feed_id, "reason": reason.value})
        return {"status": "skipped", "feed_id": feed_id, "reason": reason.value}

    try:
        fetch_result = await fetch_feed(
            feed.link,
            req_proxy=feed.req_proxy or None,
            timeout=fetcher_config.feed_timeout_seconds,
        )
        parsed = None
        if fetch_result is not None:
            content, _ = fetch_result
            parsed = await parse_feed(content, feed.link)
    except Exception as e:
        logger.warning("Failed to fetch feed", extra={"feed_id": feed_id, "error": str(e)})
        await _record_failure(session, feed, e)
        return {"status": "error", "feed_id": feed_id, "message": str(e)}

    new_items: list[Item] = []
    if parsed is not None:
        new_items = await _insert_new_items(session, feed, parsed.entries)
        feed.last_build = parsed.last_build or feed.last_build

    now = datetime.now(timezone.utc)
    feed.failure = ""
    feed.consecutive_failures = 0
    feed.last_fetched_at = now
    feed.updated_at = now
    await session.commit()

    logger.info(
        "Pulled feed",
        extra={
            "feed_id": feed_id,
            "new_items": len(new_items),
            "total_items": len(parsed.entries) if parsed else 0,
        },
    )

    if system_auto_fetch is None:
        system_auto_fetch = settings.auto_fetch_full_content
    if new_items and should_auto_fetch(feed, system_auto_fetch):
        logger.info(
            "Auto-fetching full content", extra={"feed_id": feed_id, "items_count": len(new_items)}
        )
        fetched = await auto_fetch_full_content(
            session, new_items, req_proxy=feed.req_proxy or None
        )
        logger.info(
            "Completed auto-fetching full content",
            extra={"feed_id": feed_id, "success_count": fetched},
        )

    return {
        "status": "success" if parsed is not None else "not_modified",
        "feed_id": feed_id,
        "new_items": len(new_items),
        "total_items": len(parsed.entries) if parsed else 0,
    }


async def fetch_feed_task(ctx: dict, feed_id: int, force: bool = False) -> dict[str, str | int]:
    """
    Pull a single feed.

    Args:
        ctx: Worker context.
        feed_id: Feed identifier to pull.
        force: Ignore the refresh interval and failure backoff.

    Returns:
        Dictionary with pull results.
    """
    async for session in get_session():
        return await pull_feed(session, feed_id, force=force)
    return {"status": "error", "message": "No database session"}


async def fetch_all_feeds(ctx: dict) -> dict[str, int]:
    """
    Queue pulls for every feed that is due.

    Args:
        ctx: Worker context.

    Returns:
        Dictionary with queue statistics.
    """
    async for session in get_session():
        result = await session.execute(select(Feed).where(Feed.suspended.is_(False)))
        feeds = result.scalars().all()

        now = datetime.now(timezone.utc)
        due = [
            feed
            for feed in feeds
            if decide_feed_update(feed, now, _pull_interval())[0] is FeedUpdateAction.FETCH
        ]

        for feed in due:
            await ctx["redis"].enqueue_job("fetch_feed_task", feed.id)

        logger.info(
            "Queued feed pulls", extra={"feeds_queued": len(due), "feeds_total": len(feeds)}
        )
        return {"feeds_queued": len(due)}
    return {"feeds_queued": 0}


async def scheduled_fetch(ctx: dict) -> dict[str, int]:
    """
    Scheduled task to queue due feeds (runs every 5 minutes).

    Args:
        ctx: Worker context.

    Returns:
        Dictionary with queue statistics.
    """
    return await fetch_all_feeds(ctx)

"""
Feed pull scheduling policy.

Decides whether a feed is due for a pull. Failing feeds back off
exponentially from the last attempt, capped at one week.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

DEFAULT_INTERVAL = timedelta(minutes=30)
MAX_BACKOFF = timedelta(days=7)
BACKOFF_FACTOR = 1.8


class FeedUpdateAction(str, Enum):
    """Outcome of the pull decision."""

    FETCH = "fetch"
    SKIP = "skip"


class SkipReason(str, Enum):
    """Why a feed was not pulled."""

    SUSPENDED = "suspended"
    COOLING_OFF = "cooling_off"
    TOO_SOON = "too_soon"


def backoff_time(consecutive_failures: int, interval: timedelta = DEFAULT_INTERVAL) -> timedelta:
    """
    Wait time after ``consecutive_failures`` failed pulls.

    Returns:
        ``interval * 1.8 ** consecutive_failures`` capped at 7 days,
        zero when the feed is healthy.
    """
    if consecutive_failures <= 0:
        return timedelta(0)
    try:
        backoff = interval * (BACKOFF_FACTOR**consecutive_failures)
    except OverflowError:
        return MAX_BACKOFF
    return min(backoff, MAX_BACKOFF)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def decide_feed_update(
    feed: Any,
    now: datetime | None = None,
    interval: timedelta = DEFAULT_INTERVAL,
    force: bool = False,
) -> tuple[FeedUpdateAction, SkipReason | None]:
    """
    Decide whether to pull a feed now.

    Args:
        feed: Feed with ``suspended``, ``consecutive_failures`` and ``last_fetched_at``.
        now: Current time, defaults to now in UTC.
        interval: Refresh interval of healthy feeds.
        force: Ignore interval and backoff (suspension still applies).

    Returns:
        The action and, when skipping, the reason.
    """
    if feed.suspended:
        return FeedUpdateAction.SKIP, SkipReason.SUSPENDED
    if force or feed.last_fetched_at is None:
        return FeedUpdateAction.FETCH, None

    now = _as_utc(now or datetime.now(timezone.utc))
    elapsed = now - _as_utc(feed.last_fetched_at)

    if feed.consecutive_failures > 0:
        if elapsed < backoff_time(feed.consecutive_failures, interval):
            return FeedUpdateAction.SKIP, SkipReason.COOLING_OFF
    elif elapsed < interval:
        return FeedUpdateAction.SKIP, SkipReason.TOO_SOON

    return FeedUpdateAction.FETCH, None

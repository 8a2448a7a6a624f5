"""Tests for the feed pull policy."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from fusion_worker.pull_policy import (
    MAX_BACKOFF,
    FeedUpdateAction,
    SkipReason,
    backoff_time,
    decide_feed_update,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
INTERVAL = timedelta(minutes=30)


def _feed(suspended=False, failures=0, last_fetched_at=None):
    return SimpleNamespace(
        suspended=suspended,
        consecutive_failures=failures,
        last_fetched_at=last_fetched_at,
    )


class TestBackoffTime:
    def test_healthy_feed_has_no_backoff(self):
        assert backoff_time(0) == timedelta(0)

    def test_grows_by_factor(self):
        assert backoff_time(1, INTERVAL) == timedelta(minutes=54)
        assert backoff_time(2, INTERVAL) == timedelta(seconds=5832)

    @pytest.mark.parametrize("failures", [20, 1000, 10**6])
    def test_capped_at_one_week(self, failures):
        assert backoff_time(failures, INTERVAL) == MAX_BACKOFF


class TestDecideFeedUpdate:
    def test_suspended_is_skipped_even_when_forced(self):
        action, reason = decide_feed_update(_feed(suspended=True), NOW, INTERVAL, force=True)

        assert action is FeedUpdateAction.SKIP
        assert reason is SkipReason.SUSPENDED

    def test_never_fetched_is_due(self):
        assert decide_feed_update(_feed(), NOW, INTERVAL) == (FeedUpdateAction.FETCH, None)

    def test_healthy_feed_too_soon(self):
        feed = _feed(last_fetched_at=NOW - timedelta(minutes=10))

        assert decide_feed_update(feed, NOW, INTERVAL) == (
            FeedUpdateAction.SKIP,
            SkipReason.TOO_SOON,
        )

    def test_healthy_feed_due_after_interval(self):
        feed = _feed(last_fetched_at=NOW - timedelta(minutes=31))

        assert decide_feed_update(feed, NOW, INTERVAL)[0] is FeedUpdateAction.FETCH

    def test_failing_feed_cools_off(self):
        # one failure backs off for 54 minutes
        feed = _feed(failures=1, last_fetched_at=NOW - timedelta(minutes=40))

        assert decide_feed_update(feed, NOW, INTERVAL) == (
            FeedUpdateAction.SKIP,
            SkipReason.COOLING_OFF,
        )

    def test_failing_feed_retried_after_backoff(self):
        feed = _feed(failures=1, last_fetched_at=NOW - timedelta(minutes=55))

        assert decide_feed_update(feed, NOW, INTERVAL)[0] is FeedUpdateAction.FETCH

    def test_force_bypasses_backoff(self):
        feed = _feed(failures=10, last_fetched_at=NOW - timedelta(minutes=1))

        assert decide_feed_update(feed, NOW, INTERVAL, force=True)[0] is FeedUpdateAction.FETCH

    def test_naive_timestamps_are_utc(self):
        feed = _feed(last_fetched_at=(NOW - timedelta(minutes=10)).replace(tzinfo=None))

        assert decide_feed_update(feed, NOW, INTERVAL)[1] is SkipReason.TOO_SOON

"""Tests for the effective full-content setting."""

from types import SimpleNamespace

import pytest

from fusion_core.services import should_auto_fetch


def _feed(feed_value: bool | None, group_value: bool | None):
    return SimpleNamespace(
        auto_fetch_full_content=feed_value,
        group=SimpleNamespace(auto_fetch_full_content=group_value),
    )


@pytest.mark.parametrize(
    ("feed_value", "group_value", "system_default", "expected"),
    [
        (True, False, False, True),
        (False, True, True, False),
        (None, True, False, True),
        (None, False, True, False),
        (None, None, True, True),
        (None, None, False, False),
    ],
)
def test_feed_then_group_then_system(feed_value, group_value, system_default, expected) -> None:
    assert should_auto_fetch(_feed(feed_value, group_value), system_default) is expected


def test_feed_without_loaded_group_uses_system_default() -> None:
    feed = SimpleNamespace(auto_fetch_full_content=None, group=None)

    assert should_auto_fetch(feed, True) is True

"""
Effective full-content setting.
"""

from typing import Any


def should_auto_fetch(feed: Any, system_default: bool = False) -> bool:
    """
    Decide whether full content is fetched automatically for a feed.

    Priority: feed setting, then group setting, then the system default.
    An unset value (None) at one level defers to the next one.

    Args:
        feed: Feed with ``auto_fetch_full_content`` and ``group``.
        system_default: System-wide default.

    Returns:
        The effective setting.
    """
    if feed.auto_fetch_full_content is not None:
        return feed.auto_fetch_full_content

    group = getattr(feed, "group", None)
    if group is not None and group.auto_fetch_full_content is not None:
        return group.auto_fetch_full_content

    return system_default

"""
RSS/Atom feed parser.

Parses RSS and Atom feeds using feedparser.
"""

from datetime import datetime, timezone
from typing import Any

import feedparser
from feedparser import FeedParserDict


def _to_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None


class ParsedFeed:
    """Parsed feed metadata."""

    def __init__(self, data: FeedParserDict):
        """
        Initialize from feedparser data.

        Args:
            data: Parsed feed data from feedparser.
        """
        feed_info = data.get("feed", {})
        self.title = feed_info.get("title", "")
        self.site_url = feed_info.get("link", "")
        self.last_build = _to_datetime(feed_info.get("updated_parsed")) or _to_datetime(
            feed_info.get("published_parsed")
        )
        self.entries = [ParsedEntry(entry) for entry in data.get("entries", [])]


class ParsedEntry:
    """Parsed entry data."""

    def __init__(self, data: dict[str, Any]):
        """
        Initialize from feedparser entry data.

        The GUID falls back to the link, the content prefers the full
        ``content`` element over the summary, and the publication date
        falls back to the update date and finally to now.

        Args:
            data: Entry data from feedparser.
        """
        self.link = data.get("link", "")
        self.guid = data.get("id") or self.link
        self.title = data.get("title", "")

        content_list = data.get("content", [])
        if content_list:
            self.content = content_list[0].get("value") or ""
        else:
            self.content = data.get("summary") or data.get("description") or ""

        self.pub_date = (
            _to_datetime(data.get("published_parsed"))
            or _to_datetime(data.get("updated_parsed"))
            or datetime.now(timezone.utc)
        )


async def parse_feed(content: str | bytes, url: str) -> ParsedFeed:
    """
    Parse RSS/Atom feed from content.

    Args:
        content: Feed XML content.
        url: Feed URL (used for relative link resolution).

    Returns:
        Parsed feed data.

    Raises:
        ValueError: If feed parsing fails.
    """
    data = feedparser.parse(content, response_headers={"content-location": url})

    if data.get("bozo", False) and not data.get("entries"):
        # Feed has errors and no entries
        raise ValueError(f"Failed to parse feed: {data.get('bozo_exception', 'Unknown error')}")

    if not data.get("version") and not data.get("entries"):
        raise ValueError("Content is not an RSS or Atom feed")

    return ParsedFeed(data)

"""
Feed fetching and discovery.

Fetches feeds over HTTP (optionally through a proxy) and discovers
RSS/Atom feeds linked from websites.
"""

from dataclasses import dataclass
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from .parser import parse_feed

USER_AGENT = "Fusion/1.0"

FEED_LINK_TYPES = ["application/rss+xml", "application/atom+xml", "application/xml"]


@dataclass
class DiscoveredFeed:
    """A feed found at a URL."""

    title: str
    link: str


def _client(
    timeout: float,
    req_proxy: str | None,
    headers: dict[str, str],
    transport: httpx.AsyncBaseTransport | None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=headers,
        proxy=req_proxy or None,
        transport=transport,
    )


async def discover_feeds(
    url: str,
    req_proxy: str | None = None,
    timeout: float = 30,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[DiscoveredFeed]:
    """
    Discover RSS feeds from a given URL.

    Tries to:
    1. Parse URL directly as RSS
    2. Find RSS links in the HTML page

    Args:
        url: URL to discover feeds from.
        req_proxy: Optional proxy URL.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport.

    Returns:
        Feeds found, possibly empty.

    Raises:
        ValueError: If the request fails.
    """
    async with _client(timeout, req_proxy, {"User-Agent": USER_AGENT}, transport) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ValueError(f"Failed to fetch URL: {e}")

        content_type = response.headers.get("content-type", "").lower()

        # Try to parse as RSS directly
        if "html" not in content_type:
            try:
                feed = await parse_feed(response.content, url)
                return [DiscoveredFeed(title=feed.title or url, link=url)]
            except ValueError:
                pass

        soup = BeautifulSoup(response.content, "lxml")
        found: list[DiscoveredFeed] = []
        seen: set[str] = set()

        for link in soup.find_all("link", attrs={"type": FEED_LINK_TYPES}):
            href = link.get("href")
            if not href:
                continue
            feed_url = urljoin(str(response.url), href)
            if feed_url in seen:
                continue
            seen.add(feed_url)

            # Only keep candidates that actually parse
            try:
                feed_response = await client.get(feed_url)
                feed_response.raise_for_status()
                feed = await parse_feed(feed_response.content, feed_url)
            except (httpx.HTTPError, ValueError):
                continue
            title = feed.title or link.get("title") or feed_url
            found.append(DiscoveredFeed(title=title, link=feed_url))

        return found


async def fetch_feed(
    url: str,
    req_proxy: str | None = None,
    etag: str | None = None,
    last_modified: str | None = None,
    timeout: float = 30,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bytes, dict[str, str]] | None:
    """
    Fetch feed content with conditional request support.

    Args:
        url: Feed URL.
        req_proxy: Optional proxy URL.
        etag: Optional ETag for conditional request.
        last_modified: Optional Last-Modified for conditional request.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport.

    Returns:
        Tuple of (content, cache headers) if modified, None if not modified (304).

    Raises:
        ValueError: If request fails.
    """
    headers = {"User-Agent": USER_AGENT}
    if etag:
        headers["If-None-Match"] = etag
    if last_modified:
        headers["If-Modified-Since"] = last_modified

    async with _client(timeout, req_proxy, headers, transport) as client:
        try:
            response = await client.get(url)

            if response.status_code == 304:
                return None

            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ValueError(f"Failed to fetch feed: {e}")

        cache_headers = {}
        if "etag" in response.headers:
            cache_headers["etag"] = response.headers["etag"]
        if "last-modified" in response.headers:
            cache_headers["last-modified"] = response.headers["last-modified"]

        return response.content, cache_headers

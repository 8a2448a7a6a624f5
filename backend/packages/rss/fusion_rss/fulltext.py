"""
Full article content extraction.

Downloads an article page and extracts its main body with BeautifulSoup.
The heuristic prefers an ``<article>`` element, then ``<main>``, then the
block with the most paragraph text.
"""

from dataclasses import dataclass
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag

BROWSER_USER_AGENT = "Mozilla/5.0 (compatible; FusionRSS/1.0)"

_NOISE_TAGS = ["script", "style", "noscript", "nav", "footer", "aside", "form", "iframe", "svg"]
_BLOCK_TAGS = ["div", "section", "td"]


@dataclass
class FullContentResult:
    """Extracted article."""

    content: str
    title: str


def _paragraph_score(block: Tag) -> int:
    return sum(len(p.get_text(strip=True)) for p in block.find_all("p", recursive=False))


def _densest_block(soup: BeautifulSoup) -> Tag | None:
    best: Tag | None = None
    best_score = 0
    for block in soup.find_all(_BLOCK_TAGS):
        score = _paragraph_score(block)
        if score > best_score:
            best, best_score = block, score
    return best


def extract_main_content(html: str | bytes, base_url: str | None = None) -> FullContentResult:
    """
    Extract the main content of an HTML page.

    Relative links and image sources are made absolute against ``base_url``.

    Args:
        html: Page markup.
        base_url: URL the page was loaded from.

    Returns:
        Extracted content as HTML and the page title.

    Raises:
        ValueError: If no readable content is found.
    """
    soup = BeautifulSoup(html, "lxml")
    title = soup.title.get_text(strip=True) if soup.title else ""

    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()

    node = soup.find("article") or soup.find("main") or _densest_block(soup) or soup.body
    if node is None or not node.get_text(strip=True):
        raise ValueError("No readable content found")

    if base_url:
        for tag in node.find_all(href=True):
            tag["href"] = urljoin(base_url, tag["href"])
        for tag in node.find_all(src=True):
            tag["src"] = urljoin(base_url, tag["src"])

    return FullContentResult(content=str(node), title=title)


async def fetch_full_content(
    url: str,
    req_proxy: str | None = None,
    timeout: float = 30,
    user_agent: str = BROWSER_USER_AGENT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FullContentResult:
    """
    Fetch an article page and extract its main content.

    Args:
        url: Article URL.
        req_proxy: Optional proxy URL.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
        transport: Optional httpx transport.

    Returns:
        Extracted article.

    Raises:
        ValueError: If the page cannot be fetched, is not HTML,
            or has no readable content.
    """
    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": user_agent},
        proxy=req_proxy or None,
        transport=transport,
    ) as client:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise ValueError(f"Failed to fetch URL: {e}")

    if response.status_code != 200:
        raise ValueError(f"Non-200 status code: {response.status_code}")

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type.lower():
        raise ValueError(f"Non-HTML content type: {content_type}")

    return extract_main_content(response.content, str(response.url))

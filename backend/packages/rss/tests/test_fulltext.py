"""Tests for full article extraction."""

import httpx
import pytest

from fusion_rss import extract_main_content, fetch_full_content

PAGE = """<html>
<head><title>A Post</title><script>var x = 1;</script></head>
<body>
  <nav><a href="/">Home</a></nav>
  <div class="sidebar"><p>Short</p></div>
  <div class="post">
    <p>The first paragraph has quite a lot of readable text in it.</p>
    <p>So does the second one, with an <a href="/related">inline link</a>.</p>
    <img src="images/photo.jpg">
  </div>
  <footer>Copyright</footer>
</body>
</html>"""


def test_prefers_article_element() -> None:
    html = "<html><body><div><p>noise</p></div><article><p>Body</p></article></body></html>"

    result = extract_main_content(html)

    assert result.content == "<article><p>Body</p></article>"


def test_densest_block_and_absolute_links() -> None:
    result = extract_main_content(PAGE, "https://example.com/posts/1")

    assert result.title == "A Post"
    assert "first paragraph" in result.content
    assert "Short" not in result.content
    assert "Copyright" not in result.content
    assert 'href="https://example.com/related"' in result.content
    assert 'src="https://example.com/posts/images/photo.jpg"' in result.content


def test_empty_page_raises() -> None:
    with pytest.raises(ValueError):
        extract_main_content("<html><body><script>x()</script></body></html>")


@pytest.mark.asyncio
async def test_fetch_full_content_sends_user_agent() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, html=PAGE)

    result = await fetch_full_content(
        "https://example.com/posts/1",
        user_agent="TestAgent/1.0",
        transport=httpx.MockTransport(handler),
    )

    assert seen["ua"] == "TestAgent/1.0"
    assert "second one" in result.content


@pytest.mark.asyncio
async def test_non_200_raises() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404, html="gone"))

    with pytest.raises(ValueError, match="404"):
        await fetch_full_content("https://example.com/missing", transport=transport)


@pytest.mark.asyncio
async def test_non_html_raises() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"a": 1}))

    with pytest.raises(ValueError, match="Non-HTML"):
        await fetch_full_content("https://example.com/api", transport=transport)

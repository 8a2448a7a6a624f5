"""Tests for the development proxy."""

import json

import httpx
import pytest

from fusion_devserver.app import create_app, is_api_path, target_origin


class Upstream:
    """Mock backend recording forwarded requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            200,
            json={"feeds": []},
            headers=[("set-cookie", "a=1"), ("set-cookie", "b=2")],
        )


def _client(app) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://localhost:5173")


def test_helpers() -> None:
    assert target_origin("http://localhost:8080/base/") == "http://localhost:8080"
    assert is_api_path("/api")
    assert is_api_path("/api/feeds")
    assert not is_api_path("/apiary")
    assert not is_api_path("/")


@pytest.mark.asyncio
async def test_api_request_is_forwarded_with_origin_rewritten() -> None:
    upstream = Upstream()
    app = create_app(transport=httpx.MockTransport(upstream))

    async with _client(app) as client:
        response = await client.get(
            "/api/feeds?have_unread=true",
            headers={"Origin": "http://localhost:5173", "Connection": "keep-alive"},
        )

    assert response.status_code == 200
    assert response.json() == {"feeds": []}
    assert response.headers.get_list("set-cookie") == ["a=1", "b=2"]

    forwarded = upstream.requests[0]
    assert str(forwarded.url) == "http://localhost:8080/api/feeds?have_unread=true"
    assert forwarded.headers["origin"] == "http://localhost:8080"
    assert forwarded.headers["host"] == "localhost:8080"


@pytest.mark.asyncio
async def test_origin_kept_without_change_origin() -> None:
    upstream = Upstream()
    app = create_app(change_origin=False, transport=httpx.MockTransport(upstream))

    async with _client(app) as client:
        await client.get("/api/groups", headers={"Origin": "http://localhost:5173"})

    assert upstream.requests[0].headers["origin"] == "http://localhost:5173"


@pytest.mark.asyncio
async def test_body_and_method_are_forwarded() -> None:
    upstream = Upstream()
    app = create_app(target="http://backend:9000", transport=httpx.MockTransport(upstream))

    async with _client(app) as client:
        await client.patch("/api/feeds/3", json={"suspended": True})

    forwarded = upstream.requests[0]
    assert forwarded.method == "PATCH"
    assert str(forwarded.url) == "http://backend:9000/api/feeds/3"
    assert json.loads(forwarded.content) == {"suspended": True}


@pytest.mark.asyncio
async def test_backend_down_returns_502() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    app = create_app(transport=httpx.MockTransport(handler))

    async with _client(app) as client:
        response = await client.get("/api/feeds")

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_static_files_and_spa_fallback(tmp_path) -> None:
    (tmp_path / "index.html").write_text("<div id=app></div>")
    (tmp_path / "app.js").write_text("console.log(1)")
    upstream = Upstream()
    app = create_app(static_dir=tmp_path, transport=httpx.MockTransport(upstream))

    async with _client(app) as client:
        script = await client.get("/app.js")
        route = await client.get("/feeds/3")
        escape = await client.get("/../secret.txt")

    assert script.text == "console.log(1)"
    assert route.text == "<div id=app></div>"
    assert escape.text == "<div id=app></div>"
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_no_static_dir_is_404() -> None:
    app = create_app(transport=httpx.MockTransport(Upstream()))

    async with _client(app) as client:
        response = await client.get("/")

    assert response.status_code == 404

"""
Development proxy application.

Requests under ``/api`` are forwarded to the backend; every other path is
served from the frontend build directory.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlsplit

import httpx
from starlette.applications import Starlette
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import FileResponse, PlainTextResponse, Response, StreamingResponse
from starlette.routing import Route

from fusion_core import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api"

# RFC 7230 section 6.1
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def target_origin(target: str) -> str:
    """Return the scheme://host[:port] part of a URL."""
    parts = urlsplit(target)
    return f"{parts.scheme}://{parts.netloc}"


def is_api_path(path: str) -> bool:
    """Whether a request path is handled by the backend."""
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def _forward_headers(request: Request, target: str, change_origin: bool) -> dict[str, str]:
    headers = {
        key: value
        for key, value in request.headers.items()
        if key.lower() not in HOP_BY_HOP_HEADERS and key.lower() not in ("host", "content-length")
    }
    headers["host"] = urlsplit(target).netloc
    if change_origin and "origin" in headers:
        headers["origin"] = target_origin(target)
    return headers


def _response_headers(upstream: httpx.Response) -> list[tuple[str, str]]:
    # content-length is dropped as the body is streamed decoded
    return [
        (key, value)
        for key, value in upstream.headers.multi_items()
        if key.lower() not in HOP_BY_HOP_HEADERS
        and key.lower() not in ("content-length", "content-encoding")
    ]


def create_app(
    target: str = "http://localhost:8080",
    static_dir: str | Path | None = None,
    change_origin: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Starlette:
    """
    Create the development proxy.

    Args:
        target: Backend base URL receiving ``/api`` requests.
        static_dir: Directory with the built frontend, if any.
        change_origin: Rewrite the Origin header to the target origin.
        transport: Optional httpx transport, used by tests.

    Returns:
        Starlette application.
    """
    target = target.rstrip("/")
    static_root = Path(static_dir).resolve() if static_dir else None

    client = httpx.AsyncClient(transport=transport, timeout=None)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await client.aclose()

    async def proxy(request: Request) -> Response:
        url = target + request.url.path
        if request.url.query:
            url += "?" + request.url.query

        upstream_request = client.build_request(
            request.method,
            url,
            headers=_forward_headers(request, target, change_origin),
            content=await request.body(),
        )
        try:
            upstream = await client.send(upstream_request, stream=True)
        except httpx.HTTPError as e:
            logger.warning(
                "Backend request failed", extra={"url": url, "error": str(e) or type(e).__name__}
            )
            return PlainTextResponse("Bad Gateway", status_code=502)

        logger.debug(
            "Proxied request",
            extra={"method": request.method, "url": url, "status": upstream.status_code},
        )
        response = StreamingResponse(
            upstream.aiter_bytes(),
            status_code=upstream.status_code,
            background=BackgroundTask(upstream.aclose),
        )
        # set raw headers so repeated ones (set-cookie) survive
        response.raw_headers = [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in _response_headers(upstream)
        ]
        return response

    async def static(request: Request) -> Response:
        if static_root is None:
            return PlainTextResponse("Not Found", status_code=404)

        relative = request.url.path.lstrip("/")
        candidate = (static_root / relative).resolve()
        if candidate.is_relative_to(static_root) and candidate.is_file():
            return FileResponse(candidate)

        index = static_root / "index.html"
        if index.is_file():
            return FileResponse(index)
        return PlainTextResponse("Not Found", status_code=404)

    async def dispatch(request: Request) -> Response:
        if is_api_path(request.url.path):
            return await proxy(request)
        if request.method not in ("GET", "HEAD"):
            return PlainTextResponse("Method Not Allowed", status_code=405)
        return await static(request)

    methods = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    routes = [
        Route("/", dispatch, methods=methods),
        Route("/{path:path}", dispatch, methods=methods),
    ]
    return Starlette(routes=routes, lifespan=lifespan)

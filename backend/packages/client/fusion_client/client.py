"""
Fusion API client.

Thin async wrapper over httpx returning the shared response schemas.
"""

from types import TracebackType
from typing import Any

import httpx

from fusion_core import get_logger
from fusion_core.schemas import (
    FeedResponse,
    FeedUpdate,
    GroupResponse,
    ItemListResponse,
    ItemResponse,
)

logger = get_logger(__name__)


class FusionClientError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def is_failing(feed: FeedResponse) -> bool:
    """A feed is failing while its last pull recorded an error."""
    return feed.failure != ""


class FusionClient:
    """
    Client for a Fusion server.

    Use as an async context manager; when a password is given the client
    logs in on enter and sends the session token with every request.
    """

    def __init__(
        self,
        base_url: str,
        password: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.password = password
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "FusionClient":
        if self.password:
            try:
                await self.login(self.password)
            except Exception:
                await self.close()
                raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            logger.debug(
                "API request failed",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise FusionClientError(response.status_code, detail)
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def login(self, password: str) -> None:
        """
        Create a session.

        Raises:
            FusionClientError: If the password is rejected.
        """
        data = await self._request("POST", "/sessions", json={"password": password})
        self._client.headers["Authorization"] = f"Bearer {data['token']}"

    async def list_groups(self) -> list[GroupResponse]:
        data = await self._request("GET", "/groups")
        return [GroupResponse.model_validate(group) for group in data["groups"]]

    async def list_feeds(
        self, have_unread: bool | None = None, have_bookmark: bool | None = None
    ) -> list[FeedResponse]:
        params = _params(have_unread=have_unread, have_bookmark=have_bookmark)
        data = await self._request("GET", "/feeds", params=params)
        return [FeedResponse.model_validate(feed) for feed in data["feeds"]]

    async def get_feed(self, feed_id: int) -> FeedResponse:
        data = await self._request("GET", f"/feeds/{feed_id}")
        return FeedResponse.model_validate(data)

    async def update_feed(self, feed_id: int, update: FeedUpdate) -> FeedResponse:
        """Send only the fields set on ``update``."""
        body = update.model_dump(mode="json", exclude_unset=True)
        data = await self._request("PATCH", f"/feeds/{feed_id}", json=body)
        return FeedResponse.model_validate(data)

    async def set_feed_suspended(self, feed_id: int, suspended: bool) -> FeedResponse:
        return await self.update_feed(feed_id, FeedUpdate(suspended=suspended))

    async def list_items(
        self,
        keyword: str | None = None,
        feed_id: int | None = None,
        group_id: int | None = None,
        unread: bool | None = None,
        bookmark: bool | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> ItemListResponse:
        params = _params(
            keyword=keyword,
            feed_id=feed_id,
            group_id=group_id,
            unread=unread,
            bookmark=bookmark,
            page=page,
            page_size=page_size,
        )
        data = await self._request("GET", "/items", params=params)
        return ItemListResponse.model_validate(data)

    async def get_item(self, item_id: int, fetch: bool = True) -> ItemResponse:
        data = await self._request(
            "GET", f"/items/{item_id}", params={"fetch": _bool_param(fetch)}
        )
        return ItemResponse.model_validate(data)

    async def update_unread(self, ids: list[int], unread: bool) -> int:
        data = await self._request("PATCH", "/items/-/unread", json={"ids": ids, "unread": unread})
        return data["updated"]

    async def update_bookmark(self, item_id: int, bookmark: bool) -> ItemResponse:
        data = await self._request(
            "PATCH", f"/items/{item_id}/bookmark", json={"bookmark": bookmark}
        )
        return ItemResponse.model_validate(data)

    async def refresh_feeds(self, feed_id: int | None = None) -> int:
        """
        Queue an immediate pull of one feed, or of all feeds when no id is given.

        Returns:
            Number of queued pulls.
        """
        body: dict[str, Any] = {"all": True} if feed_id is None else {"id": feed_id}
        data = await self._request("POST", "/feeds/refresh", json=body)
        return data["queued"]


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def _params(**kwargs: Any) -> dict[str, Any]:
    return {
        key: _bool_param(value) if isinstance(value, bool) else value
        for key, value in kwargs.items()
        if value is not None
    }

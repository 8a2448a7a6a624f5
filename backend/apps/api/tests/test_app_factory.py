"""Tests for the FastAPI app factory."""

from fusion_api.main import create_app


def test_create_app_builds_independent_apps() -> None:
    """Factory should return a fresh app on every call."""
    assert create_app() is not create_app()


def test_api_routes_are_registered() -> None:
    paths = create_app().openapi()["paths"]

    for path in (
        "/api/health",
        "/api/sessions",
        "/api/groups",
        "/api/groups/{group_id}",
        "/api/feeds",
        "/api/feeds/{feed_id}",
        "/api/feeds/refresh",
        "/api/feeds/validation",
        "/api/feeds/import",
        "/api/feeds/export",
        "/api/items",
        "/api/items/{item_id}",
        "/api/items/-/unread",
        "/api/items/-/read-all",
        "/api/items/{item_id}/bookmark",
    ):
        assert path in paths


def test_openapi_schema_describes_entities() -> None:
    schema = create_app().openapi()

    components = schema["components"]["schemas"]
    assert {"GroupResponse", "FeedResponse", "ItemResponse", "ItemFeed"} <= set(components)
    assert "group" in components["FeedResponse"]["properties"]

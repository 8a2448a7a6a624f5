"""
Feeds router.

Provides endpoints for feed management, discovery, refresh and OPML import/export.
"""

from typing import Annotated, Any

from arq.connections import ArqRedis
from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from fusion_core import get_logger
from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import (
    DiscoveredFeedLink,
    FeedCreate,
    FeedCreateItem,
    FeedCreateResponse,
    FeedImportResponse,
    FeedListResponse,
    FeedRefreshRequest,
    FeedResponse,
    FeedUpdate,
    FeedValidateRequest,
    FeedValidateResponse,
)
from fusion_core.services import FeedService, GroupService
from fusion_database.models import DEFAULT_GROUP_ID
from fusion_rss import discover_feeds, generate_opml, parse_opml

from ..dependencies import get_feed_service, get_group_service, get_redis_pool
from ..feed_refresh import enqueue_feed_refresh_jobs

logger = get_logger(__name__)

router = APIRouter()


@router.get("")
async def list_feeds(
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    have_unread: bool | None = None,
    have_bookmark: bool | None = None,
) -> FeedListResponse:
    """
    Get all feeds.

    Args:
        feed_service: Feed service.
        have_unread: Optional filter on feeds having unread items.
        have_bookmark: Optional filter on feeds having bookmarked items.

    Returns:
        Feeds with their group and unread count.
    """
    feeds = await feed_service.list_feeds(have_unread=have_unread, have_bookmark=have_bookmark)
    return FeedListResponse(feeds=feeds)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_feeds(
    data: FeedCreate,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    redis: Annotated[ArqRedis, Depends(get_redis_pool)],
) -> FeedCreateResponse:
    """
    Create feeds in a group and queue their first pull.

    Raises:
        HTTPException: If the group is missing or a link is already subscribed.
    """
    try:
        feeds = await feed_service.create_feeds(data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    await enqueue_feed_refresh_jobs(redis, [(feed.id, feed.name) for feed in feeds])
    return FeedCreateResponse(ids=[feed.id for feed in feeds])


@router.post("/validation")
async def validate_feed(data: FeedValidateRequest) -> FeedValidateResponse:
    """
    Find feeds at a URL.

    The URL itself is returned when it is a feed; otherwise feeds linked
    from the HTML page are returned.

    Raises:
        HTTPException: If the URL cannot be fetched.
    """
    try:
        found = await discover_feeds(str(data.link), req_proxy=data.req_proxy)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    return FeedValidateResponse(
        feed_links=[DiscoveredFeedLink(title=feed.title, link=feed.link) for feed in found]
    )


@router.post("/refresh")
async def refresh_feeds(
    data: FeedRefreshRequest,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    redis: Annotated[ArqRedis, Depends(get_redis_pool)],
) -> dict[str, Any]:
    """
    Queue an immediate pull of one feed or of all active feeds.

    Raises:
        HTTPException: If the requested feed does not exist.
    """
    try:
        feeds = await feed_service.feeds_for_refresh(None if data.all else data.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None

    jobs = await enqueue_feed_refresh_jobs(redis, [(feed.id, feed.name) for feed in feeds])
    return {"queued": len(jobs), "jobs": jobs}


@router.post("/import")
async def import_opml(
    file: UploadFile,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    group_service: Annotated[GroupService, Depends(get_group_service)],
    redis: Annotated[ArqRedis, Depends(get_redis_pool)],
) -> FeedImportResponse:
    """
    Import feeds from an OPML file.

    Category outlines become groups; feeds outside a category go to the
    default group. Already subscribed or invalid feeds count as failed.

    Raises:
        HTTPException: If the file is not valid OPML.
    """
    try:
        content = await file.read()
        opml_feeds = parse_opml(content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    success_count = 0
    failed_count = 0
    groups_created = 0
    group_ids: dict[str, int] = {}
    created: list[tuple[int, str]] = []

    for opml_feed in opml_feeds:
        group_id = DEFAULT_GROUP_ID
        if opml_feed.group:
            if opml_feed.group not in group_ids:
                group, was_created = await group_service.get_or_create_group(opml_feed.group)
                group_ids[opml_feed.group] = group.id
                groups_created += int(was_created)
            group_id = group_ids[opml_feed.group]

        try:
            request = FeedCreate(
                group_id=group_id,
                feeds=[FeedCreateItem(name=opml_feed.title, link=opml_feed.xml_url)],
            )
            feeds = await feed_service.create_feeds(request)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError too
            logger.info("Skipped OPML feed", extra={"link": opml_feed.xml_url, "error": str(e)})
            failed_count += 1
            continue

        success_count += 1
        created.extend((feed.id, feed.name) for feed in feeds)

    await enqueue_feed_refresh_jobs(redis, created)

    return FeedImportResponse(
        success=success_count,
        failed=failed_count,
        total=len(opml_feeds),
        groups_created=groups_created,
    )


@router.get("/export")
async def export_opml(
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
) -> Response:
    """
    Export feeds as an OPML file.

    Returns:
        OPML file download.
    """
    feeds = await feed_service.list_feeds()

    opml_content = generate_opml(
        [{"title": feed.name, "url": feed.link, "group": feed.group.name} for feed in feeds]
    )

    return Response(
        content=opml_content,
        media_type="application/xml",
        headers={"Content-Disposition": "attachment; filename=fusion-feeds.opml"},
    )


@router.get("/{feed_id}")
async def get_feed(
    feed_id: int,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
) -> FeedResponse:
    """
    Get a specific feed.

    Raises:
        HTTPException: If the feed does not exist.
    """
    try:
        return await feed_service.get_feed(feed_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None


@router.patch("/{feed_id}")
async def update_feed(
    feed_id: int,
    data: FeedUpdate,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
) -> FeedResponse:
    """
    Update a feed, including suspending or resuming it.

    Raises:
        HTTPException: If the feed or group is missing or the link is taken.
    """
    try:
        return await feed_service.update_feed(feed_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None


@router.delete("/{feed_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feed(
    feed_id: int,
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
) -> None:
    """
    Delete a feed and its items.

    Raises:
        HTTPException: If the feed does not exist.
    """
    try:
        await feed_service.delete_feed(feed_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None

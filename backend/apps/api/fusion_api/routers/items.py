"""
Items router.

Provides endpoints for reading and managing feed items.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import (
    ItemListResponse,
    ItemResponse,
    MarkAllReadResponse,
    UpdateBookmarkRequest,
    UpdateUnreadRequest,
)
from fusion_core.services import ItemService

from ..dependencies import get_item_service

router = APIRouter()


@router.get("")
async def list_items(
    item_service: Annotated[ItemService, Depends(get_item_service)],
    keyword: str | None = None,
    feed_id: int | None = None,
    group_id: int | None = None,
    unread: bool | None = None,
    bookmark: bool | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
) -> ItemListResponse:
    """
    Get items with filtering and pagination.

    Args:
        item_service: Item service.
        keyword: Optional search in title and content.
        feed_id: Optional filter by feed ID.
        group_id: Optional filter by group ID.
        unread: Optional filter by unread state.
        bookmark: Optional filter by bookmark state.
        page: Page number (1-indexed).
        page_size: Items per page (max 100).

    Returns:
        Total count and the requested page of items, newest first.
    """
    return await item_service.list_items(
        keyword=keyword,
        feed_id=feed_id,
        group_id=group_id,
        unread=unread,
        bookmark=bookmark,
        page=page,
        page_size=page_size,
    )


@router.patch("/-/unread")
async def update_unread(
    data: UpdateUnreadRequest,
    item_service: Annotated[ItemService, Depends(get_item_service)],
) -> dict[str, int]:
    """
    Set the unread flag on several items.

    Returns:
        Number of updated items.
    """
    updated = await item_service.update_unread(data.ids, data.unread)
    return {"updated": updated}


@router.post("/-/read-all")
async def mark_all_read(
    item_service: Annotated[ItemService, Depends(get_item_service)],
    feed_id: int | None = None,
    group_id: int | None = None,
) -> MarkAllReadResponse:
    """
    Mark all items as read, optionally within one feed or group.

    Returns:
        Number of updated items.
    """
    updated = await item_service.mark_all_read(feed_id=feed_id, group_id=group_id)
    return MarkAllReadResponse(updated=updated)


@router.get("/{item_id}")
async def get_item(
    item_id: int,
    item_service: Annotated[ItemService, Depends(get_item_service)],
    fetch: bool = True,
) -> ItemResponse:
    """
    Get a specific item.

    Args:
        item_id: Item identifier.
        item_service: Item service.
        fetch: Fetch the full article when it is not stored yet.

    Returns:
        Item details.

    Raises:
        HTTPException: If the item does not exist.
    """
    try:
        return await item_service.get_item(item_id, fetch=fetch)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None


@router.patch("/{item_id}/bookmark")
async def update_bookmark(
    item_id: int,
    data: UpdateBookmarkRequest,
    item_service: Annotated[ItemService, Depends(get_item_service)],
) -> ItemResponse:
    """
    Bookmark or unbookmark an item.

    Raises:
        HTTPException: If the item does not exist.
    """
    try:
        return await item_service.update_bookmark(item_id, data.bookmark)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    item_service: Annotated[ItemService, Depends(get_item_service)],
) -> None:
    """
    Delete an item.

    Raises:
        HTTPException: If the item does not exist.
    """
    try:
        await item_service.delete_item(item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None

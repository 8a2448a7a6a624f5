"""
Item service.

Handles item listing, reading state, bookmarks and on-demand full content.
"""

from collections.abc import Awaitable, Callable

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fusion_core import get_logger
from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import ItemListResponse, ItemResponse
from fusion_database.models import Feed, Item
from fusion_rss import FullContentResult, fetch_full_content

logger = get_logger(__name__)

FullContentFetcher = Callable[..., Awaitable[FullContentResult]]

DEFAULT_PAGE_SIZE = 10


class ItemService:
    """Item management service."""

    def __init__(
        self, session: AsyncSession, full_content_fetcher: FullContentFetcher = fetch_full_content
    ):
        """
        Initialize item service.

        Args:
            session: Database session.
            full_content_fetcher: Coroutine used to extract article bodies.
        """
        self.session = session
        self.full_content_fetcher = full_content_fetcher

    async def list_items(
        self,
        keyword: str | None = None,
        feed_id: int | None = None,
        group_id: int | None = None,
        unread: bool | None = None,
        bookmark: bool | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ItemListResponse:
        """
        Get items with filtering and pagination.

        Args:
            keyword: Substring matched against title and content.
            feed_id: Optional filter by feed.
            group_id: Optional filter by the feed's group.
            unread: Optional filter by unread state.
            bookmark: Optional filter by bookmark state.
            page: Page number (1-indexed).
            page_size: Items per page.

        Returns:
            Total count of matching items and the requested page.
        """
        conditions = []
        if keyword:
            pattern = f"%{keyword}%"
            conditions.append(or_(Item.title.ilike(pattern), Item.content.ilike(pattern)))
        if feed_id is not None:
            conditions.append(Item.feed_id == feed_id)
        if group_id is not None:
            conditions.append(Item.feed_id.in_(select(Feed.id).where(Feed.group_id == group_id)))
        if unread is not None:
            conditions.append(Item.unread.is_(unread))
        if bookmark is not None:
            conditions.append(Item.bookmark.is_(bookmark))

        total = await self.session.scalar(select(func.count(Item.id)).where(*conditions)) or 0

        stmt = (
            select(Item)
            .where(*conditions)
            .options(selectinload(Item.feed))
            .order_by(Item.pub_date.desc(), Item.created_at.desc(), Item.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        items = [ItemResponse.model_validate(item) for item in result.scalars().all()]

        return ItemListResponse(total=total, items=items)

    async def get_item(self, item_id: int, fetch: bool = True) -> ItemResponse:
        """
        Get a specific item.

        When ``fetch`` is true and the item has a link but no full content
        yet, the article body is fetched and stored. A failed fetch is
        logged and the item is returned with its feed content only.

        Raises:
            NotFoundError: If the item does not exist.
        """
        item = await self._get_item_row(item_id)

        if fetch and item.link and not item.full_content:
            logger.info(
                "Fetching full content for item", extra={"item_id": item_id, "link": item.link}
            )
            try:
                result = await self.full_content_fetcher(
                    item.link, req_proxy=item.feed.req_proxy or None
                )
            except Exception as e:
                logger.warning(
                    "Failed to fetch full content, using feed content",
                    extra={"item_id": item_id, "error": str(e)},
                )
            else:
                if result.content:
                    item.full_content = result.content
                    await self.session.commit()

        return ItemResponse.model_validate(item)

    async def delete_item(self, item_id: int) -> None:
        """
        Delete an item.

        Raises:
            NotFoundError: If the item does not exist.
        """
        item = await self.session.get(Item, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        await self.session.delete(item)
        await self.session.commit()

    async def update_unread(self, ids: list[int], unread: bool) -> int:
        """
        Set the unread flag on several items.

        Unknown ids are ignored.

        Returns:
            Number of updated items.
        """
        result = await self.session.execute(
            update(Item).where(Item.id.in_(ids)).values(unread=unread)
        )
        await self.session.commit()
        return result.rowcount or 0

    async def update_bookmark(self, item_id: int, bookmark: bool) -> ItemResponse:
        """
        Set the bookmark flag on an item.

        Raises:
            NotFoundError: If the item does not exist.
        """
        item = await self._get_item_row(item_id)
        item.bookmark = bookmark
        await self.session.commit()
        return ItemResponse.model_validate(item)

    async def mark_all_read(self, feed_id: int | None = None, group_id: int | None = None) -> int:
        """
        Mark every unread item as read, optionally scoped to a feed or group.

        Returns:
            Number of updated items.
        """
        stmt = update(Item).where(Item.unread.is_(True))
        if feed_id is not None:
            stmt = stmt.where(Item.feed_id == feed_id)
        if group_id is not None:
            stmt = stmt.where(Item.feed_id.in_(select(Feed.id).where(Feed.group_id == group_id)))

        result = await self.session.execute(stmt.values(unread=False))
        await self.session.commit()
        return result.rowcount or 0

    async def _get_item_row(self, item_id: int) -> Item:
        stmt = select(Item).where(Item.id == item_id).options(selectinload(Item.feed))
        item = await self.session.scalar(stmt)
        if item is None:
            raise NotFoundError("Item not found")
        return item

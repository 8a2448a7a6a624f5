"""
Feed service.

Handles feed listing with unread counts, batch creation, updates and deletion.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fusion_core import get_logger
from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import FeedCreate, FeedResponse, FeedUpdate
from fusion_database.models import Feed, Group, Item

logger = get_logger(__name__)


class FeedService:
    """Feed management service."""

    def __init__(self, session: AsyncSession):
        """
        Initialize feed service.

        Args:
            session: Database session.
        """
        self.session = session

    async def list_feeds(
        self, have_unread: bool | None = None, have_bookmark: bool | None = None
    ) -> list[FeedResponse]:
        """
        Get all feeds with their group and unread count.

        Args:
            have_unread: Only feeds with (True) or without (False) unread items.
            have_bookmark: Only feeds with (True) or without (False) bookmarked items.

        Returns:
            List of feed responses ordered by name.
        """
        stmt = select(Feed).options(selectinload(Feed.group)).order_by(Feed.name, Feed.id)

        if have_unread is not None:
            unread_ids = select(Item.feed_id).where(Item.unread.is_(True))
            stmt = stmt.where(
                Feed.id.in_(unread_ids) if have_unread else Feed.id.not_in(unread_ids)
            )
        if have_bookmark is not None:
            bookmark_ids = select(Item.feed_id).where(Item.bookmark.is_(True))
            stmt = stmt.where(
                Feed.id.in_(bookmark_ids) if have_bookmark else Feed.id.not_in(bookmark_ids)
            )

        result = await self.session.execute(stmt)
        feeds = result.scalars().all()
        unread_counts = await self._unread_counts()

        return [self._to_response(feed, unread_counts.get(feed.id, 0)) for feed in feeds]

    async def get_feed(self, feed_id: int) -> FeedResponse:
        """
        Get a specific feed.

        Raises:
            NotFoundError: If the feed does not exist.
        """
        feed = await self.get_feed_row(feed_id)
        unread_counts = await self._unread_counts(feed_id)
        return self._to_response(feed, unread_counts.get(feed_id, 0))

    async def get_feed_row(self, feed_id: int) -> Feed:
        """
        Get a feed row with its group loaded.

        Raises:
            NotFoundError: If the feed does not exist.
        """
        stmt = select(Feed).where(Feed.id == feed_id).options(selectinload(Feed.group))
        feed = await self.session.scalar(stmt)
        if feed is None:
            raise NotFoundError("Feed not found")
        return feed

    async def create_feeds(self, data: FeedCreate) -> list[Feed]:
        """
        Create several feeds in one group.

        Args:
            data: Target group and feeds.

        Returns:
            Created feed rows.

        Raises:
            NotFoundError: If the group does not exist.
            ValueError: If a link is already subscribed or repeated in the batch.
        """
        if await self.session.get(Group, data.group_id) is None:
            raise NotFoundError("Group not found")

        links = [str(item.link) for item in data.feeds]
        if len(set(links)) != len(links):
            raise ValueError("Duplicate links in request")

        existing = await self.session.scalars(select(Feed.link).where(Feed.link.in_(links)))
        taken = list(existing)
        if taken:
            raise ValueError(f"Feed already exists: {taken[0]}")

        feeds = [
            Feed(
                name=item.name,
                link=link,
                req_proxy=item.req_proxy,
                group_id=data.group_id,
            )
            for item, link in zip(data.feeds, links)
        ]
        self.session.add_all(feeds)
        await self.session.commit()

        logger.info("Created feeds", extra={"count": len(feeds), "group_id": data.group_id})
        return feeds

    async def update_feed(self, feed_id: int, data: FeedUpdate) -> FeedResponse:
        """
        Apply a partial update to a feed.

        Raises:
            NotFoundError: If the feed or the target group does not exist.
            ValueError: If the new link is already subscribed.
        """
        feed = await self.get_feed_row(feed_id)
        fields = data.model_fields_set

        if "name" in fields and data.name is not None:
            feed.name = data.name
        if "link" in fields and data.link is not None:
            link = str(data.link)
            if link != feed.link:
                taken = await self.session.scalar(select(Feed.id).where(Feed.link == link))
                if taken is not None:
                    raise ValueError(f"Feed already exists: {link}")
                feed.link = link
        if "suspended" in fields and data.suspended is not None:
            feed.suspended = data.suspended
        if "req_proxy" in fields:
            feed.req_proxy = data.req_proxy or ""
        if "group_id" in fields and data.group_id is not None and data.group_id != feed.group_id:
            if await self.session.get(Group, data.group_id) is None:
                raise NotFoundError("Group not found")
            feed.group_id = data.group_id
        if "auto_fetch_full_content" in fields:
            feed.auto_fetch_full_content = data.auto_fetch_full_content

        await self.session.commit()

        # Reload so the group relationship reflects a changed group_id
        self.session.expunge(feed)
        return await self.get_feed(feed_id)

    async def delete_feed(self, feed_id: int) -> None:
        """
        Delete a feed and its items.

        Raises:
            NotFoundError: If the feed does not exist.
        """
        feed = await self.session.get(Feed, feed_id)
        if feed is None:
            raise NotFoundError("Feed not found")

        await self.session.execute(delete(Item).where(Item.feed_id == feed_id))
        await self.session.delete(feed)
        await self.session.commit()

        logger.info("Deleted feed", extra={"feed_id": feed_id})

    async def feeds_for_refresh(self, feed_id: int | None = None) -> list[Feed]:
        """
        Get feeds to enqueue for a manual refresh.

        Suspended feeds are skipped when refreshing everything, but an
        explicitly requested feed is returned as long as it exists.

        Raises:
            NotFoundError: If feed_id is given and does not exist.
        """
        if feed_id is not None:
            return [await self.get_feed_row(feed_id)]

        result = await self.session.execute(
            select(Feed).where(Feed.suspended.is_(False)).order_by(Feed.id)
        )
        return list(result.scalars().all())

    async def _unread_counts(self, feed_id: int | None = None) -> dict[int, int]:
        stmt = (
            select(Item.feed_id, func.count(Item.id))
            .where(Item.unread.is_(True))
            .group_by(Item.feed_id)
        )
        if feed_id is not None:
            stmt = stmt.where(Item.feed_id == feed_id)
        result = await self.session.execute(stmt)
        return {row[0]: row[1] for row in result.all()}

    @staticmethod
    def _to_response(feed: Feed, unread_count: int) -> FeedResponse:
        return FeedResponse.model_validate(
            {
                "id": feed.id,
                "name": feed.name,
                "link": feed.link,
                "failure": feed.failure,
                "updated_at": feed.updated_at,
                "suspended": feed.suspended,
                "auto_fetch_full_content": feed.auto_fetch_full_content,
                "req_proxy": feed.req_proxy,
                "unread_count": unread_count,
                "group": feed.group,
            }
        )

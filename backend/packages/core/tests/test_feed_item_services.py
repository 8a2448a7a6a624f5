"""Tests for group, feed and item services against an in-memory database."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import FeedCreate, FeedCreateItem, FeedUpdate, GroupCreate
from fusion_core.services import FeedService, GroupService, ItemService
from fusion_database.models import Feed, Item
from fusion_rss import FullContentResult


class TestGroupService:
    @pytest.mark.asyncio
    async def test_get_or_create_group(self, db_session) -> None:
        service = GroupService(db_session)

        group, created = await service.get_or_create_group("News")
        again, created_again = await service.get_or_create_group("News")

        assert created is True
        assert created_again is False
        assert again.id == group.id

    @pytest.mark.asyncio
    async def test_missing_group_is_not_found(self, db_session) -> None:
        with pytest.raises(NotFoundError):
            await GroupService(db_session).get_group(404)

    @pytest.mark.asyncio
    async def test_not_found_is_a_value_error(self, db_session) -> None:
        with pytest.raises(ValueError):
            await GroupService(db_session).delete_group(404)

    @pytest.mark.asyncio
    async def test_create_keeps_false_setting(self, db_session) -> None:
        group = await GroupService(db_session).create_group(
            GroupCreate(name="Quiet", auto_fetch_full_content=False)
        )

        assert group.model_dump()["auto_fetch_full_content"] is False


class TestFeedService:
    @pytest.mark.asyncio
    async def test_duplicate_links_in_batch(self, db_session) -> None:
        data = FeedCreate(
            group_id=1,
            feeds=[
                FeedCreateItem(name="A", link="https://a.example.com/feed"),
                FeedCreateItem(name="B", link="https://a.example.com/feed"),
            ],
        )

        with pytest.raises(ValueError, match="Duplicate"):
            await FeedService(db_session).create_feeds(data)

    @pytest.mark.asyncio
    async def test_unread_count_per_feed(self, db_session, test_feed, test_items) -> None:
        other = Feed(name="Other", link="https://other.example.com/feed")
        db_session.add(other)
        await db_session.commit()

        feeds = {f.id: f for f in await FeedService(db_session).list_feeds()}

        assert feeds[test_feed.id].unread_count == 3
        assert feeds[other.id].unread_count == 0

    @pytest.mark.asyncio
    async def test_reset_auto_fetch_to_inherit(self, db_session, test_feed) -> None:
        service = FeedService(db_session)
        await service.update_feed(test_feed.id, FeedUpdate(auto_fetch_full_content=True))

        feed = await service.update_feed(
            test_feed.id, FeedUpdate.model_validate({"auto_fetch_full_content": None})
        )

        assert feed.auto_fetch_full_content is None
        assert "auto_fetch_full_content" not in feed.model_dump()

    @pytest.mark.asyncio
    async def test_change_link_to_taken_one(self, db_session, test_feed) -> None:
        db_session.add(Feed(name="Other", link="https://other.example.com/feed"))
        await db_session.commit()

        with pytest.raises(ValueError, match="already exists"):
            await FeedService(db_session).update_feed(
                test_feed.id, FeedUpdate(link="https://other.example.com/feed")
            )

    @pytest.mark.asyncio
    async def test_explicit_refresh_includes_suspended(self, db_session, test_feed) -> None:
        test_feed.suspended = True
        await db_session.commit()
        service = FeedService(db_session)

        assert [f.id for f in await service.feeds_for_refresh(test_feed.id)] == [test_feed.id]
        assert await service.feeds_for_refresh() == []


class TestItemService:
    @pytest.mark.asyncio
    async def test_ties_on_pub_date_keep_insert_order(self, db_session, test_feed) -> None:
        published = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for guid in ("a", "b"):
            db_session.add(
                Item(feed_id=test_feed.id, guid=guid, title=guid, link="", pub_date=published)
            )
            await db_session.commit()

        result = await ItemService(db_session).list_items()

        assert [item.title for item in result.items] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_item_without_link_is_not_fetched(self, db_session, test_feed) -> None:
        item = Item(
            feed_id=test_feed.id,
            guid="no-link",
            title="No link",
            link="",
            pub_date=datetime.now(timezone.utc) - timedelta(days=1),
        )
        db_session.add(item)
        await db_session.commit()
        fetcher = AsyncMock(return_value=FullContentResult(content="x", title=""))

        await ItemService(db_session, full_content_fetcher=fetcher).get_item(item.id)

        fetcher.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_full_content_is_stored(self, db_session, test_items) -> None:
        fetcher = AsyncMock(return_value=FullContentResult(content="<p>Body</p>", title=""))
        service = ItemService(db_session, full_content_fetcher=fetcher)

        response = await service.get_item(test_items[0].id)

        assert response.full_content == "<p>Body</p>"
        stored = await db_session.scalar(
            select(Item.full_content).where(Item.id == test_items[0].id)
        )
        assert stored == "<p>Body</p>"

    @pytest.mark.asyncio
    async def test_fetch_error_falls_back_to_feed_content(self, db_session, test_items) -> None:
        fetcher = AsyncMock(side_effect=RuntimeError("proxy refused connection"))
        service = ItemService(db_session, full_content_fetcher=fetcher)

        response = await service.get_item(test_items[0].id)

        fetcher.assert_awaited_once()
        assert response.content == "<p>Summary of post 0</p>"
        assert "full_content" not in response.model_dump()

    @pytest.mark.asyncio
    async def test_update_unread_ignores_unknown_ids(self, db_session, test_items) -> None:
        updated = await ItemService(db_session).update_unread([test_items[0].id, 9999], False)

        assert updated == 1

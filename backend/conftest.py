"""Global pytest fixtures for testing."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from fusion_api.main import app
from fusion_database.models import Feed, Group, Item
from fusion_database.session import create_tables, get_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class MockArqRedis:
    """Mock ArqRedis for testing."""

    def __init__(self):
        self.enqueued_jobs: list[tuple[str, tuple[Any, ...]]] = []

    async def enqueue_job(self, func_name: str, *args: Any, **kwargs: Any) -> None:
        """Mock enqueue_job that records calls without actually queuing."""
        self.enqueued_jobs.append((func_name, args))

    def reset(self) -> None:
        """Forget recorded jobs."""
        self.enqueued_jobs.clear()


# Global mock redis instance for testing
mock_redis = MockArqRedis()


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with the default group."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # one shared connection keeps the memory db alive
    )
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async_session = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with database and redis overrides."""
    from fusion_api.dependencies import get_redis_pool

    async def override_get_session():
        yield db_session

    async def override_get_redis_pool():
        return mock_redis

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_redis_pool] = override_get_redis_pool

    # Reset mock redis state before each test
    mock_redis.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_mock_redis() -> MockArqRedis:
    """Provide access to the mock redis instance for testing."""
    return mock_redis


@pytest_asyncio.fixture
async def test_group(db_session: AsyncSession) -> Group:
    """Create a non-default group."""
    group = Group(name="Tech")
    db_session.add(group)
    await db_session.commit()
    return group


@pytest_asyncio.fixture
async def test_feed(db_session: AsyncSession, test_group: Group) -> Feed:
    """Create a feed in the test group."""
    feed = Feed(name="Example Blog", link="https://example.com/feed.xml", group_id=test_group.id)
    db_session.add(feed)
    await db_session.commit()
    return feed


@pytest_asyncio.fixture
async def test_items(db_session: AsyncSession, test_feed: Feed) -> list[Item]:
    """Create three items, newest first in the returned list."""
    now = datetime.now(timezone.utc)
    items = [
        Item(
            feed_id=test_feed.id,
            guid=f"https://example.com/posts/{i}",
            title=f"Post {i}",
            link=f"https://example.com/posts/{i}",
            content=f"<p>Summary of post {i}</p>",
            pub_date=now - timedelta(hours=i),
        )
        for i in range(3)
    ]
    db_session.add_all(items)
    await db_session.commit()
    return items

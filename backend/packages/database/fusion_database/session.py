"""
Database session management.

Holds the process-wide async engine and session factory.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .models import DEFAULT_GROUP_ID, DEFAULT_GROUP_NAME, Base, Group

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_database(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Initialize the global engine and session factory.

    Args:
        database_url: SQLAlchemy async URL, e.g. ``sqlite+aiosqlite:///fusion.db``.
        echo: Log emitted SQL.

    Returns:
        The created engine.
    """
    global _engine, _session_factory

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    _engine = create_async_engine(database_url, echo=echo, connect_args=connect_args)
    _session_factory = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)
    return _engine


def get_engine() -> AsyncEngine:
    """
    Get the global engine.

    Raises:
        RuntimeError: If the database is not initialized.
    """
    if _engine is None:
        raise RuntimeError("Database not initialized")
    return _engine


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create the schema and make sure the default group exists.

    Args:
        engine: Engine to use, defaults to the global one.
    """
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await ensure_default_group(session)


async def ensure_default_group(session: AsyncSession) -> Group:
    """Create the default group if it is missing."""
    group = await session.scalar(select(Group).where(Group.id == DEFAULT_GROUP_ID))
    if group is None:
        group = Group(id=DEFAULT_GROUP_ID, name=DEFAULT_GROUP_NAME)
        session.add(group)
        await session.commit()
    return group


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a database session.

    Used as a FastAPI dependency and by worker tasks.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized")
    async with _session_factory() as session:
        yield session


async def close_database() -> None:
    """Dispose the global engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None

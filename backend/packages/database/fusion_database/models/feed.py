"""
Feed model definition.

This module defines the Feed model for storing subscribed sources.
"""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UTCDateTime, utcnow
from .group import DEFAULT_GROUP_ID


class Feed(Base, TimestampMixin):
    """
    Subscribed RSS/Atom source.

    Attributes:
        id: Unique feed identifier.
        name: Display name.
        link: Feed URL (unique).
        failure: Last fetch error message, empty when healthy.
        consecutive_failures: Number of fetches that failed in a row.
        suspended: Whether polling is paused.
        auto_fetch_full_content: Per-feed override of the group default.
            None means "inherit".
        req_proxy: Proxy URL used for outbound requests, empty for direct.
        last_build: Build/update time reported by the source.
        last_fetched_at: Time of the last fetch attempt, successful or not.
        updated_at: Time of the last successful refresh. Edits through the
            API leave it untouched.
        group_id: Owning group.
    """

    __tablename__ = "feeds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    link: Mapped[str] = mapped_column(String(2000), unique=True, nullable=False, index=True)

    # Fetch status
    failure: Mapped[str] = mapped_column(Text, default="", nullable=False)
    consecutive_failures: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    suspended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    last_build: Mapped[datetime | None] = mapped_column(UTCDateTime)
    last_fetched_at: Mapped[datetime | None] = mapped_column(UTCDateTime)
    # Set by the puller only, no onupdate
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    # Request options
    auto_fetch_full_content: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    req_proxy: Mapped[str] = mapped_column(String(2000), default="", nullable=False)

    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id"), default=DEFAULT_GROUP_ID, nullable=False, index=True
    )

    # Relationships
    group = relationship("Group", back_populates="feeds")
    items = relationship(
        "Item", back_populates="feed", cascade="all, delete-orphan", passive_deletes=True
    )

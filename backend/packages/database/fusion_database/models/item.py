"""
Item model definition.
"""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UTCDateTime


class Item(Base, TimestampMixin):
    """
    Single entry of a feed.

    Items are deduplicated by (feed_id, guid).
    """

    __tablename__ = "items"
    __table_args__ = (UniqueConstraint("feed_id", "guid", name="uq_items_feed_guid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guid: Mapped[str] = mapped_column(String(2000), nullable=False)
    title: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    link: Mapped[str] = mapped_column(String(2000), default="", nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    full_content: Mapped[str | None] = mapped_column(Text, nullable=True)

    # User state
    unread: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    bookmark: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    pub_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)

    feed_id: Mapped[int] = mapped_column(
        ForeignKey("feeds.id", ondelete="CASCADE"), nullable=False, index=True
    )

    feed = relationship("Feed", back_populates="items")

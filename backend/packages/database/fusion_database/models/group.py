"""
Group model definition.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

DEFAULT_GROUP_ID = 1
DEFAULT_GROUP_NAME = "Default"


class Group(Base, TimestampMixin):
    """
    Named collection of feeds.

    Attributes:
        id: Unique group identifier.
        name: Display label (unique).
        auto_fetch_full_content: Default full-content setting for the
            group's feeds. None means "inherit the system default".
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    auto_fetch_full_content: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    feeds = relationship("Feed", back_populates="group", passive_deletes=True)

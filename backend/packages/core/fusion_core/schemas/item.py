"""
Item schemas.

Request and response models for item-related operations.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import OmitUnsetModel


class ItemFeed(BaseModel):
    """
    Reduced feed reference embedded in items.

    Independent of FeedResponse; carries id, name and link only.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int
    name: str
    link: str


class ItemResponse(OmitUnsetModel):
    """Item response model."""

    model_config = ConfigDict(from_attributes=True)
    OPTIONAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"full_content"})

    id: int
    title: str
    link: str
    content: str
    full_content: str | None = None
    unread: bool
    bookmark: bool
    pub_date: datetime
    updated_at: datetime
    feed: ItemFeed


class ItemListResponse(BaseModel):
    """Paginated item list response."""

    total: int
    items: list[ItemResponse]


class UpdateUnreadRequest(BaseModel):
    """Set the unread flag on several items."""

    ids: list[int] = Field(min_length=1)
    unread: bool


class UpdateBookmarkRequest(BaseModel):
    """Set the bookmark flag on one item."""

    bookmark: bool


class MarkAllReadResponse(BaseModel):
    """Number of items marked as read."""

    updated: int

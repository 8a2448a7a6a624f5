"""
Feed schemas.

Request and response models for feed-related operations.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from .base import OmitUnsetModel
from .group import GroupResponse


class FeedResponse(OmitUnsetModel):
    """Feed response model."""

    model_config = ConfigDict(from_attributes=True)
    OPTIONAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"auto_fetch_full_content"})

    id: int
    name: str
    link: str
    failure: str
    updated_at: datetime
    suspended: bool
    auto_fetch_full_content: bool | None = None
    req_proxy: str
    unread_count: int = 0
    group: GroupResponse


class FeedListResponse(BaseModel):
    """List of feeds."""

    feeds: list[FeedResponse]


class FeedCreateItem(BaseModel):
    """One feed of a batch create request."""

    name: str = Field(min_length=1, max_length=500)
    link: HttpUrl
    req_proxy: str = ""


class FeedCreate(BaseModel):
    """Batch create feeds request."""

    group_id: int
    feeds: list[FeedCreateItem] = Field(min_length=1)


class FeedCreateResponse(BaseModel):
    """Identifiers of the created feeds."""

    ids: list[int]


class FeedUpdate(BaseModel):
    """
    Partial feed update.

    Only fields present in the request body are applied. Sending
    ``auto_fetch_full_content: null`` makes the feed inherit its group setting.
    """

    name: str | None = Field(default=None, min_length=1, max_length=500)
    link: HttpUrl | None = None
    suspended: bool | None = None
    req_proxy: str | None = None
    group_id: int | None = None
    auto_fetch_full_content: bool | None = None


class FeedValidateRequest(BaseModel):
    """Check a URL for feeds."""

    link: HttpUrl
    req_proxy: str | None = None


class DiscoveredFeedLink(BaseModel):
    """A feed found at a URL."""

    title: str
    link: str


class FeedValidateResponse(BaseModel):
    """Feeds found at a URL."""

    feed_links: list[DiscoveredFeedLink]


class FeedRefreshRequest(BaseModel):
    """Refresh one feed or all feeds."""

    id: int | None = None
    all: bool = False

    @model_validator(mode="after")
    def check_target(self) -> "FeedRefreshRequest":
        if self.id is None and not self.all:
            raise ValueError("either id or all must be set")
        return self


class FeedImportResponse(BaseModel):
    """OPML import statistics."""

    success: int
    failed: int
    total: int
    groups_created: int

"""
Pydantic schemas for API requests and responses.
"""

from .auth import LoginRequest, SessionResponse
from .base import OmitUnsetModel
from .feed import (
    DiscoveredFeedLink,
    FeedCreate,
    FeedCreateItem,
    FeedCreateResponse,
    FeedImportResponse,
    FeedListResponse,
    FeedRefreshRequest,
    FeedResponse,
    FeedUpdate,
    FeedValidateRequest,
    FeedValidateResponse,
)
from .group import GroupCreate, GroupListResponse, GroupResponse, GroupUpdate
from .item import (
    ItemFeed,
    ItemListResponse,
    ItemResponse,
    MarkAllReadResponse,
    UpdateBookmarkRequest,
    UpdateUnreadRequest,
)

__all__ = [
    "OmitUnsetModel",
    # Session
    "LoginRequest",
    "SessionResponse",
    # Group
    "GroupResponse",
    "GroupListResponse",
    "GroupCreate",
    "GroupUpdate",
    # Feed
    "FeedResponse",
    "FeedListResponse",
    "FeedCreate",
    "FeedCreateItem",
    "FeedCreateResponse",
    "FeedUpdate",
    "FeedValidateRequest",
    "FeedValidateResponse",
    "DiscoveredFeedLink",
    "FeedRefreshRequest",
    "FeedImportResponse",
    # Item
    "ItemFeed",
    "ItemResponse",
    "ItemListResponse",
    "UpdateUnreadRequest",
    "UpdateBookmarkRequest",
    "MarkAllReadResponse",
]

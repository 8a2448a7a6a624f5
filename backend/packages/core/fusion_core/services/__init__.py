"""
Service layer.

Business logic services for the application.
"""

from .auto_fetch import should_auto_fetch
from .feed_service import FeedService
from .group_service import GroupService
from .item_service import ItemService

__all__ = [
    "GroupService",
    "FeedService",
    "ItemService",
    "should_auto_fetch",
]

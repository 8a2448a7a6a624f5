"""
Database models package.

This module exports all SQLAlchemy models for the Fusion application.
"""

from .base import Base, TimestampMixin, UTCDateTime, utcnow
from .feed import Feed
from .group import DEFAULT_GROUP_ID, DEFAULT_GROUP_NAME, Group
from .item import Item

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "utcnow",
    "Group",
    "DEFAULT_GROUP_ID",
    "DEFAULT_GROUP_NAME",
    "Feed",
    "Item",
]

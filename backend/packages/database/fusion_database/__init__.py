"""
Fusion Database Package.

This package contains SQLAlchemy models and session management
for the Fusion feed reader.
"""

__version__ = "0.1.0"

from .models import Base, Feed, Group, Item, TimestampMixin

__all__ = ["Base", "TimestampMixin", "Group", "Feed", "Item"]

"""
API router modules.

This package contains all API route handlers organized by domain.
"""

from . import feeds, groups, items, sessions

__all__ = [
    "sessions",
    "groups",
    "feeds",
    "items",
]

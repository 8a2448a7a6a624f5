"""
RSS processing package.

Provides RSS/Atom parsing, feed discovery, full-content extraction
and OPML import/export.
"""

from .discoverer import DiscoveredFeed, discover_feeds, fetch_feed
from .fulltext import FullContentResult, extract_main_content, fetch_full_content
from .opml import OPMLFeed, generate_opml, parse_opml
from .parser import ParsedEntry, ParsedFeed, parse_feed

__all__ = [
    "parse_feed",
    "ParsedFeed",
    "ParsedEntry",
    "discover_feeds",
    "DiscoveredFeed",
    "fetch_feed",
    "fetch_full_content",
    "extract_main_content",
    "FullContentResult",
    "parse_opml",
    "generate_opml",
    "OPMLFeed",
]

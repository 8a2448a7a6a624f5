"""
Fusion API client.

Async HTTP client for the Fusion REST API.
"""

from .client import FusionClient, FusionClientError, is_failing

__all__ = ["FusionClient", "FusionClientError", "is_failing"]

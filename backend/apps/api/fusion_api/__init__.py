"""
Fusion API.

FastAPI application serving the feed reader JSON API.
"""

__version__ = "0.1.0"

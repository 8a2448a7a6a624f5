"""
Service-level exceptions.

Services raise ValueError for invalid requests; NotFoundError narrows it
to missing records so routers can answer 404 instead of 400.
"""


class NotFoundError(ValueError):
    """Raised when a requested record does not exist."""

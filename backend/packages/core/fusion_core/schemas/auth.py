"""
Session schemas.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login request."""

    password: str


class SessionResponse(BaseModel):
    """Issued session token."""

    token: str

"""
Authentication utilities.

Provides password hashing and session token management.
"""

from .jwt import JWTConfig, TokenData, create_session_token, verify_token
from .password import hash_password, verify_password

__all__ = [
    "JWTConfig",
    "TokenData",
    "create_session_token",
    "verify_token",
    "hash_password",
    "verify_password",
]

"""
FastAPI dependencies.

Provides dependency injection for database sessions, authentication, and services.
"""

from functools import lru_cache
from typing import Annotated

from arq.connections import ArqRedis
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fusion_core.auth import JWTConfig, hash_password, verify_password, verify_token
from fusion_core.config import fetcher_config
from fusion_core.services import FeedService, GroupService, ItemService
from fusion_database.session import get_session
from fusion_rss import FullContentResult, fetch_full_content

from .config import settings

SESSION_COOKIE = "session_token"

# Bearer tokens are accepted next to the session cookie
security = HTTPBearer(auto_error=False)

# Global Redis connection pool for the task queue, set during app lifespan
redis_pool: ArqRedis | None = None


def get_jwt_config() -> JWTConfig:
    """
    Get JWT configuration.

    Returns:
        JWT configuration instance.
    """
    return JWTConfig(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        session_expire_minutes=settings.session_expire_minutes,
    )


@lru_cache(maxsize=4)
def _password_hash(password: str) -> str:
    return hash_password(password)


def check_password(password: str) -> bool:
    """Compare a password with the configured one."""
    if not settings.password:
        return False
    return verify_password(password, _password_hash(settings.password))


async def require_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    jwt_config: Annotated[JWTConfig, Depends(get_jwt_config)],
) -> None:
    """
    Reject requests without a valid session when login is enabled.

    Raises:
        HTTPException: If the token is missing or invalid.
    """
    if not settings.password:
        return

    token = request.cookies.get(SESSION_COOKIE)
    if not token and credentials is not None:
        token = credentials.credentials

    if not token or verify_token(token, jwt_config) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_redis_pool() -> ArqRedis:
    """
    Get the global Redis connection pool for arq.

    Raises:
        RuntimeError: If Redis pool not initialized.
    """
    if redis_pool is None:
        raise RuntimeError("Redis pool not initialized")
    return redis_pool


async def _fetch_full_content(url: str, req_proxy: str | None = None) -> FullContentResult:
    return await fetch_full_content(
        url,
        req_proxy=req_proxy,
        timeout=fetcher_config.full_content_timeout_seconds,
        user_agent=fetcher_config.user_agent,
    )


# Service dependencies
def get_group_service(session: Annotated[AsyncSession, Depends(get_session)]) -> GroupService:
    """Get group service instance."""
    return GroupService(session)


def get_feed_service(session: Annotated[AsyncSession, Depends(get_session)]) -> FeedService:
    """Get feed service instance."""
    return FeedService(session)


def get_item_service(session: Annotated[AsyncSession, Depends(get_session)]) -> ItemService:
    """Get item service instance."""
    return ItemService(session, full_content_fetcher=_fetch_full_content)

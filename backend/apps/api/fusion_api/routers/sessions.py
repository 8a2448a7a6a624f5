"""
Sessions router.

Provides login and logout for the single configured password.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from fusion_core import get_logger
from fusion_core.auth import JWTConfig, create_session_token
from fusion_core.schemas import LoginRequest, SessionResponse

from ..config import settings
from ..dependencies import SESSION_COOKIE, check_password, get_jwt_config

logger = get_logger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def login(
    data: LoginRequest,
    response: Response,
    jwt_config: Annotated[JWTConfig, Depends(get_jwt_config)],
) -> SessionResponse:
    """
    Log in with the configured password.

    The session token is set as an httpOnly cookie and returned in the body
    for non-browser clients.

    Raises:
        HTTPException: If login is disabled or the password is wrong.
    """
    if not settings.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Login is not enabled"
        )
    if not check_password(data.password):
        logger.warning("Rejected login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Wrong password")

    token = create_session_token(jwt_config)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=jwt_config.session_expire_minutes * 60,
        httponly=True,
        secure=settings.secure_cookie,
        samesite="lax",
    )
    return SessionResponse(token=token)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(SESSION_COOKIE)

"""
Session tokens.

Fusion has a single user, so a token only proves that the configured
password was presented.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

SESSION_SUBJECT = "fusion"
SESSION_TOKEN_TYPE = "session"


class JWTConfig(BaseModel):
    """JWT signing configuration."""

    secret_key: str
    algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24 * 30


class TokenData(BaseModel):
    """Decoded token claims."""

    sub: str
    type: str
    exp: int
    iat: int


def create_session_token(config: JWTConfig, subject: str = SESSION_SUBJECT) -> str:
    """
    Create a signed session token.

    Args:
        config: JWT configuration.
        subject: Token subject.

    Returns:
        Encoded JWT.
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "type": SESSION_TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=config.session_expire_minutes)).timestamp()),
    }
    return jwt.encode(claims, config.secret_key, algorithm=config.algorithm)


def verify_token(token: str, config: JWTConfig) -> TokenData | None:
    """
    Decode and verify a token.

    Returns:
        Token claims, or None unless the token is a valid session token.
    """
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
        data = TokenData.model_validate(payload)
    except (JWTError, ValidationError):
        return None
    if data.type != SESSION_TOKEN_TYPE:
        return None
    return data

"""JWT access token handling (HS256 via python-jose).

Tokens carry ``{id, login}`` plus the registered ``sub``/``iat``/``exp``
claims.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.observability.logging import get_logger


if TYPE_CHECKING:
    from app.core.config import Settings


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    id: int
    login: str
    sub: str
    exp: datetime
    iat: datetime


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is invalid."""


def create_access_token(
    user_id: int,
    login: str,
    settings: Settings,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed access token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.jwt.access_token_expire_minutes)

    now = datetime.now(UTC)
    payload = {
        "id": user_id,
        "login": login,
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str, settings: Settings) -> TokenPayload:
    """Verify signature and expiry and return the claims.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the signature or the claims are invalid.
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
        return TokenPayload(**claims)

    except ExpiredSignatureError as e:
        logger.debug("Token expired", error=str(e))
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e

    except (JWTError, PydanticValidationError, TypeError) as e:
        logger.warning("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

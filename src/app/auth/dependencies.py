"""FastAPI security dependencies.

``authenticate`` validates the bearer token and attaches the principal to
``request.state.user``; ``require_user`` is what mutating routes depend on.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import TokenError, decode_token
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.observability.logging import bind_context
from app.schemas.user import Principal


MISSING_TOKEN_MESSAGE: Final[str] = "Authentication token not provided"
MALFORMED_TOKEN_MESSAGE: Final[str] = "Malformed token"
INVALID_TOKEN_MESSAGE: Final[str] = "Invalid or expired token"
NOT_AUTHENTICATED_MESSAGE: Final[str] = "User not authenticated"

# Documents the scheme in OpenAPI; the header itself is parsed below so each
# failure mode gets its own message.
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="JWT")


def _extract_token(authorization: str | None) -> str:
    if not authorization:
        raise UnauthorizedError(MISSING_TOKEN_MESSAGE)
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError(MALFORMED_TOKEN_MESSAGE)
    return parts[1]


async def authenticate(
    request: Request,
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Security(bearer_scheme)
    ] = None,
) -> Principal:
    """Validate ``Authorization: Bearer <token>`` and attach the principal.

    Raises:
        UnauthorizedError: Missing header, malformed header, or a token that
            fails verification.
    """
    token = _extract_token(request.headers.get("Authorization"))
    try:
        payload = decode_token(token, request.app.state.settings)
    except TokenError:
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from None

    user = Principal(id=payload.id, login=payload.login)
    request.state.user = user
    bind_context(user_id=user.id)
    return user


async def require_user(
    request: Request,
    _authenticated: Annotated[Principal, Depends(authenticate)],
) -> Principal:
    """Return the principal attached to the request.

    Raises:
        ForbiddenError: No principal is attached.
    """
    user = getattr(request.state, "user", None)
    if user is None:
        raise ForbiddenError(NOT_AUTHENTICATED_MESSAGE)
    return user


CurrentUser = Annotated[Principal, Depends(require_user)]

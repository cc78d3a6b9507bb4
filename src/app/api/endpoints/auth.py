"""Authentication endpoints: register, login, current user.

Annotations in the endpoint modules are evaluated eagerly (no postponed
annotations) because slowapi wraps the handlers and FastAPI resolves the
signature through the wrapper.
"""

from typing import Any

from fastapi import APIRouter, Request, Response, status

from app.api.dependencies import AuthServiceDep
from app.auth.dependencies import CurrentUser
from app.core.rate_limit import limit_auth, limit_default
from app.schemas.envelope import Envelope, success
from app.schemas.user import AuthResult, LoginRequest, Principal, RegisterRequest


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[AuthResult],
    summary="Register a new user",
    responses={409: {"description": "Login already in use"}},
)
@limit_auth
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    service: AuthServiceDep,
) -> dict[str, Any]:
    """Create an account and return it with an access token."""
    result = await service.register(body)
    return success(result, "User registered successfully")


@router.post(
    "/login",
    response_model=Envelope[AuthResult],
    summary="Log in",
    responses={401: {"description": "Invalid credentials"}},
)
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    service: AuthServiceDep,
) -> dict[str, Any]:
    """Exchange login and password for an access token."""
    result = await service.login(body)
    return success(result, "Login successful")


@router.get(
    "/me",
    response_model=Envelope[Principal],
    summary="Current user",
    responses={401: {"description": "Missing, malformed, invalid or expired token"}},
)
@limit_default
async def me(
    request: Request,
    response: Response,
    user: CurrentUser,
) -> dict[str, Any]:
    """Return the identity carried by the bearer token."""
    return success(user)

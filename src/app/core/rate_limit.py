"""Rate limiting using SlowAPI.

Counters live in the storage named by ``rate_limiting.storage_uri``
(in-process memory by default), so limits are per process.

Three tiers are applied by decorating routes:
- ``limit_default``: every API route (100 requests / 15 minutes)
- ``limit_auth``: register and login, keyed by client IP (10 / 15 minutes)
- ``limit_search``: recipe search (30 / minute)

Decorated endpoints must accept ``request: Request`` and
``response: Response`` so slowapi can read the client and write the
``X-RateLimit-*`` headers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.core.config import get_settings
from app.core.exceptions import OrjsonResponse, RateLimitError, error_envelope
from app.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

    from app.core.config import Settings

logger = get_logger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """Use the authenticated user id when present, else the client IP."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.id}"
    return str(get_remote_address(request))


def _get_auth_rate_limit_key(request: Request) -> str:
    """Always key auth endpoints by IP to slow down credential stuffing."""
    return f"auth:{get_remote_address(request)}"


def create_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limiting.default],
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
        enabled=settings.rate_limiting.enabled,
    )


# Route decorators are bound at import time, so the limiter is module level.
_settings = get_settings()
limiter = create_limiter(_settings)

limit_default: Any = limiter.limit(_settings.rate_limiting.default)
limit_auth: Any = limiter.limit(
    _settings.rate_limiting.auth, key_func=_get_auth_rate_limit_key
)
limit_search: Any = limiter.limit(_settings.rate_limiting.search)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> OrjsonResponse:
    """Render ``RateLimitExceeded`` as a 429 error envelope."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )
    error = RateLimitError()
    response = OrjsonResponse(
        status_code=error.status_code,
        content=error_envelope(error.message),
    )
    view_limit = getattr(request.state, "view_rate_limit", None)
    if view_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_limit)
    return response


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Attach the limiter to the app and honour ``rate_limiting.enabled``."""
    limiter.enabled = settings.rate_limiting.enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info("Rate limiting configured", enabled=limiter.enabled)

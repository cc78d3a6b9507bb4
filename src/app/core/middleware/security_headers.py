"""Security response headers (the usual helmet-style set)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


# Swagger UI needs inline scripts and styles
DEFAULT_CSP = "; ".join(
    (
        "default-src 'self'",
        "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "img-src 'self' data: https:",
        "frame-ancestors 'none'",
        "base-uri 'self'",
        "form-action 'self'",
    )
)

BASE_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}

HSTS_VALUE = "max-age=15552000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response.

    Args:
        api_prefix: Responses under this prefix are marked non-cacheable.
        enable_hsts: Send ``Strict-Transport-Security`` (production only).
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_prefix: str = "/api",
        enable_hsts: bool = False,
        content_security_policy: str = DEFAULT_CSP,
    ) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix.rstrip("/") + "/"
        self.headers = dict(BASE_HEADERS)
        self.headers["Content-Security-Policy"] = content_security_policy
        if enable_hsts:
            self.headers["Strict-Transport-Security"] = HSTS_VALUE

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        if request.url.path.startswith(self.api_prefix):
            response.headers["Cache-Control"] = "no-store"
        return response

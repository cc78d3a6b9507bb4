"""Custom middleware components."""

from app.core.middleware.request_context import RequestContextMiddleware
from app.core.middleware.security_headers import SecurityHeadersMiddleware


__all__ = [
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
]

"""Registration and login service."""

from app.services.auth.service import AuthService


__all__ = ["AuthService"]

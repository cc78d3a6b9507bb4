"""User listing service."""

from app.services.user.service import UserService


__all__ = ["UserService"]

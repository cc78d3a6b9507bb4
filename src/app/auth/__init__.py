"""Authentication: bcrypt passwords, JWT access tokens, FastAPI dependencies."""

from app.auth.dependencies import CurrentUser, authenticate, require_user
from app.auth.jwt import create_access_token, decode_token
from app.auth.passwords import hash_password, verify_password


__all__ = [
    "CurrentUser",
    "authenticate",
    "create_access_token",
    "decode_token",
    "hash_password",
    "require_user",
    "verify_password",
]

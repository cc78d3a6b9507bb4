"""Unit tests for bcrypt password hashing."""

from __future__ import annotations

import pytest

from app.auth.passwords import BCRYPT_MAX_BYTES, hash_password, verify_password


pytestmark = pytest.mark.unit


class TestHashPassword:
    """Tests for hash_password function."""

    async def test_produces_bcrypt_hash(self) -> None:
        """Should return a salted bcrypt hash with the given cost."""
        hashed = await hash_password("segredo123", rounds=4)

        assert hashed.startswith("$2b$04$")
        assert hashed != "segredo123"

    async def test_salts_every_hash(self) -> None:
        """Should produce different hashes for the same password."""
        first = await hash_password("segredo123", rounds=4)
        second = await hash_password("segredo123", rounds=4)

        assert first != second


class TestVerifyPassword:
    """Tests for verify_password function."""

    async def test_accepts_correct_password(self) -> None:
        hashed = await hash_password("segredo123", rounds=4)

        assert await verify_password("segredo123", hashed) is True

    async def test_rejects_wrong_password(self) -> None:
        hashed = await hash_password("segredo123", rounds=4)

        assert await verify_password("segredo124", hashed) is False

    async def test_rejects_non_bcrypt_value(self) -> None:
        """Should return False instead of raising for a malformed hash."""
        assert await verify_password("segredo123", "plain-text") is False

    async def test_long_passwords_are_truncated(self) -> None:
        """Should hash passwords longer than bcrypt's input limit."""
        long_password = "a" * (BCRYPT_MAX_BYTES + 10)

        hashed = await hash_password(long_password, rounds=4)

        assert await verify_password(long_password, hashed) is True

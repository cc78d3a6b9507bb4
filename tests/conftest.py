"""Shared test fixtures for the recipe catalog service.

APP_ENV is pinned to ``test`` before any application module is imported so
the YAML overrides under ``config/environments/test`` apply (rate limiting
off, cheap bcrypt rounds).
"""

from __future__ import annotations

import os


os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from app.core.config import Settings  # noqa: E402
from app.core.config.settings import (  # noqa: E402
    AppSettings,
    AuthSettings,
    LoggingSettings,
    RateLimitingSettings,
)


TEST_JWT_SECRET = "test-jwt-secret-key-minimum-32-characters"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests; independent of any local .env file."""
    return Settings(
        APP_ENV="test",
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        app=AppSettings(name="test-recipe-catalog", version="0.0.1-test"),
        auth=AuthSettings(bcrypt_rounds=4),
        rate_limiting=RateLimitingSettings(enabled=False),
        logging=LoggingSettings(level="WARNING", format="pretty"),
    )

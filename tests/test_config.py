"""Tests for settings and production validation."""

import pytest

from urbanliving.core.config import DEFAULT_JWT_SECRET, Settings

pytestmark = pytest.mark.unit


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_database_uri_defaults_to_asyncpg():
    settings = make_settings(DATABASE_URL=None, POSTGRES_HOST="db", POSTGRES_DB="rentals")
    assert settings.SQLALCHEMY_DATABASE_URI == "postgresql+asyncpg://postgres:postgres@db:5432/rentals"
    assert settings.SYNC_DATABASE_URI == "postgresql://postgres:postgres@db:5432/rentals"


def test_database_url_override():
    settings = make_settings(DATABASE_URL="sqlite+aiosqlite:///./dev.db")
    assert settings.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///./dev.db"
    assert settings.SYNC_DATABASE_URI == "sqlite:///./dev.db"


def test_cors_origins_list():
    settings = make_settings(CORS_ORIGINS="http://a.test, http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_photo_public_prefix():
    assert make_settings(PHOTO_STORAGE_ROOT="/photos/properties/").photo_public_prefix == "/photos/properties"


def test_security_headers_default_follows_environment():
    assert make_settings(APP_ENV="production").security_headers_enabled is True
    assert make_settings(APP_ENV="development").security_headers_enabled is False
    assert make_settings(APP_ENV="development", SECURITY_HEADERS_ENABLED=True).security_headers_enabled


def test_production_requires_real_secrets():
    settings = make_settings(APP_ENV="production", DATABASE_URL=None, JWT_SECRET_KEY=DEFAULT_JWT_SECRET)
    with pytest.raises(ValueError) as exc_info:
        settings.validate_for_production()
    assert "DATABASE_URL" in str(exc_info.value)
    assert "JWT_SECRET_KEY" in str(exc_info.value)


def test_production_ok():
    make_settings(
        APP_ENV="production",
        DATABASE_URL="postgresql+asyncpg://u:p@db/rentals",
        JWT_SECRET_KEY="a-long-random-secret",
    ).validate_for_production()

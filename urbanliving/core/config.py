"""Application configuration using Pydantic Settings.

This module provides type-safe environment variable management
with validation and computed properties for database URIs and
photo storage locations.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        APP_ENV: Application environment (development, staging, production).
        DEBUG: Enable debug mode.
        HOST: Interface the server binds to.
        PORT: Port the server listens on.
        DATABASE_URL: Full async database URL. Overrides the POSTGRES_* parts.
        POSTGRES_USER: PostgreSQL username.
        POSTGRES_PASSWORD: PostgreSQL password.
        POSTGRES_DB: PostgreSQL database name.
        POSTGRES_HOST: PostgreSQL host address.
        POSTGRES_PORT: PostgreSQL port number.
        CORS_ORIGINS: Comma-separated list of allowed CORS origins.
        MEDIA_ROOT: Directory on disk that holds the photo storage root.
        PHOTO_STORAGE_ROOT: Storage root for property photos, relative to
            MEDIA_ROOT. Also the public URL prefix for served photos.
        MAX_UPLOAD_FILES: Maximum number of files accepted per upload.
        MAX_UPLOAD_BYTES: Maximum size of a single uploaded file.
        PHOTO_MAX_WIDTH: Width of the bounding box photos are scaled into.
        PHOTO_MAX_HEIGHT: Height of the bounding box photos are scaled into.
        PHOTO_JPEG_QUALITY: JPEG quality used when re-encoding uploads.
        API_KEY: Static key accepted in the X-API-Key header.
        JWT_SECRET_KEY: Secret used to sign admin session tokens.
        JWT_EXPIRATION_HOURS: Lifetime of issued session tokens.
        ADMIN_USERNAME: Admin account created on startup if missing.
        ADMIN_PASSWORD: Password for the bootstrap admin account.
        GOOGLE_GEOCODING_API_KEY: Key for the Google Geocoding API.
        RATE_LIMIT_ENABLED: Toggle slowapi rate limiting.
        SECURITY_HEADERS_ENABLED: Force security headers on or off.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "urbanliving"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Photo storage
    MEDIA_ROOT: Path = Path(".")
    PHOTO_STORAGE_ROOT: str = "photos/properties"
    MAX_UPLOAD_FILES: int = 10
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024
    PHOTO_MAX_WIDTH: int = 1920
    PHOTO_MAX_HEIGHT: int = 1080
    PHOTO_JPEG_QUALITY: int = 80

    # Auth
    API_KEY: Optional[str] = None
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_EXPIRATION_HOURS: int = 24
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # Third-party services
    GOOGLE_GEOCODING_API_KEY: Optional[str] = None

    # Hardening
    RATE_LIMIT_ENABLED: bool = True
    SECURITY_HEADERS_ENABLED: Optional[bool] = None

    @computed_field  # type: ignore[misc]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the async database URI.

        Returns:
            DATABASE_URL when set, otherwise an asyncpg PostgreSQL URI.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @computed_field  # type: ignore[misc]
    @property
    def SYNC_DATABASE_URI(self) -> str:
        """Construct the sync database URI for Alembic.

        Returns:
            Sync database connection string.
        """
        uri = self.SQLALCHEMY_DATABASE_URI
        return uri.replace("+asyncpg", "").replace("+aiosqlite", "")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def photo_public_prefix(self) -> str:
        """URL prefix under which the photo storage root is served."""
        return "/" + self.PHOTO_STORAGE_ROOT.strip("/")

    @property
    def security_headers_enabled(self) -> bool:
        if self.SECURITY_HEADERS_ENABLED is None:
            return self.is_production
        return self.SECURITY_HEADERS_ENABLED

    def validate_for_production(self) -> None:
        """Fail fast when production is started with development defaults.

        Raises:
            ValueError: If a required production setting is missing.
        """
        if not self.is_production:
            return

        missing = []
        if not self.DATABASE_URL and self.POSTGRES_HOST == "localhost":
            missing.append("DATABASE_URL")
        if self.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            missing.append("JWT_SECRET_KEY")
        if missing:
            raise ValueError(
                "Missing required environment variables for production: "
                + ", ".join(missing)
            )
        if self.PORT <= 0:
            raise ValueError(f"Invalid PORT: {self.PORT}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance.
    """
    return Settings()


settings = get_settings()

"""Dependency injection utilities for API endpoints.

Per-application objects (settings, the photo service, the geocoder, the
session factory) live on ``app.state`` and are handed to routes through
the aliases below.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from urbanliving.core.config import Settings
from urbanliving.core.security import get_current_user
from urbanliving.services.database import get_db
from urbanliving.services.geocoding import GeocodingClient
from urbanliving.services.photo_service import PhotoService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_photo_service(request: Request) -> PhotoService:
    return request.app.state.photo_service


def get_geocoder(request: Request) -> GeocodingClient:
    return request.app.state.geocoder


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

SettingsDep = Annotated[Settings, Depends(get_app_settings)]
PhotoServiceDep = Annotated[PhotoService, Depends(get_photo_service)]
GeocoderDep = Annotated[GeocodingClient, Depends(get_geocoder)]

# Admin-only routes; resolves to the username (or "api-key")
CurrentUser = Annotated[str, Depends(get_current_user)]

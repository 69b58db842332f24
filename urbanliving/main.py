"""FastAPI application entry point.

This module builds the FastAPI application with CORS, security and
error-handling middleware, rate limiting, route registration and the
read-only static mount that serves stored photos.

Run locally with::

    uvicorn urbanliving.main:app --reload --port 5000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from urbanliving import __version__
from urbanliving.api.endpoints import auth, branding, health, leads, photos, properties, units
from urbanliving.core.config import Settings, get_settings
from urbanliving.core.logging import setup_logging
from urbanliving.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from urbanliving.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from urbanliving.middleware.security import RequestLoggingMiddleware, SecurityHeadersMiddleware
from urbanliving.services.database import build_engine, build_session_factory, init_models
from urbanliving.services.geocoding import GeocodingClient
from urbanliving.services.photo_service import PhotoService
from urbanliving.services.users import ensure_admin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Startup creates the database engine, any missing tables and the
    bootstrap admin account; shutdown disposes the engine.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("Starting UrbanLiving API...")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    await init_models(engine)
    await ensure_admin(app.state.session_factory, settings)

    yield

    logger.info("Shutting down UrbanLiving API...")
    await engine.dispose()


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment's.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    settings.validate_for_production()
    setup_logging(settings)

    app = FastAPI(
        title="UrbanLiving API",
        description=(
            "Rental listings API: properties, units, lead submissions, "
            "site branding and property photo management."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.photo_service = PhotoService.from_settings(settings)
    app.state.geocoder = GeocodingClient(settings.GOOGLE_GEOCODING_API_KEY)

    # Rate limiting
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Middleware: the last one added runs first
    if settings.security_headers_enabled:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_exception_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(properties.router)
    app.include_router(units.router)
    app.include_router(photos.router)
    app.include_router(leads.router)
    app.include_router(branding.router)

    # Stored photos, read-only, at the same path as their storage root
    app.mount(
        settings.photo_public_prefix,
        StaticFiles(directory=app.state.photo_service.storage.storage_path),
        name="photos",
    )

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "urbanliving.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


# Create the application instance
app = create_application()

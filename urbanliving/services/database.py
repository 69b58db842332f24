"""Async database session management.

This module builds the async SQLAlchemy engine and session factory
for non-blocking database operations. Both are created per application
(see ``urbanliving.main.lifespan``) and kept on ``app.state`` so tests can
run each app against its own database.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from urbanliving.core.config import Settings
from urbanliving.core.exceptions import DatabaseException
from urbanliving.models import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    SQLite (tests and local development) gets a single shared connection;
    PostgreSQL gets a regular connection pool.

    Args:
        settings: Application settings.

    Returns:
        Configured AsyncEngine.
    """
    uri = settings.SQLALCHEMY_DATABASE_URI
    if uri.startswith("sqlite"):
        return create_async_engine(
            uri,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(
        uri,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for creating async sessions."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables.

    Safe to run on every startup; existing tables are left untouched.
    Schema changes go through Alembic.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session.

    This is a FastAPI dependency that yields an async session
    and ensures proper cleanup after the request completes.

    Yields:
        AsyncSession: SQLAlchemy async session for database operations.

    Raises:
        DatabaseException: A database error escaped the request; the
            driver message is logged, not returned.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error, transaction rolled back: {e}")
            raise DatabaseException() from e
        except Exception:
            await session.rollback()
            raise

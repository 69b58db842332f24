"""Admin user accounts."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from urbanliving.core.config import Settings
from urbanliving.core.exceptions import ValidationException
from urbanliving.core.security import hash_password, verify_password
from urbanliving.models import User

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, username: str, password: str) -> User:
    """
    Create an admin account.

    Raises:
        ValidationException: Username taken or password too short
    """
    username = username.strip()
    if not username:
        raise ValidationException("Username is required")
    if len(password) < 8:
        raise ValidationException("Password must be at least 8 characters")
    if await get_user(db, username) is not None:
        raise ValidationException(f"User {username!r} already exists")

    user = User(username=username, hashed_password=hash_password(password))
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info(f"Created admin user {username!r}")
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> Optional[User]:
    """Return the user when the password matches, else None."""
    user = await get_user(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def ensure_admin(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> None:
    """Create the configured admin account on startup if it is missing."""
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return
    async with session_factory() as db:
        if await get_user(db, settings.ADMIN_USERNAME) is not None:
            return
        await create_user(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
        await db.commit()

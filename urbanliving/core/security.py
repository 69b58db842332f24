"""
Authentication for the admin surface.

Two credentials are accepted, checked in order:

1. ``X-API-Key`` header matching ``settings.API_KEY`` (scripts, bulk import
   tooling, server-to-server calls).
2. ``Authorization: Bearer <jwt>`` issued by ``POST /api/auth/login`` to an
   admin user (the dashboard session).

Public endpoints do not depend on this module at all; admin endpoints add
the ``CurrentUser`` dependency from ``urbanliving.api.deps``.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from urbanliving.core.config import Settings
from urbanliving.core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# pbkdf2_sha256 is pure python in passlib, no native backend needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password for storage in the users table."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed session token for an admin user.

    Args:
        subject: Username stored in the ``sub`` claim
        settings: Settings providing the secret and default lifetime
        expires_delta: Override for the token lifetime

    Returns:
        str: Encoded JWT
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    )
    payload = {"sub": subject, "exp": expire, "iat": datetime.now(timezone.utc)}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Decode and verify a session token.

    Raises:
        UnauthorizedException: If the signature or expiry check fails
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedException("Invalid or expired token")


async def get_current_user(
    request: Request,
    api_key: Optional[str] = Security(api_key_header),
    bearer: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Authenticate using either API key or JWT token.

    Returns:
        str: User identifier (``api-key`` for key-authenticated calls)

    Raises:
        UnauthorizedException: 401 if both auth methods fail
    """
    settings: Settings = request.app.state.settings

    if api_key and settings.API_KEY and secrets.compare_digest(api_key, settings.API_KEY):
        return "api-key"

    if bearer:
        payload = decode_access_token(bearer.credentials, settings)
        subject = payload.get("sub")
        if subject:
            return subject

    if api_key:
        logger.warning(f"Rejected API key {api_key[:4]}... on {request.url.path}")

    raise UnauthorizedException(
        "Invalid authentication. Provide X-API-Key or Authorization: Bearer token"
    )

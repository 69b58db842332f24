"""
Admin login.

``POST /api/auth/login`` exchanges a username and password for a JWT that
the dashboard sends back as ``Authorization: Bearer <token>``.
"""

import logging

from fastapi import APIRouter, Request

from urbanliving.api.deps import CurrentUser, DBSession, SettingsDep
from urbanliving.core.exceptions import UnauthorizedException
from urbanliving.core.security import create_access_token
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.auth import CurrentUserResponse, LoginRequest, TokenResponse
from urbanliving.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RateLimitConfig.AUTH_ATTEMPT)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: DBSession,
    settings: SettingsDep,
):
    user = await user_service.authenticate(db, credentials.username, credentials.password)
    if user is None:
        logger.warning(f"Failed login for {credentials.username!r}")
        raise UnauthorizedException("Invalid username or password")

    logger.info(f"User {user.username!r} logged in")
    return TokenResponse(access_token=create_access_token(user.username, settings))


@router.get("/user", response_model=CurrentUserResponse)
async def current_user(user: CurrentUser):
    return CurrentUserResponse(username=user)

"""Site branding endpoints."""

from typing import Optional

from fastapi import APIRouter, Request

from urbanliving.api.deps import CurrentUser, DBSession
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.branding import BrandingResponse, BrandingUpdate
from urbanliving.services import branding as branding_service

router = APIRouter(prefix="/api/branding", tags=["Branding"])


@router.get("", response_model=Optional[BrandingResponse])
async def get_branding(db: DBSession):
    """The site's branding, or ``null`` before it has been configured."""
    return await branding_service.get_branding(db)


@router.put("", response_model=BrandingResponse)
@limiter.limit(RateLimitConfig.WRITE)
async def update_branding(
    request: Request,
    data: BrandingUpdate,
    db: DBSession,
    current_user: CurrentUser,
):
    return await branding_service.upsert_branding(db, data)

"""Unit endpoints."""

from typing import List

from fastapi import APIRouter, Query, Request, Response, status

from urbanliving.api.deps import CurrentUser, DBSession
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.property import UnitCreate, UnitResponse, UnitUpdate
from urbanliving.services import properties as property_service

router = APIRouter(prefix="/api/units", tags=["Units"])


@router.get("", response_model=List[UnitResponse])
async def list_units(
    db: DBSession,
    property_id: int = Query(..., alias="propertyId", description="Owning property id"),
):
    return await property_service.list_units(db, property_id)


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(unit_id: int, db: DBSession):
    return await property_service.get_unit(db, unit_id)


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RateLimitConfig.WRITE)
async def create_unit(
    request: Request,
    data: UnitCreate,
    db: DBSession,
    current_user: CurrentUser,
):
    return await property_service.create_unit(db, data)


@router.put("/{unit_id}", response_model=UnitResponse)
@limiter.limit(RateLimitConfig.WRITE)
async def update_unit(
    request: Request,
    unit_id: int,
    data: UnitUpdate,
    db: DBSession,
    current_user: CurrentUser,
):
    return await property_service.update_unit(db, unit_id, data)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(RateLimitConfig.DELETE)
async def delete_unit(
    request: Request,
    unit_id: int,
    db: DBSession,
    current_user: CurrentUser,
) -> Response:
    await property_service.delete_unit(db, unit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

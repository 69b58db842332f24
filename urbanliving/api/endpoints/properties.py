"""
Property endpoints.

Browsing is public; creating, editing and deleting properties requires an
admin credential.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, Request, Response, status

from urbanliving.api.deps import CurrentUser, DBSession, GeocoderDep
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from urbanliving.services import properties as property_service

router = APIRouter(prefix="/api/properties", tags=["Properties"])


@router.get("", response_model=List[PropertyResponse])
@limiter.limit(RateLimitConfig.READ)
async def list_properties(
    request: Request,
    db: DBSession,
    city: Optional[str] = Query(None, description="Case-insensitive city name"),
    is_available: Optional[bool] = Query(
        None,
        alias="isAvailable",
        description="Only properties with (true) or without (false) available units",
    ),
):
    return await property_service.list_properties(db, city=city, is_available=is_available)


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: int, db: DBSession):
    return await property_service.get_property(db, property_id)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RateLimitConfig.WRITE)
async def create_property(
    request: Request,
    data: PropertyCreate,
    db: DBSession,
    geocoder: GeocoderDep,
    current_user: CurrentUser,
):
    """
    Create a property.

    Without ``latitude``/``longitude`` in the body the address is geocoded.
    The lookup is best effort; the property is saved either way.
    """
    return await property_service.create_property(db, data, geocoder=geocoder)


@router.put("/{property_id}", response_model=PropertyResponse)
@limiter.limit(RateLimitConfig.WRITE)
async def update_property(
    request: Request,
    property_id: int,
    data: PropertyUpdate,
    db: DBSession,
    geocoder: GeocoderDep,
    current_user: CurrentUser,
):
    """Partial update; re-geocodes when the address changes without new coordinates."""
    return await property_service.update_property(db, property_id, data, geocoder=geocoder)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(RateLimitConfig.DELETE)
async def delete_property(
    request: Request,
    property_id: int,
    db: DBSession,
    current_user: CurrentUser,
) -> Response:
    await property_service.delete_property(db, property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Request/response schemas for properties and units."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from urbanliving.schemas.common import CamelModel
from urbanliving.services.geocoding import format_coordinate


def _coerce_coordinate(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    formatted = format_coordinate(value)
    if formatted is None:
        raise ValueError("Coordinate must be numeric")
    return formatted


class PropertyFields(CamelModel):
    description: Optional[str] = None
    neighborhood: Optional[str] = None
    amenities: Optional[str] = None
    pet_policy: Optional[str] = None
    floor_plans: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    latitude: Optional[str] = None
    longitude: Optional[str] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coerce_coordinate(cls, value: Any) -> Optional[str]:
        return _coerce_coordinate(value)


class PropertyCreate(PropertyFields):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=20)
    bedrooms: int = Field(..., ge=0)
    bathrooms: str = Field(..., min_length=1, max_length=20)
    total_units: int = Field(..., ge=0)


class PropertyUpdate(CamelModel):
    """Partial update; only fields present in the request are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[str] = Field(None, min_length=1, max_length=20)
    total_units: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    neighborhood: Optional[str] = None
    amenities: Optional[str] = None
    pet_policy: Optional[str] = None
    floor_plans: Optional[str] = None
    images: Optional[List[str]] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coerce_coordinate(cls, value: Any) -> Optional[str]:
        return _coerce_coordinate(value)


class PropertyResponse(PropertyCreate):
    id: int
    created_at: Optional[datetime] = None


class UnitCreate(CamelModel):
    property_id: int
    unit_number: str = Field(..., min_length=1, max_length=50)
    bedrooms: int = Field(0, ge=0)
    bathrooms: str = Field("", max_length=20)
    is_available: bool = False
    available_date: Optional[datetime] = None
    rent: Optional[int] = Field(None, ge=0, description="Monthly rent in cents")
    images: List[str] = Field(default_factory=list)


class UnitUpdate(CamelModel):
    property_id: Optional[int] = None
    unit_number: Optional[str] = Field(None, min_length=1, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[str] = Field(None, max_length=20)
    is_available: Optional[bool] = None
    available_date: Optional[datetime] = None
    rent: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None


class UnitResponse(UnitCreate):
    id: int

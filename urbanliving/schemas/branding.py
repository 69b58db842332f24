"""Schemas for site branding."""

from typing import List, Optional

from pydantic import Field, field_validator

from urbanliving.core.validators import validate_hex_color
from urbanliving.schemas.common import CamelModel


class BrandingUpdate(CamelModel):
    company_name: str = Field("UrbanLiving", min_length=1, max_length=255)
    logo_url: Optional[str] = Field(None, max_length=512)
    primary_color: Optional[str] = "#2563eb"
    secondary_color: Optional[str] = "#4f46e5"
    cities: List[str] = Field(default_factory=list)
    header: Optional[str] = Field(None, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=512)
    footer_text: Optional[str] = None
    contact_info: Optional[str] = None

    @field_validator("primary_color", "secondary_color")
    @classmethod
    def check_color(cls, value: Optional[str]) -> Optional[str]:
        return validate_hex_color(value)

    @field_validator("cities")
    @classmethod
    def clean_cities(cls, value: List[str]) -> List[str]:
        return [city.strip() for city in value if city and city.strip()]


class BrandingResponse(BrandingUpdate):
    id: int

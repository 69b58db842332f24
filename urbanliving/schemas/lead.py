"""Schemas for lead submissions."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from urbanliving.core.validators import strip_text, validate_email
from urbanliving.schemas.common import CamelModel


class LeadSubmissionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str
    move_in_date: Optional[datetime] = None
    desired_bedrooms: Optional[str] = Field(None, max_length=50)
    additional_info: Optional[str] = Field(None, max_length=5000)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name cannot be blank")
        return value

    @field_validator("desired_bedrooms", "additional_info")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return strip_text(value)


class LeadSubmissionUpdate(CamelModel):
    contacted: bool


class LeadSubmissionResponse(CamelModel):
    id: int
    name: str
    email: str
    move_in_date: Optional[datetime] = None
    desired_bedrooms: Optional[str] = None
    additional_info: Optional[str] = None
    contacted: bool
    submitted_at: Optional[datetime] = None

"""Schemas for admin login."""

from pydantic import Field

from urbanliving.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"


class CurrentUserResponse(CamelModel):
    username: str

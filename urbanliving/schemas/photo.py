"""Schemas for the photo endpoints."""

from typing import Dict, List, Optional

from pydantic import Field

from urbanliving.schemas.common import CamelModel


class UploadResultSchema(CamelModel):
    filename: str
    original_name: str
    size: int = Field(..., description="Stored size in bytes after normalization")
    url: str


class UploadErrorSchema(CamelModel):
    original_name: str
    reason: str
    error: str


class UploadResponse(CamelModel):
    files: List[UploadResultSchema]
    errors: List[UploadErrorSchema] = Field(default_factory=list)


class PhotoTaxonomyResponse(CamelModel):
    exterior: List[str]
    interior: List[str]
    amenities: List[str]
    units: Dict[str, List[str]] = Field(
        ..., description="Photo URLs keyed by unit id (as a string)"
    )


class DeletePhotoRequest(CamelModel):
    path: Optional[str] = None


class MessageResponse(CamelModel):
    message: str

"""
Photo endpoints - upload, list and delete property photos.

Photos are plain files under the storage root (see ``photo_paths``); there
is no photo table. The directory for an upload is derived from the stored
Property row, so two uploads for the same property always land in the same
place whatever ``propertyName`` the client sends.

Uploaded files are read fully into memory (at most ``MAX_UPLOAD_FILES`` x
``MAX_UPLOAD_BYTES``) and handed to the ``PhotoService`` in the threadpool,
since Pillow and disk writes are blocking.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from urbanliving.api.deps import CurrentUser, DBSession, PhotoServiceDep
from urbanliving.core.exceptions import PayloadTooLargeException, ValidationException
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.photo import (
    DeletePhotoRequest,
    MessageResponse,
    PhotoTaxonomyResponse,
    UploadResponse,
)
from urbanliving.services import properties as property_service
from urbanliving.services.photo_service import IncomingPhoto, PhotoDestination

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photos", tags=["Photos"])


async def _read_upload(file: UploadFile, max_bytes: int) -> IncomingPhoto:
    # One byte past the limit is enough to know the file is too large
    data = await file.read(max_bytes + 1)
    await file.close()
    return IncomingPhoto(
        filename=file.filename or "photo",
        content_type=file.content_type,
        data=data,
    )


@router.post("/upload", response_model=UploadResponse)
@limiter.limit(RateLimitConfig.UPLOAD)
async def upload_photos(
    request: Request,
    db: DBSession,
    photo_service: PhotoServiceDep,
    current_user: CurrentUser,
    photos: List[UploadFile] = File(..., description="Photos to upload (max 10)"),
    property_id: int = Form(..., alias="propertyId"),
    property_name: Optional[str] = Form(None, alias="propertyName"),
    photo_type: Optional[str] = Form(None, alias="type"),
    unit_id: Optional[int] = Form(None, alias="unitId"),
    unit_number: Optional[str] = Form(None, alias="unitNumber"),
):
    """
    Upload photos for a property category or for one unit.

    Form fields:
        photos: One or more image files
        propertyId: Owning property
        propertyName: Display name, informational only
        type: ``exterior``, ``interior`` or ``amenities`` (property photos)
        unitId: Target unit (unit photos); its stored unit number picks the
            directory, ``unitNumber`` is informational

    Returns:
        ``{files: [...], errors: [...]}``; ``errors`` lists files that could
        not be stored while their siblings were.
    """
    if len(photos) > photo_service.max_files:
        raise PayloadTooLargeException(
            f"Too many files. Maximum {photo_service.max_files} files per upload",
            details={"max_files": photo_service.max_files, "received": len(photos)},
        )

    prop = await property_service.get_property(db, property_id)

    stored_unit_number = None
    if unit_id is not None:
        unit = await property_service.get_unit(db, unit_id)
        if unit.property_id != prop.id:
            raise ValidationException(
                "Unit does not belong to this property",
                details={"unitId": unit_id, "propertyId": property_id},
            )
        stored_unit_number = unit.unit_number
        if unit_number and unit_number != unit.unit_number:
            logger.info(
                f"Ignoring client unitNumber {unit_number!r} for unit {unit_id} "
                f"({unit.unit_number!r})"
            )

    if property_name and property_name != prop.name:
        logger.info(
            f"Ignoring client propertyName {property_name!r} for property {prop.id} ({prop.name!r})"
        )

    destination = PhotoDestination(
        property_id=prop.id,
        city=prop.city,
        property_name=prop.name,
        category=None if unit_id is not None else photo_type,
        unit_id=unit_id,
        unit_number=stored_unit_number,
    )

    incoming = [await _read_upload(f, photo_service.max_bytes) for f in photos]
    batch = await run_in_threadpool(photo_service.process_upload, incoming, destination)

    logger.info(
        f"{current_user} uploaded {len(batch.files)} photo(s) to property {prop.id}"
        + (f" ({len(batch.errors)} failed)" if batch.errors else "")
    )
    return UploadResponse.model_validate(batch)


@router.get("/property/{property_id}", response_model=PhotoTaxonomyResponse)
async def get_property_photos(
    property_id: int,
    db: DBSession,
    photo_service: PhotoServiceDep,
):
    """All photos of a property, grouped by category and by unit id."""
    prop = await property_service.get_property(db, property_id)
    units = await property_service.list_units(db, prop.id)
    taxonomy = await run_in_threadpool(photo_service.read_taxonomy, prop, units)
    return PhotoTaxonomyResponse(**taxonomy.to_dict())


@router.delete("", response_model=MessageResponse)
@limiter.limit(RateLimitConfig.DELETE)
async def delete_photo(
    request: Request,
    data: DeletePhotoRequest,
    photo_service: PhotoServiceDep,
    current_user: CurrentUser,
):
    """
    Delete one photo by its public URL or storage-relative path.

    Paths that resolve outside photo storage are refused with 403.
    """
    removed = await run_in_threadpool(photo_service.delete_photo, data.path)
    logger.info(f"{current_user} deleted photo {removed}")
    return MessageResponse(message="Photo deleted successfully")

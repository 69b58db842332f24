"""
Photo Service - upload, taxonomy and delete operations.

This is the orchestration layer of the photo subsystem. It has no database
access: the API layer looks up the Property/Unit rows and hands them in, and
this service turns them into directory paths (``photo_paths``), image bytes
(``ImageProcessor``) and files (``StorageManager``).

Batch upload policy
-------------------
Request-level problems (too many files, a non-image MIME type, an oversized
file, bad destination fields) reject the whole batch before anything is
written. Once writing starts each file is independent: a corrupt image or a
failed write is reported for that file in ``UploadBatch.errors`` while its
siblings are still stored. Only when every file fails does the whole request
fail.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import PurePosixPath
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from urbanliving.core.config import Settings
from urbanliving.core.exceptions import (
    ForbiddenException,
    NotFoundException,
    PayloadTooLargeException,
    StorageWriteException,
    UnsupportedMediaTypeException,
    ValidationException,
)
from urbanliving.services.image_processor import ImageProcessingError, ImageProcessor
from urbanliving.services.naming import sanitize_filename_stem
from urbanliving.services.photo_paths import (
    PHOTO_CATEGORIES,
    public_url,
    resolve_category_path,
    resolve_property_root,
    resolve_unit_path,
)
from urbanliving.services.storage_manager import (
    InvalidPathError,
    PathOutsideStorageError,
    StorageError,
    StorageManager,
)

logger = logging.getLogger(__name__)

# Reasons reported per failed file
INVALID_IMAGE = "invalid_image"
WRITE_FAILED = "write_failed"


class PropertyLike(Protocol):
    id: int
    name: str
    city: str


class UnitLike(Protocol):
    id: int
    unit_number: str


@dataclass(frozen=True)
class IncomingPhoto:
    """One uploaded file, fully read into memory."""

    filename: str
    content_type: Optional[str]
    data: bytes


@dataclass(frozen=True)
class PhotoDestination:
    """Where a batch of uploads should land.

    Exactly one of ``category`` (a property-level category) or
    ``unit_id``/``unit_number`` selects the target directory.
    """

    property_id: int
    city: str
    property_name: str
    category: Optional[str] = None
    unit_id: Optional[int] = None
    unit_number: Optional[str] = None

    def relative_dir(self, storage_root: str) -> PurePosixPath:
        root = resolve_property_root(self.city, self.property_name, storage_root)
        if self.unit_id is not None:
            if not self.unit_number:
                raise ValidationException(
                    "unitNumber is required for unit photos",
                    details={"field": "unitNumber"},
                )
            return resolve_unit_path(root, self.unit_number)
        if not self.category:
            raise ValidationException(
                "type is required for property photos", details={"field": "type"}
            )
        return resolve_category_path(root, self.category)


@dataclass(frozen=True)
class UploadResult:
    filename: str
    original_name: str
    size: int
    url: str


@dataclass(frozen=True)
class UploadError:
    original_name: str
    reason: str
    error: str


@dataclass
class UploadBatch:
    files: List[UploadResult] = field(default_factory=list)
    errors: List[UploadError] = field(default_factory=list)


@dataclass
class PhotoTaxonomy:
    """All photos of a property, rebuilt from directory listings."""

    exterior: List[str] = field(default_factory=list)
    interior: List[str] = field(default_factory=list)
    amenities: List[str] = field(default_factory=list)
    units: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exterior": self.exterior,
            "interior": self.interior,
            "amenities": self.amenities,
            "units": self.units,
        }


class PhotoService:
    """
    Upload Processor, Photo Reader and Photo Deleter in one place.

    Attributes:
        storage: Filesystem backend
        processor: Image normalizer
        max_files: Maximum files per upload batch
        max_bytes: Maximum size of one uploaded file
    """

    def __init__(
        self,
        storage: StorageManager,
        processor: ImageProcessor,
        max_files: int = 10,
        max_bytes: int = 20 * 1024 * 1024,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.processor = processor
        self.max_files = max_files
        self.max_bytes = max_bytes
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "PhotoService":
        """Build the service from application settings."""
        return cls(
            storage=StorageManager(
                media_root=settings.MEDIA_ROOT,
                storage_root=settings.PHOTO_STORAGE_ROOT,
            ),
            processor=ImageProcessor(
                max_width=settings.PHOTO_MAX_WIDTH,
                max_height=settings.PHOTO_MAX_HEIGHT,
                quality=settings.PHOTO_JPEG_QUALITY,
            ),
            max_files=settings.MAX_UPLOAD_FILES,
            max_bytes=settings.MAX_UPLOAD_BYTES,
        )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def validate_batch(self, files: Sequence[IncomingPhoto]) -> None:
        """
        Check request-level upload constraints.

        Raises:
            ValidationException: No files were sent
            PayloadTooLargeException: Too many files, or one file too large
            UnsupportedMediaTypeException: A file is not declared as an image
        """
        if not files:
            raise ValidationException("No files uploaded", details={"field": "photos"})

        if len(files) > self.max_files:
            raise PayloadTooLargeException(
                f"Too many files. Maximum {self.max_files} files per upload",
                details={"max_files": self.max_files, "received": len(files)},
            )

        for photo in files:
            if not photo.content_type or not photo.content_type.startswith("image/"):
                raise UnsupportedMediaTypeException(
                    f"File {photo.filename} is not an image. Only image files are allowed",
                    details={"filename": photo.filename, "content_type": photo.content_type},
                )
            if len(photo.data) > self.max_bytes:
                raise PayloadTooLargeException(
                    f"File {photo.filename} is too large. "
                    f"Maximum size: {self.max_bytes // (1024 * 1024)}MB",
                    details={"filename": photo.filename, "max_bytes": self.max_bytes},
                )

    def build_filename(self, original_name: str) -> str:
        """``{unix timestamp ms}-{sanitized stem}.jpg``"""
        timestamp = int(self._clock() * 1000)
        return f"{timestamp}-{sanitize_filename_stem(original_name)}.jpg"

    def process_upload(
        self,
        files: Sequence[IncomingPhoto],
        destination: PhotoDestination,
    ) -> UploadBatch:
        """
        Normalize and store a batch of uploaded photos.

        Args:
            files: Uploaded files
            destination: Property/category or unit the photos belong to

        Returns:
            UploadBatch with one UploadResult per stored file and one
            UploadError per file that could not be stored

        Raises:
            ValidationException / PayloadTooLargeException /
            UnsupportedMediaTypeException: Request rejected, nothing written
            UnsupportedMediaTypeException: No file could be decoded
            StorageWriteException: Nothing stored and at least one write failed
        """
        self.validate_batch(files)
        relative_dir = destination.relative_dir(str(self.storage.storage_root))

        logger.info(
            f"Uploading {len(files)} photo(s) for property {destination.property_id} "
            f"to {relative_dir}"
        )

        batch = UploadBatch()
        for photo in files:
            try:
                normalized = self.processor.normalize(photo.data)
            except ImageProcessingError as e:
                logger.warning(f"Rejected upload {photo.filename!r}: {e}")
                batch.errors.append(UploadError(photo.filename, INVALID_IMAGE, "Invalid image file"))
                continue

            try:
                relative_path, size = self.storage.write_file(
                    relative_dir, self.build_filename(photo.filename), normalized.data
                )
            except StorageError as e:
                logger.error(f"Failed to store upload {photo.filename!r}: {e}")
                batch.errors.append(UploadError(photo.filename, WRITE_FAILED, "Failed to store file"))
                continue

            batch.files.append(
                UploadResult(
                    filename=relative_path.name,
                    original_name=photo.filename,
                    size=size,
                    url=public_url(relative_path),
                )
            )

        if not batch.files:
            details = {"errors": [asdict(e) for e in batch.errors]}
            if any(e.reason == WRITE_FAILED for e in batch.errors):
                raise StorageWriteException(details=details)
            raise UnsupportedMediaTypeException(
                "None of the uploaded files could be read as an image", details=details
            )

        return batch

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _list_urls(self, relative_dir: PurePosixPath) -> List[str]:
        return [public_url(relative_dir / name) for name in self.storage.list_images(relative_dir)]

    def read_taxonomy(self, prop: PropertyLike, units: Sequence[UnitLike]) -> PhotoTaxonomy:
        """
        Rebuild a property's photo taxonomy from the filesystem.

        Missing directories give empty lists, so the result always has every
        category and one entry per current unit. Properties and units whose
        names cannot be slugified have no directory and get empty lists.
        """
        taxonomy = PhotoTaxonomy()
        try:
            root = resolve_property_root(prop.city, prop.name, str(self.storage.storage_root))
        except ValidationException:
            # No letters or digits in city or name: nothing can have been uploaded
            taxonomy.units = {str(unit.id): [] for unit in units}
            return taxonomy

        for category in PHOTO_CATEGORIES:
            setattr(taxonomy, category, self._list_urls(resolve_category_path(root, category)))

        for unit in units:
            try:
                unit_dir = resolve_unit_path(root, unit.unit_number)
            except ValidationException:
                taxonomy.units[str(unit.id)] = []
                continue
            taxonomy.units[str(unit.id)] = self._list_urls(unit_dir)

        return taxonomy

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_photo(self, photo_path: Optional[str]) -> PurePosixPath:
        """
        Delete one previously issued photo.

        Args:
            photo_path: Public URL or storage-relative path of the photo

        Returns:
            The relative path that was removed

        Raises:
            ValidationException: Empty or malformed path
            ForbiddenException: Path resolves outside the storage root
            NotFoundException: No such photo
        """
        if not photo_path or not photo_path.strip():
            raise ValidationException("Photo path is required", details={"field": "path"})

        try:
            relative_path = self.storage.resolve_managed_path(photo_path)
        except PathOutsideStorageError:
            logger.warning(f"Refused delete outside storage root: {photo_path!r}")
            raise ForbiddenException("Photo path is outside photo storage")
        except InvalidPathError as e:
            raise ValidationException("Invalid photo path", details={"reason": str(e)})

        try:
            deleted = self.storage.delete_file(relative_path)
        except StorageError as e:
            logger.error(f"Failed to delete {relative_path}: {e}")
            raise StorageWriteException("Failed to delete photo")

        if not deleted:
            raise NotFoundException("Photo not found", details={"path": photo_path})
        return relative_path

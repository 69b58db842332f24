"""
Path Resolver for property photos.

Maps property/unit identity onto the on-disk layout that the bulk import
scripts and the static file mount both depend on::

    photos/properties/
    └── atlanta-the-loft-district/         # {city-slug}-{property-slug}
        ├── property-exterior/
        │   └── 1718000000000-front.jpg    # {timestamp ms}-{name}.jpg
        ├── property-interior/
        ├── property-amenities/
        └── unit-3b/                       # unit-{unit-number-slug}

All functions here are pure string composition on ``PurePosixPath`` values
relative to the media root; nothing touches the filesystem. The public URL
of a stored photo is the same relative path with a leading slash.
"""

from pathlib import PurePosixPath
from typing import Tuple

from urbanliving.core.exceptions import ValidationException
from urbanliving.services.naming import slugify

DEFAULT_STORAGE_ROOT = "photos/properties"

PHOTO_CATEGORIES: Tuple[str, ...] = ("exterior", "interior", "amenities")
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})

CATEGORY_DIR_PREFIX = "property-"
UNIT_DIR_PREFIX = "unit-"


def _require_slug(value: str, field: str) -> str:
    slug = slugify(value)
    if not slug:
        raise ValidationException(
            f"{field} must contain at least one letter or digit",
            details={"field": field, "value": value},
        )
    return slug


def resolve_property_root(
    city: str,
    property_name: str,
    storage_root: str = DEFAULT_STORAGE_ROOT,
) -> PurePosixPath:
    """Resolve the directory holding every photo of a property.

    Args:
        city: City as stored on the property.
        property_name: Property name as stored on the property.
        storage_root: Storage root relative to the media root.

    Returns:
        ``{storage_root}/{slugify(city)}-{slugify(property_name)}``

    Raises:
        ValidationException: If either part slugifies to nothing.
    """
    city_slug = _require_slug(city, "city")
    name_slug = _require_slug(property_name, "propertyName")
    return PurePosixPath(storage_root) / f"{city_slug}-{name_slug}"


def resolve_category_path(root: PurePosixPath, category: str) -> PurePosixPath:
    """Append the directory for a property-level category.

    Raises:
        ValidationException: If ``category`` is not one of PHOTO_CATEGORIES.
    """
    if category not in PHOTO_CATEGORIES:
        raise ValidationException(
            f"Invalid photo type '{category}'. Allowed: {', '.join(PHOTO_CATEGORIES)}",
            details={"field": "type", "value": category},
        )
    return root / f"{CATEGORY_DIR_PREFIX}{category}"


def resolve_unit_path(root: PurePosixPath, unit_number: str) -> PurePosixPath:
    """Append the directory for a unit's photos."""
    return root / f"{UNIT_DIR_PREFIX}{_require_slug(unit_number, 'unitNumber')}"


def public_url(relative_path: PurePosixPath) -> str:
    """Public URL of a stored file; the static mount mirrors the media root."""
    return "/" + str(relative_path).lstrip("/")


def is_image_filename(filename: str) -> bool:
    """Whether a directory entry counts as a photo when listing."""
    return PurePosixPath(filename).suffix.lower() in IMAGE_EXTENSIONS

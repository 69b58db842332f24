"""Tests for the photo path resolver."""

from pathlib import PurePosixPath

import pytest

from urbanliving.core.exceptions import ValidationException
from urbanliving.services.photo_paths import (
    is_image_filename,
    public_url,
    resolve_category_path,
    resolve_property_root,
    resolve_unit_path,
)

pytestmark = pytest.mark.unit


def test_property_root_layout():
    root = resolve_property_root("Atlanta", "The Loft District")
    assert root == PurePosixPath("photos/properties/atlanta-the-loft-district")


def test_property_root_is_stable_for_same_identity():
    assert resolve_property_root("Atlanta", "The Loft District") == resolve_property_root(
        "  ATLANTA ", "the loft   district!"
    )


def test_property_root_custom_storage_root():
    root = resolve_property_root("Decatur", "Oak Grove", storage_root="media/listings")
    assert str(root) == "media/listings/decatur-oak-grove"


@pytest.mark.parametrize("city, name", [("", "Loft"), ("Atlanta", "!!!")])
def test_property_root_rejects_empty_slugs(city, name):
    with pytest.raises(ValidationException):
        resolve_property_root(city, name)


@pytest.mark.parametrize("category", ["exterior", "interior", "amenities"])
def test_category_paths(category):
    root = resolve_property_root("Atlanta", "The Loft District")
    assert resolve_category_path(root, category) == root / f"property-{category}"


@pytest.mark.parametrize("category", ["roof", "", "Exterior", "../exterior"])
def test_invalid_category_rejected(category):
    root = resolve_property_root("Atlanta", "The Loft District")
    with pytest.raises(ValidationException) as exc_info:
        resolve_category_path(root, category)
    assert exc_info.value.status_code == 400


def test_unit_path():
    root = resolve_property_root("Atlanta", "The Loft District")
    assert str(resolve_unit_path(root, "3B")) == "photos/properties/atlanta-the-loft-district/unit-3b"


def test_unit_path_rejects_unsluggable_number():
    root = resolve_property_root("Atlanta", "The Loft District")
    with pytest.raises(ValidationException):
        resolve_unit_path(root, "#")


def test_public_url():
    path = PurePosixPath("photos/properties/atlanta-x/property-exterior/1-a.jpg")
    assert public_url(path) == "/photos/properties/atlanta-x/property-exterior/1-a.jpg"


@pytest.mark.parametrize(
    "name, expected",
    [("a.jpg", True), ("a.JPEG", True), ("a.png", True), ("a.webp", True),
     ("a.gif", False), ("notes.txt", False), (".1234.part", False)],
)
def test_is_image_filename(name, expected):
    assert is_image_filename(name) is expected

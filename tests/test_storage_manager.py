"""Tests for the filesystem storage backend."""

import errno
import os
from pathlib import PurePosixPath
from unittest.mock import patch

import pytest

from urbanliving.services.storage_manager import (
    DiskSpaceError,
    InvalidPathError,
    PathOutsideStorageError,
    StorageManager,
)

pytestmark = pytest.mark.unit

PHOTO_DIR = PurePosixPath("photos/properties/atlanta-the-loft/property-exterior")


@pytest.fixture
def storage(tmp_path):
    return StorageManager(media_root=tmp_path)


def test_storage_root_created(tmp_path, storage):
    assert (tmp_path / "photos" / "properties").is_dir()
    assert storage.storage_path == (tmp_path / "photos" / "properties").resolve()


def test_write_creates_directories(tmp_path, storage):
    relative_path, size = storage.write_file(PHOTO_DIR, "1-front.jpg", b"abc")

    assert relative_path == PHOTO_DIR / "1-front.jpg"
    assert size == 3
    assert (tmp_path / PHOTO_DIR / "1-front.jpg").read_bytes() == b"abc"


def test_write_leaves_no_temp_files(tmp_path, storage):
    storage.write_file(PHOTO_DIR, "1-front.jpg", b"abc")
    assert os.listdir(tmp_path / PHOTO_DIR) == ["1-front.jpg"]


def test_name_collision_gets_suffix(storage):
    first, _ = storage.write_file(PHOTO_DIR, "1-front.jpg", b"one")
    second, _ = storage.write_file(PHOTO_DIR, "1-front.jpg", b"two")
    third, _ = storage.write_file(PHOTO_DIR, "1-front.jpg", b"three")

    assert first.name == "1-front.jpg"
    assert second.name == "1-front-1.jpg"
    assert third.name == "1-front-2.jpg"
    assert storage.absolute(first).read_bytes() == b"one"


def test_disk_full_raises_disk_space_error(storage):
    with patch("urbanliving.services.storage_manager.os.link",
               side_effect=OSError(errno.ENOSPC, "No space left on device")):
        with pytest.raises(DiskSpaceError):
            storage.write_file(PHOTO_DIR, "1-front.jpg", b"abc")


def test_list_images_sorted_and_filtered(tmp_path, storage):
    directory = tmp_path / PHOTO_DIR
    directory.mkdir(parents=True)
    for name in ["200-b.jpg", "100-a.PNG", "notes.txt", ".x.part", "300-c.webp"]:
        (directory / name).write_bytes(b"x")
    (directory / "400-dir.jpg").mkdir()

    assert storage.list_images(PHOTO_DIR) == ["100-a.PNG", "200-b.jpg", "300-c.webp"]


def test_list_images_missing_directory(storage):
    assert storage.list_images(PHOTO_DIR) == []


class TestResolveManagedPath:

    @pytest.mark.parametrize(
        "photo_path",
        [
            "/photos/properties/atlanta-the-loft/property-exterior/1-a.jpg",
            "photos/properties/atlanta-the-loft/property-exterior/1-a.jpg",
            "atlanta-the-loft/property-exterior/1-a.jpg",
        ],
    )
    def test_accepted_forms(self, storage, photo_path):
        assert storage.resolve_managed_path(photo_path) == PHOTO_DIR / "1-a.jpg"

    @pytest.mark.parametrize(
        "photo_path",
        [
            "../../etc/passwd",
            "/photos/properties/../../secret.txt",
            "/photos/properties/atlanta/../../..",
            "/photos/properties/",
            "..\\..\\boot.ini",
        ],
    )
    def test_escapes_rejected(self, storage, photo_path):
        with pytest.raises(PathOutsideStorageError):
            storage.resolve_managed_path(photo_path)

    def test_symlink_out_of_root_rejected(self, tmp_path, storage):
        outside = tmp_path / "outside.jpg"
        outside.write_bytes(b"x")
        (storage.storage_path / "link.jpg").symlink_to(outside)

        with pytest.raises(PathOutsideStorageError):
            storage.resolve_managed_path("/photos/properties/link.jpg")

    def test_nul_character_rejected(self, storage):
        with pytest.raises(InvalidPathError):
            storage.resolve_managed_path("/photos/properties/a\x00.jpg")


def test_delete_file(tmp_path, storage):
    relative_path, _ = storage.write_file(PHOTO_DIR, "1-front.jpg", b"abc")

    assert storage.delete_file(relative_path) is True
    assert not (tmp_path / relative_path).exists()
    # Directory is kept even though it is now empty
    assert (tmp_path / PHOTO_DIR).is_dir()
    assert storage.delete_file(relative_path) is False


def test_delete_directory_is_not_a_file(storage):
    storage.ensure_directory(PHOTO_DIR)
    assert storage.delete_file(PHOTO_DIR) is False

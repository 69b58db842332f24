"""
Storage Manager for Property Photos
===================================

This module owns every filesystem operation on stored photos: creating
category directories, writing normalized images, listing a directory's
photos and deleting a single photo.

Why a Storage Manager?
---------------------
Centralized file storage management provides:
1. One place that knows the media root on disk
2. Atomic, no-clobber writes with proper error handling
3. Path confinement: nothing outside the storage root is ever touched
4. A seam for a future object-storage backend (the callers only deal in
   relative paths and URL lists, never in ``open()``)

The directory layout itself is decided by ``photo_paths``; this class only
maps those relative paths onto ``media_root``.

Example Usage:
-------------
```python
storage = StorageManager(media_root="/srv/urbanliving")

rel_dir = resolve_category_path(resolve_property_root("Atlanta", "The Loft"), "exterior")
rel_path, size = storage.write_file(rel_dir, "1718000000000-front.jpg", jpeg_bytes)
storage.list_images(rel_dir)       # ['1718000000000-front.jpg']
storage.delete_file(rel_path)      # True
```
"""

import errno
import logging
import os
import uuid
from pathlib import Path, PurePosixPath
from typing import List, Tuple, Union

from urbanliving.services.photo_paths import DEFAULT_STORAGE_ROOT, is_image_filename

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for storage-related errors."""
    pass


class DiskSpaceError(StorageError):
    """Raised when there's insufficient disk space."""
    pass


class PathOutsideStorageError(StorageError):
    """Raised when a requested path resolves outside the storage root."""
    pass


class InvalidPathError(StorageError):
    """Raised when a requested path cannot name a file (e.g. NUL characters)."""
    pass


class StorageManager:
    """
    Maps relative photo paths onto the local filesystem.

    Attributes:
        media_root: Directory on disk that relative paths are joined onto
        storage_root: Relative storage root (``photos/properties``)
        storage_path: Absolute, canonical storage root on disk

    Thread Safety:
        Directory creation is idempotent and writes never overwrite an
        existing photo, so concurrent uploads are safe without locking.
    """

    def __init__(
        self,
        media_root: Union[str, Path] = ".",
        storage_root: str = DEFAULT_STORAGE_ROOT,
    ) -> None:
        """
        Initialize the storage manager.

        Args:
            media_root: Directory holding the storage root. Created if missing.
            storage_root: Storage root relative to ``media_root``.

        Raises:
            StorageError: If the storage root cannot be created.
        """
        self.media_root = Path(media_root)
        self.storage_root = PurePosixPath(storage_root.strip("/"))
        self.storage_path = (self.media_root / self.storage_root).resolve()

        try:
            self.storage_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise StorageError(
                f"Cannot create storage directory at {self.storage_path}. "
                f"Check permissions. Error: {e}"
            )
        except OSError as e:
            raise StorageError(f"Failed to create storage directory: {e}")

        logger.info(f"Photo storage initialized at: {self.storage_path}")

    def absolute(self, relative_path: PurePosixPath) -> Path:
        """Absolute on-disk location of a path relative to the media root."""
        return self.media_root.resolve() / Path(*relative_path.parts)

    def ensure_directory(self, relative_dir: PurePosixPath) -> Path:
        """
        Create a photo directory (and parents) if absent.

        Idempotent: racing uploads to the same directory are fine.

        Raises:
            StorageError: If the directory cannot be created.
        """
        directory = self.absolute(relative_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directory {relative_dir}: {e}")
        return directory

    def write_file(
        self,
        relative_dir: PurePosixPath,
        filename: str,
        data: bytes,
    ) -> Tuple[PurePosixPath, int]:
        """
        Write bytes under ``relative_dir`` without clobbering existing photos.

        The bytes go to a hidden temp file first, which is then hard-linked
        to its final name. Readers listing the directory therefore never see
        a half-written photo, and ``os.link`` refuses to replace an existing
        file, so a same-millisecond upload with the same name gets a ``-1``,
        ``-2``... suffix instead of overwriting.

        Args:
            relative_dir: Destination directory relative to the media root
            filename: Desired filename (``{timestamp}-{stem}.jpg``)
            data: File contents

        Returns:
            Tuple of (relative path actually written, size in bytes)

        Raises:
            DiskSpaceError: If the disk is full
            StorageError: For any other I/O failure
        """
        directory = self.ensure_directory(relative_dir)
        stem, suffix = os.path.splitext(filename)
        temp_path = directory / f".{uuid.uuid4().hex}.part"

        try:
            with open(temp_path, "wb") as f:
                f.write(data)

            attempt = 0
            while True:
                candidate = filename if attempt == 0 else f"{stem}-{attempt}{suffix}"
                try:
                    os.link(temp_path, directory / candidate)
                    break
                except FileExistsError:
                    attempt += 1
                    logger.debug(f"Name collision on {candidate}, retrying")

        except OSError as e:
            if e.errno == errno.ENOSPC:
                raise DiskSpaceError(f"Disk full, cannot save: {relative_dir / filename}")
            raise StorageError(f"Failed to save photo: {e}")
        finally:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass

        relative_path = relative_dir / candidate
        logger.info(f"Saved photo: {relative_path} ({len(data)} bytes)")
        return relative_path, len(data)

    def list_images(self, relative_dir: PurePosixPath) -> List[str]:
        """
        List photo filenames in a directory, oldest first.

        A missing directory is an empty listing, not an error. Entries are
        filtered by image extension and sorted by name, which orders them by
        the millisecond timestamp prefix.
        """
        directory = self.absolute(relative_dir)
        try:
            entries = os.listdir(directory)
        except FileNotFoundError:
            return []
        except NotADirectoryError:
            logger.warning(f"Expected a directory at {relative_dir}")
            return []

        return sorted(
            name for name in entries
            if is_image_filename(name) and (directory / name).is_file()
        )

    def resolve_managed_path(self, photo_path: str) -> PurePosixPath:
        """
        Map a photo URL or path onto a canonical path inside the storage root.

        Accepted forms all name the same file::

            /photos/properties/atlanta-the-loft/property-exterior/1-a.jpg
            photos/properties/atlanta-the-loft/property-exterior/1-a.jpg
            atlanta-the-loft/property-exterior/1-a.jpg

        Args:
            photo_path: Path as previously issued by the upload or read APIs

        Returns:
            PurePosixPath relative to the media root

        Raises:
            PathOutsideStorageError: If the canonical path escapes the
                storage root (``..`` segments, symlinks, absolute paths)
            InvalidPathError: If the path contains characters no filename
                can hold
        """
        cleaned = photo_path.strip().replace("\\", "/").lstrip("/")
        root_prefix = f"{self.storage_root}/"
        if cleaned.startswith(root_prefix):
            cleaned = cleaned[len(root_prefix):]

        if "\x00" in cleaned:
            raise InvalidPathError("Path contains a NUL character")
        try:
            candidate = (self.storage_path / cleaned).resolve()
        except (ValueError, OSError) as e:
            raise InvalidPathError(f"Invalid path: {e}")
        if candidate == self.storage_path or not candidate.is_relative_to(self.storage_path):
            raise PathOutsideStorageError(f"Path escapes storage root: {photo_path}")

        return self.storage_root / PurePosixPath(*candidate.relative_to(self.storage_path).parts)

    def delete_file(self, relative_path: PurePosixPath) -> bool:
        """
        Delete a single photo.

        Directories are never removed, even when this empties them.

        Returns:
            True if the file was deleted, False if no regular file exists there.

        Raises:
            StorageError: If deletion fails (permissions, etc.)
        """
        file_path = self.absolute(relative_path)

        if not file_path.is_file():
            logger.warning(f"File not found for deletion: {relative_path}")
            return False

        try:
            file_path.unlink()
        except FileNotFoundError:
            # Lost a race with another delete
            return False
        except PermissionError:
            raise StorageError(f"Permission denied: cannot delete {relative_path}")
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}")

        logger.info(f"Deleted photo: {relative_path}")
        return True

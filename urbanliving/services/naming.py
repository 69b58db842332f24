"""
Identity Normalizer
===================

Turns human-entered strings (property names, cities, unit numbers,
uploaded file names) into filesystem and URL safe tokens.

``slugify`` is the only place in the system that derives photo directory
names. Clients always send raw names; both the upload path and the read
path call this function on the stored Property/Unit values, so the two can
never disagree about where a property's photos live.

Examples:
    >>> slugify("The Loft District")
    'the-loft-district'
    >>> slugify("Atlanta")
    'atlanta'
    >>> slugify("3B")
    '3b'
    >>> slugify("  ")
    ''
"""

import re
from pathlib import PurePosixPath, PureWindowsPath

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_NON_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")

# Keeps generated filenames comfortably under the 255 byte filesystem limit
MAX_STEM_LENGTH = 100
DEFAULT_STEM = "photo"


def slugify(value: str) -> str:
    """
    Derive a lowercase, hyphen-delimited slug.

    Every run of characters outside ``[a-z0-9]`` (after lowercasing)
    collapses into a single hyphen; leading and trailing hyphens are
    stripped. Empty or whitespace-only input yields ``""``.

    Args:
        value: Human-entered text

    Returns:
        str: The slug, possibly empty
    """
    if not value:
        return ""
    return _NON_SLUG_CHARS.sub("-", value.lower()).strip("-")


def sanitize_filename_stem(filename: str) -> str:
    """
    Sanitize the stem of an uploaded filename for use in a stored name.

    Path components (either separator style) and the extension are dropped,
    ``..`` sequences removed, and any character outside
    ``[A-Za-z0-9._-]`` replaced with ``_``.

    Args:
        filename: Client-supplied filename, e.g. ``"../My Photo (1).PNG"``

    Returns:
        str: Safe stem, e.g. ``"My_Photo__1_"``; ``"photo"`` if nothing is left

    Example:
        >>> sanitize_filename_stem("../../etc/passwd")
        'passwd'
        >>> sanitize_filename_stem("kitchen view.png")
        'kitchen_view'
    """
    if not filename:
        return DEFAULT_STEM

    # Strip any directory part, whichever separator the client used
    name = PureWindowsPath(PurePosixPath(filename).name).name
    name = name.replace("\x00", "")

    stem = PurePosixPath(name).stem if "." in name.lstrip(".") else name
    stem = stem.replace("..", "")
    stem = _NON_FILENAME_CHARS.sub("_", stem)
    stem = re.sub(r"\.{2,}", ".", stem).strip(".")

    stem = stem[:MAX_STEM_LENGTH]
    if not stem or set(stem) <= {"_", "-"}:
        return DEFAULT_STEM
    return stem

"""Tests for slug and filename normalization."""

import pytest

from urbanliving.services.naming import sanitize_filename_stem, slugify

pytestmark = pytest.mark.unit


class TestSlugify:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("The Loft District", "the-loft-district"),
            ("Atlanta", "atlanta"),
            ("3B", "3b"),
            ("St. Mary's  Court", "st-mary-s-court"),
            ("Unit #12-A", "unit-12-a"),
            ("  Midtown  ", "midtown"),
            ("Café Lofts", "caf-lofts"),
        ],
    )
    def test_known_values(self, value, expected):
        assert slugify(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "!!!", "---"])
    def test_nothing_sluggable_gives_empty_string(self, value):
        assert slugify(value) == ""

    def test_idempotent(self):
        once = slugify("The Loft -- District!")
        assert slugify(once) == once

    def test_no_leading_trailing_or_double_hyphens(self):
        slug = slugify("--Hello,,  World--")
        assert slug == "hello-world"
        assert "--" not in slug


class TestSanitizeFilenameStem:

    def test_spaces_and_extension(self):
        assert sanitize_filename_stem("kitchen view.png") == "kitchen_view"

    def test_directory_components_dropped(self):
        assert sanitize_filename_stem("../../etc/passwd") == "passwd"
        assert sanitize_filename_stem("C:\\Users\\me\\front door.JPG") == "front_door"

    def test_special_characters_replaced(self):
        assert sanitize_filename_stem("My Photo (1).jpeg") == "My_Photo__1_"

    def test_empty_falls_back(self):
        assert sanitize_filename_stem("") == "photo"
        assert sanitize_filename_stem("...") == "photo"

    def test_truncated(self):
        assert len(sanitize_filename_stem("a" * 500 + ".jpg")) == 100

"""Unit tests for classical_admin/utils/formatting.py."""

import sys
from pathlib import Path

# Add parent dir to path so classical_admin is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classical_admin.utils.formatting import (
    clean_text,
    extract_year,
    format_life,
    initials,
    sanitize_key,
)


class TestExtractYear:
    """Tests for extract_year() function."""

    def test_integer_year(self):
        """Integer year should be returned as-is."""
        assert extract_year(1685) == 1685

    def test_string_year(self):
        """String year should be converted to integer."""
        assert extract_year("1750") == 1750
        assert extract_year(" 1932 ") == 1932

    def test_iso_date(self):
        """ISO date should extract year."""
        assert extract_year("1685-03-31") == 1685

    def test_three_digit_year(self):
        """Early-music years have three digits."""
        assert extract_year("998") == 998

    def test_empty_values(self):
        """None, blank and bool inputs should return None."""
        assert extract_year(None) is None
        assert extract_year("") is None
        assert extract_year("   ") is None
        assert extract_year(True) is None

    def test_invalid_string(self):
        """Invalid string should return None."""
        assert extract_year("baroque") is None
        assert extract_year("17th century") is None


class TestCleanText:
    """Tests for clean_text() function."""

    def test_trims(self):
        assert clean_text("  German ") == "German"

    def test_blank_is_none(self):
        assert clean_text("   ") is None
        assert clean_text("") is None
        assert clean_text(None) is None


class TestFormatLife:
    """Tests for format_life() function."""

    def test_full_span(self):
        """Both years show the age at death."""
        assert format_life(1685, 1750) == "1685 - 1750 (65)"

    def test_living(self):
        assert format_life(1957, None) == "1957 - ?"

    def test_unknown_birth(self):
        assert format_life(None, 1600) == "? - 1600"

    def test_unknown(self):
        assert format_life(None, None) == "-"


class TestInitials:
    """Tests for initials() function."""

    def test_first_and_last(self):
        assert initials("Johann Sebastian Bach") == "JB"

    def test_single_word(self):
        assert initials("Bach") == "BA"

    def test_empty(self):
        assert initials("") == ""


class TestSanitizeKey:
    """Tests for sanitize_key() function."""

    def test_spaces_to_dashes(self):
        """Spaces should be converted to dashes."""
        assert sanitize_key("Goldberg Variations") == "Goldberg-Variations"

    def test_special_characters_removed(self):
        """Special characters should be removed."""
        assert sanitize_key("Dvořák: Symphony No. 9") == "Dvok-Symphony-No.-9"

    def test_multiple_dashes_collapsed(self):
        """Multiple consecutive dashes should collapse."""
        assert sanitize_key("Bach -- BWV 988") == "Bach-BWV-988"

    def test_empty_uses_fallback(self):
        """Empty string should return fallback."""
        assert sanitize_key("") == "Unknown"
        assert sanitize_key("???", "image") == "image"

"""Tests for the numeric major.minor.patch comparator."""

import pytest

from errors import InvalidFormatError, NonNumericSegmentError, ParseError
from versioning.semantic import SemanticVersion


class TestParse:
    """Parsing of one to three numeric segments."""

    def test_full_triple(self):
        assert SemanticVersion.parse("1.2.3") == SemanticVersion(1, 2, 3)

    def test_missing_segments_default_to_zero(self):
        assert SemanticVersion.parse("4") == SemanticVersion(4, 0, 0)
        assert SemanticVersion.parse("4.5") == SemanticVersion(4, 5, 0)

    def test_leading_zeros_are_numeric(self):
        assert SemanticVersion.parse("01.002.0") == SemanticVersion(1, 2, 0)

    def test_too_many_segments(self):
        with pytest.raises(InvalidFormatError):
            SemanticVersion.parse("1.2.3.4")

    @pytest.mark.parametrize("text", ["1.0.0rc1", "a.b.c", "", "1..2", "-1.0.0", "+1.0", " 1.0"])
    def test_non_numeric_segment(self, text):
        with pytest.raises(NonNumericSegmentError):
            SemanticVersion.parse(text)

    def test_errors_are_parse_errors(self):
        with pytest.raises(ParseError):
            SemanticVersion.parse("x")

    def test_str_is_full_triple(self):
        assert str(SemanticVersion.parse("1.0")) == "1.0.0"


class TestOrdering:
    """Comparison is numeric, not lexicographic."""

    def test_numeric_not_lexicographic(self):
        assert SemanticVersion.parse("9") < SemanticVersion.parse("10")
        assert not SemanticVersion.parse("2.0.0") > SemanticVersion.parse("10.0.0")

    def test_minor_and_patch_break_ties(self):
        assert SemanticVersion.parse("1.2.0") > SemanticVersion.parse("1.1.9")
        assert SemanticVersion.parse("1.1.10") > SemanticVersion.parse("1.1.9")

    def test_equal_after_padding(self):
        assert SemanticVersion.parse("1.0") == SemanticVersion.parse("1.0.0")

    def test_sorting(self):
        versions = [SemanticVersion.parse(v) for v in ["10.0.0", "2.0.0", "2.0.10", "2.0.9"]]
        assert [str(v) for v in sorted(versions)] == ["2.0.0", "2.0.9", "2.0.10", "10.0.0"]

"""
Unit tests for core/coercion.py.

Tests numeric text parsing and the issues it records.
"""

import pytest
from decimal import Decimal

from cabinkit.core.coercion import parse_number, coerce_number
from cabinkit.errors.taxonomy import ErrorCode, ErrorSeverity


class TestParseNumber:
    """Test parse_number function."""

    @pytest.mark.parametrize("text,expected", [
        ("24", 24.0),
        ("12.5", 12.5),
        (" 7 ", 7.0),
        (".5", 0.5),
        ("-3", -3.0),
        ("+4", 4.0),
        ("1e2", 100.0),
    ])
    def test_clean_text(self, text, expected):
        """Test well-formed numeric text parses fully."""
        assert parse_number(text) == expected

    def test_leading_prefix_is_kept(self):
        """Test trailing junk is dropped after the numeric prefix."""
        assert parse_number("12abc") == 12.0
        assert parse_number("12.") == 12.0
        assert parse_number("20 ft") == 20.0

    @pytest.mark.parametrize("value", ["notanumber", "abc", "", "   ", "ft 20", "-", "."])
    def test_unparseable_text_is_zero(self, value):
        """Test text without a numeric prefix falls back to 0."""
        assert parse_number(value) == 0.0

    def test_numbers_pass_through(self):
        """Test numeric values are converted to float."""
        assert parse_number(30) == 30.0
        assert parse_number(8.5) == 8.5
        assert parse_number(Decimal("24.00")) == 24.0

    def test_non_finite_is_zero(self):
        """Test infinities and NaN fall back to 0."""
        assert parse_number(float("nan")) == 0.0
        assert parse_number(float("inf")) == 0.0
        assert parse_number("1e999") == 0.0

    def test_other_types_are_zero(self):
        """Test None, booleans and containers fall back to 0."""
        assert parse_number(None) == 0.0
        assert parse_number(True) == 0.0
        assert parse_number([12]) == 0.0

    def test_never_raises(self):
        """Test odd input never raises."""
        for value in (object(), {"w": 1}, b"12", "\x00", "٣"):
            assert parse_number(value) == 0.0


class TestCoerceNumber:
    """Test coerce_number function."""

    def test_clean_value_no_issue(self):
        """Test clean input produces no issue."""
        value, issue = coerce_number("width", "24")
        assert value == 24.0
        assert issue is None

    def test_unparseable_issue(self):
        """Test unparseable input records an issue."""
        value, issue = coerce_number("width", "notanumber")
        assert value == 0.0
        assert issue.code == ErrorCode.INP_UNPARSEABLE
        assert issue.field_name == "width"
        assert issue.actual_value == "notanumber"
        assert issue.resolved_value == 0.0
        assert issue.recoverable

    def test_partial_parse_issue(self):
        """Test partial parse records an informational issue."""
        value, issue = coerce_number("length", "12abc")
        assert value == 12.0
        assert issue.code == ErrorCode.INP_PARTIAL_PARSE
        assert issue.severity == ErrorSeverity.INFO

    def test_non_finite_issue(self):
        """Test overflow records a non-finite issue."""
        value, issue = coerce_number("height", "1e999")
        assert value == 0.0
        assert issue.code == ErrorCode.INP_NON_FINITE

    def test_source_recorded(self):
        """Test the caller-supplied source is kept."""
        _, issue = coerce_number("width", "", source="project_store")
        assert issue.source == "project_store"

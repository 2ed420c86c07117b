"""
Unit tests for the metrics module.

Tests for attendance parsing, rounding and average formatting.
"""

from decimal import Decimal

import pytest

from attendance_dashboard.normalization.metrics import format_average, parse_metric, round_half_up


class TestParseMetric:
    """Tests for parse_metric."""

    def test_int(self):
        """Integers pass through as floats."""
        assert parse_metric(120) == 120.0

    def test_float(self):
        """Floats pass through."""
        assert parse_metric(12.5) == 12.5

    def test_decimal(self):
        """Decimals are converted."""
        assert parse_metric(Decimal("7")) == 7.0

    def test_thousands_separator_stripped(self):
        """Commas are thousands separators, not decimals."""
        assert parse_metric("1,250") == 1250.0

    def test_numeric_string(self):
        """Plain numeric strings parse."""
        assert parse_metric(" 85 ") == 85.0

    def test_overflowing_int_excluded(self):
        """Integers too large for a float are dropped, not raised."""
        assert parse_metric(10**400) is None

    @pytest.mark.parametrize("value", [None, "", "  ", "n/a", "12abc", True, [], float("inf")])
    def test_non_numeric_excluded(self, value):
        """Anything that is not a finite number yields None."""
        assert parse_metric(value) is None


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_half_rounds_up(self):
        """2.25 rounds to 2.3, not banker's 2.2."""
        assert round_half_up(2.25) == 2.3

    def test_one_decimal(self):
        """Repeating decimals are cut to one place."""
        assert round_half_up(100 / 3) == 33.3


class TestFormatAverage:
    """Tests for format_average."""

    def test_average(self):
        """Sum over count with one decimal."""
        assert format_average(300, 2) == "150.0"

    def test_no_values(self):
        """Zero count yields the marker."""
        assert format_average(0, 0) == "N/A"

    def test_custom_marker(self):
        """The marker is configurable."""
        assert format_average(0, 0, not_applicable="-") == "-"

"""
Unit tests for the row_parser module.

Tests for RowParser header skipping, padding and shape validation.
"""

import pytest

from attendance_dashboard.errors import TableShapeError
from attendance_dashboard.ingestion.row_parser import RowParser
from attendance_dashboard.schemas.dashboard_config import ColumnLayout


@pytest.fixture
def parser():
    """Parser with the default layout and one header row."""
    return RowParser(ColumnLayout(), header_rows=1)


class TestParseTable:
    """Tests for RowParser.parse_table."""

    def test_header_skipped_and_numbered(self, parser, make_table, make_row):
        """Data rows are numbered by their 1-based sheet position."""
        table = make_table(make_row(location="A"), make_row(location="B"))
        rows = parser.parse_table(table, table)

        assert [r.row_number for r in rows] == [2, 3]
        assert [r.location for r in rows] == ["A", "B"]

    def test_value_and_display_kept_apart(self, parser, make_table, make_row):
        """Values keep their type; display is text."""
        values = make_table(make_row(date=45354, attendance=1250))
        display = make_table(make_row(date="03-03-2024", attendance="1,250"))
        row = parser.parse_table(values, display)[0]

        assert row.value.date == 45354
        assert row.value.attendance == 1250
        assert row.display.date == "03-03-2024"
        assert row.display.attendance == "1,250"

    def test_short_rows_padded(self, parser):
        """Missing trailing cells read as empty."""
        values = [["h"], ["Sunday", "2024-03-03", "A"]]
        row = parser.parse_table(values, values)[0]

        assert row.value.end is None
        assert row.display.end == ""
        assert row.display.location == "A"

    def test_header_only(self, parser, make_table):
        """A table with only a header has no data rows."""
        table = make_table()
        assert parser.parse_table(table, table) == []

    def test_shape_mismatch(self, parser, make_table, make_row):
        """Value and display tables must have equal row counts."""
        values = make_table(make_row())
        with pytest.raises(TableShapeError):
            parser.parse_table(values, values[:1])

    def test_custom_layout(self):
        """Columns can be rearranged."""
        layout = ColumnLayout(day=2, location=0, date=1, attendance=3)
        parser = RowParser(layout, header_rows=0)
        row = parser.parse_row(1, ["A", "2024-03-03", "Sunday", 5], ["A", "03-03-2024", "Sunday", "5"])

        assert row.location == "A"
        assert row.day_label == "sunday"

"""
Unit tests for the pivot module.

Tests for PivotAggregator row order, first-write-wins, averages,
missing-data flags and empty bucket policies.
"""

import pytest

from attendance_dashboard.reporting.pivot import LocationAggregate, PivotAggregator
from attendance_dashboard.schemas.dashboard_config import EmptyBucketPolicy, WeekdayConfig
from attendance_dashboard.schemas.report import EventDetail


@pytest.fixture
def sunday_config():
    """Sunday with canonical order A, B."""
    return WeekdayConfig(
        labels=("Sunday",),
        location_order=("A", "B"),
        empty_bucket_policy=EmptyBucketPolicy.ENUMERATE_CANONICAL,
    )


@pytest.fixture
def aggregator(sunday_config):
    """Aggregator highlighting A."""
    return PivotAggregator(sunday_config, highlighted_locations={"A"}, name="sunday")


class TestLocationAggregate:
    """Tests for LocationAggregate."""

    def test_first_write_wins(self):
        """A second row for the same date key is ignored."""
        agg = LocationAggregate()
        assert agg.add_if_absent("03-03-2024", EventDetail(topic="first"), 10.0) is True
        assert agg.add_if_absent("03-03-2024", EventDetail(topic="second"), 90.0) is False
        assert agg.date_data["03-03-2024"].topic == "first"
        assert agg.metric_count == 1
        assert agg.average == 10.0

    def test_none_metric_fills_cell_only(self):
        """A row without attendance is stored but not averaged."""
        agg = LocationAggregate()
        agg.add_if_absent("03-03-2024", EventDetail(), None)
        assert "03-03-2024" in agg.date_data
        assert agg.average is None

    def test_lacks_any(self):
        """lacks_any is true when one key is absent."""
        agg = LocationAggregate()
        agg.add_if_absent("a", EventDetail(), 1.0)
        assert agg.lacks_any(["a", "b"]) is True
        assert agg.lacks_any(["a"]) is False


class TestPivotAggregator:
    """Tests for PivotAggregator.aggregate."""

    def test_average_and_missing_flags(self, aggregator, make_item):
        """A averages its two values; B has no value and misses a date."""
        items = [
            make_item("Sunday", "2024-03-03", "A", 100),
            make_item("Sunday", "2024-03-10", "A", 200),
            make_item("Sunday", "2024-03-03", "B", ""),
        ]
        result = aggregator.aggregate(items)

        assert result.sorted_dates == ["03-03-2024", "10-03-2024"]
        row_a, row_b = result.template_data
        assert row_a.location == "A"
        assert row_a.average == "150.0"
        assert row_a.average_value == 150.0
        assert row_a.is_missing_data is False
        assert row_b.location == "B"
        assert row_b.average == "N/A"
        assert row_b.average_value is None
        assert row_b.is_missing_data is True

    def test_dates_sorted_chronologically_across_years(self, aggregator, make_item):
        """30-12-2023 precedes 02-01-2024 even though it sorts later as text."""
        items = [
            make_item("Sunday", "2024-01-02", "A", 1),
            make_item("Sunday", "2023-12-30", "A", 1),
        ]
        result = aggregator.aggregate(items)
        assert result.sorted_dates == ["30-12-2023", "02-01-2024"]

    def test_duplicate_row_ignored(self, aggregator, make_item):
        """Only the first row for a location and date contributes."""
        items = [
            make_item("Sunday", "2024-03-03", "A", 100, topic="kept"),
            make_item("Sunday", "2024-03-03", "A", 500, topic="dropped"),
        ]
        row = aggregator.aggregate(items).get_row("A")
        assert row.date_data["03-03-2024"].topic == "kept"
        assert row.average == "100.0"

    def test_cell_uses_display_text(self, aggregator, make_item):
        """Cells carry the display string, not the raw value."""
        items = [make_item("Sunday", "2024-03-03", "A", 1250, display_attendance="1,250")]
        row = aggregator.aggregate(items).get_row("A")
        assert row.date_data["03-03-2024"].attendance == "1,250"
        assert row.average == "1250.0"

    def test_canonical_rows_always_present(self, aggregator, make_item):
        """Canonical locations without data still get a row."""
        result = aggregator.aggregate([make_item("Sunday", "2024-03-03", "A", 10)])
        assert result.locations == ["A", "B"]
        row_b = result.get_row("B")
        assert row_b.date_data == {}
        assert row_b.is_missing_data is True

    def test_extra_locations_sorted_after_canonical(self, aggregator, make_item):
        """Unknown locations follow the canonical block alphabetically."""
        items = [
            make_item("Sunday", "2024-03-03", "zeta", 1),
            make_item("Sunday", "2024-03-03", "Beta", 1),
            make_item("Sunday", "2024-03-03", "A", 1),
        ]
        result = aggregator.aggregate(items)
        assert result.locations == ["A", "B", "Beta", "zeta"]

    def test_extra_location_missing_flag(self, aggregator, make_item):
        """Extra locations are flagged when they lack a bucket date."""
        items = [
            make_item("Sunday", "2024-03-03", "A", 1),
            make_item("Sunday", "2024-03-10", "A", 1),
            make_item("Sunday", "2024-03-10", "X", 1),
        ]
        assert aggregator.aggregate(items).get_row("X").is_missing_data is True

    def test_highlighted(self, aggregator, make_item):
        """Highlighted locations are marked."""
        result = aggregator.aggregate([make_item("Sunday", "2024-03-03", "A", 1)])
        assert result.get_row("A").is_highlighted is True
        assert result.get_row("B").is_highlighted is False

    def test_duplicate_canonical_names_collapsed(self, make_item):
        """A location repeated in the order appears once."""
        config = WeekdayConfig(
            labels=("Sunday",),
            location_order=("A", "A", "B"),
            empty_bucket_policy=EmptyBucketPolicy.ENUMERATE_CANONICAL,
        )
        result = PivotAggregator(config).aggregate([make_item()])
        assert result.locations == ["A", "B"]


class TestEmptyBucketPolicy:
    """Tests for the empty bucket behaviour."""

    def test_enumerate_canonical(self, aggregator):
        """An empty bucket lists canonical locations without data."""
        result = aggregator.aggregate([])
        assert result.sorted_dates == []
        assert result.locations == ["A", "B"]
        assert all(row.average == "N/A" for row in result.template_data)
        assert not any(row.is_missing_data for row in result.template_data)

    def test_empty_result(self):
        """An empty bucket yields an empty pivot."""
        config = WeekdayConfig(labels=("Wednesday",), location_order=("A",))
        result = PivotAggregator(config).aggregate([])
        assert result.template_data == []
        assert result.sorted_dates == []

    def test_custom_not_applicable(self, sunday_config):
        """The no-value marker is configurable."""
        result = PivotAggregator(sunday_config, not_applicable="-").aggregate([])
        assert result.get_row("A").average == "-"

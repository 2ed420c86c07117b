"""
Pivot Aggregator.

Folds one weekday bucket into a location x date matrix:

    rows (location, date, details, attendance)
        -> LocationAggregate per location (first row per date wins)
        -> PivotResult (canonical locations first, then the rest A-Z)

Date keys are display strings (``dd-mm-yyyy`` by default) but are always
ordered by the ISO date they came from, never lexically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from attendance_dashboard.normalization.dates import to_display_key
from attendance_dashboard.normalization.metrics import format_average, parse_metric, round_half_up
from attendance_dashboard.schemas.dashboard_config import EmptyBucketPolicy, WeekdayConfig
from attendance_dashboard.schemas.report import EventDetail, LocationRow, PivotResult
from attendance_dashboard.schemas.rows import NormalizedItem

logger = logging.getLogger(__name__)


@dataclass
class LocationAggregate:
    """Per-location accumulator for one weekday bucket."""

    date_data: Dict[str, EventDetail] = field(default_factory=dict)
    metric_sum: float = 0.0
    metric_count: int = 0

    def add_if_absent(self, date_key: str, detail: EventDetail, metric: Optional[float]) -> bool:
        """
        Upsert-if-absent: only the first row for a date key is kept.

        The metric is accumulated together with the cell, so a later duplicate
        contributes neither content nor attendance. A None metric fills the
        cell but stays out of the average.

        Returns:
            True if the row was stored, False if the date key was taken
        """
        if date_key in self.date_data:
            return False
        self.date_data[date_key] = detail
        if metric is not None:
            self.metric_sum += metric
            self.metric_count += 1
        return True

    @property
    def average(self) -> Optional[float]:
        if self.metric_count == 0:
            return None
        return round_half_up(self.metric_sum / self.metric_count, 1)

    def lacks_any(self, date_keys: Iterable[str]) -> bool:
        return any(key not in self.date_data for key in date_keys)


class PivotAggregator:
    """Builds the PivotResult for one weekday bucket."""

    def __init__(
        self,
        weekday: WeekdayConfig,
        highlighted_locations: Iterable[str] = (),
        display_date_format: str = "%d-%m-%Y",
        not_applicable: str = "N/A",
        name: str = "weekday",
    ):
        self.weekday = weekday
        self.highlighted = frozenset(highlighted_locations)
        self.display_date_format = display_date_format
        self.not_applicable = not_applicable
        self.name = name
        # Duplicates in the configured order would repeat a location
        self.location_order: List[str] = list(dict.fromkeys(weekday.location_order))

    def aggregate(self, items: Sequence[NormalizedItem]) -> PivotResult:
        """
        Pivot a bucket.

        Args:
            items: Normalized rows of this weekday, already month-filtered

        Returns:
            PivotResult with one row per location and chronologically
            sorted date keys
        """
        if not items and self.weekday.empty_bucket_policy is EmptyBucketPolicy.EMPTY_RESULT:
            return PivotResult()

        aggregates: Dict[str, LocationAggregate] = {}
        # display key -> ISO date of its first occurrence
        date_sort_keys: Dict[str, str] = {}
        duplicates = 0

        for item in items:
            date_key = to_display_key(item.iso_date, self.display_date_format)
            date_sort_keys.setdefault(date_key, item.iso_date)

            aggregate = aggregates.setdefault(item.row.location, LocationAggregate())
            stored = aggregate.add_if_absent(
                date_key,
                EventDetail.from_display(item.row.display),
                parse_metric(item.row.value.attendance),
            )
            if not stored:
                duplicates += 1

        sorted_dates = sorted(date_sort_keys, key=date_sort_keys.__getitem__)
        if duplicates:
            logger.debug(f"{self.name}: ignored {duplicates} duplicate location/date rows")
        logger.info(f"{self.name}: sorted date keys {', '.join(sorted_dates) or '(none)'}")

        return PivotResult(
            template_data=self._build_rows(aggregates, sorted_dates),
            sorted_dates=sorted_dates,
        )

    def _build_rows(
        self,
        aggregates: Dict[str, LocationAggregate],
        sorted_dates: List[str],
    ) -> List[LocationRow]:
        rows: List[LocationRow] = []

        # Canonical locations are always present, with or without data
        for location in self.location_order:
            aggregate = aggregates.get(location)
            if aggregate is None:
                missing = bool(sorted_dates)
            else:
                missing = aggregate.lacks_any(sorted_dates)
            rows.append(self._row(location, aggregate, missing))

        canonical = set(self.location_order)
        extras = sorted(
            (loc for loc in aggregates if loc not in canonical),
            key=lambda loc: (loc.casefold(), loc),
        )
        for location in extras:
            aggregate = aggregates[location]
            rows.append(self._row(location, aggregate, aggregate.lacks_any(sorted_dates)))

        return rows

    def _row(
        self,
        location: str,
        aggregate: Optional[LocationAggregate],
        missing: bool,
    ) -> LocationRow:
        if aggregate is None:
            aggregate = LocationAggregate()
        return LocationRow(
            location=location,
            is_highlighted=location in self.highlighted,
            date_data=dict(aggregate.date_data),
            average=format_average(aggregate.metric_sum, aggregate.metric_count, self.not_applicable),
            average_value=aggregate.average,
            is_missing_data=missing,
        )

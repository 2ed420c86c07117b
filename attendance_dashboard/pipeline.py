"""
Dashboard Pipeline.

Runs the full transformation for one request:

    TableSource -> RowParser -> DateNormalizer -> MonthSelector
        -> month filter -> RowClassifier
        -> PivotAggregator (Sunday, Wednesday) / SpecialEventListBuilder (other)
        -> DashboardResult

A run is synchronous, side-effect free and never raises: every failure is
returned as ``DashboardResult.error``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from attendance_dashboard.configs.config import Config
from attendance_dashboard.configs.settings import Settings, get_settings
from attendance_dashboard.errors import ConfigError, SourceError
from attendance_dashboard.ingestion.adapters import BaseTableSource, WorkbookTableSource
from attendance_dashboard.ingestion.row_parser import RowParser
from attendance_dashboard.monitoring.logging import with_context
from attendance_dashboard.normalization.dates import DateNormalizer
from attendance_dashboard.reporting.classifier import Bucket, RowClassifier
from attendance_dashboard.reporting.missing_entries import find_missing_entries
from attendance_dashboard.reporting.months import MonthSelector, collect_months, current_month
from attendance_dashboard.reporting.pivot import PivotAggregator
from attendance_dashboard.reporting.special_events import SpecialEventListBuilder
from attendance_dashboard.schemas.dashboard_config import DashboardConfig
from attendance_dashboard.schemas.report import DashboardResult, MissingEntry, MonthListing
from attendance_dashboard.schemas.rows import NormalizedItem, RawRow

logger = logging.getLogger(__name__)

NO_DATA_ROWS = "No data rows found."
NO_VALID_DATES = "No data with valid dates found."

Clock = Callable[[], datetime]


class DashboardPipeline:
    """
    Turns the attendance sheet into the dashboard views.

    Configuration and the table source are fixed at construction; ``clock``
    supplies "now" for the current-month fallback.
    """

    def __init__(
        self,
        config: DashboardConfig,
        source: BaseTableSource,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.source = source
        self.clock = clock or (lambda: datetime.now(config.tzinfo))

        self.row_parser = RowParser(config.columns, config.header_rows)
        self.normalizer = DateNormalizer(config.tzinfo)
        self.month_selector = MonthSelector()
        self.classifier = RowClassifier(config.sunday, config.wednesday)
        self.sunday_pivot = self._pivot_for(Bucket.SUNDAY)
        self.wednesday_pivot = self._pivot_for(Bucket.WEDNESDAY)
        self.special_builder = SpecialEventListBuilder()

    def _pivot_for(self, bucket: Bucket) -> PivotAggregator:
        weekday = self.config.sunday if bucket is Bucket.SUNDAY else self.config.wednesday
        return PivotAggregator(
            weekday,
            highlighted_locations=self.config.highlighted_locations,
            display_date_format=self.config.display_date_format,
            not_applicable=self.config.not_applicable,
            name=bucket.title,
        )

    # ========================================================================
    # STAGES
    # ========================================================================

    def read_rows(self) -> List[RawRow]:
        """
        Fetch the tables and parse data rows.

        Raises:
            SourceError: If the source could not provide the table
            TableShapeError: If value and display tables disagree
        """
        fetched = self.source.fetch()
        if not fetched.success:
            raise SourceError("; ".join(fetched.errors) or f"Source '{self.source.source_id}' unavailable")
        return self.row_parser.parse_table(fetched.values, fetched.display)

    def normalize_rows(self, rows: List[RawRow]) -> List[NormalizedItem]:
        """Attach ISO dates; rows whose date does not parse are dropped."""
        items = []
        for row in rows:
            iso_date = self.normalizer.normalize(row.value.date, row.row_number)
            if iso_date is not None:
                items.append(NormalizedItem(row=row, iso_date=iso_date))

        dropped = len(rows) - len(items)
        if dropped:
            logger.info(f"Skipped {dropped} of {len(rows)} rows without a valid date")
        return items

    # ========================================================================
    # EXECUTION
    # ========================================================================

    def run(self, requested_month: Optional[str] = None) -> DashboardResult:
        """
        Build the dashboard for a month.

        Args:
            requested_month: ``yyyy-MM`` to display; falls back to the
                current month, then the most recent month with data

        Returns:
            DashboardResult, with ``error`` set on any terminal failure
        """
        run_id = uuid.uuid4().hex[:8]
        log = with_context(logger, run_id=run_id, stage="load")
        months: List[str] = []
        selected: Optional[str] = None

        try:
            rows = self.read_rows()
            if not rows:
                log.warning(NO_DATA_ROWS)
                return DashboardResult.failure(NO_DATA_ROWS)

            items = self.normalize_rows(rows)
            months = collect_months(items)
            log.info(f"Found {len(months)} months with data")

            now = current_month(self.config.tzinfo, self.clock())
            selected = self.month_selector.select(requested_month, months, now)
            if selected is None:
                return DashboardResult.failure(NO_VALID_DATES)

            log = with_context(logger, run_id=run_id, stage="aggregate", month=selected)
            month_items = [item for item in items if item.in_month(selected)]
            log.info(f"Found {len(month_items)} rows for month {selected}")
            buckets = self.classifier.partition(month_items)

            return DashboardResult(
                sunday=self.sunday_pivot.aggregate(buckets.sunday),
                wednesday=self.wednesday_pivot.aggregate(buckets.wednesday),
                special=self.special_builder.build(buckets.other),
                available_months=months,
                selected_month=selected,
            )
        except Exception as e:
            log.exception(f"Dashboard run failed: {e}")
            return DashboardResult.failure(f"Failed to load data: {e}", months, selected)

    def available_months(self) -> MonthListing:
        """Months with data and the month shown when none is requested."""
        result = self.run(None)
        return MonthListing(
            months=result.available_months,
            selected_month=result.selected_month,
            error=result.error,
        )

    def find_missing_entries(self, requested_month: Optional[str] = None) -> List[MissingEntry]:
        """
        Locations lacking an entry for some weekday date of the month.

        Raises:
            DashboardError: If the run for the month failed
        """
        return find_missing_entries(self.run(requested_month), self.config)


def build_pipeline(
    settings: Optional[Settings] = None,
    *,
    source_path: Optional[Path | str] = None,
    sheet_name: Optional[str] = None,
    config_path: Optional[Path | str] = None,
    clock: Optional[Clock] = None,
) -> DashboardPipeline:
    """
    Create a pipeline over a workbook from settings, with optional overrides.

    Raises:
        ConfigError: If no workbook path is configured
    """
    settings = settings or get_settings()
    config = Config.load_dashboard_config(config_path, settings=settings)

    path = source_path or settings.SOURCE_PATH
    if not path:
        raise ConfigError("No source workbook configured (set SOURCE_PATH or pass --source)")

    source = WorkbookTableSource.from_path(
        path,
        sheet_name or settings.SHEET_NAME,
        display_date_format=config.display_date_format,
    )
    return DashboardPipeline(config, source, clock=clock)

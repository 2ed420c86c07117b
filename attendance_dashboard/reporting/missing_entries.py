"""
Missing entry report.

Lists, per weekday pivot, the locations that have no entry for one or more
of the dates the bucket covers.
"""

from typing import List, Optional

from attendance_dashboard.errors import DashboardError
from attendance_dashboard.reporting.classifier import Bucket
from attendance_dashboard.schemas.dashboard_config import DashboardConfig, WeekdayConfig
from attendance_dashboard.schemas.report import DashboardResult, MissingEntry, PivotResult


def missing_for_pivot(
    pivot: Optional[PivotResult],
    weekday: WeekdayConfig,
    title: str,
) -> List[MissingEntry]:
    """
    Missing dates for one weekday pivot.

    With ``expected_locations`` configured, exactly those locations are
    checked (an absent location misses every date); otherwise every row of
    the pivot is checked. A pivot without dates reports nothing.
    """
    if pivot is None or not pivot.sorted_dates:
        return []

    entries = []
    if weekday.expected_locations:
        for location in dict.fromkeys(weekday.expected_locations):
            row = pivot.get_row(location)
            dates = row.missing_dates(pivot.sorted_dates) if row else list(pivot.sorted_dates)
            if dates:
                entries.append(MissingEntry(location=location, weekday=title, dates=dates))
    else:
        for row in pivot.template_data:
            dates = row.missing_dates(pivot.sorted_dates)
            if dates:
                entries.append(MissingEntry(location=row.location, weekday=title, dates=dates))
    return entries


def find_missing_entries(result: DashboardResult, config: DashboardConfig) -> List[MissingEntry]:
    """
    Missing entries for both weekday pivots of a run, Sunday first.

    Raises:
        DashboardError: If the run ended in an error state
    """
    if result.error:
        raise DashboardError(result.error)

    return missing_for_pivot(result.sunday, config.sunday, Bucket.SUNDAY.title) + missing_for_pivot(
        result.wednesday, config.wednesday, Bucket.WEDNESDAY.title
    )

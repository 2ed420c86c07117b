"""
Shared pytest fixtures for the Attendance Dashboard test suite.

Provides factory fixtures for sheet rows, normalized items, configs and
pipelines over in-memory tables.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional
from zoneinfo import ZoneInfo

import pytest

from attendance_dashboard.ingestion.adapters import InMemoryTableSource
from attendance_dashboard.pipeline import DashboardPipeline
from attendance_dashboard.schemas.dashboard_config import (
    DashboardConfig,
    EmptyBucketPolicy,
    WeekdayConfig,
)
from attendance_dashboard.schemas.rows import DisplayFields, NormalizedItem, RawRow, ValueFields

HEADER = [
    "Day",
    "Date",
    "Location",
    "Total Attendance",
    "Mode",
    "Name",
    "Arrival Time",
    "Topic",
    "Speaker",
    "Reading",
    "Start Time",
    "End Time",
]

TZ = ZoneInfo("Asia/Kolkata")


@pytest.fixture
def make_row():
    """
    Return a function that builds one positional sheet row.

    Example:
        row = make_row("Sunday", "2024-03-03", "A", 100, topic="Evening")
    """

    def _make_row(
        day: Any = "Sunday",
        date: Any = "2024-03-03",
        location: Any = "A",
        attendance: Any = 100,
        **details: Any,
    ) -> List[Any]:
        return [
            day,
            date,
            location,
            attendance,
            details.get("mode", "In person"),
            details.get("name", "Host"),
            details.get("arrival", "09:30"),
            details.get("topic", "Weekly"),
            details.get("speaker", "Speaker"),
            details.get("reading", "Book"),
            details.get("start", "10:00"),
            details.get("end", "11:00"),
        ]

    return _make_row


@pytest.fixture
def make_table(make_row):
    """Return a function that prepends the header row to data rows."""

    def _make_table(*rows: List[Any]) -> List[List[Any]]:
        return [list(HEADER)] + [list(r) for r in rows]

    return _make_table


@pytest.fixture
def make_item():
    """
    Return a function that creates NormalizedItem objects directly.

    Display attendance defaults to the string form of the value.
    """
    counter = {"row": 1}

    def _make_item(
        day: str = "Sunday",
        iso_date: str = "2024-03-03",
        location: str = "A",
        attendance: Any = 100,
        display_attendance: Optional[str] = None,
        **details: str,
    ) -> NormalizedItem:
        counter["row"] += 1
        display_date = datetime.strptime(iso_date, "%Y-%m-%d").strftime("%d-%m-%Y")
        if display_attendance is None:
            display_attendance = "" if attendance is None else str(attendance)
        row = RawRow(
            row_number=counter["row"],
            value=ValueFields(day=day, date=iso_date, location=location, attendance=attendance, **details),
            display=DisplayFields(
                day=day,
                date=display_date,
                location=location,
                attendance=display_attendance,
                **details,
            ),
        )
        return NormalizedItem(row=row, iso_date=iso_date)

    return _make_item


@pytest.fixture
def dashboard_config():
    """Small configuration: canonical Sunday order A, B; Wednesday expects A, C."""
    return DashboardConfig(
        timezone="Asia/Kolkata",
        sunday=WeekdayConfig(
            labels=("Sunday", "रविवार"),
            location_order=("A", "B"),
            empty_bucket_policy=EmptyBucketPolicy.ENUMERATE_CANONICAL,
        ),
        wednesday=WeekdayConfig(
            labels=("Wednesday", "बुधवार"),
            expected_locations=("A", "C"),
        ),
        highlighted_locations=frozenset({"A"}),
    )


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-04-15 in the dashboard time zone."""
    return lambda: datetime(2024, 4, 15, 12, 0, tzinfo=TZ)


@pytest.fixture
def make_pipeline(dashboard_config, fixed_clock):
    """Return a function that builds a pipeline over in-memory tables."""

    def _make_pipeline(values, display=None, config=None, clock=None) -> DashboardPipeline:
        return DashboardPipeline(
            config or dashboard_config,
            InMemoryTableSource(values, display),
            clock=clock or fixed_clock,
        )

    return _make_pipeline


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo setup_logging() so caplog keeps seeing package records."""
    logger = logging.getLogger("attendance_dashboard")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
            h.close()
    logger.setLevel(level)
    logger.propagate = propagate

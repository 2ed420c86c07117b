"""
Data models for the attendance dashboard.

This package provides:
- Configuration models: DashboardConfig, ColumnLayout, WeekdayConfig
- Row models: RawRow, ValueFields, DisplayFields, NormalizedItem
- Report models: EventDetail, LocationRow, PivotResult, SpecialEvent,
  MissingEntry, MonthListing, DashboardResult
"""

from .dashboard_config import (
    ColumnLayout,
    DashboardConfig,
    EmptyBucketPolicy,
    WeekdayConfig,
)
from .report import (
    EVENT_DETAIL_HEADERS,
    SPECIAL_EVENT_HEADERS,
    DashboardResult,
    EventDetail,
    LocationRow,
    MissingEntry,
    MonthListing,
    PivotResult,
    SpecialEvent,
)
from .rows import DisplayFields, NormalizedItem, RawRow, ValueFields

__all__ = [
    # Configuration
    "ColumnLayout",
    "DashboardConfig",
    "EmptyBucketPolicy",
    "WeekdayConfig",
    # Rows
    "DisplayFields",
    "NormalizedItem",
    "RawRow",
    "ValueFields",
    # Report
    "EVENT_DETAIL_HEADERS",
    "SPECIAL_EVENT_HEADERS",
    "DashboardResult",
    "EventDetail",
    "LocationRow",
    "MissingEntry",
    "MonthListing",
    "PivotResult",
    "SpecialEvent",
]

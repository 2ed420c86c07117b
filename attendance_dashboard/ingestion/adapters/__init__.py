"""
Table Sources for the attendance sheet.

Sources provide a unified interface for reading the value and display tables:
- In-memory tables (already fetched rows, tests)
- .xlsx workbooks via openpyxl

Usage:
    from attendance_dashboard.ingestion.adapters import WorkbookTableSource

    with WorkbookTableSource.from_path("attendance.xlsx") as source:
        result = source.fetch()
"""

from .base_adapter import BaseTableSource, SourceConfig, SourceType, TableFetchResult
from .memory_adapter import InMemoryTableSource, display_text
from .workbook_adapter import WorkbookSourceConfig, WorkbookTableSource, format_cell

__all__ = [
    "BaseTableSource",
    "SourceConfig",
    "SourceType",
    "TableFetchResult",
    "InMemoryTableSource",
    "WorkbookSourceConfig",
    "WorkbookTableSource",
    "display_text",
    "format_cell",
]

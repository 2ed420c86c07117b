"""
Ingestion Layer for the attendance dashboard.

Key Components:
- Table sources: read the value and display tables (in-memory, .xlsx)
- RowParser: validates table shape and produces typed RawRow records
"""

from .adapters import (
    BaseTableSource,
    InMemoryTableSource,
    SourceType,
    TableFetchResult,
    WorkbookTableSource,
)
from .row_parser import RowParser

__all__ = [
    "BaseTableSource",
    "InMemoryTableSource",
    "RowParser",
    "SourceType",
    "TableFetchResult",
    "WorkbookTableSource",
]

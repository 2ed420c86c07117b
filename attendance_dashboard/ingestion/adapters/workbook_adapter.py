"""
Workbook Table Source.

Reads the attendance sheet from an .xlsx file with openpyxl. The value table
holds cached cell values (``data_only``); the display table approximates the
text the spreadsheet shows, using each cell's number format.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, List, Optional
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .base_adapter import BaseTableSource, SourceConfig, SourceType, TableFetchResult


@dataclass
class WorkbookSourceConfig(SourceConfig):
    """Configuration for an .xlsx workbook source."""
    path: Optional[Path] = None
    display_date_format: str = "%d-%m-%Y"


def format_cell(value: Any, number_format: Optional[str], date_format: str = "%d-%m-%Y") -> str:
    """
    Render a cell value the way the sheet displays it.

    - dates -> date_format (time appended when the format shows hours)
    - times -> HH:MM
    - integral floats -> no decimals; thousands separators when formatted so
    """
    fmt = (number_format or "General").lower()
    if value is None:
        return ""
    if isinstance(value, datetime):
        if "h" in fmt and value.time() != time(0, 0):
            return value.strftime(f"{date_format} %H:%M")
        return value.strftime(date_format)
    if isinstance(value, date):
        return value.strftime(date_format)
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if "#,##0" in fmt:
            return f"{value:,}"
        return str(value)
    return str(value)


class WorkbookTableSource(BaseTableSource):
    """Table source backed by one sheet of an .xlsx workbook."""

    def __init__(self, config: WorkbookSourceConfig):
        super().__init__(config)
        self.config: WorkbookSourceConfig = config

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        sheet_name: str = "Dashboard",
        display_date_format: str = "%d-%m-%Y",
    ) -> "WorkbookTableSource":
        return cls(
            WorkbookSourceConfig(
                source_id=Path(path).stem,
                source_type=SourceType.WORKBOOK,
                sheet_name=sheet_name,
                path=Path(path),
                display_date_format=display_date_format,
            )
        )

    def _validate_config(self) -> None:
        if self.config.source_type != SourceType.WORKBOOK:
            raise ValueError(f"WorkbookTableSource requires source_type=workbook, got {self.config.source_type}")
        if not getattr(self.config, "path", None):
            raise ValueError("WorkbookTableSource requires a workbook path")

    def fetch(self) -> TableFetchResult:
        started = self._started()
        path = Path(self.config.path)

        try:
            workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (OSError, InvalidFileException, BadZipFile, KeyError) as e:
            self.logger.error(f"Could not open workbook {path}: {e}")
            return self._failure(started, f"Could not open workbook {path}: {e}")

        try:
            if self.config.sheet_name not in workbook.sheetnames:
                return self._failure(started, f"Sheet '{self.config.sheet_name}' not found!")

            sheet = workbook[self.config.sheet_name]
            values: List[List[Any]] = []
            display: List[List[str]] = []
            for row in sheet.iter_rows():
                values.append([cell.value for cell in row])
                display.append(
                    [
                        format_cell(
                            cell.value,
                            getattr(cell, "number_format", None),
                            self.config.display_date_format,
                        )
                        for cell in row
                    ]
                )
        finally:
            workbook.close()

        self.logger.info(f"Read {len(values)} rows from {path.name}:{self.config.sheet_name}")
        return TableFetchResult(
            success=True,
            source_type=self.source_type,
            values=values,
            display=display,
            metadata={"path": str(path), "sheet_name": self.config.sheet_name},
            fetch_started_at=started,
            fetch_ended_at=datetime.now(timezone.utc),
        )

    def _failure(self, started: datetime, message: str) -> TableFetchResult:
        return TableFetchResult(
            success=False,
            source_type=self.source_type,
            errors=[message],
            fetch_started_at=started,
            fetch_ended_at=datetime.now(timezone.utc),
        )

"""
In-Memory Table Source.

Serves tables already held in memory, e.g. rows pulled from a sheets API
by the caller, or fixtures in tests.
"""

from datetime import date, datetime, timezone
from typing import Any, List, Optional, Sequence

from .base_adapter import BaseTableSource, SourceConfig, SourceType, TableFetchResult


def display_text(value: Any, date_format: str = "%d-%m-%Y") -> str:
    """Default display text for a cell that has no formatted form."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime(date_format)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class InMemoryTableSource(BaseTableSource):
    """
    Table source over in-memory row lists.

    When no display table is given it is derived from the values with
    display_text().
    """

    def __init__(
        self,
        values: Optional[Sequence[Sequence[Any]]],
        display: Optional[Sequence[Sequence[Any]]] = None,
        config: Optional[SourceConfig] = None,
        date_format: str = "%d-%m-%Y",
    ):
        self._values = values
        self._display = display
        self.date_format = date_format
        super().__init__(config or SourceConfig(source_id="memory", source_type=SourceType.MEMORY))

    def _validate_config(self) -> None:
        if self.config.source_type != SourceType.MEMORY:
            raise ValueError(f"InMemoryTableSource requires source_type=memory, got {self.config.source_type}")

    def fetch(self) -> TableFetchResult:
        started = self._started()
        if self._values is None:
            return TableFetchResult(
                success=False,
                source_type=self.source_type,
                errors=[f"Sheet '{self.config.sheet_name}' not found!"],
                fetch_started_at=started,
                fetch_ended_at=datetime.now(timezone.utc),
            )

        values: List[List[Any]] = [list(row) for row in self._values]
        if self._display is None:
            display = [[display_text(cell, self.date_format) for cell in row] for row in values]
        else:
            display = [["" if cell is None else str(cell) for cell in row] for row in self._display]

        self.logger.debug(f"Serving {len(values)} in-memory rows")
        return TableFetchResult(
            success=True,
            source_type=self.source_type,
            values=values,
            display=display,
            metadata={"sheet_name": self.config.sheet_name},
            fetch_started_at=started,
            fetch_ended_at=datetime.now(timezone.utc),
        )

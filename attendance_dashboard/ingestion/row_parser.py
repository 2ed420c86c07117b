"""
Row Parser.

Validates the shape of the value and display tables once and turns
position-indexed rows into typed RawRow records.
"""

import logging
from typing import Any, List, Sequence

from attendance_dashboard.errors import TableShapeError
from attendance_dashboard.schemas.dashboard_config import ColumnLayout
from attendance_dashboard.schemas.rows import DisplayFields, RawRow, ValueFields

logger = logging.getLogger(__name__)


class RowParser:
    """Maps positional rows to named fields using a ColumnLayout."""

    def __init__(self, layout: ColumnLayout, header_rows: int = 1):
        self.layout = layout
        self.header_rows = header_rows
        self._positions = layout.model_dump()

    def parse_table(
        self,
        values: Sequence[Sequence[Any]],
        display: Sequence[Sequence[Any]],
    ) -> List[RawRow]:
        """
        Build RawRow records for every data row (header rows skipped).

        Args:
            values: Row-major underlying cell values, headers included
            display: Row-major display text, same shape as values

        Returns:
            One RawRow per data row, in sheet order

        Raises:
            TableShapeError: If the two tables differ in row count
        """
        if len(values) != len(display):
            raise TableShapeError(
                f"Value table has {len(values)} rows but display table has {len(display)}"
            )

        rows = []
        for index in range(self.header_rows, len(values)):
            rows.append(self.parse_row(index + 1, values[index], display[index]))

        short = sum(1 for index in range(self.header_rows, len(values)) if len(values[index]) < self.layout.width)
        if short:
            logger.debug(f"Padded {short} rows shorter than {self.layout.width} columns")
        return rows

    def parse_row(
        self,
        row_number: int,
        value_row: Sequence[Any],
        display_row: Sequence[Any],
    ) -> RawRow:
        """Build one RawRow; cells beyond the end of a short row read as empty."""
        value_fields = {name: _cell(value_row, pos) for name, pos in self._positions.items()}
        display_fields = {}
        for name, pos in self._positions.items():
            cell = _cell(display_row, pos)
            display_fields[name] = "" if cell is None else str(cell)

        return RawRow(
            row_number=row_number,
            value=ValueFields(**value_fields),
            display=DisplayFields(**display_fields),
        )


def _cell(row: Sequence[Any], position: int) -> Any:
    return row[position] if position < len(row) else None

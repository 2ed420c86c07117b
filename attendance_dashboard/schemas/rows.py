"""
Typed source rows.

A source row arrives twice: once with underlying cell values (typed dates,
numbers) and once with the display text shown in the sheet. Dates and the
attendance metric are read from the value form; every other field is
rendered from the display form.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValueFields(BaseModel):
    """Underlying cell values of one row, by column name."""

    model_config = ConfigDict(frozen=True)

    day: Any = None
    date: Any = None
    location: Any = None
    attendance: Any = None
    mode: Any = None
    name: Any = None
    arrival: Any = None
    topic: Any = None
    speaker: Any = None
    reading: Any = None
    start: Any = None
    end: Any = None


class DisplayFields(BaseModel):
    """Display text of one row, by column name."""

    model_config = ConfigDict(frozen=True)

    day: str = ""
    date: str = ""
    location: str = ""
    attendance: str = ""
    mode: str = ""
    name: str = ""
    arrival: str = ""
    topic: str = ""
    speaker: str = ""
    reading: str = ""
    start: str = ""
    end: str = ""


class RawRow(BaseModel):
    """One data row of the source table in both representations."""

    model_config = ConfigDict(frozen=True)

    row_number: int = Field(..., ge=1, description="1-based row number in the sheet")
    value: ValueFields
    display: DisplayFields

    @property
    def location(self) -> str:
        return self.display.location.strip()

    @property
    def day_label(self) -> str:
        """Day label trimmed and lower-cased for matching."""
        return self.display.day.strip().lower()


class NormalizedItem(BaseModel):
    """A raw row whose date cell normalized to an ISO calendar date."""

    model_config = ConfigDict(frozen=True)

    row: RawRow
    iso_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")

    @property
    def year_month(self) -> str:
        return self.iso_date[:7]

    def in_month(self, month: Optional[str]) -> bool:
        return month is not None and self.iso_date.startswith(month)

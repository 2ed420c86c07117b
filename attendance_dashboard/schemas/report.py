"""
Report models handed to rendering and export collaborators.

- EventDetail: the pivot cell for one (location, date) pair
- LocationRow / PivotResult: one weekday's location x date matrix
- SpecialEvent: one entry of the chronological special-event list
- DashboardResult: everything produced by a single pipeline run
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from attendance_dashboard.schemas.rows import DisplayFields

# Pivot cell keys and their column titles, in rendering order
EVENT_DETAIL_HEADERS: Dict[str, str] = {
    "attendance": "Total Attendance",
    "mode": "Mode",
    "name": "Name",
    "arrival": "Arrival Time",
    "topic": "Topic",
    "speaker": "Speaker",
    "reading": "Reading",
    "start": "Start Time",
    "end": "End Time",
}

SPECIAL_EVENT_HEADERS: Dict[str, str] = {
    "date": "Date",
    "day": "Day",
    "location": "Location",
    **EVENT_DETAIL_HEADERS,
}


class EventDetail(BaseModel):
    """Detail fields of one event, taken verbatim from the display row."""

    model_config = ConfigDict(frozen=True)

    attendance: str = ""
    mode: str = ""
    name: str = ""
    arrival: str = ""
    topic: str = ""
    speaker: str = ""
    reading: str = ""
    start: str = ""
    end: str = ""

    @classmethod
    def from_display(cls, display: DisplayFields) -> "EventDetail":
        return cls(**{key: getattr(display, key) for key in EVENT_DETAIL_HEADERS})


class LocationRow(BaseModel):
    """One output row of a weekday pivot."""

    location: str
    is_highlighted: bool = False
    date_data: Dict[str, EventDetail] = Field(default_factory=dict)
    average: str = "N/A"
    average_value: Optional[float] = None
    is_missing_data: bool = False

    def missing_dates(self, sorted_dates: List[str]) -> List[str]:
        """Date keys of the bucket this location has no entry for."""
        return [d for d in sorted_dates if d not in self.date_data]


class PivotResult(BaseModel):
    """Location x date matrix for one weekday bucket."""

    template_data: List[LocationRow] = Field(default_factory=list)
    sorted_dates: List[str] = Field(default_factory=list)

    def get_row(self, location: str) -> Optional[LocationRow]:
        for row in self.template_data:
            if row.location == location:
                return row
        return None

    @property
    def locations(self) -> List[str]:
        return [row.location for row in self.template_data]


class SpecialEvent(EventDetail):
    """A row outside the two pivoted weekdays, flattened for listing."""

    date: str = ""
    day: str = ""
    location: str = ""
    # ISO date used for ordering; never serialized
    sort_key: Optional[str] = Field(default=None, exclude=True)


class MissingEntry(BaseModel):
    """Dates a location has no recorded entry for in one weekday pivot."""

    location: str
    weekday: str
    dates: List[str]

    def __str__(self) -> str:
        return f"{self.location} ({self.weekday}): {', '.join(self.dates)}"


class MonthListing(BaseModel):
    """Months with data and the month a run would display."""

    months: List[str] = Field(default_factory=list)
    selected_month: Optional[str] = None
    error: Optional[str] = None


class DashboardResult(BaseModel):
    """Output of one pipeline run, or a terminal error state."""

    sunday: Optional[PivotResult] = None
    wednesday: Optional[PivotResult] = None
    special: List[SpecialEvent] = Field(default_factory=list)
    error: Optional[str] = None
    available_months: List[str] = Field(default_factory=list)
    selected_month: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def event_detail_headers(self) -> List[str]:
        return list(EVENT_DETAIL_HEADERS.values())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def special_event_headers(self) -> List[str]:
        return list(SPECIAL_EVENT_HEADERS.values())

    @classmethod
    def failure(
        cls,
        error: str,
        available_months: Optional[List[str]] = None,
        selected_month: Optional[str] = None,
    ) -> "DashboardResult":
        return cls(
            error=error,
            available_months=available_months or [],
            selected_month=selected_month,
        )

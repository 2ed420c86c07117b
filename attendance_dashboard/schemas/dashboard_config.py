"""
Dashboard configuration models.

Immutable values handed to every pipeline component at construction time:
column layout, weekday label sets, canonical location orders, highlight set
and the single time zone used for all date interpretation.
"""

from __future__ import annotations

from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class EmptyBucketPolicy(str, Enum):
    """What a weekday pivot emits when its bucket holds no rows."""

    # One row per canonical location, none flagged missing
    ENUMERATE_CANONICAL = "enumerate_canonical"
    # templateData and sortedDates both empty
    EMPTY_RESULT = "empty_result"


class ColumnLayout(BaseModel):
    """Zero-based positions of each field in a source row."""

    model_config = ConfigDict(frozen=True)

    day: int = Field(default=0, ge=0)
    date: int = Field(default=1, ge=0)
    location: int = Field(default=2, ge=0)
    attendance: int = Field(default=3, ge=0)
    mode: int = Field(default=4, ge=0)
    name: int = Field(default=5, ge=0)
    arrival: int = Field(default=6, ge=0)
    topic: int = Field(default=7, ge=0)
    speaker: int = Field(default=8, ge=0)
    reading: int = Field(default=9, ge=0)
    start: int = Field(default=10, ge=0)
    end: int = Field(default=11, ge=0)

    @model_validator(mode="after")
    def _positions_unique(self) -> "ColumnLayout":
        positions = list(self.model_dump().values())
        if len(set(positions)) != len(positions):
            raise ValueError(f"Column positions must be unique, got {positions}")
        return self

    @property
    def width(self) -> int:
        """Minimum row length needed to read every field."""
        return max(self.model_dump().values()) + 1


class WeekdayConfig(BaseModel):
    """Labels and location lists for one of the two pivoted weekdays."""

    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...] = Field(..., min_length=1)
    location_order: tuple[str, ...] = ()
    empty_bucket_policy: EmptyBucketPolicy = EmptyBucketPolicy.EMPTY_RESULT
    expected_locations: tuple[str, ...] = ()

    @field_validator("labels")
    @classmethod
    def _normalize_labels(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        labels = tuple(label.strip().lower() for label in v if label and label.strip())
        if not labels:
            raise ValueError("At least one non-blank day label is required")
        return labels

    def matches(self, day_label: str) -> bool:
        """Check a normalized (trimmed, lower-cased) day label."""
        return day_label in self.labels


class DashboardConfig(BaseModel):
    """Complete configuration for one dashboard pipeline."""

    model_config = ConfigDict(frozen=True)

    timezone: str = "Asia/Kolkata"
    header_rows: int = Field(default=1, ge=0)
    columns: ColumnLayout = Field(default_factory=ColumnLayout)
    sunday: WeekdayConfig = Field(
        default_factory=lambda: WeekdayConfig(
            labels=("sunday", "रविवार"),
            empty_bucket_policy=EmptyBucketPolicy.ENUMERATE_CANONICAL,
        )
    )
    wednesday: WeekdayConfig = Field(
        default_factory=lambda: WeekdayConfig(labels=("wednesday", "बुधवार"))
    )
    highlighted_locations: frozenset[str] = frozenset()
    not_applicable: str = "N/A"
    display_date_format: str = "%d-%m-%Y"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone '{v}'") from e
        return v

    @model_validator(mode="after")
    def _weekday_labels_disjoint(self) -> "DashboardConfig":
        overlap = set(self.sunday.labels) & set(self.wednesday.labels)
        if overlap:
            raise ValueError(f"Day labels used for both weekdays: {sorted(overlap)}")
        return self

    @property
    def tzinfo(self) -> ZoneInfo:
        """ZoneInfo for the configured time zone."""
        return ZoneInfo(self.timezone)

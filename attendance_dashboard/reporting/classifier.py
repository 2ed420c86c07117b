"""
Row Classifier.

Routes each normalized row to the Sunday bucket, the Wednesday bucket, or
the catch-all "other" bucket by its day label. Rows without a location or
without a day label are discarded.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from attendance_dashboard.schemas.dashboard_config import WeekdayConfig
from attendance_dashboard.schemas.rows import NormalizedItem, RawRow

logger = logging.getLogger(__name__)


class Bucket(str, Enum):
    """Classification of a row."""

    SUNDAY = "sunday"
    WEDNESDAY = "wednesday"
    OTHER = "other"
    DISCARD = "discard"

    @property
    def title(self) -> str:
        return self.value.capitalize()


@dataclass
class ClassifiedRows:
    """Rows of one month split into buckets, in input order."""

    sunday: List[NormalizedItem] = field(default_factory=list)
    wednesday: List[NormalizedItem] = field(default_factory=list)
    other: List[NormalizedItem] = field(default_factory=list)
    discarded: int = 0

    def add(self, bucket: Bucket, item: NormalizedItem) -> None:
        if bucket is Bucket.SUNDAY:
            self.sunday.append(item)
        elif bucket is Bucket.WEDNESDAY:
            self.wednesday.append(item)
        elif bucket is Bucket.OTHER:
            self.other.append(item)
        else:
            self.discarded += 1


class RowClassifier:
    """Case-insensitive day-label matcher for the two pivoted weekdays."""

    def __init__(self, sunday: WeekdayConfig, wednesday: WeekdayConfig):
        self.sunday = sunday
        self.wednesday = wednesday

    def classify(self, row: RawRow) -> Bucket:
        """
        Classify one row.

        A blank location discards the row whatever its day label; a blank
        day label discards it too. Any other unmatched label is OTHER.
        """
        if not row.location:
            return Bucket.DISCARD

        label = row.day_label
        if not label:
            return Bucket.DISCARD
        if self.sunday.matches(label):
            return Bucket.SUNDAY
        if self.wednesday.matches(label):
            return Bucket.WEDNESDAY
        return Bucket.OTHER

    def partition(self, items: Iterable[NormalizedItem]) -> ClassifiedRows:
        """Classify every item, preserving input order within each bucket."""
        result = ClassifiedRows()
        for item in items:
            result.add(self.classify(item.row), item)

        logger.info(
            f"Categorized - Sun: {len(result.sunday)}, Wed: {len(result.wednesday)}, "
            f"Special: {len(result.other)}, Discarded: {result.discarded}"
        )
        return result

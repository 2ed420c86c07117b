"""Special event list for rows outside the two pivoted weekdays."""

import logging
from functools import cmp_to_key
from typing import List, Sequence

from attendance_dashboard.schemas.report import EVENT_DETAIL_HEADERS, SpecialEvent
from attendance_dashboard.schemas.rows import NormalizedItem

logger = logging.getLogger(__name__)


def _compare(a: SpecialEvent, b: SpecialEvent) -> int:
    # A missing key compares equal to anything, so it never moves
    if not a.sort_key or not b.sort_key:
        return 0
    return (a.sort_key > b.sort_key) - (a.sort_key < b.sort_key)


class SpecialEventListBuilder:
    """Flattens the "other" bucket into date-ordered SpecialEvent records."""

    def build(self, items: Sequence[NormalizedItem]) -> List[SpecialEvent]:
        """
        Map each row's display fields to a SpecialEvent and sort by ISO date.

        The sort is stable: rows sharing a date keep their input order.
        """
        if not items:
            return []

        events = [self._to_event(item) for item in items]
        events.sort(key=cmp_to_key(_compare))
        logger.info(f"Built special event list with {len(events)} events")
        return events

    @staticmethod
    def _to_event(item: NormalizedItem) -> SpecialEvent:
        display = item.row.display
        return SpecialEvent(
            date=display.date,
            day=display.day,
            location=display.location,
            sort_key=item.iso_date,
            **{key: getattr(display, key) for key in EVENT_DETAIL_HEADERS},
        )

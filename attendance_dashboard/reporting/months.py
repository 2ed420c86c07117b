"""Month selection for the dashboard view."""

import logging
from datetime import datetime
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from attendance_dashboard.schemas.rows import NormalizedItem

logger = logging.getLogger(__name__)


def collect_months(items: Iterable[NormalizedItem]) -> List[str]:
    """Distinct ``yyyy-MM`` prefixes of the given items, ascending."""
    return sorted({item.year_month for item in items})


def current_month(tz: ZoneInfo, now: Optional[datetime] = None) -> str:
    """The calendar month of ``now`` (default: the present) in ``tz``."""
    now = now or datetime.now(tz)
    if now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.strftime("%Y-%m")


class MonthSelector:
    """
    Pick the month to display.

    Resolution order:
    1. the requested month, if it has data
    2. the current month, if it has data
    3. the most recent month with data
    4. None when no month has data
    """

    def select(
        self,
        requested_month: Optional[str],
        available_months: Iterable[str],
        current: str,
    ) -> Optional[str]:
        available = set(available_months)
        if requested_month and requested_month in available:
            selected = requested_month
        elif current in available:
            selected = current
        elif available:
            selected = max(available)
        else:
            logger.info("No valid data found for any month.")
            return None

        logger.info(f"Selected month {selected} (requested: {requested_month}, current: {current})")
        return selected

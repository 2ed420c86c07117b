"""
Attendance metric parsing.

Reads the averaging metric from the underlying cell value. Non-numeric
values are excluded from averages instead of being coerced to zero.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

# Thousands separators and stray whitespace
_SEPARATORS = re.compile(r"[,\s ]")


def parse_metric(value: Any) -> Optional[float]:
    """
    Parse an attendance value.

    Handles:
    - 120 -> 120.0
    - "1,250" -> 1250.0
    - "" / None / "n/a" -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = _SEPARATORS.sub("", value)
        if not value:
            return None
    elif not isinstance(value, (int, float, Decimal)):
        return None

    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None

    return number if math.isfinite(number) else None


def round_half_up(value: float, places: int = 1) -> float:
    """Round like a spreadsheet does (2.25 -> 2.3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_average(total: float, count: int, not_applicable: str = "N/A") -> str:
    """Average rendered with one decimal, or the not-applicable marker."""
    if count <= 0:
        return not_applicable
    return f"{round_half_up(total / count):.1f}"

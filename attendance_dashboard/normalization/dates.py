"""
Date Normalizer.

Converts a raw date cell (native date/datetime, spreadsheet serial number,
or text in one of several formats) into a canonical ``YYYY-MM-DD`` string in
one configured time zone.

Parsing is an ordered list of strategies. Each strategy returns a date or
None; the first date wins. Expected format mismatches never raise.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

ParseStrategy = Callable[[Any], Optional[date]]

# Day 1 of the spreadsheet serial calendar is 1899-12-31
SERIAL_EPOCH = date(1899, 12, 30)

# Tried in order; the first format producing a valid calendar date wins
STRING_FORMATS: Tuple[str, ...] = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%m/%d/%Y")

# Numbers at or above this are read as Unix milliseconds, not serial days
MILLIS_THRESHOLD = 10**11

_YEAR_TOKEN = re.compile(r"(?<!\d)\d{4}(?!\d)")

# Two parse defaults differing in year, month and day
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


class DateNormalizer:
    """
    Normalize raw date cells to ISO dates in a fixed time zone.

    Strategies, in order:
    1. native ``datetime``/``date`` objects
    2. positive numbers as serial day counts (or Unix milliseconds when huge)
    3. trimmed strings against STRING_FORMATS, then a generic parse

    Serial and millisecond values resolving outside [min_year, max_year] are
    rejected rather than accepted as garbage.
    """

    def __init__(
        self,
        timezone: str | ZoneInfo = "Asia/Kolkata",
        *,
        formats: Sequence[str] = STRING_FORMATS,
        min_year: int = 1900,
        max_year: int = 2100,
        allow_generic: bool = True,
    ):
        self.tz = timezone if isinstance(timezone, ZoneInfo) else ZoneInfo(timezone)
        self.formats = tuple(formats)
        self.min_year = min_year
        self.max_year = max_year
        self.allow_generic = allow_generic
        self._strategies: List[ParseStrategy] = [
            self._from_native,
            self._from_serial,
            self._from_string,
        ]

    def normalize(self, raw: Any, row_number: Optional[int] = None) -> Optional[str]:
        """
        Normalize a raw cell to ``YYYY-MM-DD``.

        Args:
            raw: Underlying cell value
            row_number: Sheet row, used only for diagnostics

        Returns:
            ISO date string, or None when no strategy accepts the value
        """
        parsed = self.parse(raw)
        if parsed is not None:
            return parsed.isoformat()

        origin = f"(row {row_number}, value {raw!r})" if row_number else f"({raw!r})"
        if _is_blank(raw):
            logger.debug(f"Blank date cell {origin}")
        else:
            logger.warning(f"Could not parse date {origin}")
        return None

    def parse(self, raw: Any) -> Optional[date]:
        """Run the strategies in order and return the first date found."""
        for strategy in self._strategies:
            result = strategy(raw)
            if result is not None:
                return result
        return None

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _from_native(self, raw: Any) -> Optional[date]:
        if isinstance(raw, datetime):
            # Naive datetimes are wall-clock time in the sheet's zone
            if raw.tzinfo is not None:
                return raw.astimezone(self.tz).date()
            return raw.date()
        if isinstance(raw, date):
            return raw
        return None

    def _from_serial(self, raw: Any) -> Optional[date]:
        if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
            return None
        value = float(raw)
        if not math.isfinite(value) or value <= 0:
            return None

        if value >= MILLIS_THRESHOLD:
            return self._from_millis(value)

        days = math.floor(value)
        if days > (date.max - SERIAL_EPOCH).days:
            return None
        result = SERIAL_EPOCH + timedelta(days=days)
        if not self._plausible(result):
            logger.debug(f"Serial {raw!r} resolves to implausible date {result}")
            return None
        return result

    def _from_millis(self, value: float) -> Optional[date]:
        try:
            result = datetime.fromtimestamp(value / 1000, tz=self.tz).date()
        except (OverflowError, OSError, ValueError):
            return None
        return result if self._plausible(result) else None

    def _from_string(self, raw: Any) -> Optional[date]:
        if not isinstance(raw, str):
            return None
        text = raw.strip()
        if not text:
            return None

        for fmt in self.formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        if self.allow_generic:
            return self._from_generic(text)
        return None

    def _from_generic(self, text: str) -> Optional[date]:
        """Last-resort parse for text such as 'March 3, 2024'."""
        # Without a year the parser fills in today's date parts
        if not _YEAR_TOKEN.search(text):
            return None
        try:
            parsed = date_parser.parse(text, default=_DEFAULT_A)
            check = date_parser.parse(text, default=_DEFAULT_B)
        except (ValueError, OverflowError):
            return None
        # A part taken from the default differs between the two parses
        if parsed.date() != check.date():
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(self.tz)
        result = parsed.date()
        return result if self._plausible(result) else None

    def _plausible(self, value: date) -> bool:
        return self.min_year <= value.year <= self.max_year


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def to_display_key(iso_date: str, display_format: str = "%d-%m-%Y") -> str:
    """Reformat an ISO date for display, e.g. 2024-03-03 -> 03-03-2024."""
    return date.fromisoformat(iso_date).strftime(display_format)

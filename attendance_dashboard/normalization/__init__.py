"""
Normalization of raw cell values.

This package provides:
- DateNormalizer: date cells to ISO dates in the configured time zone
- parse_metric / format_average: attendance metric parsing and averaging
"""

from .dates import STRING_FORMATS, DateNormalizer, to_display_key
from .metrics import format_average, parse_metric, round_half_up

__all__ = [
    "DateNormalizer",
    "STRING_FORMATS",
    "to_display_key",
    "format_average",
    "parse_metric",
    "round_half_up",
]

"""
Reporting stages of the dashboard pipeline.

- RowClassifier: Sunday / Wednesday / other buckets by day label
- MonthSelector: which month to display
- PivotAggregator: location x date matrix per weekday
- SpecialEventListBuilder: chronological list of the other rows
- find_missing_entries: locations lacking an entry for a bucket date
"""

from .classifier import Bucket, ClassifiedRows, RowClassifier
from .missing_entries import find_missing_entries, missing_for_pivot
from .months import MonthSelector, collect_months, current_month
from .pivot import LocationAggregate, PivotAggregator
from .special_events import SpecialEventListBuilder

__all__ = [
    "Bucket",
    "ClassifiedRows",
    "RowClassifier",
    "find_missing_entries",
    "missing_for_pivot",
    "MonthSelector",
    "collect_months",
    "current_month",
    "LocationAggregate",
    "PivotAggregator",
    "SpecialEventListBuilder",
]

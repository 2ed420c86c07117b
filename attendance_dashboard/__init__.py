"""
Attendance Dashboard.

Turns a flat table of dated attendance records into per-weekday pivot
tables and a chronological list of special events.

Key Components:
- DashboardPipeline: end-to-end run from a table source to a DashboardResult
- PivotAggregator: location x date matrix with running attendance average
- SpecialEventListBuilder: flat list for rows outside the two weekdays
"""

__version__ = "0.1.0"

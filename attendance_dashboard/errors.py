"""Exception hierarchy for the attendance dashboard."""


class DashboardError(Exception):
    """Base error for dashboard failures surfaced to callers."""


class ConfigError(DashboardError):
    """Dashboard configuration is missing fields or holds invalid values."""


class SourceError(DashboardError):
    """The source table is absent or could not be read."""


class TableShapeError(DashboardError):
    """Value and display tables do not line up."""

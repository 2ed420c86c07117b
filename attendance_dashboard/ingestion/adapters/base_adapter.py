"""
Base Table Source.

Abstract base class defining the interface for all table sources.
Implements the Strategy pattern for different ways of reading the sheet.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

Table = List[List[Any]]


class SourceType(str, Enum):
    """Type of table source."""
    MEMORY = "memory"
    WORKBOOK = "workbook"


@dataclass
class TableFetchResult:
    """
    Result of a table read.

    ``values`` holds underlying cell values and ``display`` the text shown
    for the same cells; both are row-major and include header rows.
    """
    success: bool
    source_type: SourceType
    values: Table = field(default_factory=list)
    display: List[List[str]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    fetch_started_at: Optional[datetime] = None
    fetch_ended_at: Optional[datetime] = None

    @property
    def total_rows(self) -> int:
        return len(self.values)

    @property
    def duration_seconds(self) -> float:
        """Calculate fetch duration."""
        if self.fetch_started_at and self.fetch_ended_at:
            return (self.fetch_ended_at - self.fetch_started_at).total_seconds()
        return 0.0


@dataclass
class SourceConfig:
    """
    Base configuration for table sources.

    Extended by specific source types.
    """
    source_id: str
    source_type: SourceType
    sheet_name: str = "Dashboard"


class BaseTableSource(ABC):
    """
    Abstract base class for table sources.

    Sources encapsulate reading the attendance sheet from wherever it lives
    and return the value and display tables in one unified result.

    Subclasses must implement:
        - fetch(): Read both tables from the source
        - _validate_config(): Validate source-specific configuration
    """

    def __init__(self, config: SourceConfig):
        """
        Initialize the source.

        Args:
            config: SourceConfig with source-specific settings
        """
        self.config = config
        self.logger = logging.getLogger(f"attendance_dashboard.source.{config.source_id}")
        self._validate_config()

    @property
    def source_type(self) -> SourceType:
        """Get the source type."""
        return self.config.source_type

    @property
    def source_id(self) -> str:
        """Get the source identifier."""
        return self.config.source_id

    @abstractmethod
    def fetch(self) -> TableFetchResult:
        """
        Read the value and display tables.

        Returns:
            TableFetchResult; ``success`` is False when the table is absent
            or unreadable, with the reason in ``errors``
        """
        pass

    @abstractmethod
    def _validate_config(self) -> None:
        """
        Validate source-specific configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        pass

    def close(self) -> None:
        """
        Release any resources held by the source.

        Override in subclasses that hold resources (e.g., open workbooks).
        """
        pass

    def _started(self) -> datetime:
        return datetime.now(timezone.utc)

    def __enter__(self) -> "BaseTableSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

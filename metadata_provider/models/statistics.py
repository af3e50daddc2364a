"""
Statistics models.

This module defines the ColumnStatistics and TableStatistics classes. Every
statistic is optional: an absent value means "unknown", never zero.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ColumnStatistics:
    """Statistics for one column.

    Attributes:
        name: Column name.
        null_count: Number of NULL values, if known.
        distinct_count: Number of distinct values (NDV), if known.
        min_value: Lower bound of the column values, if known.
        max_value: Upper bound of the column values, if known.
    """

    name: str
    null_count: Optional[int] = None
    distinct_count: Optional[int] = None
    min_value: Any = None
    max_value: Any = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("column name cannot be empty")
        for label, value in (
            ("null_count", self.null_count),
            ("distinct_count", self.distinct_count),
        ):
            if value is not None and value < 0:
                raise ValueError(f"{label} cannot be negative")

    @property
    def has_bounds(self) -> bool:
        """Whether both min and max values are known."""
        return self.min_value is not None and self.max_value is not None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ColumnStatistics":
        """Create column statistics from their dictionary form."""
        return cls(
            name=name,
            null_count=data.get("null_count"),
            distinct_count=data.get("distinct_count"),
            min_value=data.get("min"),
            max_value=data.get("max"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (without the column name)."""
        return {
            "null_count": self.null_count,
            "distinct_count": self.distinct_count,
            "min": self.min_value,
            "max": self.max_value,
        }


@dataclass(frozen=True)
class TableStatistics:
    """Table-level statistics with optional per-column statistics.

    Attributes:
        row_count: Number of rows, or None when unknown.
        columns: Per-column statistics in no particular order.

    Example:
        >>> stats = TableStatistics(row_count=1000)
        >>> stats.row_count
        1000
        >>> stats.get_column("id") is None
        True
    """

    row_count: Optional[int] = None
    columns: Tuple[ColumnStatistics, ...] = ()

    def __post_init__(self) -> None:
        if self.row_count is not None and self.row_count < 0:
            raise ValueError("row_count cannot be negative")
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def has_row_count(self) -> bool:
        """Whether the row count is known."""
        return self.row_count is not None

    def get_column(self, name: str) -> Optional[ColumnStatistics]:
        """Get statistics for a column (case-insensitive), if any."""
        key = name.lower()
        for column in self.columns:
            if column.name.lower() == key:
                return column
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableStatistics":
        """Create table statistics from their dictionary form.

        Accepts ``{"row_count": N, "columns": {"col": {...}}}``.
        """
        columns = data.get("columns") or {}
        return cls(
            row_count=data.get("row_count"),
            columns=tuple(
                ColumnStatistics.from_dict(name, values)
                for name, values in columns.items()
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "row_count": self.row_count,
            "columns": {column.name: column.to_dict() for column in self.columns},
        }

"""
Physical layout models.

This module defines the immutable description of how a table is stored:
files, the row groups inside them, and the partitions derived from the
directory structure. A PhysicalLayout is produced by a discovery backend and
is only present on providers built through full discovery.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from metadata_provider.models.column import TableSchema
from metadata_provider.models.statistics import ColumnStatistics, TableStatistics

PartitionValues = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RowGroupMetadata:
    """A row group of a data file.

    Attributes:
        index: Position of the row group inside its file.
        row_count: Number of rows in the row group.
        byte_size: Uncompressed size in bytes, if known.
        columns: Per-column statistics recorded in the file footer.
    """

    index: int
    row_count: int
    byte_size: Optional[int] = None
    columns: Tuple[ColumnStatistics, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))

    def get_column(self, name: str) -> Optional[ColumnStatistics]:
        """Get statistics for a column (case-insensitive), if recorded."""
        key = name.lower()
        for column in self.columns:
            if column.name.lower() == key:
                return column
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "row_count": self.row_count,
            "byte_size": self.byte_size,
            "columns": {column.name: column.to_dict() for column in self.columns},
        }


@dataclass(frozen=True)
class FileMetadata:
    """A data file of a table.

    Attributes:
        path: File path.
        row_count: Number of rows in the file.
        size_bytes: File size on storage, if known.
        partition_values: Ordered (key, value) pairs derived from the
            directories between the table root and the file.
        row_groups: Row groups of the file. Empty when row group statistics
            were not collected.
    """

    path: str
    row_count: int
    size_bytes: Optional[int] = None
    partition_values: PartitionValues = ()
    row_groups: Tuple[RowGroupMetadata, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "partition_values",
            tuple((str(k), str(v)) for k, v in self.partition_values),
        )
        object.__setattr__(self, "row_groups", tuple(self.row_groups))

    @property
    def partition_dict(self) -> Dict[str, str]:
        """Partition values as a dictionary."""
        return dict(self.partition_values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "row_count": self.row_count,
            "size_bytes": self.size_bytes,
            "partition_values": self.partition_dict,
            "row_groups": [row_group.to_dict() for row_group in self.row_groups],
        }


@dataclass(frozen=True)
class PartitionMetadata:
    """A partition: the files sharing the same partition values.

    Attributes:
        values: Ordered (key, value) pairs identifying the partition.
        files: Paths of the files in the partition.
        row_count: Total number of rows in the partition.
    """

    values: PartitionValues
    files: Tuple[str, ...] = ()
    row_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def value_dict(self) -> Dict[str, str]:
        """Partition values as a dictionary."""
        return dict(self.values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "values": self.value_dict,
            "files": list(self.files),
            "row_count": self.row_count,
        }


@dataclass(frozen=True)
class PhysicalLayout:
    """Physical metadata of a table as found by a discovery backend.

    Attributes:
        location: Table root that was scanned.
        columns: Schema discovered from the data files.
        files: Data files, in deterministic (sorted) order.
        partitions: Partitions derived from the files' directories.

    Example:
        >>> layout = PhysicalLayout(location="/data/orders")
        >>> layout.row_count
        0
        >>> layout.summarize_statistics().row_count
        0
    """

    location: str
    columns: TableSchema = TableSchema()
    files: Tuple[FileMetadata, ...] = ()
    partitions: Tuple[PartitionMetadata, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "partitions", tuple(self.partitions))

    @property
    def row_count(self) -> int:
        """Total number of rows over all files."""
        return sum(file.row_count for file in self.files)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def partition_columns(self) -> List[str]:
        """Partition keys in first-seen order."""
        keys: List[str] = []
        for file in self.files:
            for key, _ in file.partition_values:
                if key not in keys:
                    keys.append(key)
        return keys

    @property
    def row_groups(self) -> List[RowGroupMetadata]:
        """All row groups of all files, file by file."""
        return [row_group for file in self.files for row_group in file.row_groups]

    def get_file(self, path: str) -> Optional[FileMetadata]:
        """Get a file by its path, if part of the layout."""
        for file in self.files:
            if file.path == path:
                return file
        return None

    def summarize_statistics(self) -> TableStatistics:
        """Summarize the layout into table statistics.

        The row count is the sum over all files. For each column seen in the
        row groups, null counts are summed and min/max bounds are combined.
        A column statistic is left unknown when any row group lacks it or
        when the recorded values cannot be compared with each other.

        Returns:
            TableStatistics derived from the layout.
        """
        row_groups = self.row_groups
        order: List[str] = []
        merged: Dict[str, Dict[str, Any]] = {}

        for row_group in row_groups:
            for column in row_group.columns:
                if column.name not in merged:
                    order.append(column.name)
                    merged[column.name] = {
                        "seen": 0,
                        "null_count": 0,
                        "min": column.min_value,
                        "max": column.max_value,
                        "bounds_known": True,
                        "nulls_known": True,
                    }
                entry = merged[column.name]
                entry["seen"] += 1

                if column.null_count is None:
                    entry["nulls_known"] = False
                elif entry["nulls_known"]:
                    entry["null_count"] += column.null_count

                if not column.has_bounds:
                    entry["bounds_known"] = False
                elif entry["bounds_known"]:
                    try:
                        entry["min"] = min(entry["min"], column.min_value)
                        entry["max"] = max(entry["max"], column.max_value)
                    except TypeError:
                        entry["bounds_known"] = False

        columns = []
        for name in order:
            entry = merged[name]
            complete = entry["seen"] == len(row_groups)
            bounds = complete and entry["bounds_known"]
            columns.append(
                ColumnStatistics(
                    name=name,
                    null_count=(
                        entry["null_count"]
                        if complete and entry["nulls_known"]
                        else None
                    ),
                    min_value=entry["min"] if bounds else None,
                    max_value=entry["max"] if bounds else None,
                )
            )

        return TableStatistics(row_count=self.row_count, columns=tuple(columns))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "location": self.location,
            "columns": self.columns.to_dict()["columns"],
            "files": [file.to_dict() for file in self.files],
            "partitions": [partition.to_dict() for partition in self.partitions],
        }

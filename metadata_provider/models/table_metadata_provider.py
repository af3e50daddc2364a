"""
Table metadata provider model.

This module defines the TableMetadataProvider class, the immutable result of
resolving metadata for one table at one point in query planning.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from metadata_provider.models.column import TableSchema
from metadata_provider.models.layout import (
    FileMetadata,
    PartitionMetadata,
    PhysicalLayout,
    RowGroupMetadata,
)
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.statistics import ColumnStatistics, TableStatistics
from metadata_provider.models.table_handle import TableHandle


@dataclass(frozen=True)
class TableMetadataProvider:
    """Resolved metadata for exactly one table.

    A provider never changes after construction; re-resolving metadata
    requires building a new provider. Planning components may read every
    attribute but must treat absent statistics as unknown.

    Attributes:
        kind: Strategy the provider was built with.
        schema: Ordered, typed column list. Empty when nothing is known.
        statistics: Table and column statistics, or None when unknown.
        layout: Physical layout. Present iff kind is FULL_DISCOVERY.
        table: Handle of the described table, if known.

    Example:
        >>> provider = TableMetadataProvider(kind=ProviderKind.SCHEMA_STATS_ONLY)
        >>> provider.row_count is None
        True
        >>> provider.files
        ()
    """

    kind: ProviderKind
    schema: TableSchema = TableSchema()
    statistics: Optional[TableStatistics] = None
    layout: Optional[PhysicalLayout] = None
    table: Optional[TableHandle] = None

    def __post_init__(self) -> None:
        """Check that the layout matches the provider kind."""
        if not isinstance(self.kind, ProviderKind):
            raise TypeError("kind must be a ProviderKind instance")
        if self.kind.requires_discovery and self.layout is None:
            raise ValueError(f"{self.kind.value} provider requires a physical layout")
        if not self.kind.requires_discovery and self.layout is not None:
            raise ValueError(f"{self.kind.value} provider cannot carry a physical layout")

    @property
    def table_name(self) -> Optional[str]:
        return self.table.name if self.table else None

    @property
    def has_statistics(self) -> bool:
        return self.statistics is not None

    @property
    def has_layout(self) -> bool:
        return self.layout is not None

    @property
    def row_count(self) -> Optional[int]:
        """Row count from the statistics, or None when unknown."""
        if self.statistics is None:
            return None
        return self.statistics.row_count

    @property
    def files(self) -> Tuple[FileMetadata, ...]:
        """Data files of the table; empty without a layout."""
        return self.layout.files if self.layout else ()

    @property
    def partitions(self) -> Tuple[PartitionMetadata, ...]:
        """Partitions of the table; empty without a layout."""
        return self.layout.partitions if self.layout else ()

    @property
    def row_groups(self) -> List[RowGroupMetadata]:
        """Row groups of all files; empty without a layout."""
        return self.layout.row_groups if self.layout else []

    def get_file(self, path: str) -> Optional[FileMetadata]:
        """Get file metadata by path, if the provider has a layout."""
        return self.layout.get_file(path) if self.layout else None

    def get_column_statistics(self, name: str) -> Optional[ColumnStatistics]:
        """Get statistics for a column, if known."""
        if self.statistics is None:
            return None
        return self.statistics.get_column(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "table": self.table_name,
            "location": self.table.location if self.table else None,
            "schema": self.schema.to_dict()["columns"],
            "statistics": self.statistics.to_dict() if self.statistics else None,
            "layout": self.layout.to_dict() if self.layout else None,
        }

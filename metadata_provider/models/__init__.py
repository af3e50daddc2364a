"""
Data models for metadata provider resolution.

This package contains the immutable structures describing a table's schema,
statistics and physical layout, the resolved provider that bundles them, and
the configuration and kind enumerations used to build providers.
"""

from metadata_provider.models.column import ColumnMetadata, TableSchema
from metadata_provider.models.config import ErrorMode, ProviderConfig
from metadata_provider.models.layout import (
    FileMetadata,
    PartitionMetadata,
    PhysicalLayout,
    RowGroupMetadata,
)
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.statistics import ColumnStatistics, TableStatistics
from metadata_provider.models.table_handle import TableHandle
from metadata_provider.models.table_metadata_provider import TableMetadataProvider

__all__ = [
    "ColumnMetadata",
    "ColumnStatistics",
    "ErrorMode",
    "FileMetadata",
    "PartitionMetadata",
    "PhysicalLayout",
    "ProviderConfig",
    "ProviderKind",
    "RowGroupMetadata",
    "TableHandle",
    "TableMetadataProvider",
    "TableSchema",
    "TableStatistics",
]

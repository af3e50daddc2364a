"""
Metadata Provider v1.0

Resolves table metadata (schema, statistics, file and partition layout) for
query planning. Callers pick a provider kind per table access: a cheap
provider built from already known schema and statistics, or a full provider
built by scanning the table's Parquet files.

Example:
    >>> from metadata_provider import ProviderKind, ProviderManager
    >>> manager = ProviderManager.init()
    >>> provider = manager.builder(ProviderKind.SCHEMA_STATS_ONLY).build()
    >>> manager.set_resolved_provider(provider)
"""

from metadata_provider.version import __version__, __version_info__

__author__ = "Metadata Provider Contributors"

from metadata_provider.builders.base import BuilderState, ProviderBuilder
from metadata_provider.builders.full_discovery import FullDiscoveryBuilder
from metadata_provider.builders.schema_stats_only import SchemaStatsOnlyBuilder
from metadata_provider.discovery.backend import MetadataDiscoveryBackend
from metadata_provider.discovery.parquet_backend import ParquetDiscoveryBackend
from metadata_provider.exceptions import (
    BuilderStateError,
    DiscoveryError,
    DiscoveryIOError,
    DiscoveryPermissionError,
    MalformedMetadataError,
    MetadataProviderError,
    ProviderConfigurationError,
    ProviderStateError,
    SchemaMismatchError,
    SchemaMismatchWarning,
    SchemaParseError,
    StatisticsParseError,
    UnsupportedProviderKindError,
)
from metadata_provider.manager.provider_manager import (
    ProviderManager,
    resolve_for_schema,
    resolve_with_fallback,
)
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
from metadata_provider.sources.schema_source import (
    DictSchemaSource,
    FileSchemaSource,
    InlineSchemaSource,
    SchemaSource,
    StaticSchemaSource,
)
from metadata_provider.sources.stats_source import (
    FileStatsSource,
    StaticStatsSource,
    StatsSource,
)

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Entry points
    "ProviderManager",
    "resolve_for_schema",
    "resolve_with_fallback",
    # Configuration
    "ProviderConfig",
    "ErrorMode",
    "ProviderKind",
    # Builders
    "ProviderBuilder",
    "BuilderState",
    "FullDiscoveryBuilder",
    "SchemaStatsOnlyBuilder",
    # Data models
    "TableMetadataProvider",
    "TableHandle",
    "TableSchema",
    "ColumnMetadata",
    "TableStatistics",
    "ColumnStatistics",
    "PhysicalLayout",
    "FileMetadata",
    "PartitionMetadata",
    "RowGroupMetadata",
    # Sources
    "SchemaSource",
    "StaticSchemaSource",
    "DictSchemaSource",
    "InlineSchemaSource",
    "FileSchemaSource",
    "StatsSource",
    "StaticStatsSource",
    "FileStatsSource",
    # Discovery
    "MetadataDiscoveryBackend",
    "ParquetDiscoveryBackend",
    # Exceptions
    "MetadataProviderError",
    "UnsupportedProviderKindError",
    "ProviderConfigurationError",
    "BuilderStateError",
    "ProviderStateError",
    "SchemaParseError",
    "StatisticsParseError",
    "SchemaMismatchError",
    "SchemaMismatchWarning",
    "DiscoveryError",
    "DiscoveryPermissionError",
    "DiscoveryIOError",
    "MalformedMetadataError",
]

"""
Schema and statistics only provider builder.

This module defines the SchemaStatsOnlyBuilder class, the cheap path used
when planning only needs column types and cardinality estimates.
"""

from metadata_provider.builders.base import ProviderBuilder
from metadata_provider.models.column import TableSchema
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.table_metadata_provider import TableMetadataProvider


class SchemaStatsOnlyBuilder(ProviderBuilder):
    """Builds providers purely from supplied schema and statistics.

    No storage is touched, so the provider never has a physical layout. This
    suits views and schema validation queries. With no inputs at all the
    provider has an empty schema and unknown statistics.

    Example:
        >>> provider = SchemaStatsOnlyBuilder().with_stats(
        ...     TableStatistics(row_count=1000)
        ... ).build()
        >>> provider.row_count
        1000
        >>> provider.layout is None
        True
    """

    kind = ProviderKind.SCHEMA_STATS_ONLY

    def _assemble(self) -> TableMetadataProvider:
        schema = self._resolve_schema()
        return TableMetadataProvider(
            kind=self.kind,
            schema=schema if schema is not None else TableSchema(),
            statistics=self._resolve_statistics(),
            layout=None,
            table=self._table,
        )

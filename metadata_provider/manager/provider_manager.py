"""
Metadata provider manager.

This module defines the ProviderManager class, the entry point through which
query planning obtains table metadata, and the two convenience resolution
functions built on top of it.
"""

import logging
from typing import Dict, Optional, Type

from metadata_provider.builders.base import ProviderBuilder
from metadata_provider.builders.full_discovery import FullDiscoveryBuilder
from metadata_provider.builders.schema_stats_only import SchemaStatsOnlyBuilder
from metadata_provider.exceptions import ProviderStateError, UnsupportedProviderKindError
from metadata_provider.models.column import TableSchema
from metadata_provider.models.config import ProviderConfig
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.table_metadata_provider import TableMetadataProvider
from metadata_provider.sources.schema_source import SchemaSource
from metadata_provider.sources.stats_source import StatsSource

logger = logging.getLogger(__name__)

# Every ProviderKind member must have exactly one entry.
BUILDER_CLASSES: Dict[ProviderKind, Type[ProviderBuilder]] = {
    ProviderKind.FULL_DISCOVERY: FullDiscoveryBuilder,
    ProviderKind.SCHEMA_STATS_ONLY: SchemaStatsOnlyBuilder,
}


class ProviderManager:
    """Manages how metadata is obtained for one table in one planning unit.

    A manager is created per planning unit (one query or one table access),
    optionally seeded with schema and statistics sources, asked for a
    builder of the required kind, and finally used to cache the provider
    that was built so later planning steps reuse it. Managers are not
    thread-safe and must not be shared across planning units, because the
    cached metadata can go stale between queries.

    The manager only stores the resolved provider; ``builder()`` never
    returns it implicitly. Deciding to reuse it is up to the caller.

    Usage:
        manager = ProviderManager.init()
        manager.set_stats_source(StaticStatsSource(TableStatistics(row_count=1000)))

        provider = manager.builder(ProviderKind.SCHEMA_STATS_ONLY).build()
        manager.set_resolved_provider(provider)

        # Later in the same planning unit
        provider = manager.get_resolved_provider()
    """

    def __init__(self, config: Optional[ProviderConfig] = None) -> None:
        """Initialize an empty ProviderManager.

        Args:
            config: Configuration passed to every builder. Defaults to
                ProviderConfig().
        """
        self.config = config or ProviderConfig()
        self._schema_source: Optional[SchemaSource] = None
        self._stats_source: Optional[StatsSource] = None
        self._resolved_provider: Optional[TableMetadataProvider] = None

    @classmethod
    def init(cls, config: Optional[ProviderConfig] = None) -> "ProviderManager":
        """Create a fresh manager for a new planning unit."""
        return cls(config)

    def set_schema_source(self, source: Optional[SchemaSource]) -> None:
        self._schema_source = source

    def get_schema_source(self) -> Optional[SchemaSource]:
        return self._schema_source

    def set_stats_source(self, source: Optional[StatsSource]) -> None:
        self._stats_source = source

    def get_stats_source(self) -> Optional[StatsSource]:
        return self._stats_source

    def set_resolved_provider(self, provider: TableMetadataProvider) -> None:
        """Cache the provider resolved for this planning unit.

        The cache slot is filled at most once. Storing the same provider
        again is a no-op.

        Raises:
            ProviderStateError: If a different provider is already cached.
        """
        if self._resolved_provider is not None and self._resolved_provider is not provider:
            raise ProviderStateError(
                "A metadata provider has already been resolved for this planning "
                "unit; create a new ProviderManager to resolve metadata again"
            )
        self._resolved_provider = provider

    def get_resolved_provider(self) -> Optional[TableMetadataProvider]:
        return self._resolved_provider

    def has_resolved_provider(self) -> bool:
        return self._resolved_provider is not None

    def builder(self, kind: ProviderKind) -> ProviderBuilder:
        """Return a new builder for kind, seeded with this manager's sources.

        Args:
            kind: Provider kind to build.

        Returns:
            A fresh, unconfigured builder.

        Raises:
            UnsupportedProviderKindError: If kind is not a ProviderKind or has
                no registered builder.
        """
        if not isinstance(kind, ProviderKind) or kind not in BUILDER_CLASSES:
            raise UnsupportedProviderKindError(kind)

        builder_class = BUILDER_CLASSES[kind]
        logger.debug("Dispatching %s to %s", kind.value, builder_class.__name__)
        return builder_class(
            schema_source=self._schema_source,
            stats_source=self._stats_source,
            config=self.config,
        )

    def __repr__(self) -> str:
        return (
            f"ProviderManager(schema_source={self._schema_source!r}, "
            f"stats_source={self._stats_source!r}, "
            f"resolved={self.has_resolved_provider()})"
        )


def resolve_for_schema(
    schema: TableSchema, config: Optional[ProviderConfig] = None
) -> TableMetadataProvider:
    """Build a schema-only provider for an already known schema.

    No manager state is involved and nothing is discovered.

    Args:
        schema: Complete table schema.
        config: Optional configuration.

    Returns:
        A SCHEMA_STATS_ONLY provider exposing schema.
    """
    return (
        ProviderManager.init(config)
        .builder(ProviderKind.SCHEMA_STATS_ONLY)
        .with_schema(schema)
        .build()
    )


def resolve_with_fallback(
    manager: Optional[ProviderManager],
) -> TableMetadataProvider:
    """Return a provider from manager, or a safe default.

    With a manager, its resolved provider is returned. If that manager has
    not cached one yet, a schema-only provider is built from the manager's
    seeded sources and returned without being cached. Without a manager, a
    schema-only provider with an empty schema and unknown statistics is
    returned. This function never returns None.

    Args:
        manager: Manager of the current planning unit, if any.

    Returns:
        A TableMetadataProvider.
    """
    if manager is None:
        return ProviderManager.init().builder(ProviderKind.SCHEMA_STATS_ONLY).build()

    provider = manager.get_resolved_provider()
    if provider is not None:
        return provider

    logger.debug("No resolved provider cached; building a schema-only provider")
    return manager.builder(ProviderKind.SCHEMA_STATS_ONLY).build()

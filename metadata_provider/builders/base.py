"""
Provider builder base class.

This module defines the ProviderBuilder class and the BuilderState enum. A
builder accumulates optional inputs through chained ``with_*`` calls and
assembles a TableMetadataProvider exactly once.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Optional

from metadata_provider.exceptions import BuilderStateError
from metadata_provider.models.column import TableSchema
from metadata_provider.models.config import ProviderConfig
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.statistics import TableStatistics
from metadata_provider.models.table_handle import TableHandle
from metadata_provider.models.table_metadata_provider import TableMetadataProvider
from metadata_provider.sources.schema_source import SchemaSource
from metadata_provider.sources.stats_source import StatsSource

logger = logging.getLogger(__name__)


class BuilderState(str, Enum):
    """Lifecycle of a provider builder.

    Transitions are UNCONFIGURED -> CONFIGURED -> BUILT. BUILT is terminal.
    """

    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    BUILT = "built"


class ProviderBuilder(ABC):
    """Single-use assembler of a TableMetadataProvider.

    Explicit values passed to ``with_schema``/``with_stats`` take precedence
    over the schema and statistics sources the builder was seeded with.
    Once ``build()`` has been called, successfully or not, the builder is
    spent: any further configuration or a second build raises
    BuilderStateError.

    Subclasses set ``kind`` and implement ``_assemble()``.

    Attributes:
        kind: Provider kind produced by this builder class.
        config: ProviderConfig shared with the sources and backend.
    """

    kind: ClassVar[ProviderKind]

    def __init__(
        self,
        schema_source: Optional[SchemaSource] = None,
        stats_source: Optional[StatsSource] = None,
        config: Optional[ProviderConfig] = None,
    ) -> None:
        self.config = config or ProviderConfig()
        self._schema_source = schema_source
        self._stats_source = stats_source
        self._schema: Optional[TableSchema] = None
        self._statistics: Optional[TableStatistics] = None
        self._table: Optional[TableHandle] = None
        self._state = BuilderState.UNCONFIGURED

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def is_built(self) -> bool:
        return self._state is BuilderState.BUILT

    def with_schema(self, schema: Optional[TableSchema]) -> "ProviderBuilder":
        """Use an explicit schema."""
        self._configure("with_schema")
        self._schema = schema
        return self

    def with_stats(self, statistics: Optional[TableStatistics]) -> "ProviderBuilder":
        """Use explicit statistics."""
        self._configure("with_stats")
        self._statistics = statistics
        return self

    def with_schema_source(self, source: Optional[SchemaSource]) -> "ProviderBuilder":
        """Replace the schema source the builder was seeded with."""
        self._configure("with_schema_source")
        self._schema_source = source
        return self

    def with_stats_source(self, source: Optional[StatsSource]) -> "ProviderBuilder":
        """Replace the statistics source the builder was seeded with."""
        self._configure("with_stats_source")
        self._stats_source = source
        return self

    def with_table(self, table: Optional[TableHandle]) -> "ProviderBuilder":
        """Set the table the provider describes."""
        self._configure("with_table")
        self._table = table
        return self

    def build(self) -> TableMetadataProvider:
        """Assemble the provider.

        Returns:
            A new immutable TableMetadataProvider.

        Raises:
            BuilderStateError: If the builder was already built.
            DiscoveryError: If physical discovery fails (full discovery only).
        """
        if self.is_built:
            raise BuilderStateError(
                f"{type(self).__name__} has already been built and cannot be reused"
            )

        logger.debug(
            "Building %s provider for table %s",
            self.kind.value,
            self._table or "<unnamed>",
        )
        try:
            provider = self._assemble()
        finally:
            self._state = BuilderState.BUILT

        logger.debug(
            "Built %s provider with %d column(s)",
            self.kind.value,
            len(provider.schema),
        )
        return provider

    @abstractmethod
    def _assemble(self) -> TableMetadataProvider:
        """Produce the provider from the accumulated inputs."""

    def _configure(self, operation: str) -> None:
        if self.is_built:
            raise BuilderStateError(
                f"Cannot call {operation}() on {type(self).__name__} after build()"
            )
        self._state = BuilderState.CONFIGURED

    def _resolve_schema(self) -> Optional[TableSchema]:
        """Explicit schema, else the seeded source's schema, else None."""
        if self._schema is not None:
            return self._schema
        if self._schema_source is not None:
            return self._schema_source.get()
        return None

    def _resolve_statistics(self) -> Optional[TableStatistics]:
        """Explicit statistics, else the seeded source's, else None."""
        if self._statistics is not None:
            return self._statistics
        if self._stats_source is not None:
            return self._stats_source.get()
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.value})"

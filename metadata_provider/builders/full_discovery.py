"""
Full discovery provider builder.

This module defines the FullDiscoveryBuilder class, which scans the table's
storage through a discovery backend and combines the discovered layout with
an optional explicit schema.
"""

import logging
import warnings
from typing import Optional

from metadata_provider.builders.base import ProviderBuilder
from metadata_provider.discovery.backend import MetadataDiscoveryBackend
from metadata_provider.exceptions import (
    DiscoveryError,
    ProviderConfigurationError,
    SchemaMismatchError,
    SchemaMismatchWarning,
)
from metadata_provider.models.column import TableSchema
from metadata_provider.models.config import ErrorMode, ProviderConfig
from metadata_provider.models.provider_kind import ProviderKind
from metadata_provider.models.table_metadata_provider import TableMetadataProvider
from metadata_provider.sources.schema_source import SchemaSource
from metadata_provider.sources.stats_source import StatsSource
from metadata_provider.utils.type_utils import types_equal

logger = logging.getLogger(__name__)


class FullDiscoveryBuilder(ProviderBuilder):
    """Builds providers from a physical scan of the table.

    This is the expensive path: the discovery backend is called once per
    build and its cost grows with the number of files and partitions. It is
    meant for planners that need file, partition or row-group metadata for
    pruning.

    Schema precedence: when an explicit schema is available (passed to
    ``with_schema`` or supplied by the seeded schema source) the provider's
    schema has exactly its columns, in its order. Explicit columns without a
    type take the discovered type. Layout and statistics always come from
    the discovery backend.

    Usage:
        provider = (
            FullDiscoveryBuilder()
            .with_table(TableHandle.from_path("/data/orders"))
            .with_backend(ParquetDiscoveryBackend())
            .build()
        )
    """

    kind = ProviderKind.FULL_DISCOVERY

    def __init__(
        self,
        schema_source: Optional[SchemaSource] = None,
        stats_source: Optional[StatsSource] = None,
        config: Optional[ProviderConfig] = None,
    ) -> None:
        super().__init__(schema_source, stats_source, config)
        self._backend: Optional[MetadataDiscoveryBackend] = None

    def with_backend(
        self, backend: Optional[MetadataDiscoveryBackend]
    ) -> "FullDiscoveryBuilder":
        """Set the discovery backend used to scan the table."""
        self._configure("with_backend")
        self._backend = backend
        return self

    def _assemble(self) -> TableMetadataProvider:
        if self._table is None:
            raise ProviderConfigurationError(
                "Full discovery requires a table handle; call with_table()"
            )
        if self._backend is None:
            raise ProviderConfigurationError(
                f"Full discovery of table '{self._table.name}' requires a "
                f"discovery backend; call with_backend()"
            )

        try:
            layout = self._backend.discover(self._table)
        except DiscoveryError as e:
            e.with_table(self._table.name)
            raise

        logger.debug(
            "Discovered %d file(s) and %d partition(s) for table '%s'",
            layout.file_count,
            len(layout.partitions),
            self._table,
        )

        explicit = self._resolve_schema()
        if explicit is None:
            schema = layout.columns
        else:
            self._check_mismatches(explicit, layout.columns)
            schema = explicit.fill_types_from(layout.columns)

        if self._statistics is not None or self._stats_source is not None:
            logger.debug(
                "Ignoring supplied statistics for table '%s'; full discovery "
                "derives statistics from the physical layout",
                self._table,
            )

        return TableMetadataProvider(
            kind=self.kind,
            schema=schema,
            statistics=layout.summarize_statistics(),
            layout=layout,
            table=self._table,
        )

    def _check_mismatches(self, explicit: TableSchema, discovered: TableSchema) -> None:
        """Report explicit columns that disagree with the discovered ones."""
        mode = self.config.on_schema_mismatch
        if mode is ErrorMode.IGNORE:
            return

        table_name = self._table.name if self._table else ""
        for column in explicit:
            found = discovered.get_column(column.name)
            if found is None:
                message = (
                    f"Column '{column.name}' of the explicit schema for table "
                    f"'{table_name}' was not found in the data files"
                )
            elif column.is_typed and found.is_typed and not types_equal(
                column.data_type, found.data_type, self.config.dialect
            ):
                message = (
                    f"Column '{column.name}' of table '{table_name}' is declared "
                    f"as {column.data_type} but stored as {found.data_type}; "
                    f"using {column.data_type}"
                )
            else:
                continue

            if mode is ErrorMode.FAIL:
                raise SchemaMismatchError(
                    message,
                    table_name=table_name,
                    column_name=column.name,
                    expected_type=column.data_type,
                    discovered_type=found.data_type if found else None,
                )
            warnings.warn(message, SchemaMismatchWarning, stacklevel=2)

"""
Parquet discovery backend.

This module defines the ParquetDiscoveryBackend class, which lists the
Parquet files of a table on the local file system, derives partitions from
the directory structure and reads every file footer with pyarrow to collect
row counts, row-group column statistics and the Arrow schema.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pyarrow as pa
import pyarrow.parquet as pq

from metadata_provider.discovery.backend import MetadataDiscoveryBackend
from metadata_provider.exceptions import (
    DiscoveryError,
    DiscoveryIOError,
    DiscoveryPermissionError,
    MalformedMetadataError,
)
from metadata_provider.models.column import ColumnMetadata, TableSchema
from metadata_provider.models.config import ProviderConfig
from metadata_provider.models.layout import (
    FileMetadata,
    PartitionMetadata,
    PartitionValues,
    PhysicalLayout,
    RowGroupMetadata,
)
from metadata_provider.models.statistics import ColumnStatistics
from metadata_provider.models.table_handle import TableHandle

logger = logging.getLogger(__name__)

STEP_LIST_FILES = "list files"
STEP_READ_FOOTER = "read footer"


class ParquetDiscoveryBackend(MetadataDiscoveryBackend):
    """Discovers table metadata by reading Parquet footers.

    The table location may be a single Parquet file or a directory. Inside
    a directory, files are found recursively and processed in sorted order.
    Directory names below the table root become partition values:
    ``region=eu`` yields ``("region", "eu")`` and any other name yields
    ``("dirN", name)`` where N is the nesting depth.

    Attributes:
        config: ProviderConfig controlling file selection and statistics.

    Example:
        >>> backend = ParquetDiscoveryBackend()
        >>> layout = backend.discover(TableHandle.from_path("/data/orders"))
        >>> layout.partition_columns
        ['region']
    """

    def __init__(self, config: Optional[ProviderConfig] = None) -> None:
        self.config = config or ProviderConfig()

    def discover(self, table: TableHandle) -> PhysicalLayout:
        if not table.location:
            raise DiscoveryIOError(
                "table has no storage location",
                table=table.name,
                step=STEP_LIST_FILES,
            )

        root = Path(table.location)
        paths = self._list_files(table, root)
        logger.debug("Found %d data file(s) for table '%s'", len(paths), table)

        files: List[FileMetadata] = []
        columns: List[ColumnMetadata] = []
        seen_columns = set()

        for path in paths:
            file_metadata, schema = self._read_footer(table, root, path)
            files.append(file_metadata)
            for field in schema:
                if field.name.lower() not in seen_columns:
                    seen_columns.add(field.name.lower())
                    columns.append(
                        ColumnMetadata(
                            name=field.name,
                            data_type=arrow_type_to_sql(field.type),
                            nullable=field.nullable,
                        )
                    )

        return PhysicalLayout(
            location=str(root),
            columns=TableSchema.from_columns(columns),
            files=tuple(files),
            partitions=_group_partitions(files),
        )

    def _list_files(self, table: TableHandle, root: Path) -> List[Path]:
        """List the data files under root in sorted order.

        Any directory that cannot be read fails the listing; a partial file
        list would understate the table.
        """
        try:
            if root.is_file():
                return [root]
            if not root.is_dir():
                raise DiscoveryIOError(
                    "table location does not exist",
                    table=table.name,
                    step=STEP_LIST_FILES,
                    path=str(root),
                )
            paths = []
            for dirpath, dirnames, filenames in os.walk(root, onerror=_reraise):
                if self.config.ignore_hidden_files:
                    dirnames[:] = [d for d in dirnames if not d.startswith((".", "_"))]
                for filename in filenames:
                    path = Path(dirpath) / filename
                    if path.is_file() and self._is_data_file(root, path):
                        paths.append(path)
            return sorted(paths)
        except DiscoveryError:
            raise
        except PermissionError as e:
            raise DiscoveryPermissionError(
                str(e),
                table=table.name,
                step=STEP_LIST_FILES,
                path=e.filename or str(root),
            ) from e
        except OSError as e:
            raise DiscoveryIOError(
                str(e),
                table=table.name,
                step=STEP_LIST_FILES,
                path=e.filename or str(root),
            ) from e

    def _is_data_file(self, root: Path, path: Path) -> bool:
        if self.config.ignore_hidden_files:
            for part in path.relative_to(root).parts:
                if part.startswith((".", "_")):
                    return False
        suffix = path.suffix.lower()
        return any(suffix == ext.lower() for ext in self.config.file_extensions)

    def _read_footer(
        self, table: TableHandle, root: Path, path: Path
    ) -> Tuple[FileMetadata, pa.Schema]:
        """Read one file footer into FileMetadata and its Arrow schema."""
        try:
            metadata = pq.read_metadata(str(path))
            schema = metadata.schema.to_arrow_schema()
            size_bytes = path.stat().st_size
        except PermissionError as e:
            raise DiscoveryPermissionError(
                str(e), table=table.name, step=STEP_READ_FOOTER, path=str(path)
            ) from e
        except pa.ArrowInvalid as e:
            raise MalformedMetadataError(
                str(e), table=table.name, step=STEP_READ_FOOTER, path=str(path)
            ) from e
        except OSError as e:
            raise DiscoveryIOError(
                str(e), table=table.name, step=STEP_READ_FOOTER, path=str(path)
            ) from e

        row_groups: Tuple[RowGroupMetadata, ...] = ()
        if self.config.collect_row_group_stats:
            row_groups = tuple(
                _row_group_metadata(metadata.row_group(i), i)
                for i in range(metadata.num_row_groups)
            )

        file_metadata = FileMetadata(
            path=str(path),
            row_count=metadata.num_rows,
            size_bytes=size_bytes,
            partition_values=_partition_values(root, path),
            row_groups=row_groups,
        )
        return file_metadata, schema


def _reraise(error: OSError) -> None:
    """os.walk error handler; os.walk skips unreadable directories otherwise."""
    raise error


def _row_group_metadata(row_group, index: int) -> RowGroupMetadata:
    columns = []
    for j in range(row_group.num_columns):
        chunk = row_group.column(j)
        stats = chunk.statistics if chunk.is_stats_set else None
        if stats is None:
            columns.append(ColumnStatistics(name=chunk.path_in_schema))
            continue
        columns.append(
            ColumnStatistics(
                name=chunk.path_in_schema,
                null_count=stats.null_count if stats.has_null_count else None,
                distinct_count=(
                    stats.distinct_count if stats.has_distinct_count else None
                ),
                min_value=stats.min if stats.has_min_max else None,
                max_value=stats.max if stats.has_min_max else None,
            )
        )
    return RowGroupMetadata(
        index=index,
        row_count=row_group.num_rows,
        byte_size=row_group.total_byte_size,
        columns=tuple(columns),
    )


def _partition_values(root: Path, path: Path) -> PartitionValues:
    """Derive partition values from the directories between root and path."""
    if path == root:
        return ()
    values = []
    for depth, part in enumerate(path.relative_to(root).parent.parts):
        if "=" in part:
            key, _, value = part.partition("=")
            values.append((key, value))
        else:
            values.append((f"dir{depth}", part))
    return tuple(values)


def _group_partitions(files: List[FileMetadata]) -> Tuple[PartitionMetadata, ...]:
    grouped: Dict[PartitionValues, List[FileMetadata]] = {}
    for file in files:
        if file.partition_values:
            grouped.setdefault(file.partition_values, []).append(file)
    return tuple(
        PartitionMetadata(
            values=values,
            files=tuple(file.path for file in members),
            row_count=sum(file.row_count for file in members),
        )
        for values, members in grouped.items()
    )


def arrow_type_to_sql(arrow_type: pa.DataType) -> Optional[str]:
    """Map an Arrow data type to a SQL type name.

    Returns:
        SQL type string, or None for types without a SQL counterpart
        (such as the Arrow null type).

    Example:
        >>> arrow_type_to_sql(pa.decimal128(10, 2))
        'DECIMAL(10, 2)'
        >>> arrow_type_to_sql(pa.list_(pa.int64()))
        'ARRAY<BIGINT>'
    """
    types = pa.types
    if types.is_dictionary(arrow_type):
        return arrow_type_to_sql(arrow_type.value_type)
    if types.is_boolean(arrow_type):
        return "BOOLEAN"
    if types.is_int8(arrow_type):
        return "TINYINT"
    if types.is_int16(arrow_type) or types.is_uint8(arrow_type):
        return "SMALLINT"
    if types.is_int32(arrow_type) or types.is_uint16(arrow_type):
        return "INT"
    if types.is_int64(arrow_type) or types.is_uint32(arrow_type):
        return "BIGINT"
    if types.is_uint64(arrow_type):
        return "DECIMAL(20, 0)"
    if types.is_float16(arrow_type) or types.is_float32(arrow_type):
        return "FLOAT"
    if types.is_float64(arrow_type):
        return "DOUBLE"
    if types.is_decimal(arrow_type):
        return f"DECIMAL({arrow_type.precision}, {arrow_type.scale})"
    if types.is_string(arrow_type) or types.is_large_string(arrow_type):
        return "VARCHAR"
    if (
        types.is_binary(arrow_type)
        or types.is_large_binary(arrow_type)
        or types.is_fixed_size_binary(arrow_type)
    ):
        return "VARBINARY"
    if types.is_date(arrow_type):
        return "DATE"
    if types.is_timestamp(arrow_type):
        return "TIMESTAMPTZ" if arrow_type.tz else "TIMESTAMP"
    if types.is_time(arrow_type):
        return "TIME"
    if types.is_list(arrow_type) or types.is_large_list(arrow_type):
        inner = arrow_type_to_sql(arrow_type.value_type)
        return f"ARRAY<{inner}>" if inner else None
    if types.is_map(arrow_type):
        key = arrow_type_to_sql(arrow_type.key_type)
        item = arrow_type_to_sql(arrow_type.item_type)
        return f"MAP<{key}, {item}>" if key and item else None
    if types.is_struct(arrow_type):
        fields = []
        for i in range(arrow_type.num_fields):
            field = arrow_type.field(i)
            field_type = arrow_type_to_sql(field.type)
            if field_type is None:
                return None
            fields.append(f"{field.name} {field_type}")
        return f"STRUCT<{', '.join(fields)}>"
    return None

"""
Command-line interface for metadata provider v1.0.

This module provides a command-line interface that resolves a metadata
provider for one table and prints its schema, statistics and physical
layout.
"""

import argparse
import json
import logging
import sys
import warnings
from typing import Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from metadata_provider import (
    DiscoveryError,
    FileSchemaSource,
    FileStatsSource,
    InlineSchemaSource,
    MetadataProviderError,
    ParquetDiscoveryBackend,
    ProviderConfig,
    ProviderKind,
    ProviderManager,
    SchemaMismatchWarning,
    TableHandle,
    TableMetadataProvider,
)

USE_COLOR = True


def _color(text: str, color: str) -> str:
    if not USE_COLOR:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def print_success(msg: str) -> None:
    """Print success message."""
    print(_color(f"[OK] {msg}", Fore.GREEN))


def print_error(msg: str) -> None:
    """Print error message."""
    print(_color(f"[ERROR] {msg}", Fore.RED), file=sys.stderr)


def print_warning(msg: str, file=None) -> None:
    """Print warning message."""
    print(_color(f"[WARN] {msg}", Fore.YELLOW), file=file)


def print_info(msg: str) -> None:
    """Print info message."""
    print(_color(msg, Fore.CYAN))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="metadata-provider",
        description="Table Metadata Provider - v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan a Parquet table directory
  %(prog)s /data/orders

  # Resolve from schema and statistics files only, no scan
  %(prog)s /data/orders --kind schema-stats-only --stats stats.json

  # Override the discovered schema
  %(prog)s /data/orders --inline-schema "(id BIGINT NOT NULL, amount DECIMAL(10,2))"

  # JSON output
  %(prog)s /data/orders --format json
        """,
    )

    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument("location", help="Table directory or Parquet file")
    input_group.add_argument("--name", help="Table name (default: last path segment)")
    input_group.add_argument(
        "--kind",
        "-k",
        default=ProviderKind.FULL_DISCOVERY.value,
        help=f"Provider kind: {', '.join(ProviderKind.values())} "
        f"(default: {ProviderKind.FULL_DISCOVERY.value})",
    )
    schema_group = input_group.add_mutually_exclusive_group()
    schema_group.add_argument(
        "--schema", "-s", metavar="FILE", help="Schema definition file (JSON format)"
    )
    schema_group.add_argument(
        "--inline-schema", metavar="TEXT", help="Column list, e.g. '(id INT, name VARCHAR)'"
    )
    input_group.add_argument(
        "--stats", metavar="FILE", help="Statistics file (JSON format)"
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--dialect", help="SQL dialect used to parse type names")
    config_group.add_argument(
        "--no-row-group-stats",
        action="store_true",
        help="Do not read row group statistics from file footers",
    )

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def resolve(args: argparse.Namespace) -> TableMetadataProvider:
    """Resolve a provider for the table described by the arguments."""
    kind = ProviderKind.from_string(args.kind)
    config = ProviderConfig(
        dialect=args.dialect,
        collect_row_group_stats=not args.no_row_group_stats,
    )
    table = TableHandle.from_path(args.location, name=args.name)

    manager = ProviderManager.init(config)
    if args.inline_schema:
        manager.set_schema_source(InlineSchemaSource(args.inline_schema, args.dialect))
    elif args.schema:
        manager.set_schema_source(FileSchemaSource(args.schema, args.dialect))
    else:
        manager.set_schema_source(FileSchemaSource.for_table(table, config))

    if args.stats:
        manager.set_stats_source(FileStatsSource(args.stats))
    else:
        manager.set_stats_source(FileStatsSource.for_table(table, config))

    builder = manager.builder(kind).with_table(table)
    if kind.requires_discovery:
        builder.with_backend(ParquetDiscoveryBackend(config))

    provider = builder.build()
    manager.set_resolved_provider(provider)
    return provider


def main(argv: Optional[list] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        metadata-provider /data/orders
        metadata-provider /data/orders --kind schema-stats-only
        metadata-provider /data/orders --format json
    """
    global USE_COLOR

    args = build_parser().parse_args(argv)

    if args.no_color:
        USE_COLOR = False
    else:
        init()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", SchemaMismatchWarning)
            provider = resolve(args)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)
    except DiscoveryError as e:
        print_error(str(e))
        sys.exit(1)
    except MetadataProviderError as e:
        print_error(f"Metadata resolution failed: {e}")
        sys.exit(1)

    # Warnings go to stderr in JSON mode so stdout stays parseable.
    for warning in caught:
        print_warning(
            str(warning.message),
            file=sys.stderr if args.format == "json" else None,
        )

    if args.format == "json":
        print(json.dumps(provider.to_dict(), indent=2, default=_json_value))
        return

    print_success(
        f"Resolved {provider.kind.value} provider for table '{provider.table_name}'"
    )
    show_schema(provider)
    show_statistics(provider)
    if provider.has_layout:
        show_layout(provider, detailed=args.format == "table")


def show_schema(provider: TableMetadataProvider) -> None:
    """Print the provider schema."""
    print_info(f"\nSchema ({len(provider.schema)} columns):")
    if provider.schema.is_empty():
        print_warning("No columns known")
        return
    rows = [
        [column.name, column.data_type or "?", "YES" if column.nullable else "NO"]
        for column in provider.schema
    ]
    print(tabulate(rows, headers=["Column", "Type", "Nullable"]))


def show_statistics(provider: TableMetadataProvider) -> None:
    """Print the provider statistics."""
    print_info("\nStatistics:")
    if provider.statistics is None:
        print("  unknown")
        return

    row_count = provider.row_count
    print(f"  Row count: {row_count if row_count is not None else 'unknown'}")
    if provider.statistics.columns:
        rows = [
            [
                column.name,
                _or_unknown(column.null_count),
                _or_unknown(column.distinct_count),
                _or_unknown(column.min_value),
                _or_unknown(column.max_value),
            ]
            for column in provider.statistics.columns
        ]
        print(tabulate(rows, headers=["Column", "Nulls", "NDV", "Min", "Max"]))


def show_layout(provider: TableMetadataProvider, detailed: bool) -> None:
    """Print the physical layout."""
    layout = provider.layout
    print_info("\nPhysical layout:")
    print(f"  Location: {layout.location}")
    print(f"  Files: {layout.file_count}")
    print(f"  Row groups: {len(layout.row_groups)}")
    if layout.partition_columns:
        print(f"  Partition columns: {', '.join(layout.partition_columns)}")

    if layout.partitions:
        rows = [
            [
                ", ".join(f"{k}={v}" for k, v in partition.values),
                len(partition.files),
                partition.row_count,
            ]
            for partition in layout.partitions
        ]
        print(tabulate(rows, headers=["Partition", "Files", "Rows"]))

    if detailed:
        rows = [
            [file.path, file.row_count, len(file.row_groups), _or_unknown(file.size_bytes)]
            for file in layout.files
        ]
        print()
        print(tabulate(rows, headers=["File", "Rows", "Row groups", "Bytes"]))


def _json_value(value) -> str:
    """Render statistic values JSON cannot encode natively.

    Binary Parquet bounds are decoded as UTF-8 when possible and
    hex-encoded otherwise.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    return str(value)


def _or_unknown(value) -> str:
    return "unknown" if value is None else _json_value(value)


if __name__ == "__main__":
    main()

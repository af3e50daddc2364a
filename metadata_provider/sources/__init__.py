"""
Schema and statistics sources.

This package contains the abstract interfaces through which builders obtain
already-known schema and statistics, and concrete implementations backed by
memory, inline SQL and JSON files stored next to the table data.
"""

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
    "DictSchemaSource",
    "FileSchemaSource",
    "FileStatsSource",
    "InlineSchemaSource",
    "SchemaSource",
    "StaticSchemaSource",
    "StaticStatsSource",
    "StatsSource",
]

"""
Provider builders.

This package contains the single-use builders that assemble a
TableMetadataProvider, one per provider kind.
"""

from metadata_provider.builders.base import BuilderState, ProviderBuilder
from metadata_provider.builders.full_discovery import FullDiscoveryBuilder
from metadata_provider.builders.schema_stats_only import SchemaStatsOnlyBuilder

__all__ = [
    "BuilderState",
    "FullDiscoveryBuilder",
    "ProviderBuilder",
    "SchemaStatsOnlyBuilder",
]

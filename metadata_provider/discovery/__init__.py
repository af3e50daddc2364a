"""
Physical metadata discovery.

This package contains the discovery backend interface used by full discovery
builders and the pyarrow-based Parquet implementation.
"""

from metadata_provider.discovery.backend import MetadataDiscoveryBackend
from metadata_provider.discovery.parquet_backend import (
    ParquetDiscoveryBackend,
    arrow_type_to_sql,
)

__all__ = [
    "MetadataDiscoveryBackend",
    "ParquetDiscoveryBackend",
    "arrow_type_to_sql",
]

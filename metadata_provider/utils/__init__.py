"""
Utility functions for metadata provider resolution.

This package contains helpers shared by the models, sources and discovery
backends.
"""

from metadata_provider.utils.type_utils import normalize_type, types_equal

__all__ = [
    "normalize_type",
    "types_equal",
]

"""
Provider manager.

This package contains the ProviderManager entry point and the resolution
helpers built on it.
"""

from metadata_provider.manager.provider_manager import (
    BUILDER_CLASSES,
    ProviderManager,
    resolve_for_schema,
    resolve_with_fallback,
)

__all__ = [
    "BUILDER_CLASSES",
    "ProviderManager",
    "resolve_for_schema",
    "resolve_with_fallback",
]

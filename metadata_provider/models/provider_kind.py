"""
Provider kind enumeration.

This module defines the closed set of strategies used to obtain a table
metadata provider.
"""

from enum import Enum


class ProviderKind(str, Enum):
    """Strategy used to obtain a metadata provider.

    Attributes:
        FULL_DISCOVERY: Physical scan of the table's files (e.g. Parquet
            footers). Produces a provider with a physical layout.
        SCHEMA_STATS_ONLY: Lightweight provider derived purely from supplied
            schema and statistics. Never touches storage.

    Example:
        >>> ProviderKind.from_string("full-discovery")
        <ProviderKind.FULL_DISCOVERY: 'full_discovery'>
        >>> ProviderKind.SCHEMA_STATS_ONLY.requires_discovery
        False
    """

    FULL_DISCOVERY = "full_discovery"
    SCHEMA_STATS_ONLY = "schema_stats_only"

    @property
    def requires_discovery(self) -> bool:
        """Whether providers of this kind carry a physical layout."""
        return self is ProviderKind.FULL_DISCOVERY

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all provider kind values."""
        return [member.value for member in cls]

    @classmethod
    def from_string(cls, value: str) -> "ProviderKind":
        """Parse a provider kind from user input.

        Dashes and underscores are interchangeable and case is ignored.

        Args:
            value: Kind name such as "schema-stats-only".

        Returns:
            The matching ProviderKind.

        Raises:
            ValueError: If value does not name a provider kind.
        """
        normalized = value.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Invalid provider kind: '{value}'. "
                f"Must be one of {cls.values()}"
            ) from None

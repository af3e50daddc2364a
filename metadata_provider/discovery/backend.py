"""
Metadata discovery backend interface.

A discovery backend performs the expensive physical inspection of a table's
stored files and returns its PhysicalLayout. Retry, caching and cancellation
policies belong to the backend; the provider layer calls it once per build
and propagates its errors unchanged.
"""

from abc import ABC, abstractmethod

from metadata_provider.models.layout import PhysicalLayout
from metadata_provider.models.table_handle import TableHandle


class MetadataDiscoveryBackend(ABC):
    """Abstract interface for physical metadata discovery.

    Example:
        >>> class EmptyBackend(MetadataDiscoveryBackend):
        ...     def discover(self, table):
        ...         return PhysicalLayout(location=table.location or "")
        >>> EmptyBackend().discover(TableHandle("t", "/data/t")).file_count
        0
    """

    @abstractmethod
    def discover(self, table: TableHandle) -> PhysicalLayout:
        """Scan the table's storage and return its physical layout.

        Args:
            table: Handle of the table to discover.

        Returns:
            PhysicalLayout with files, partitions and discovered columns.

        Raises:
            DiscoveryPermissionError: If storage could not be accessed.
            DiscoveryIOError: If reading storage failed.
            MalformedMetadataError: If stored metadata could not be decoded.
        """

"""
Table handle model.

This module defines the TableHandle class, which identifies the table a
provider is resolved for and where its data is stored.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class TableHandle:
    """Identifies a table and its storage location.

    Attributes:
        name: Table name used in messages and provider output.
        location: Root directory (or single file) holding the table data.
            May be None for tables that are never discovered, such as views.

    Example:
        >>> handle = TableHandle.from_path("/data/warehouse/orders")
        >>> handle.name
        'orders'
    """

    name: str
    location: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that the table name is not empty."""
        if not self.name:
            raise ValueError("table name cannot be empty")

    @classmethod
    def from_path(
        cls, path: Union[str, Path], name: Optional[str] = None
    ) -> "TableHandle":
        """Create a handle for the table stored at path.

        Args:
            path: Table root directory or single data file.
            name: Optional explicit table name. Defaults to the last path
                segment without its suffix.

        Returns:
            A TableHandle pointing at path.
        """
        path = Path(path)
        table_name = name or path.stem or str(path)
        return cls(name=table_name, location=str(path))

    def __str__(self) -> str:
        return self.name

"""
Column and table schema models.

This module defines the ColumnMetadata and TableSchema classes. Both are
immutable so that a resolved provider can be shared read-only between
planning components.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from metadata_provider.utils.type_utils import normalize_type


@dataclass(frozen=True)
class ColumnMetadata:
    """A single typed column of a table schema.

    Attributes:
        name: Column name (required).
        data_type: SQL type string such as "BIGINT". None marks an untyped
            column hint whose type is expected to come from discovery.
        nullable: Whether the column may contain NULL values.

    Example:
        >>> col = ColumnMetadata.of("amount", "decimal(10,2)")
        >>> col.data_type
        'DECIMAL(10, 2)'
        >>> ColumnMetadata("id").is_typed
        False
    """

    name: str
    data_type: Optional[str] = None
    nullable: bool = True

    def __post_init__(self) -> None:
        """Validate that the column name is not empty."""
        if not self.name:
            raise ValueError("column name cannot be empty")

    @classmethod
    def of(
        cls,
        name: str,
        data_type: Optional[str] = None,
        nullable: bool = True,
        dialect: Optional[str] = None,
    ) -> "ColumnMetadata":
        """Create a column with its type normalized through sqlglot.

        Raises:
            SchemaParseError: If data_type cannot be parsed.
        """
        if data_type is not None:
            data_type = normalize_type(data_type, dialect)
        return cls(name=name, data_type=data_type, nullable=nullable)

    @property
    def is_typed(self) -> bool:
        """Whether the column carries a type."""
        return self.data_type is not None

    def with_type(self, data_type: Optional[str]) -> "ColumnMetadata":
        """Return a copy of this column with a different type."""
        return replace(self, data_type=data_type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "type": self.data_type,
            "nullable": self.nullable,
        }


@dataclass(frozen=True)
class TableSchema:
    """Ordered, immutable list of table columns.

    Column names are unique and looked up case-insensitively. An empty
    schema is valid and means "no known columns".

    Attributes:
        columns: Tuple of ColumnMetadata in table order.

    Example:
        >>> schema = TableSchema.from_columns([
        ...     ColumnMetadata("id", "INT"),
        ...     ColumnMetadata("name", "VARCHAR"),
        ... ])
        >>> schema.column_names()
        ['id', 'name']
        >>> schema.get_column("ID").data_type
        'INT'
    """

    columns: Tuple[ColumnMetadata, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the column sequence and reject duplicate names."""
        columns = tuple(self.columns)
        seen = set()
        for column in columns:
            if not isinstance(column, ColumnMetadata):
                raise TypeError("columns must be ColumnMetadata instances")
            key = column.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate column name: '{column.name}'")
            seen.add(key)
        object.__setattr__(self, "columns", columns)

    @classmethod
    def from_columns(cls, columns: Iterable[ColumnMetadata]) -> "TableSchema":
        """Create a schema from any iterable of columns."""
        return cls(columns=tuple(columns))

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], dialect: Optional[str] = None
    ) -> "TableSchema":
        """Create a schema from its dictionary form.

        Accepts ``{"columns": [{"name": ..., "type": ..., "nullable": ...}]}``
        as produced by ``to_dict()``.

        Raises:
            SchemaParseError: If a column type cannot be parsed.
            KeyError: If a column entry has no name.
        """
        return cls.from_columns(
            ColumnMetadata.of(
                entry["name"],
                entry.get("type"),
                nullable=entry.get("nullable", True),
                dialect=dialect,
            )
            for entry in data.get("columns", [])
        )

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnMetadata]:
        return iter(self.columns)

    def is_empty(self) -> bool:
        """Check whether the schema has no columns."""
        return not self.columns

    def column_names(self) -> List[str]:
        """Return column names in table order."""
        return [column.name for column in self.columns]

    def get_column(self, name: str) -> Optional[ColumnMetadata]:
        """Get a column by name (case-insensitive).

        Returns:
            ColumnMetadata or None if the column doesn't exist.
        """
        key = name.lower()
        for column in self.columns:
            if column.name.lower() == key:
                return column
        return None

    def has_column(self, name: str) -> bool:
        """Check if a column exists (case-insensitive)."""
        return self.get_column(name) is not None

    def fill_types_from(self, other: "TableSchema") -> "TableSchema":
        """Return a copy whose untyped columns take their type from other.

        Column order, names, nullability and already-typed columns are kept
        exactly as they are in this schema. Columns of ``other`` that are not
        in this schema are ignored.

        Args:
            other: Schema to borrow types from, typically a discovered one.

        Returns:
            A new TableSchema.
        """
        filled: List[ColumnMetadata] = []
        for column in self.columns:
            if not column.is_typed:
                source = other.get_column(column.name)
                if source is not None and source.is_typed:
                    column = column.with_type(source.data_type)
            filled.append(column)
        return TableSchema.from_columns(filled)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"columns": [column.to_dict() for column in self.columns]}

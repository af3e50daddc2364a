"""
Schema source interface and implementations.

This module defines the SchemaSource abstract base class, which supplies a
persisted or inferred table schema on demand, together with the reference
implementations used by the CLI and tests: an in-memory value, a
column-to-type mapping, an inline column list and a JSON schema file kept in
the table root.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from metadata_provider.exceptions import SchemaParseError
from metadata_provider.models.column import ColumnMetadata, TableSchema
from metadata_provider.models.config import ProviderConfig
from metadata_provider.models.table_handle import TableHandle

logger = logging.getLogger(__name__)


class SchemaSource(ABC):
    """Abstract interface for table schema sources.

    A schema source returns the schema of one table, or None when no schema
    is known. Returning None is not an error: builders fall back to
    discovered columns or to an empty schema.

    Example:
        >>> class FixedSchemaSource(SchemaSource):
        ...     def get(self):
        ...         return TableSchema.from_columns([ColumnMetadata("id", "INT")])
        >>> FixedSchemaSource().get().column_names()
        ['id']
    """

    @abstractmethod
    def get(self) -> Optional[TableSchema]:
        """Return the table schema, or None if it is not known.

        Raises:
            SchemaParseError: If a stored schema exists but is malformed.
        """


class StaticSchemaSource(SchemaSource):
    """Schema source returning a schema held in memory."""

    def __init__(self, schema: Optional[TableSchema]) -> None:
        self.schema = schema

    def get(self) -> Optional[TableSchema]:
        return self.schema

    def __repr__(self) -> str:
        return f"StaticSchemaSource(schema={self.schema!r})"


class DictSchemaSource(SchemaSource):
    """Schema source that reads column types from a dictionary.

    The dictionary maps column names to SQL type names, in table order. A
    None type declares an untyped column whose type is filled from
    discovery. This is handy for tests, prototyping, or when schema
    information is available as a simple data structure.

    Attributes:
        columns: Mapping of column names to type names (or None).
        dialect: Optional sqlglot dialect used to parse the type names.

    Example:
        >>> source = DictSchemaSource({"id": "bigint", "name": "varchar"})
        >>> [c.data_type for c in source.get()]
        ['BIGINT', 'VARCHAR']
    """

    def __init__(
        self, columns: Dict[str, Optional[str]], dialect: Optional[str] = None
    ) -> None:
        """Initialize a DictSchemaSource.

        Args:
            columns: Mapping of column names to type names.
            dialect: Optional sqlglot dialect.

        Raises:
            TypeError: If columns is not a dictionary.
            ValueError: If columns is None.
        """
        if columns is None:
            raise ValueError("columns cannot be None")
        if not isinstance(columns, dict):
            raise TypeError("columns must be a dictionary")

        self.columns: Dict[str, Optional[str]] = dict(columns)
        self.dialect = dialect

    def get(self) -> Optional[TableSchema]:
        return TableSchema.from_columns(
            ColumnMetadata.of(name, data_type, dialect=self.dialect)
            for name, data_type in self.columns.items()
        )


class InlineSchemaSource(SchemaSource):
    """Schema source that parses a column list written as SQL.

    The text is a parenthesized column list as it would appear in a
    ``CREATE TABLE`` statement, e.g. ``(id INT NOT NULL, name VARCHAR)``.
    Columns listed without a type become untyped hints. The text is parsed
    with sqlglot on first use and the result is kept.

    Example:
        >>> source = InlineSchemaSource("(id INT NOT NULL, name VARCHAR)")
        >>> schema = source.get()
        >>> schema.column_names()
        ['id', 'name']
        >>> schema.get_column("id").nullable
        False
    """

    def __init__(self, text: str, dialect: Optional[str] = None) -> None:
        if not text or not text.strip():
            raise ValueError("inline schema text cannot be empty")
        self.text = text.strip()
        self.dialect = dialect
        self._schema: Optional[TableSchema] = None

    def get(self) -> Optional[TableSchema]:
        if self._schema is None:
            self._schema = self._parse()
        return self._schema

    def _parse(self) -> TableSchema:
        """Parse the column list into a TableSchema."""
        body = self.text if self.text.startswith("(") else f"({self.text})"
        try:
            statement = sqlglot.parse_one(
                f"CREATE TABLE inline_schema {body}", read=self.dialect
            )
        except SqlglotError as e:
            raise SchemaParseError(
                f"Invalid inline schema: {e}", source=self.text
            ) from e

        definition = statement.this if isinstance(statement, exp.Create) else None
        if not isinstance(definition, exp.Schema):
            raise SchemaParseError(
                "Inline schema must be a parenthesized column list",
                source=self.text,
            )

        columns = []
        for item in definition.expressions:
            if isinstance(item, exp.ColumnDef):
                kind = item.args.get("kind")
                columns.append(
                    ColumnMetadata(
                        name=item.name,
                        data_type=kind.sql() if kind is not None else None,
                        nullable=not _has_not_null(item),
                    )
                )
            elif isinstance(item, (exp.Identifier, exp.Column)):
                columns.append(ColumnMetadata(name=item.name))
            else:
                raise SchemaParseError(
                    f"Unsupported inline schema element: {item.sql()}",
                    source=self.text,
                )

        try:
            return TableSchema.from_columns(columns)
        except ValueError as e:
            raise SchemaParseError(str(e), source=self.text) from e


def _has_not_null(column: exp.ColumnDef) -> bool:
    """Check whether a column definition carries a NOT NULL constraint."""
    for constraint in column.args.get("constraints") or []:
        kind = constraint.args.get("kind")
        if isinstance(kind, exp.NotNullColumnConstraint) and not kind.args.get(
            "allow_null"
        ):
            return True
    return False


class FileSchemaSource(SchemaSource):
    """Schema source backed by a JSON schema file.

    Two layouts are accepted::

        {"columns": [{"name": "id", "type": "INT", "nullable": false}]}
        {"id": "INT", "name": "VARCHAR"}

    A missing file means "no schema" and yields None. The file is read once
    and the result is kept until ``reload()`` is called.

    Attributes:
        path: Location of the schema file.
        dialect: Optional sqlglot dialect used to parse type names.
    """

    def __init__(self, path: Union[str, Path], dialect: Optional[str] = None) -> None:
        self.path = Path(path)
        self.dialect = dialect
        self._loaded = False
        self._schema: Optional[TableSchema] = None

    @classmethod
    def for_table(
        cls, table: TableHandle, config: Optional[ProviderConfig] = None
    ) -> "FileSchemaSource":
        """Create a source reading the schema file kept in the table root.

        Raises:
            ValueError: If the table handle has no location.
        """
        config = config or ProviderConfig()
        if not table.location:
            raise ValueError(f"Table '{table.name}' has no location")
        return cls(Path(table.location) / config.schema_file_name, config.dialect)

    def get(self) -> Optional[TableSchema]:
        if not self._loaded:
            self._schema = self._load()
            self._loaded = True
        return self._schema

    def reload(self) -> None:
        """Forget the loaded schema so the next get() reads the file again."""
        self._loaded = False
        self._schema = None

    def _load(self) -> Optional[TableSchema]:
        if not self.path.is_file():
            logger.debug("No schema file at %s", self.path)
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SchemaParseError(
                f"Cannot read schema file {self.path}: {e}", source=str(self.path)
            ) from e

        schema = self._to_schema(data)
        logger.debug("Loaded %d column(s) from %s", len(schema), self.path)
        return schema

    def _to_schema(self, data: Any) -> TableSchema:
        if not isinstance(data, dict):
            raise SchemaParseError(
                f"Schema file {self.path} must contain a JSON object",
                source=str(self.path),
            )

        try:
            if isinstance(data.get("columns"), list):
                return TableSchema.from_dict(data, dialect=self.dialect)
            return DictSchemaSource(data, dialect=self.dialect).get()
        except SchemaParseError as e:
            e.source = str(self.path)
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SchemaParseError(
                f"Invalid schema file {self.path}: {e}", source=str(self.path)
            ) from e

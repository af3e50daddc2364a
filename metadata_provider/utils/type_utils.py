"""
Column type utilities.

This module normalizes SQL type names through sqlglot so that types coming
from schema files, inline schemas and discovered Parquet files can be
compared with each other.
"""

from typing import Optional

from sqlglot import exp
from sqlglot.errors import SqlglotError

from metadata_provider.exceptions import SchemaParseError


def normalize_type(type_name: str, dialect: Optional[str] = None) -> str:
    """Return the canonical spelling of a SQL type name.

    The type is parsed with the given sqlglot dialect and rendered in
    sqlglot's dialect-agnostic form, so ``int4`` under Postgres and ``INT``
    both become ``INT``.

    Args:
        type_name: Type name such as "decimal(10,2)" or "varchar".
        dialect: Optional sqlglot dialect used for parsing.

    Returns:
        Canonical upper-case type string, e.g. "DECIMAL(10, 2)".

    Raises:
        SchemaParseError: If the type name is empty or cannot be parsed.

    Example:
        >>> normalize_type("decimal(10,2)")
        'DECIMAL(10, 2)'
    """
    if not isinstance(type_name, str):
        raise SchemaParseError(f"Column type must be a string, got {type_name!r}")
    if not type_name.strip():
        raise SchemaParseError("Column type cannot be empty")

    try:
        data_type = exp.DataType.build(type_name.strip(), dialect=dialect)
    except (SqlglotError, ValueError) as e:
        raise SchemaParseError(
            f"Invalid column type '{type_name}': {e}", source=type_name
        ) from e

    return data_type.sql()


def types_equal(
    left: Optional[str], right: Optional[str], dialect: Optional[str] = None
) -> bool:
    """Check whether two type names denote the same type.

    Two absent types are equal; an absent type never equals a present one.
    Types that sqlglot cannot parse are compared case-insensitively as
    plain strings.
    """
    if left is None or right is None:
        return left is None and right is None

    try:
        return normalize_type(left, dialect) == normalize_type(right, dialect)
    except SchemaParseError:
        return left.strip().upper() == right.strip().upper()

"""
Configuration model for metadata provider resolution.

This module defines the ProviderConfig class and ErrorMode enum, which control
how builders merge schemas, how reference sources locate their files, and how
the Parquet discovery backend walks a table location.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ErrorMode(str, Enum):
    """Enumeration of error handling modes for recoverable conflicts.

    Attributes:
        FAIL: Raise an exception immediately when a conflict is found.
        WARN: Issue a warning and continue.
        IGNORE: Silently continue.

    Example:
        >>> ErrorMode("warn")
        <ErrorMode.WARN: 'warn'>
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


@dataclass
class ProviderConfig:
    """Configuration settings shared by builders, sources and backends.

    Every option has a default, so ``ProviderConfig()`` is a valid
    configuration for both provider kinds.

    Attributes:
        dialect: sqlglot dialect used to parse column type names. None means
            the dialect-agnostic parser.
        file_extensions: File name suffixes treated as data files during
            discovery. Compared case-insensitively.
        ignore_hidden_files: If True, discovery skips files and directories
            whose names start with "." or "_".
        collect_row_group_stats: If True, discovery reads per row group
            column statistics from file footers.
        on_schema_mismatch: What to do when an explicit schema declares a
            column that discovery did not find, or with a different type.
        schema_file_name: Name of the schema file kept in a table root.
        stats_file_name: Name of the statistics file kept in a table root.

    Example:
        >>> config = ProviderConfig(on_schema_mismatch=ErrorMode.FAIL)
        >>> config.file_extensions
        ('.parquet',)
    """

    dialect: Optional[str] = None
    file_extensions: Tuple[str, ...] = (".parquet",)
    ignore_hidden_files: bool = True
    collect_row_group_stats: bool = True
    on_schema_mismatch: ErrorMode = ErrorMode.WARN
    schema_file_name: str = ".table_schema.json"
    stats_file_name: str = ".table_stats.json"

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if self.dialect is not None and not isinstance(self.dialect, str):
            raise TypeError("dialect must be a string or None")
        if isinstance(self.file_extensions, str):
            raise TypeError("file_extensions must be a sequence of strings")
        self.file_extensions = tuple(self.file_extensions)
        if not self.file_extensions:
            raise ValueError("file_extensions cannot be empty")
        for extension in self.file_extensions:
            if not isinstance(extension, str) or not extension:
                raise ValueError("file_extensions must be non-empty strings")
        if not isinstance(self.ignore_hidden_files, bool):
            raise TypeError("ignore_hidden_files must be a boolean")
        if not isinstance(self.collect_row_group_stats, bool):
            raise TypeError("collect_row_group_stats must be a boolean")
        if not isinstance(self.on_schema_mismatch, ErrorMode):
            raise TypeError("on_schema_mismatch must be an ErrorMode instance")
        if not self.schema_file_name or not self.stats_file_name:
            raise ValueError("schema_file_name and stats_file_name cannot be empty")
        if self.schema_file_name == self.stats_file_name:
            raise ValueError("schema_file_name and stats_file_name must differ")

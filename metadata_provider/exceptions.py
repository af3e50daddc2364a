"""
Custom exception classes for metadata provider resolution.

This module defines all custom exceptions used throughout the metadata
provider package. Configuration errors (unsupported provider kinds, missing
builder inputs, misuse of single-use builders) are raised immediately, while
discovery errors carry the table and the discovery step that failed so the
planner can abort the table access with a precise message.
"""

from typing import Any, Optional


class MetadataProviderError(Exception):
    """Base exception class for all metadata provider errors.

    This exception serves as the base class for all custom exceptions in the
    package. It can be used to catch any provider-related error.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a MetadataProviderError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class UnsupportedProviderKindError(MetadataProviderError):
    """Exception raised when a builder is requested for an unknown kind.

    The set of provider kinds is closed and every member has a registered
    builder, so this error indicates a programming error rather than bad
    input data.

    Attributes:
        kind: The kind value that could not be dispatched.
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"Unsupported metadata provider kind: {kind!r}")


class ProviderConfigurationError(MetadataProviderError):
    """Exception raised when a builder lacks an input it cannot work without.

    Schema and statistics are always optional; this error is reserved for
    structural inputs such as the discovery backend or the table handle of a
    full discovery build.
    """


class BuilderStateError(MetadataProviderError):
    """Exception raised when a builder is used after it has been built."""


class ProviderStateError(MetadataProviderError):
    """Exception raised when a manager's cached provider would be replaced."""


class SchemaParseError(MetadataProviderError):
    """Exception raised when a schema or a column type cannot be parsed.

    Attributes:
        source: Optional description of where the schema came from (a file
            path or the inline text).
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class StatisticsParseError(MetadataProviderError):
    """Exception raised when a statistics file cannot be parsed.

    Attributes:
        source: Path of the statistics file.
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class SchemaMismatchError(MetadataProviderError):
    """Exception raised when an explicit schema disagrees with discovered data.

    Attributes:
        table_name: Name of the table being resolved.
        column_name: Name of the offending column.
        expected_type: Type declared by the explicit schema.
        discovered_type: Type found by discovery, or None if the column was
            not discovered at all.
    """

    def __init__(
        self,
        message: str,
        table_name: str,
        column_name: str,
        expected_type: Optional[str] = None,
        discovered_type: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.table_name = table_name
        self.column_name = column_name
        self.expected_type = expected_type
        self.discovered_type = discovered_type


class SchemaMismatchWarning(UserWarning):
    """Warning category for non-fatal explicit/discovered schema conflicts."""


class DiscoveryError(MetadataProviderError):
    """Exception raised when physical metadata discovery fails.

    Discovery errors are never retried or swallowed by the provider layer.
    The message names the table and the discovery step so that a failed
    resolution can be reported precisely.

    Attributes:
        reason: Description of the underlying failure.
        table: Name of the table whose discovery failed, if known.
        step: Discovery step that failed (e.g. "list files", "read footer").
        path: File or directory involved in the failure, if any.
    """

    def __init__(
        self,
        reason: str,
        table: Optional[str] = None,
        step: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        """Initialize a DiscoveryError.

        Args:
            reason: Description of the underlying failure.
            table: Optional table name.
            step: Optional discovery step name.
            path: Optional file or directory path.
        """
        self.reason = reason
        self.table = table
        self.step = step
        self.path = path
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        """Build the error message from the available context."""
        msg = "Metadata discovery failed"
        if self.table:
            msg += f" for table '{self.table}'"
        if self.step:
            msg += f" during step '{self.step}'"
        if self.path:
            msg += f" ({self.path})"
        return f"{msg}: {self.reason}"

    def with_table(self, table: str) -> "DiscoveryError":
        """Attach a table name if none was recorded, and return self.

        Args:
            table: Table name to attach.

        Returns:
            This same exception instance, so it can be re-raised unchanged
            in classification.
        """
        if not self.table:
            self.table = table
            self.message = self._build_message()
            self.args = (self.message,)
        return self


class DiscoveryPermissionError(DiscoveryError):
    """Discovery failed because a file or directory could not be accessed."""


class DiscoveryIOError(DiscoveryError):
    """Discovery failed because of an I/O error (including missing paths)."""


class MalformedMetadataError(DiscoveryError):
    """Discovery failed because stored file metadata could not be decoded."""

"""Errors raised while reading a result set."""


class ResultSetError(Exception):
    """Base class for result set reader errors."""


class InvalidCursorError(ResultSetError):
    """Raised when an accessor is used while the cursor is not on a row."""


class OutOfRangeError(ResultSetError, IndexError):
    """Raised when a column index is outside the schema."""

    def __init__(self, index: int, field_count: int) -> None:
        super().__init__(f"Column index {index} out of range for {field_count} fields")
        self.index = index
        self.field_count = field_count


class UnknownColumnError(ResultSetError, LookupError):
    """Raised when no schema field has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown column: {name!r}")
        self.name = name


class TypeConversionError(ResultSetError, ValueError):
    """Raised when a cell cannot be converted to the requested type."""

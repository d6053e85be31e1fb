"""Exception classes for rowbind."""

from typing import Any


class RowBindError(Exception):
    """Base exception for all rowbind errors."""
    pass


class SchemaError(RowBindError):
    """Raised when a schema is misused.

    For example, qualifying columns before an alias is set, selecting
    before an executor is bound, or selecting with no columns installed.

    Attributes:
        message: Error message
        table_name: Name of the table (if applicable)
        column_name: Name of the column (if applicable)
    """

    def __init__(self, message: str, table_name: str = None, column_name: str = None):
        super().__init__(message)
        self.message = message
        self.table_name = table_name
        self.column_name = column_name


class AttributeNotFoundError(RowBindError, AttributeError):
    """Raised when an attribute resolves against nothing.

    Only raised when a caller unwraps an absent result or uses attribute
    notation on a record; the lookup methods themselves return results.

    Attributes:
        message: Error message
        name: Attribute or method name that was looked up
        target: Name of the record or schema type searched
    """

    def __init__(self, message: str, name: str = None, target: str = None):
        super().__init__(message)
        self.message = message
        self.name = name
        self.target = target


class ExecutionError(RowBindError):
    """Raised when the query executor fails to run a statement.

    Attributes:
        message: Error message
        sql: SQL string that was submitted
        params: Bound parameters that were submitted
    """

    def __init__(self, message: str, sql: str = None, params: dict = None):
        super().__init__(message)
        self.message = message
        self.sql = sql
        self.params = params


class ConfigurationError(RowBindError):
    """Raised when settings cannot be loaded or are invalid.

    Attributes:
        message: Error message
        path: Settings file path (if applicable)
        value: Offending value (if applicable)
    """

    def __init__(self, message: str, path: str = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.value = value

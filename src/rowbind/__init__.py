"""rowbind - Table schemas, parameterized SELECT building and dynamic row records."""

from .schema import Schema
from .record import ActiveRecord, JSONRecord
from .column import Column, ColumnSet, ColumnAccessor
from .content import SemiStructured, JSONContent
from .executor import QueryExecutor, ResultCursor
from .result import Result
from .config import Settings, load_settings
from .log import configure_logging
from .exceptions import (
    RowBindError,
    SchemaError,
    AttributeNotFoundError,
    ExecutionError,
    ConfigurationError,
)

__version__ = "0.1.0"

__all__ = [
    "Schema",
    "ActiveRecord",
    "JSONRecord",
    "Column",
    "ColumnSet",
    "ColumnAccessor",
    "SemiStructured",
    "JSONContent",
    "QueryExecutor",
    "ResultCursor",
    "Result",
    "Settings",
    "load_settings",
    "configure_logging",
    "RowBindError",
    "SchemaError",
    "AttributeNotFoundError",
    "ExecutionError",
    "ConfigurationError",
]

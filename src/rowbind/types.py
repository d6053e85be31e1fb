"""Type mapping utilities for semantic column type names."""

import re
from datetime import datetime, date, time
from decimal import Decimal
import sqlalchemy as sa


_TYPE_PATTERN = re.compile(r"^\s*([a-z]+)\s*(?:\(\s*(\d+)\s*\))?\s*$")

# Semantic name -> (SQLAlchemy type, Python type)
_TYPE_MAP = {
    "int": (sa.Integer, int),
    "integer": (sa.Integer, int),
    "smallint": (sa.SmallInteger, int),
    "bigint": (sa.BigInteger, int),
    "varchar": (sa.String, str),
    "char": (sa.String, str),
    "string": (sa.String, str),
    "text": (sa.Text, str),
    "float": (sa.Float, float),
    "double": (sa.Float, float),
    "real": (sa.Float, float),
    "decimal": (sa.Numeric, Decimal),
    "numeric": (sa.Numeric, Decimal),
    "bool": (sa.Boolean, bool),
    "boolean": (sa.Boolean, bool),
    "date": (sa.Date, date),
    "datetime": (sa.DateTime, datetime),
    "timestamp": (sa.DateTime, datetime),
    "time": (sa.Time, time),
    "blob": (sa.LargeBinary, bytes),
    "binary": (sa.LargeBinary, bytes),
    "json": (sa.JSON, dict),
}

_LENGTH_TYPES = {"varchar", "char", "string"}


def _parse(type_name: str) -> tuple[str, int | None]:
    """Split a semantic type name into its base name and optional length.

    Args:
        type_name: Type name such as 'int' or 'varchar(255)'

    Returns:
        Tuple of (lowercase base name, length or None)

    Raises:
        ValueError: If the name is malformed or unknown
    """
    match = _TYPE_PATTERN.match(type_name.lower()) if type_name else None
    if match is None or match.group(1) not in _TYPE_MAP:
        raise ValueError(f"Unsupported type: {type_name!r}")
    length = match.group(2)
    return match.group(1), int(length) if length is not None else None


def semantic_type_to_sqlalchemy(type_name: str) -> sa.types.TypeEngine:
    """Convert a semantic column type name to a SQLAlchemy type.

    Args:
        type_name: Semantic type (e.g., 'int', 'varchar(64)', 'json')

    Returns:
        SQLAlchemy type instance

    Examples:
        >>> semantic_type_to_sqlalchemy("int")
        Integer()
        >>> semantic_type_to_sqlalchemy("varchar(64)")
        String(length=64)
    """
    base, length = _parse(type_name)
    sa_type = _TYPE_MAP[base][0]
    if length is not None and base in _LENGTH_TYPES:
        return sa_type(length)
    return sa_type()


def semantic_type_to_python(type_name: str) -> type:
    """Convert a semantic column type name to the Python type of its values."""
    base, _ = _parse(type_name)
    return _TYPE_MAP[base][1]


def is_json_type(type_name: str) -> bool:
    """Check if a semantic type name denotes a JSON column.

    Unknown or malformed names are not JSON.
    """
    try:
        base, _ = _parse(type_name)
    except ValueError:
        return False
    return base == "json"

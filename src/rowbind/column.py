"""Column, ColumnSet and ColumnAccessor classes for schema column definitions."""

from typing import Any, Iterable, Iterator, Optional
import sqlalchemy as sa

from .types import semantic_type_to_sqlalchemy


class Column:
    """A single column definition and its current value.

    Attributes:
        name: Column name in the table (read-only)
        alias: Output label used in SELECT lists (defaults to name)
        type: Semantic type name (e.g., 'int', 'varchar', 'json')
        value: Current value, None when unset
        primary: Whether the column is part of the primary key
    """

    def __init__(
        self,
        name: str,
        type: str = "varchar",
        alias: Optional[str] = None,
        value: Any = None,
        primary: bool = False
    ):
        """Initialize a Column.

        Args:
            name: Column name
            type: Semantic type name
            alias: Output label (defaults to name)
            value: Initial value
            primary: Primary key flag
        """
        if not name:
            raise ValueError("Column name must be a non-empty string")
        self._name = name
        self.alias = alias or name
        self.type = type
        self.value = value
        self.primary = primary

    @property
    def name(self) -> str:
        """Column name; immutable once set."""
        return self._name

    @property
    def is_aliased(self) -> bool:
        """True when the alias differs from the column name."""
        return self.alias != self._name

    def reset(self) -> None:
        """Clear the current value."""
        self.value = None

    def to_sa_column(self) -> sa.Column:
        """Build an equivalent SQLAlchemy Column."""
        return sa.Column(
            self._name,
            semantic_type_to_sqlalchemy(self.type),
            primary_key=self.primary,
        )

    def bind_type(self) -> Optional[sa.types.TypeEngine]:
        """Return the SQLAlchemy type to bind the current value with.

        Text values are bound as they are, so a JSON column can still be
        matched against its stored text. Other values use the column type.
        """
        if self.value is None or isinstance(self.value, (str, bytes)):
            return None
        return semantic_type_to_sqlalchemy(self.type)

    def __repr__(self) -> str:
        """Return string representation of the column."""
        return f"Column({self._name!r})"


class ColumnSet:
    """Ordered collection of columns, unique by name.

    Insertion order is the canonical column order for SELECT lists and
    WHERE clauses. Replacing a column keeps the position of the first one.
    """

    def __init__(self, columns: Iterable[Column] = ()):
        """Initialize a ColumnSet.

        Args:
            columns: Initial columns, added in order
        """
        self._columns: dict[str, Column] = {}
        for column in columns:
            self.add(column)

    def add(self, column: Column) -> "ColumnSet":
        """Insert a column, or replace the one with the same name in place.

        Returns:
            This set, for chaining
        """
        self._columns[column.name] = column
        return self

    hydrate = add

    def find(self, name: str) -> Optional[Column]:
        """Find a column by name only."""
        return self._columns.get(name)

    def find_by_name_or_alias(self, key: str) -> Optional[Column]:
        """Find a column by name, then by alias.

        A name match anywhere in the set wins over an alias match.

        Args:
            key: Column name or alias

        Returns:
            Matching Column, or None if nothing matches
        """
        if key in self._columns:
            return self._columns[key]
        for column in self._columns.values():
            if column.alias == key:
                return column
        return None

    def names(self) -> list[str]:
        """Return column names in insertion order."""
        return list(self._columns)

    def aliased_names(self) -> list[str]:
        """Return 'name AS alias' for aliased columns, plain names otherwise."""
        return [
            f"{column.name} AS {column.alias}" if column.is_aliased else column.name
            for column in self._columns.values()
        ]

    def primary_column(self) -> Optional[Column]:
        """Return the first primary-key column, or None if none is flagged."""
        for column in self._columns.values():
            if column.primary:
                return column
        return None

    def values(self) -> dict[str, Any]:
        """Return {name: value} for every column with a non-null value."""
        return {
            name: column.value
            for name, column in self._columns.items()
            if column.value is not None
        }

    def reset(self) -> None:
        """Clear the value of every column."""
        for column in self._columns.values():
            column.reset()

    @property
    def c(self) -> "ColumnAccessor":
        """Access columns by attribute with auto-complete support."""
        return ColumnAccessor(self)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(list(self._columns.values()))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.find_by_name_or_alias(key) is not None

    def __getitem__(self, key: str) -> Column:
        """Get a column by name or alias.

        Raises:
            KeyError: If no column matches
        """
        column = self.find_by_name_or_alias(key)
        if column is None:
            raise KeyError(key)
        return column

    def __dir__(self):
        return list(super().__dir__()) + self.names()

    def __repr__(self) -> str:
        return f"ColumnSet({self.names()!r})"


class ColumnAccessor:
    """Provides attribute access to the columns of a ColumnSet.

    Allows accessing columns via attribute notation: schema.columns.c.email
    """

    def __init__(self, columns: ColumnSet):
        """Initialize the ColumnAccessor.

        Args:
            columns: ColumnSet whose columns to provide access to
        """
        self._columns = columns

    def __getattr__(self, name: str) -> Column:
        """Get a column by name or alias.

        Raises:
            AttributeError: If column doesn't exist
        """
        column = self._columns.find_by_name_or_alias(name)
        if column is None:
            raise AttributeError(f"Column set has no column {name!r}")
        return column

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __dir__(self):
        """Return list of column names for auto-complete support."""
        return self._columns.names()

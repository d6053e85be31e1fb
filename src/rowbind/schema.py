"""Schema class describing a table and building SELECT statements from it."""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional
import sqlalchemy as sa
from sqlalchemy.schema import CreateTable

from .column import Column, ColumnSet
from .exceptions import SchemaError
from .executor import QueryExecutor, ResultCursor
from .record import ActiveRecord
from .result import Result

logger = logging.getLogger(__name__)


class Schema(ABC):
    """Describes one table: its name, alias and ordered columns.

    Concrete schemas declare the table as class attributes and return their
    columns from ``define_columns()``:

        class UserSchema(Schema):
            identifier = "app.users"
            table_name = "users"
            table_alias = "u"
            record_class = User

            def define_columns(self):
                return ColumnSet([
                    Column("id", "int", primary=True),
                    Column("email", "varchar(255)"),
                ])

    Column values double as filters: ``select_by()`` matches every column
    whose value is set. The last built statement is kept on ``query`` and
    ``query_params`` (with the bind types on ``query_types``) and the last
    cursor on ``statement``; each select overwrites them, so an instance
    must not serve two queries at once.
    """

    identifier: ClassVar[str] = ""
    table_name: ClassVar[str] = ""
    table_alias: ClassVar[str] = ""
    record_class: ClassVar[type[ActiveRecord]] = ActiveRecord

    def __init__(self, executor: Optional[QueryExecutor] = None):
        """Initialize a Schema and install its columns.

        Args:
            executor: QueryExecutor used by the select methods
        """
        self._executor = executor
        self._columns = ColumnSet()
        self.query: Optional[str] = None
        self.query_params: dict[str, Any] = {}
        self.query_types: dict[str, sa.types.TypeEngine] = {}
        self.statement: Optional[ResultCursor] = None
        self.set_columns(self.define_columns())

    @abstractmethod
    def define_columns(self) -> ColumnSet:
        """Return the column definitions of this table."""

    def bind(self, executor: QueryExecutor) -> "Schema":
        """Attach the executor used by the select methods."""
        self._executor = executor
        return self

    def set_columns(self, columns: ColumnSet) -> "Schema":
        """Install column definitions and clear every value.

        Calling this again resets all values; it does not merge.
        """
        self._columns = columns
        self._columns.reset()
        return self

    def hydrate(self, column: Column) -> "Schema":
        """Add a column definition, replacing one with the same name."""
        self._columns.add(column)
        return self

    def get_identifier(self) -> str:
        """Return the declared identifier, defaulting to the table name."""
        return self.identifier or self.table_name

    def get_name(self) -> str:
        return self.table_name

    def get_alias(self) -> str:
        return self.table_alias

    def get_scheme(self) -> ColumnSet:
        """Return the installed column definitions."""
        return self._columns

    @property
    def columns(self) -> ColumnSet:
        return self._columns

    def set(self, name: str, value: Any) -> Result:
        """Set the value of a column found by name or alias.

        Args:
            name: Column name or alias
            value: New value (None clears the column)

        Returns:
            Result holding the updated Column, or an absent result if the
            schema has no such column
        """
        column = self._columns.find_by_name_or_alias(name)
        if column is None:
            logger.warning(
                "Column or alias %r does not exist in schema %r",
                name, self.table_name, stacklevel=2
            )
            return Result.absent(name, f"Schema {self.table_name!r} has no column {name!r}")
        column.value = value
        return Result.ok(column, name)

    def get(self, name: str) -> Result:
        """Return the current value of a column found by name or alias."""
        column = self._columns.find_by_name_or_alias(name)
        if column is None:
            return Result.absent(name, f"Schema {self.table_name!r} has no column {name!r}")
        return Result.ok(column.value, name)

    def reset(self) -> "Schema":
        """Clear every column value."""
        self._columns.reset()
        return self

    def get_aliased_name(self) -> str:
        """Return '<table> AS <alias>'. Names are not escaped."""
        self._require_alias()
        return f"{self.table_name} AS {self.table_alias}"

    def get_qualified_columns(self) -> str:
        """Return column names qualified by the table alias, comma-joined."""
        self._require_alias()
        return ",".join(f"{self.table_alias}.{name}" for name in self._columns.names())

    def get_full_qualified_columns(self) -> str:
        """Return qualified column names with their aliases, comma-joined.

        Columns are qualified by name; ``AS <alias>`` is appended only to
        columns whose alias differs from their name.
        """
        self._require_alias()
        return ",".join(f"{self.table_alias}.{name}" for name in self._columns.aliased_names())

    def get_primary_column(self) -> Optional[Column]:
        """Return the first primary-key column, or None if none is flagged."""
        return self._columns.primary_column()

    def build_select_all(self) -> tuple[str, dict[str, Any]]:
        """Build an unfiltered SELECT over every column.

        Returns:
            Tuple of (SQL string, empty parameter dict)
        """
        self.query = self._select_base()
        self.query_params = {}
        self.query_types = {}
        return self.query, self.query_params

    def build_select_by(self) -> tuple[str, dict[str, Any]]:
        """Build a SELECT filtered on every column that has a value.

        Predicates are AND-joined in column order. With no values set the
        statement has no WHERE clause.

        Returns:
            Tuple of (SQL string, {column name: value})
        """
        query = self._select_base()

        predicates = []
        params = {}
        types = {}
        for column in self._columns:
            if column.value is not None:
                predicates.append(f"{self.table_alias}.{column.name}=:{column.name}")
                params[column.name] = column.value
                bind_type = column.bind_type()
                if bind_type is not None:
                    types[column.name] = bind_type

        if predicates:
            query += " WHERE " + " AND ".join(predicates)

        self.query = query
        self.query_params = params
        self.query_types = types
        return self.query, self.query_params

    async def select_all(self) -> ResultCursor:
        """Select every row of the table.

        Returns:
            ResultCursor from the executor

        Raises:
            SchemaError: If no executor is bound
            ExecutionError: If the executor fails
        """
        executor = self._require_executor()
        self.build_select_all()
        self.statement = await executor.submit(self.query, self.query_params, self.query_types)
        return self.statement

    async def select_by(self) -> ResultCursor:
        """Select the rows matching every column value currently set.

        Returns:
            ResultCursor from the executor

        Raises:
            SchemaError: If no executor is bound
            ExecutionError: If the executor fails
        """
        executor = self._require_executor()
        self.build_select_by()
        self.statement = await executor.submit(self.query, self.query_params, self.query_types)
        return self.statement

    def add_order_by(self, column: str, direction: str = "ASC") -> "Schema":
        """Add an ORDER BY term to subsequent selects."""
        raise NotImplementedError("add_order_by() is not supported yet")

    def add_group_by(self, column: str) -> "Schema":
        """Add a GROUP BY term to subsequent selects."""
        raise NotImplementedError("add_group_by() is not supported yet")

    def add_constraint(self, column: str, operator: str, logical: Optional[str] = None) -> "Schema":
        """Add a WHERE constraint to subsequent selects."""
        raise NotImplementedError("add_constraint() is not supported yet")

    def get_active_record_instance(self) -> ActiveRecord:
        """Return a new, empty record bound to this schema."""
        return self.record_class(self)

    def hydrate_records(self, cursor: ResultCursor) -> list[ActiveRecord]:
        """Build one hydrated record per row of a cursor."""
        return [self.get_active_record_instance().hydrate(row) for row in cursor]

    @property
    def sa_table(self) -> sa.Table:
        """Build a SQLAlchemy Table from the column definitions."""
        return sa.Table(
            self.table_name,
            sa.MetaData(),
            *(column.to_sa_column() for column in self._columns)
        )

    @property
    def create_sql(self) -> str:
        """Return the CREATE TABLE statement for the column definitions."""
        ddl = CreateTable(self.sa_table)
        if self._executor is not None:
            return str(ddl.compile(dialect=self._executor.engine.dialect)).strip()
        return str(ddl.compile()).strip()

    async def create_table(self) -> None:
        """Create the table through the bound executor."""
        await self._require_executor().submit(self.create_sql)

    def describe(self) -> str:
        """Return a plain text outline of the table and its columns."""
        lines = [self.table_name, self.table_alias]
        lines.extend(f"\t{column.name} [{column.type}]" for column in self._columns)
        return "\n".join(lines)

    def _select_base(self) -> str:
        if not len(self._columns):
            raise SchemaError(
                f"Schema {self.table_name!r} has no columns installed",
                table_name=self.table_name
            )
        return f"SELECT {self.get_full_qualified_columns()} FROM {self.get_aliased_name()}"

    def _require_alias(self) -> None:
        if not self.table_name or not self.table_alias:
            raise SchemaError(
                f"Schema {type(self).__name__} needs a table name and alias before qualifying columns",
                table_name=self.table_name or None
            )

    def _require_executor(self) -> QueryExecutor:
        if self._executor is None:
            raise SchemaError(
                f"Schema {self.table_name!r} has no query executor bound",
                table_name=self.table_name
            )
        return self._executor

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.table_name!r} AS {self.table_alias!r})"

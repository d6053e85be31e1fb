"""Tests for Column, ColumnSet and ColumnAccessor classes."""

import pytest
import sqlalchemy as sa

from rowbind.column import Column, ColumnSet, ColumnAccessor


class TestColumn:
    """Tests for Column class."""

    def test_column_defaults(self):
        """Test a column with only a name."""
        col = Column("email")
        assert col.name == "email"
        assert col.alias == "email"
        assert col.type == "varchar"
        assert col.value is None
        assert col.primary is False
        assert col.is_aliased is False

    def test_column_with_alias(self):
        """Test a column whose alias differs from its name."""
        col = Column("email", "varchar", alias="mail")
        assert col.alias == "mail"
        assert col.is_aliased is True

    def test_name_is_read_only(self):
        """Test that the name cannot be reassigned."""
        col = Column("id", "int")
        with pytest.raises(AttributeError):
            col.name = "other"
        assert col.name == "id"

    def test_empty_name_rejected(self):
        """Test that an empty name raises ValueError."""
        with pytest.raises(ValueError, match="non-empty"):
            Column("")

    def test_reset(self):
        """Test that reset clears the value."""
        col = Column("id", "int", value=42)
        col.reset()
        assert col.value is None

    def test_to_sa_column(self):
        """Test conversion to a SQLAlchemy column."""
        sa_col = Column("id", "int", primary=True).to_sa_column()
        assert isinstance(sa_col, sa.Column)
        assert sa_col.name == "id"
        assert isinstance(sa_col.type, sa.Integer)
        assert sa_col.primary_key is True

    def test_bind_type_for_json_value(self):
        """Test a dict value on a JSON column binds as JSON."""
        col = Column("profile", "json", value={"city": "Paris"})
        assert isinstance(col.bind_type(), sa.JSON)

    def test_bind_type_for_scalar_value(self):
        """Test non-text values bind with the column type."""
        assert isinstance(Column("id", "int", value=3).bind_type(), sa.Integer)

    def test_no_bind_type_for_text_or_unset(self):
        """Test text values and unset columns bind as they are."""
        assert Column("profile", "json", value='{"city": "Paris"}').bind_type() is None
        assert Column("id", "int").bind_type() is None

    def test_column_repr(self):
        """Test column representation."""
        assert repr(Column("id", "int")) == "Column('id')"


class TestColumnSet:
    """Tests for ColumnSet class."""

    def test_add_appends_in_order(self):
        """Test that new columns keep insertion order."""
        columns = ColumnSet()
        columns.add(Column("id")).add(Column("name")).add(Column("email"))
        assert columns.names() == ["id", "name", "email"]

    def test_add_returns_set(self):
        """Test that add is chainable."""
        columns = ColumnSet()
        assert columns.add(Column("id")) is columns

    def test_add_replaces_in_place(self):
        """Test that re-adding a name replaces the column at its first position."""
        columns = ColumnSet([Column("id"), Column("name"), Column("email")])
        replacement = Column("name", "text", alias="full_name")
        columns.add(replacement)

        assert columns.names() == ["id", "name", "email"]
        assert columns.find_by_name_or_alias("name") is replacement
        assert len(columns) == 3

    def test_hydrate_is_add(self):
        """Test that hydrate behaves like add."""
        columns = ColumnSet([Column("id")])
        new = Column("age", "int")
        assert columns.hydrate(new) is columns
        assert columns.find_by_name_or_alias("age") is new
        assert columns.names() == ["id", "age"]

    def test_find_by_name(self):
        """Test lookup by column name."""
        email = Column("email", alias="mail")
        columns = ColumnSet([Column("id"), email])
        assert columns.find_by_name_or_alias("email") is email

    def test_find_by_alias(self):
        """Test lookup by column alias."""
        email = Column("email", alias="mail")
        columns = ColumnSet([Column("id"), email])
        assert columns.find_by_name_or_alias("mail") is email

    def test_name_match_wins_over_alias(self):
        """Test that a name match beats an earlier alias match."""
        aliased = Column("login", alias="email")
        named = Column("email")
        columns = ColumnSet([aliased, named])
        assert columns.find_by_name_or_alias("email") is named

    def test_find_missing_returns_none(self):
        """Test that a missing key returns None instead of raising."""
        columns = ColumnSet([Column("id")])
        assert columns.find_by_name_or_alias("missing") is None

    def test_find_by_name_only(self):
        """Test that find ignores aliases."""
        columns = ColumnSet([Column("email", alias="mail")])
        assert columns.find("mail") is None
        assert columns.find("email") is not None

    def test_aliased_names(self):
        """Test the alias projection."""
        columns = ColumnSet([
            Column("id"),
            Column("email", alias="mail"),
        ])
        assert columns.aliased_names() == ["id", "email AS mail"]

    def test_primary_column(self):
        """Test the first primary column is returned."""
        first = Column("id", primary=True)
        columns = ColumnSet([Column("name"), first, Column("code", primary=True)])
        assert columns.primary_column() is first

    def test_no_primary_column(self):
        """Test None is returned when no column is primary."""
        columns = ColumnSet([Column("name"), Column("email")])
        assert columns.primary_column() is None

    def test_values_skips_unset(self):
        """Test values only includes non-null columns."""
        columns = ColumnSet([
            Column("id", value=1),
            Column("name"),
            Column("active", value=False),
        ])
        assert columns.values() == {"id": 1, "active": False}

    def test_reset(self):
        """Test reset clears every value."""
        columns = ColumnSet([Column("id", value=1), Column("name", value="x")])
        columns.reset()
        assert columns.values() == {}

    def test_container_protocol(self):
        """Test len, iteration, membership and indexing."""
        email = Column("email", alias="mail")
        columns = ColumnSet([Column("id"), email])

        assert len(columns) == 2
        assert [col.name for col in columns] == ["id", "email"]
        assert "mail" in columns
        assert "email" in columns
        assert "missing" not in columns
        assert columns["mail"] is email
        with pytest.raises(KeyError):
            columns["missing"]

    def test_dir_includes_names(self):
        """Test __dir__ lists column names."""
        columns = ColumnSet([Column("id"), Column("email")])
        assert "email" in dir(columns)


class TestColumnAccessor:
    """Tests for ColumnAccessor class."""

    def test_get_column_by_attribute(self):
        """Test accessing a column by attribute name."""
        columns = ColumnSet([Column("id", "int", primary=True), Column("email", alias="mail")])
        accessor = columns.c

        assert isinstance(accessor, ColumnAccessor)
        assert accessor.id.name == "id"
        assert accessor.mail.name == "email"

    def test_nonexistent_column_raises_error(self):
        """Test accessing non-existent column raises AttributeError."""
        columns = ColumnSet([Column("id")])
        with pytest.raises(AttributeError, match="has no column 'nonexistent'"):
            _ = columns.c.nonexistent

    def test_iterate_columns(self):
        """Test iterating over the accessor."""
        columns = ColumnSet([Column("id"), Column("name"), Column("email")])
        assert [col.name for col in columns.c] == ["id", "name", "email"]

    def test_dir_returns_column_names(self):
        """Test __dir__ returns column names for auto-complete."""
        columns = ColumnSet([Column("id"), Column("name")])
        assert dir(columns.c) == ["id", "name"]

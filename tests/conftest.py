"""Pytest configuration and fixtures for rowbind tests."""

import pytest
import pytest_asyncio

from rowbind import ActiveRecord, Column, ColumnSet, JSONRecord, QueryExecutor, Schema


class User(ActiveRecord):
    """Record with no declared fields."""


class UserSchema(Schema):
    identifier = "tests.users"
    table_name = "users"
    table_alias = "u"
    record_class = User

    def define_columns(self):
        return ColumnSet([
            Column("id", "int", primary=True),
            Column("email", "varchar(255)"),
        ])


class Person(JSONRecord):
    """Record whose fallback content is the profile column."""
    json_column = "profile"
    nickname: str = "anonymous"

    def greeting(self, punctuation="!"):
        return f"Hello {self.name}{punctuation}"


class PersonSchema(Schema):
    identifier = "tests.people"
    table_name = "people"
    table_alias = "p"
    record_class = Person

    def define_columns(self):
        return ColumnSet([
            Column("id", "int", primary=True),
            Column("name", "varchar(100)"),
            Column("email", "varchar(255)", alias="mail"),
            Column("age", "int"),
            Column("profile", "json"),
        ])


@pytest.fixture
def user_schema():
    """UserSchema with no executor bound."""
    return UserSchema()


@pytest.fixture
def person_schema():
    """PersonSchema with no executor bound."""
    return PersonSchema()


@pytest_asyncio.fixture
async def executor():
    """Create an executor on an in-memory SQLite database.

    Yields:
        QueryExecutor connected to in-memory SQLite
    """
    query_executor = QueryExecutor("sqlite+aiosqlite:///:memory:")
    yield query_executor
    await query_executor.close()


@pytest_asyncio.fixture
async def executor_with_people(executor):
    """Create an executor with a populated people table.

    Args:
        executor: Executor fixture

    Yields:
        QueryExecutor with the people table created
    """
    await executor.submit("""
        CREATE TABLE people (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT,
            age INTEGER,
            profile TEXT
        )
    """)

    await executor.submit("""
        INSERT INTO people (name, email, age, profile) VALUES
        ('Alice', 'alice@example.com', 30, '{"city": "Paris", "tags": ["admin"]}'),
        ('Bob', 'bob@example.com', 25, NULL),
        ('Charlie', 'charlie@example.com', 30, '{"city": "Lyon", "address": {"zip": "69001"}}')
    """)

    yield executor

"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from pgschema_reader.core import queries


def column_row(**overrides: Any) -> dict[str, Any]:
    """Columns query row with every attribute empty unless overridden."""
    row = {
        "schema": "public",
        "table_name": "users",
        "name": "id",
        "pos": 1,
        "default": None,
        "null": "YES",
        "is_identity": "NO",
        "type": "integer",
        "custom_type_name": "int4",
        "char_length": None,
        "num_precision": None,
        "num_scale": None,
        "dt_precision": None,
        "interval_type": None,
        "element_type": None,
        "element_custom_type_name": None,
    }
    row.update(overrides)
    return row


class FakeCursor:
    """Cursor returning canned rows for each known query."""

    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self._rows: list[dict[str, Any]] = []

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc: Any) -> None:
        pass

    def execute(self, query: str, params: Any = None) -> None:
        self.conn.executed.append((query, params))
        self._rows = [dict(row) for row in self.conn.responses.get(query, [])]

    def fetchall(self) -> list[dict[str, Any]]:
        return self._rows


class FakeConnection:
    """
    Stand-in for a psycopg connection.

    Attributes:
        responses: query text -> rows returned for it
        executed: (query, params) pairs in execution order
    """

    def __init__(self, responses: dict[str, list[dict[str, Any]]]):
        self.responses = responses
        self.executed: list[tuple[str, Any]] = []

    def __enter__(self) -> "FakeConnection":
        return self

    def __exit__(self, *exc: Any) -> None:
        pass

    def cursor(self, row_factory: Any = None) -> FakeCursor:
        return FakeCursor(self)

    def queries(self) -> list[str]:
        return [query for query, _ in self.executed]


@pytest.fixture
def catalog_rows() -> dict[str, list[dict[str, Any]]]:
    """
    Catalog rows for a small blog schema.

    users(id identity pk, email varchar(255), name text, status user_status,
    created_at timestamp, tags text[]) and posts(id bigserial pk, user_id,
    title varchar(100), rating numeric(3,1), published bool, author_email).
    """
    return {
        queries.TABLES_QUERY: [
            {"schema": "public", "name": "posts"},
            {"schema": "public", "name": "users"},
        ],
        queries.COLUMNS_QUERY: [
            column_row(table_name="posts", name="id", pos=1, type="bigint",
                       custom_type_name="int8", null="NO",
                       default="nextval('posts_id_seq'::regclass)",
                       num_precision=64, num_scale=0),
            column_row(table_name="posts", name="user_id", pos=2, null="NO",
                       num_precision=32, num_scale=0),
            column_row(table_name="posts", name="title", pos=3, type="character varying",
                       custom_type_name="varchar", char_length=100),
            column_row(table_name="posts", name="rating", pos=4, type="numeric",
                       custom_type_name="numeric", num_precision=3, num_scale=1,
                       default="0.0"),
            column_row(table_name="posts", name="published", pos=5, type="boolean",
                       custom_type_name="bool", null="NO", default="false"),
            column_row(table_name="posts", name="author_email", pos=6,
                       type="character varying", custom_type_name="varchar",
                       char_length=255),
            column_row(table_name="users", name="id", pos=1, null="NO", is_identity="YES",
                       num_precision=32, num_scale=0),
            column_row(table_name="users", name="email", pos=2, type="character varying",
                       custom_type_name="varchar", char_length=255, null="NO"),
            column_row(table_name="users", name="name", pos=3, type="text",
                       custom_type_name="text"),
            column_row(table_name="users", name="status", pos=4, type="USER-DEFINED",
                       custom_type_name="user_status", null="NO",
                       default="'pending'::user_status"),
            column_row(table_name="users", name="created_at", pos=5,
                       type="timestamp without time zone", custom_type_name="timestamp",
                       dt_precision=6, default="now()"),
            column_row(table_name="users", name="tags", pos=6, type="ARRAY",
                       custom_type_name="_text", element_type="text",
                       element_custom_type_name="text"),
        ],
        queries.INDEXES_QUERY: [
            {"table_name": "posts", "name": "posts_pkey", "column_positions": [1],
             "index_options": [0], "primary": True, "unique": True, "condition": None,
             "index_type": "btree", "index_oid": 200},
            {"table_name": "posts", "name": "posts_user_id_idx", "column_positions": "2",
             "index_options": "3", "primary": False, "unique": False,
             "condition": "published", "index_type": "btree", "index_oid": 201},
            {"table_name": "users", "name": "users_pkey", "column_positions": [1],
             "index_options": [0], "primary": True, "unique": True, "condition": None,
             "index_type": "btree", "index_oid": 100},
            {"table_name": "users", "name": "users_email_key", "column_positions": [2],
             "index_options": [0], "primary": False, "unique": True, "condition": None,
             "index_type": "btree", "index_oid": 102},
            {"table_name": "users", "name": "users_lower_name_email_idx",
             "column_positions": [0, 2], "index_options": [0, 1], "primary": False,
             "unique": False, "condition": None, "index_type": "btree", "index_oid": 101},
        ],
        queries.EXPRESSION_INDEXES_QUERY: [
            {"index_id": 101, "definitions": ["lower(name)", "email", None]},
        ],
        queries.CONSTRAINTS_QUERY: [
            {"table_name": "posts", "name": "posts_author_email_fkey", "type": "f",
             "condition": None, "field_positions": [6], "key_positions": [2],
             "referenced": "users", "on_update": "c", "on_delete": "n",
             "deferrable": True},
            {"table_name": "posts", "name": "posts_user_id_fkey", "type": "f",
             "condition": None, "field_positions": [2], "key_positions": [1],
             "referenced": "users", "on_update": "a", "on_delete": "c",
             "deferrable": False},
            {"table_name": "users", "name": "users_email_check", "type": "c",
             "condition": "length(email::text) > 3", "field_positions": [2],
             "key_positions": None, "referenced": None, "on_update": " ",
             "on_delete": " ", "deferrable": False},
        ],
        queries.ENUMS_QUERY: [
            {"schema": "public", "name": "user_status",
             "values": ["pending", "active", "banned"]},
        ],
        queries.EXTENSIONS_QUERY: [
            {"name": "hstore"},
        ],
    }


@pytest.fixture
def fake_conn(catalog_rows: dict[str, list[dict[str, Any]]]) -> FakeConnection:
    return FakeConnection(catalog_rows)


@pytest.fixture
def make_column():
    """Factory for columns query rows."""
    return column_row


@pytest.fixture
def make_connection():
    """Factory for fake connections over custom catalog rows."""
    return FakeConnection

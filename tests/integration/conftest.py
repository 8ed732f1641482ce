"""Fixtures for tests against a live PostgreSQL database."""

import os

import psycopg
import pytest
from psycopg import Connection

TEST_SCHEMA = "pgschema_reader_test"


@pytest.fixture
def db_conn() -> Connection:
    """
    Provide a test database connection.

    Set PGSCHEMA_TEST_DATABASE_URL to run these tests, e.g.
    postgresql://localhost/pgschema_reader_test
    """
    url = os.environ.get("PGSCHEMA_TEST_DATABASE_URL")
    if not url:
        pytest.skip("PGSCHEMA_TEST_DATABASE_URL not set")

    conn = psycopg.connect(url, autocommit=True)

    yield conn

    conn.close()


@pytest.fixture
def test_schema(db_conn: Connection) -> str:
    """
    Create a blog schema with every catalog feature the reader decodes.

    Returns the schema name.
    """
    s = TEST_SCHEMA

    # Tables stay off the search_path, so the catalog renders
    # schema-qualified sequence and type names.
    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {s} CASCADE")
        cur.execute(f"CREATE SCHEMA {s}")

        cur.execute(f"CREATE TYPE {s}.user_status AS ENUM ('pending', 'active', 'banned')")

        cur.execute(f"""
            CREATE TABLE {s}.users (
                id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
                email VARCHAR(255) NOT NULL UNIQUE,
                name TEXT,
                status {s}.user_status NOT NULL DEFAULT 'pending',
                score NUMERIC(5, 2) DEFAULT 1.5,
                active BOOLEAN NOT NULL DEFAULT true,
                born_on DATE DEFAULT '2000-01-01',
                created_at TIMESTAMP(3) DEFAULT now(),
                tags TEXT[],
                session_length INTERVAL HOUR TO MINUTE,
                CONSTRAINT users_email_check CHECK (length(email) > 3)
            )
        """)
        cur.execute(
            f"CREATE INDEX users_lower_name_idx ON {s}.users "
            f"(lower(name), email DESC NULLS LAST)"
        )

        cur.execute(f"""
            CREATE TABLE {s}.posts (
                id BIGSERIAL PRIMARY KEY,
                user_id INTEGER NOT NULL REFERENCES {s}.users ON DELETE CASCADE,
                author_email VARCHAR(255) REFERENCES {s}.users (email)
                    ON UPDATE CASCADE ON DELETE SET NULL DEFERRABLE,
                title VARCHAR(100) NOT NULL DEFAULT 'untitled',
                published BOOLEAN NOT NULL DEFAULT false
            )
        """)
        cur.execute(f"CREATE INDEX posts_user_id_idx ON {s}.posts (user_id) WHERE published")

        cur.execute(f"""
            CREATE TABLE {s}.search_docs (
                id SERIAL,
                token TEXT NOT NULL,
                config REGCONFIG NOT NULL DEFAULT 'english',
                CONSTRAINT search_docs_pkey PRIMARY KEY (id) INCLUDE (token)
            )
        """)
        cur.execute(f"""
            CREATE TABLE {s}.search_hits (
                doc_id INTEGER NOT NULL REFERENCES {s}.search_docs (id)
            )
        """)

    yield TEST_SCHEMA

    # Cleanup
    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {TEST_SCHEMA} CASCADE")

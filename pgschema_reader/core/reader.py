"""Read a PostgreSQL schema from the system catalog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from psycopg import Connection
from psycopg.rows import dict_row

from pgschema_reader.core import queries
from pgschema_reader.core.assembler import (
    assemble_tables,
    build_enums,
    build_extensions,
)
from pgschema_reader.core.indexes import expression_positions, expression_texts
from pgschema_reader.core.models import Enum, Extension, Schema, Table

if TYPE_CHECKING:
    from pgschema_reader.config import Config

logger = logging.getLogger(__name__)

DEFAULT_SCHEMAS = ("public",)
DEFAULT_EXCLUDED_EXTENSIONS = ("plpgsql",)


class SchemaReader:
    """
    Read tables, enums and extensions of a PostgreSQL database.

    Every read issues a fixed number of catalog queries (one per row set,
    never one per table) and returns a freshly built object graph.

    Example:
        >>> with psycopg.connect("postgresql://localhost/app") as conn:
        ...     schema = SchemaReader(conn).read_schema()
        >>> schema.table("users").primary_key
        ('id',)
    """

    def __init__(
        self,
        conn: Connection,
        schemas: Iterable[str] = DEFAULT_SCHEMAS,
        excluded_extensions: Iterable[str] = DEFAULT_EXCLUDED_EXTENSIONS,
    ):
        """
        Initialize reader.

        Args:
            conn: PostgreSQL connection
            schemas: Schemas whose tables and enums are read
            excluded_extensions: Extensions left out of read_extensions()
        """
        self.conn = conn
        self.schemas = list(schemas)
        self.excluded_extensions = list(excluded_extensions)

    @classmethod
    def from_config(cls, conn: Connection, config: Config) -> SchemaReader:
        """Create a reader using the schemas and exclusions of a Config."""
        return cls(
            conn,
            schemas=config.database.schemas,
            excluded_extensions=config.reader.excluded_extensions,
        )

    def read_schema(self) -> Schema:
        schema = Schema(
            tables=self.read_tables(),
            enums=self.read_enums(),
            extensions=self.read_extensions(),
        )
        logger.info(
            f"Read {len(schema.tables)} tables, {len(schema.enums)} enums and "
            f"{len(schema.extensions)} extensions from {', '.join(self.schemas)}"
        )
        return schema

    def read_tables(self) -> tuple[Table, ...]:
        """
        Read all base tables with their fields, indexes, checks and foreign keys.

        Raises:
            CatalogDecodingError: If catalog rows can't be decoded
            DuplicateTableError: If a table name appears in several schemas
        """
        params = {"schemas": self.schemas}
        table_rows = self._fetch(queries.TABLES_QUERY, params)
        column_rows = self._fetch(queries.COLUMNS_QUERY, params)
        index_rows = self._fetch(queries.INDEXES_QUERY, params)
        constraint_rows = self._fetch(queries.CONSTRAINTS_QUERY, params)

        return assemble_tables(
            table_rows,
            column_rows,
            index_rows,
            constraint_rows,
            self._index_expressions(index_rows),
        )

    def read_enums(self) -> tuple[Enum, ...]:
        """Read enum types; labels keep their declared sort order."""
        return build_enums(self._fetch(queries.ENUMS_QUERY, {"schemas": self.schemas}))

    def read_extensions(self) -> tuple[Extension, ...]:
        rows = self._fetch(queries.EXTENSIONS_QUERY, {"excluded": self.excluded_extensions})
        return build_extensions(rows)

    def _index_expressions(self, index_rows: list[dict[str, Any]]) -> dict[int, list[str]]:
        """Fetch expression texts for indexes with expression columns (one query)."""
        slots = expression_positions(index_rows)
        if not slots:
            return {}

        max_position = max(max(positions) for positions in slots.values()) + 1
        logger.debug(f"Fetching expressions of {len(slots)} expression indexes")
        rows = self._fetch(
            queries.EXPRESSION_INDEXES_QUERY,
            {"index_ids": list(slots), "max_position": max_position},
        )
        return expression_texts(rows, slots)

    def _fetch(self, query: str, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()

"""Assemble tables from already-fetched catalog row sets."""

import logging
from collections import defaultdict
from typing import Any, Iterable, Mapping, Sequence

from pgschema_reader.core.constraints import classify_constraints
from pgschema_reader.core.fields import build_field
from pgschema_reader.core.indexes import build_index, primary_key_columns
from pgschema_reader.core.models import Enum, Extension, Table
from pgschema_reader.exceptions import DuplicateEnumError, DuplicateTableError

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def group_by_table(rows: Iterable[Row]) -> dict[str, list[Row]]:
    grouped: dict[str, list[Row]] = defaultdict(list)
    for row in rows:
        grouped[row["table_name"]].append(row)
    return dict(grouped)


def column_name_lookup(columns_by_table: Mapping[str, Sequence[Row]]) -> dict[str, dict[int, str]]:
    """Build table name -> column position -> column name."""
    return {
        table_name: {row["pos"]: row["name"] for row in rows}
        for table_name, rows in columns_by_table.items()
    }


def table_names(table_rows: Iterable[Row]) -> list[str]:
    """
    Extract table names in query order.

    Raises:
        DuplicateTableError: If the same name appears in several schemas
    """
    schemas_by_name: dict[str, list[str]] = defaultdict(list)
    names = []
    for row in table_rows:
        name = row["name"]
        if name not in schemas_by_name:
            names.append(name)
        schemas_by_name[name].append(row.get("schema", ""))

    for name in names:
        if len(schemas_by_name[name]) > 1:
            raise DuplicateTableError(name, schemas_by_name[name])
    return names


def assemble_tables(
    table_rows: Iterable[Row],
    column_rows: Iterable[Row],
    index_rows: Iterable[Row],
    constraint_rows: Iterable[Row],
    index_expressions: Mapping[Any, Sequence[str]],
) -> tuple[Table, ...]:
    """
    Build every table from the catalog row sets.

    Args:
        table_rows: Tables query rows (schema, name), in output order
        column_rows: Columns query rows for all tables
        index_rows: Indexes query rows for all tables
        constraint_rows: Constraints query rows (checks and foreign keys)
        index_expressions: index oid -> expression texts in key order

    Returns:
        Tables in query order, each with indexes sorted by name
    """
    names = table_names(table_rows)
    index_rows = list(index_rows)
    columns_by_table = group_by_table(column_rows)
    indexes_by_table = group_by_table(index_rows)
    column_names = column_name_lookup(columns_by_table)
    primary_keys = primary_key_columns(index_rows, column_names)
    checks, foreign_keys = classify_constraints(constraint_rows, column_names, primary_keys)

    tables = []
    for name in names:
        primary_key = primary_keys.get(name, ())
        fields = tuple(
            build_field(row, name, primary_key=row["name"] in primary_key)
            for row in columns_by_table.get(name, [])
        )
        indexes = sorted(
            (
                build_index(
                    row, column_names.get(name, {}), index_expressions.get(row["index_oid"], ())
                )
                for row in indexes_by_table.get(name, [])
            ),
            key=lambda index: index.name,
        )
        table = Table(
            name=name,
            fields=fields,
            indexes=tuple(indexes),
            checks=tuple(checks.get(name, [])),
            foreign_keys=tuple(foreign_keys.get(name, [])),
        )
        logger.debug(
            f"Assembled table '{name}': {len(table.fields)} fields, "
            f"{len(table.indexes)} indexes, {len(table.checks)} checks, "
            f"{len(table.foreign_keys)} foreign keys"
        )
        tables.append(table)

    return tuple(tables)


def build_enums(rows: Iterable[Row]) -> tuple[Enum, ...]:
    """
    Build enum types, one per enums query row.

    Raises:
        DuplicateEnumError: If the same type name appears in several schemas
    """
    rows = list(rows)
    schemas_by_name: dict[str, list[str]] = defaultdict(list)
    for row in rows:
        schemas_by_name[row["name"]].append(row.get("schema", ""))

    for name, schemas in schemas_by_name.items():
        if len(schemas) > 1:
            raise DuplicateEnumError(name, schemas)

    return tuple(Enum(name=row["name"], values=tuple(row["values"])) for row in rows)


def build_extensions(rows: Iterable[Row]) -> tuple[Extension, ...]:
    return tuple(Extension(name=row["name"]) for row in rows)

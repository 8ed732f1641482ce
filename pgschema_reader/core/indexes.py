"""Decode pg_index rows into indexes.

pg_index stores an index's key as two parallel arrays: ``indkey`` holds the
table column position of every index column (0 for expression columns) and
``indoption`` holds a per-column code packing sort order and nulls placement.
Expression texts are fetched separately and consumed in key order.
"""

from collections import deque
from typing import Any, Iterable, Mapping, Sequence

from pgschema_reader.core.models import (
    Expression,
    Index,
    IndexColumn,
    NullsPlacement,
    SortOrder,
    TableField,
)
from pgschema_reader.exceptions import (
    IndexExpressionMismatchError,
    UnknownColumnPositionError,
    UnknownIndexOptionError,
)


# indoption code -> (order, nulls)
INDEX_OPTIONS: dict[int, tuple[SortOrder, NullsPlacement]] = {
    0: (SortOrder.ASC, NullsPlacement.DEFAULT),
    1: (SortOrder.DESC, NullsPlacement.LAST),
    2: (SortOrder.ASC, NullsPlacement.FIRST),
    3: (SortOrder.DESC, NullsPlacement.DEFAULT),
}


def parse_int_array(value: Any) -> list[int]:
    """
    Normalize a catalog integer array.

    int2vector columns (indkey, indoption) render as space-separated text
    unless cast to an array in the query.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [int(item) for item in value.split()]
    return [int(item) for item in value]


def decode_order(code: int, index_name: str) -> tuple[SortOrder, NullsPlacement]:
    try:
        return INDEX_OPTIONS[code]
    except KeyError:
        raise UnknownIndexOptionError(code, index_name) from None


def resolve_position(position: int, column_names: Mapping[int, str], table_name: str) -> str:
    """Resolve a 1-based column position (attnum) to the column name."""
    try:
        return column_names[position]
    except KeyError:
        raise UnknownColumnPositionError(position, table_name) from None


def decode_index_columns(
    index_name: str,
    table_name: str,
    positions: Sequence[int],
    options: Sequence[int],
    column_names: Mapping[int, str],
    expressions: Iterable[str] = (),
) -> tuple[IndexColumn, ...]:
    """
    Reconstruct an index's ordered column list.

    Args:
        index_name: Index name (for error reporting)
        table_name: Indexed table (for error reporting)
        positions: indkey values, 0 meaning an expression column
        options: indoption codes, one per key column
        column_names: Position -> column name lookup for the indexed table
        expressions: Expression texts, one per zero position, in key order

    Returns:
        TableField and Expression columns in key order

    Raises:
        IndexExpressionMismatchError: If expressions don't match the zero positions
        UnknownIndexOptionError: If an option code is outside 0-3
        UnknownColumnPositionError: If a position isn't a column of the table
    """
    queue = deque(expressions)
    expected = sum(1 for position in positions if position == 0)
    if len(queue) != expected:
        raise IndexExpressionMismatchError(index_name, expected, list(queue))

    columns: list[IndexColumn] = []
    for position, code in zip(positions, options):
        order, nulls = decode_order(code, index_name)
        if position == 0:
            columns.append(Expression(queue.popleft(), order=order, nulls=nulls))
        else:
            name = resolve_position(position, column_names, table_name)
            columns.append(TableField(name, order=order, nulls=nulls))

    return tuple(columns)


def build_index(
    row: Mapping[str, Any],
    column_names: Mapping[int, str],
    expressions: Iterable[str] = (),
) -> Index:
    """Build an Index from one indexes query row."""
    columns = decode_index_columns(
        row["name"],
        row["table_name"],
        parse_int_array(row["column_positions"]),
        parse_int_array(row["index_options"]),
        column_names,
        expressions,
    )
    return Index(
        name=row["name"],
        columns=columns,
        unique=bool(row["unique"]),
        primary=bool(row["primary"]),
        type=row["index_type"],
        condition=row.get("condition"),
    )


def expression_positions(index_rows: Iterable[Mapping[str, Any]]) -> dict[int, list[int]]:
    """
    Find the expression slots of every index.

    Returns:
        index oid -> 0-based key positions holding an expression, for indexes
        with at least one expression column
    """
    slots = {}
    for row in index_rows:
        positions = parse_int_array(row["column_positions"])
        zeros = [i for i, position in enumerate(positions) if position == 0]
        if zeros:
            slots[row["index_oid"]] = zeros
    return slots


def expression_texts(
    expression_rows: Iterable[Mapping[str, Any]],
    slots: Mapping[int, list[int]],
) -> dict[int, list[str]]:
    """
    Pick each index's expression texts out of its per-column definitions.

    Args:
        expression_rows: Expression index query rows (index_id, definitions),
            where definitions[i] is pg_get_indexdef() of key column i + 1
        slots: Output of expression_positions()

    Returns:
        index oid -> expression texts in key order
    """
    texts = {}
    for row in expression_rows:
        index_id = row["index_id"]
        definitions = row["definitions"]
        texts[index_id] = [
            definitions[slot] for slot in slots.get(index_id, []) if slot < len(definitions)
        ]
    return texts


def primary_key_columns(
    index_rows: Iterable[Mapping[str, Any]],
    column_names: Mapping[str, Mapping[int, str]],
) -> dict[str, tuple[str, ...]]:
    """
    Compute every table's primary key from its primary index.

    Non-key INCLUDE columns follow the key columns in indkey and have no
    indoption entry; they are not part of the key.

    Returns:
        table name -> primary key column names in key order
    """
    primary_keys = {}
    for row in index_rows:
        if not row["primary"]:
            continue
        table_name = row["table_name"]
        names = column_names.get(table_name, {})
        key_count = len(parse_int_array(row["index_options"]))
        primary_keys[table_name] = tuple(
            resolve_position(position, names, table_name)
            for position in parse_int_array(row["column_positions"])[:key_count]
        )
    return primary_keys

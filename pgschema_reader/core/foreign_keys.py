"""Normalize foreign key constraint rows."""

from typing import Any, Mapping

from pgschema_reader.core.indexes import parse_int_array, resolve_position
from pgschema_reader.core.models import ForeignKey, ForeignKeyAction
from pgschema_reader.exceptions import UnknownForeignKeyActionError

# pg_constraint.confupdtype / confdeltype codes
FKEY_ACTIONS: dict[str, ForeignKeyAction] = {
    "a": ForeignKeyAction.NO_ACTION,
    "r": ForeignKeyAction.RESTRICT,
    "c": ForeignKeyAction.CASCADE,
    "n": ForeignKeyAction.SET_NULL,
    "d": ForeignKeyAction.SET_DEFAULT,
}


def decode_action(code: Any, constraint: str) -> ForeignKeyAction:
    try:
        return FKEY_ACTIONS[code]
    except (KeyError, TypeError):
        raise UnknownForeignKeyActionError(code, constraint) from None


def build_foreign_key(
    row: Mapping[str, Any],
    column_names: Mapping[str, Mapping[int, str]],
    primary_keys: Mapping[str, tuple[str, ...]],
) -> ForeignKey:
    """
    Build a ForeignKey from one constraints query row.

    Referenced columns that are exactly the referenced table's primary key
    (same names, same order) are dropped: an empty ``keys`` tuple stands for
    "the primary key".

    Args:
        row: Constraint row (table_name, name, field_positions, key_positions,
            referenced, on_update, on_delete, deferrable)
        column_names: table name -> position -> column name
        primary_keys: table name -> primary key column names

    Raises:
        UnknownForeignKeyActionError: If an action code is not a/r/c/n/d
        UnknownColumnPositionError: If a key position can't be resolved
    """
    name = row["name"]
    table_name = row["table_name"]
    referenced = row["referenced"]

    fields = tuple(
        resolve_position(position, column_names.get(table_name, {}), table_name)
        for position in parse_int_array(row["field_positions"])
    )
    keys = tuple(
        resolve_position(position, column_names.get(referenced, {}), referenced)
        for position in parse_int_array(row["key_positions"])
    )
    if keys == primary_keys.get(referenced):
        keys = ()

    return ForeignKey(
        name=name,
        fields=fields,
        referenced_table=referenced,
        keys=keys,
        on_update=decode_action(row["on_update"], name),
        on_delete=decode_action(row["on_delete"], name),
        deferrable=bool(row["deferrable"]),
    )

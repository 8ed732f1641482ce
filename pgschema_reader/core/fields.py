"""Build typed fields from information_schema.columns rows."""

import logging
import re
from typing import Any, Mapping, Optional

from pgschema_reader.core.defaults import parse_default
from pgschema_reader.core.models import (
    ArrayOptions,
    CharacterOptions,
    ColumnType,
    DefaultValue,
    Field,
    FieldOptions,
    FieldType,
    IntervalOptions,
    NumericOptions,
)

logger = logging.getLogger(__name__)

USER_DEFINED = "user-defined"

SERIAL_TYPES: dict[FieldType, FieldType] = {
    FieldType.SMALLINT: FieldType.SMALLSERIAL,
    FieldType.INTEGER: FieldType.SERIAL,
    FieldType.BIGINT: FieldType.BIGSERIAL,
}

LENGTH_TYPES = frozenset(
    {
        FieldType.CHARACTER,
        FieldType.CHARACTER_VARYING,
        FieldType.BIT,
        FieldType.BIT_VARYING,
    }
)

_INTERVAL_PRECISION = re.compile(r"\(\d+\)")
_PLAIN_IDENTIFIER = re.compile(r"[a-z_][a-z0-9_$]*")


def resolve_type(
    data_type: str, custom_type_name: Optional[str], column: str, table: str
) -> ColumnType:
    """
    Resolve the catalog's data_type into a FieldType or a custom type name.

    Built-in types missing from FieldType (aclitem, refcursor...) come back
    as their lowercased catalog name.
    """
    type_name = data_type.lower()
    if type_name == USER_DEFINED:
        return custom_type_name
    try:
        return FieldType(type_name)
    except ValueError:
        logger.debug(f"Column {table}.{column} has unmodeled type '{type_name}'")
        return type_name


def quote_identifier(name: str) -> str:
    """Quote an identifier the way regclass output renders it."""
    if _PLAIN_IDENTIFIER.fullmatch(name):
        return name
    return '"' + name.replace('"', '""') + '"'


def sequence_default(table_name: str, column_name: str, schema: Optional[str] = None) -> str:
    """
    Default rendered by the catalog for a serial column's owned sequence.

    The sequence name is schema-qualified when its schema is not on the
    search_path.
    """
    sequence = quote_identifier(f"{table_name}_{column_name}_seq")
    if schema is not None:
        sequence = f"{quote_identifier(schema)}.{sequence}"
    return f"nextval('{sequence}'::regclass)"


def is_sequence_default(
    raw_default: Optional[str], table_name: str, column_name: str, schema: Optional[str] = None
) -> bool:
    """Check a default against the column's owned sequence, qualified or not."""
    if raw_default is None:
        return False
    if raw_default == sequence_default(table_name, column_name):
        return True
    return schema is not None and raw_default == sequence_default(
        table_name, column_name, schema
    )


def build_field(row: Mapping[str, Any], table_name: str, primary_key: bool = False) -> Field:
    """
    Build a Field from one columns query row.

    Args:
        row: Columns query row (schema, name, type, custom_type_name, null,
            default, is_identity, char_length, num_precision, num_scale,
            dt_precision, interval_type, element_type, element_custom_type_name)
        table_name: Owning table, needed to recognize sequence-backed defaults
        primary_key: Whether the column is part of the table's primary key

    Returns:
        Field with serial types inferred and type options extracted
    """
    name = row["name"]
    field_type = resolve_type(row["type"], row.get("custom_type_name"), name, table_name)
    nullable = row["null"] != "NO"
    raw_default = row.get("default")
    default: DefaultValue = None

    serial_type = SERIAL_TYPES.get(field_type)
    if row.get("is_identity") == "YES" and serial_type is not None:
        logger.debug(f"Identity column {table_name}.{name} read as {serial_type.value}")
        field_type, nullable = serial_type, True
    elif (
        serial_type is not None
        and not nullable
        and is_sequence_default(raw_default, table_name, name, row.get("schema"))
    ):
        logger.debug(f"Sequence-backed column {table_name}.{name} read as {serial_type.value}")
        field_type, nullable = serial_type, True
    elif raw_default is not None:
        default = parse_default(raw_default)

    return Field(
        name=name,
        type=field_type,
        nullable=nullable,
        default=default,
        primary_key=primary_key,
        options=build_options(field_type, row, table_name),
    )


def build_options(
    field_type: ColumnType, row: Mapping[str, Any], table_name: str
) -> Optional[FieldOptions]:
    """
    Extract the type-specific options of a column.

    Returns None for types without options and when the catalog reports none
    of the type's attributes.
    """
    if field_type in LENGTH_TYPES:
        length = row.get("char_length")
        return CharacterOptions(length=length) if length is not None else None

    if field_type == FieldType.NUMERIC:
        precision, scale = row.get("num_precision"), row.get("num_scale")
        if precision is None and scale is None:
            return None
        return NumericOptions(precision=precision, scale=scale)

    if field_type == FieldType.INTERVAL:
        precision, interval_type = row.get("dt_precision"), row.get("interval_type")
        if precision is None and interval_type is None:
            return None
        fields = None
        if interval_type is not None:
            fields = _INTERVAL_PRECISION.sub("", interval_type).strip().lower()
        return IntervalOptions(precision=precision, fields=fields)

    if field_type == FieldType.ARRAY:
        element_type = row.get("element_type")
        if element_type is None:
            return None
        return ArrayOptions(
            element_type=resolve_type(
                element_type, row.get("element_custom_type_name"), row["name"], table_name
            )
        )

    return None

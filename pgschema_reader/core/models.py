"""
Core data models for pgschema-reader.

Defines the immutable structures used to describe a database schema read from
the PostgreSQL catalog: tables, fields, indexes, constraints, enums and
extensions. Entities refer to each other by name only.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from enum import Enum as _Enum
from typing import Any, Optional, Union


class FieldType(str, _Enum):
    """Built-in column types as reported by information_schema.columns."""

    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    SMALLSERIAL = "smallserial"
    SERIAL = "serial"
    BIGSERIAL = "bigserial"
    NUMERIC = "numeric"
    REAL = "real"
    DOUBLE_PRECISION = "double precision"
    MONEY = "money"
    CHARACTER = "character"
    CHARACTER_VARYING = "character varying"
    TEXT = "text"
    CHAR = '"char"'
    NAME = "name"
    BYTEA = "bytea"
    TIMESTAMP = "timestamp without time zone"
    TIMESTAMPTZ = "timestamp with time zone"
    DATE = "date"
    TIME = "time without time zone"
    TIMETZ = "time with time zone"
    INTERVAL = "interval"
    BOOLEAN = "boolean"
    POINT = "point"
    LINE = "line"
    LSEG = "lseg"
    BOX = "box"
    PATH = "path"
    POLYGON = "polygon"
    CIRCLE = "circle"
    CIDR = "cidr"
    INET = "inet"
    MACADDR = "macaddr"
    MACADDR8 = "macaddr8"
    BIT = "bit"
    BIT_VARYING = "bit varying"
    TSVECTOR = "tsvector"
    TSQUERY = "tsquery"
    UUID = "uuid"
    XML = "xml"
    JSON = "json"
    JSONB = "jsonb"
    JSONPATH = "jsonpath"
    INT4RANGE = "int4range"
    INT8RANGE = "int8range"
    NUMRANGE = "numrange"
    TSRANGE = "tsrange"
    TSTZRANGE = "tstzrange"
    DATERANGE = "daterange"
    INT4MULTIRANGE = "int4multirange"
    INT8MULTIRANGE = "int8multirange"
    NUMMULTIRANGE = "nummultirange"
    TSMULTIRANGE = "tsmultirange"
    TSTZMULTIRANGE = "tstzmultirange"
    DATEMULTIRANGE = "datemultirange"
    OID = "oid"
    XID = "xid"
    XID8 = "xid8"
    CID = "cid"
    TID = "tid"
    INT2VECTOR = "int2vector"
    OIDVECTOR = "oidvector"
    REGCLASS = "regclass"
    REGCOLLATION = "regcollation"
    REGCONFIG = "regconfig"
    REGDICTIONARY = "regdictionary"
    REGNAMESPACE = "regnamespace"
    REGOPER = "regoper"
    REGOPERATOR = "regoperator"
    REGPROC = "regproc"
    REGPROCEDURE = "regprocedure"
    REGROLE = "regrole"
    REGTYPE = "regtype"
    REFCURSOR = "refcursor"
    ACLITEM = "aclitem"
    PG_LSN = "pg_lsn"
    PG_SNAPSHOT = "pg_snapshot"
    TXID_SNAPSHOT = "txid_snapshot"
    ARRAY = "array"


class SortOrder(str, _Enum):
    ASC = "asc"
    DESC = "desc"


class NullsPlacement(str, _Enum):
    DEFAULT = "default"
    FIRST = "first"
    LAST = "last"


class ForeignKeyAction(str, _Enum):
    NO_ACTION = "no_action"
    RESTRICT = "restrict"
    CASCADE = "cascade"
    SET_NULL = "set_null"
    SET_DEFAULT = "set_default"


# A column type is either a built-in type or the name of a custom type (enum, domain...)
ColumnType = Union[FieldType, str]


@dataclass(frozen=True)
class SqlExpression:
    """Default value that is not a recognized literal (function call, cast, ...)."""

    text: str


DefaultValue = Union[date, datetime, str, int, float, bool, SqlExpression, None]


@dataclass(frozen=True)
class CharacterOptions:
    """Options of character and bit string types."""

    length: Optional[int] = None


@dataclass(frozen=True)
class NumericOptions:
    precision: Optional[int] = None
    scale: Optional[int] = None


@dataclass(frozen=True)
class IntervalOptions:
    """
    Options of interval columns.

    Attributes:
        precision: Fractional seconds precision
        fields: Restricted unit, e.g. "day to second" or "year"
    """

    precision: Optional[int] = None
    fields: Optional[str] = None


@dataclass(frozen=True)
class ArrayOptions:
    element_type: ColumnType


FieldOptions = Union[CharacterOptions, NumericOptions, IntervalOptions, ArrayOptions]


@dataclass(frozen=True)
class Field:
    """
    Table column.

    Attributes:
        name: Column name
        type: Built-in FieldType or custom type name
        nullable: Whether the column accepts NULL
        default: Typed literal, SqlExpression or None
        primary_key: Whether the column is part of the primary key
        options: Type-specific attributes (length, precision...) if any
    """

    name: str
    type: ColumnType
    nullable: bool = True
    default: DefaultValue = None
    primary_key: bool = False
    options: Optional[FieldOptions] = None

    @property
    def is_serial(self) -> bool:
        return self.type in SERIAL_FIELD_TYPES


SERIAL_FIELD_TYPES = frozenset(
    {FieldType.SMALLSERIAL, FieldType.SERIAL, FieldType.BIGSERIAL}
)


@dataclass(frozen=True)
class TableField:
    """Index column referencing a table column."""

    name: str
    order: SortOrder = SortOrder.ASC
    nulls: NullsPlacement = NullsPlacement.DEFAULT


@dataclass(frozen=True)
class Expression:
    """Index column computed from an expression."""

    text: str
    order: SortOrder = SortOrder.ASC
    nulls: NullsPlacement = NullsPlacement.DEFAULT


IndexColumn = Union[TableField, Expression]


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[IndexColumn, ...]
    unique: bool = False
    primary: bool = False
    type: str = "btree"
    condition: Optional[str] = None


@dataclass(frozen=True)
class CheckConstraint:
    name: str
    condition: str


@dataclass(frozen=True)
class ForeignKey:
    """
    Foreign key constraint.

    An empty ``keys`` tuple means the foreign key references the primary key
    of ``referenced_table``.
    """

    name: str
    fields: tuple[str, ...]
    referenced_table: str
    keys: tuple[str, ...] = ()
    on_update: ForeignKeyAction = ForeignKeyAction.NO_ACTION
    on_delete: ForeignKeyAction = ForeignKeyAction.NO_ACTION
    deferrable: bool = False

    @property
    def references_primary_key(self) -> bool:
        return not self.keys


@dataclass(frozen=True)
class Table:
    name: str
    fields: tuple[Field, ...] = ()
    indexes: tuple[Index, ...] = ()
    checks: tuple[CheckConstraint, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()

    def field(self, name: str) -> Optional[Field]:
        """Get a field by name, or None."""
        for table_field in self.fields:
            if table_field.name == name:
                return table_field
        return None

    def index(self, name: str) -> Optional[Index]:
        for index in self.indexes:
            if index.name == name:
                return index
        return None

    @property
    def primary_key(self) -> tuple[str, ...]:
        """Names of the primary key columns, in key order."""
        for index in self.indexes:
            if index.primary:
                return tuple(
                    column.name for column in index.columns if isinstance(column, TableField)
                )
        return ()


@dataclass(frozen=True)
class Enum:
    """Enumerated type; ``values`` are in the type's comparison order."""

    name: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class Extension:
    name: str


@dataclass(frozen=True)
class Schema:
    tables: tuple[Table, ...] = ()
    enums: tuple[Enum, ...] = ()
    extensions: tuple[Extension, ...] = ()

    def table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None


def schema_to_dict(value: Any) -> Any:
    """
    Convert a schema (or any model entity) into JSON-ready primitives.

    Enum members become their values, dates ISO strings, and default
    expressions ``{"expression": text}``.
    """
    if isinstance(value, SqlExpression):
        return {"expression": value.text}
    if isinstance(value, _Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        result = {f.name: schema_to_dict(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, (TableField, Expression)):
            result["kind"] = "expression" if isinstance(value, Expression) else "field"
        return result
    if isinstance(value, (list, tuple)):
        return [schema_to_dict(item) for item in value]
    return value

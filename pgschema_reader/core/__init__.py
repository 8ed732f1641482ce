"""Core functionality for pgschema-reader."""

from pgschema_reader.core.defaults import parse_default
from pgschema_reader.core.models import (
    CheckConstraint,
    Enum,
    Expression,
    Extension,
    Field,
    FieldType,
    ForeignKey,
    ForeignKeyAction,
    Index,
    NullsPlacement,
    Schema,
    SortOrder,
    SqlExpression,
    Table,
    TableField,
)
from pgschema_reader.core.reader import SchemaReader

__all__ = [
    "CheckConstraint",
    "Enum",
    "Expression",
    "Extension",
    "Field",
    "FieldType",
    "ForeignKey",
    "ForeignKeyAction",
    "Index",
    "NullsPlacement",
    "Schema",
    "SchemaReader",
    "SortOrder",
    "SqlExpression",
    "Table",
    "TableField",
    "parse_default",
]

"""
pgschema-reader - Typed PostgreSQL schema introspection

Reads tables, columns, indexes, check constraints, foreign keys, enum types
and extensions from the PostgreSQL system catalog into immutable Python
objects for migration planners, diff tools and code generators.
"""

__version__ = "0.1.0"

from pgschema_reader.config import Config
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
    schema_to_dict,
)
from pgschema_reader.core.reader import SchemaReader
from pgschema_reader.exceptions import CatalogDecodingError, SchemaReaderError

__all__ = [
    "CatalogDecodingError",
    "CheckConstraint",
    "Config",
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
    "SchemaReaderError",
    "SortOrder",
    "SqlExpression",
    "Table",
    "TableField",
    "schema_to_dict",
    "__version__",
]

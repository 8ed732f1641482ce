"""Custom exceptions with helpful error messages."""

from typing import Any, Sequence


class SchemaReaderError(Exception):
    """Base exception for pgschema-reader errors."""

    pass


class CatalogDecodingError(SchemaReaderError):
    """
    Catalog rows could not be decoded into the schema model.

    Attributes:
        stage: Decoding stage that failed (e.g. "foreign_key", "index")
        value: Offending raw catalog value
    """

    def __init__(self, stage: str, value: Any, message: str):
        self.stage = stage
        self.value = value
        super().__init__(message)


class UnknownForeignKeyActionError(CatalogDecodingError):
    """Foreign key action code is not one of a/r/c/n/d."""

    def __init__(self, code: Any, constraint: str):
        super().__init__(
            "foreign_key",
            code,
            f"Unknown action code {code!r} on foreign key '{constraint}'.\n\n"
            f"Suggestions:\n"
            f"1. Check pg_constraint.confupdtype / confdeltype values on this server\n"
            f"2. Ensure the constraints query selects the raw action codes",
        )


class UnknownConstraintTypeError(CatalogDecodingError):
    """Constraint row carries a type tag other than 'c' or 'f'."""

    def __init__(self, tag: Any, constraint: str):
        super().__init__(
            "constraint",
            tag,
            f"Unknown constraint type {tag!r} for constraint '{constraint}'.\n\n"
            f"Suggestions:\n"
            f"1. The constraints query must filter on contype IN ('c', 'f')\n"
            f"2. Check that the query has not been modified",
        )


class IndexExpressionMismatchError(CatalogDecodingError):
    """
    Expression texts do not line up with the index's expression slots.

    ``value`` holds the fetched expression texts.
    """

    def __init__(self, index: str, expected: int, expressions: Sequence[str]):
        self.index = index
        self.expected = expected
        super().__init__(
            "index",
            tuple(expressions),
            f"Index '{index}' has {expected} expression slot(s) "
            f"but {len(expressions)} expression text(s) were fetched: "
            f"{list(expressions)!r}.\n\n"
            f"Suggestions:\n"
            f"1. The catalog may have changed between queries; read the schema again\n"
            f"2. Check the expression index query returns one row per index",
        )


class UnknownIndexOptionError(CatalogDecodingError):
    """Index column order/nulls code outside 0-3."""

    def __init__(self, code: Any, index: str):
        super().__init__(
            "index",
            code,
            f"Unknown column option code {code!r} in index '{index}'.\n\n"
            f"Suggestions:\n"
            f"1. Expected pg_index.indoption values are 0, 1, 2 or 3\n"
            f"2. Check the access method of this index",
        )


class UnknownColumnPositionError(CatalogDecodingError):
    """Column position does not match any column of the table."""

    def __init__(self, position: Any, table: str):
        super().__init__(
            "column_position",
            position,
            f"Column position {position!r} not found in table '{table}'.\n\n"
            f"Suggestions:\n"
            f"1. The referenced table may live outside the schemas being read\n"
            f"2. Add its schema to the reader configuration",
        )


class DuplicateTableError(SchemaReaderError):
    """Two schemas in scope define a table with the same name."""

    def __init__(self, table: str, schemas: list[str]):
        schemas_str = ", ".join(schemas)
        super().__init__(
            f"Table '{table}' exists in more than one schema: {schemas_str}\n\n"
            f"Suggestions:\n"
            f"1. Read one schema at a time: --schema <name>\n"
            f"2. Rename one of the tables"
        )


class DuplicateEnumError(SchemaReaderError):
    """Two schemas in scope define an enum type with the same name."""

    def __init__(self, enum: str, schemas: list[str]):
        schemas_str = ", ".join(schemas)
        super().__init__(
            f"Enum type '{enum}' exists in more than one schema: {schemas_str}\n\n"
            f"Suggestions:\n"
            f"1. Read one schema at a time: --schema <name>\n"
            f"2. Rename one of the types"
        )


class ConfigFileNotFoundError(SchemaReaderError, FileNotFoundError):
    """No configuration file could be located."""

    def __init__(self, location: str):
        super().__init__(
            f"No pgschema-reader.toml found at {location}.\n\n"
            f"Suggestions:\n"
            f"1. Run 'pgschema-reader init' to create one\n"
            f"2. Pass --url to the command instead"
        )

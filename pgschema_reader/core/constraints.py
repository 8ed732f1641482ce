"""Split the mixed constraints row set into checks and foreign keys."""

from collections import defaultdict
from typing import Any, Iterable, Mapping

from pgschema_reader.core.foreign_keys import build_foreign_key
from pgschema_reader.core.models import CheckConstraint, ForeignKey
from pgschema_reader.exceptions import UnknownConstraintTypeError

CHECK = "c"
FOREIGN_KEY = "f"


def classify_constraints(
    rows: Iterable[Mapping[str, Any]],
    column_names: Mapping[str, Mapping[int, str]],
    primary_keys: Mapping[str, tuple[str, ...]],
) -> tuple[dict[str, list[CheckConstraint]], dict[str, list[ForeignKey]]]:
    """
    Partition constraint rows by type and owning table.

    Args:
        rows: Constraints query rows, discriminated by ``type`` ('c' or 'f')
        column_names: table name -> position -> column name
        primary_keys: table name -> primary key column names

    Returns:
        (checks by table name, foreign keys by table name)

    Raises:
        UnknownConstraintTypeError: If a row's type is neither 'c' nor 'f'
    """
    checks: dict[str, list[CheckConstraint]] = defaultdict(list)
    foreign_keys: dict[str, list[ForeignKey]] = defaultdict(list)

    for row in rows:
        table_name = row["table_name"]
        if row["type"] == CHECK:
            checks[table_name].append(
                CheckConstraint(name=row["name"], condition=row["condition"])
            )
        elif row["type"] == FOREIGN_KEY:
            foreign_keys[table_name].append(
                build_foreign_key(row, column_names, primary_keys)
            )
        else:
            raise UnknownConstraintTypeError(row["type"], row["name"])

    return dict(checks), dict(foreign_keys)

"""Parser for column default expressions as rendered by the PostgreSQL catalog."""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from pgschema_reader.core.models import DefaultValue, SqlExpression


@dataclass(frozen=True)
class DefaultRule:
    """
    A single literal recognition rule.

    Attributes:
        kind: Literal kind recognized by this rule (e.g. "date")
        pattern: Regex matched against the whole default expression
        convert: Turns the match into a Python value
    """

    kind: str
    pattern: re.Pattern
    convert: Callable[[re.Match], DefaultValue]

    def parse(self, raw: str) -> Optional[DefaultValue]:
        match = self.pattern.fullmatch(raw)
        if match is None:
            return None
        return self.convert(match)


def _to_timestamp(match: re.Match) -> datetime:
    value = datetime.strptime(match.group("time"), "%Y-%m-%d %H:%M:%S")
    offset = match.group("offset")
    if offset is None:
        return value
    return value.replace(tzinfo=timezone(timedelta(hours=int(offset))))


# Plain or double-quoted type name, as in a ::cast
_TYPE_NAME = r'(?:"(?:[^"]|"")+"|[a-z_][\w ]*)'

# Order matters: quoted dates/timestamps before generic strings,
# floats before integers.
DEFAULT_RULES: tuple[DefaultRule, ...] = (
    DefaultRule(
        "date",
        re.compile(r"'(?P<date>\d{4}-\d{2}-\d{2})'::date"),
        lambda match: date.fromisoformat(match.group("date")),
    ),
    DefaultRule(
        "timestamp",
        re.compile(
            r"'(?P<time>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?P<offset>[+-]\d{2})?'"
            r"::timestamp(?: with(?:out)? time zone)?"
        ),
        _to_timestamp,
    ),
    DefaultRule(
        "string",
        re.compile(
            rf"'(?P<string>(?:[^']|'')*)'"
            rf"(?:::{_TYPE_NAME}(?:\.{_TYPE_NAME})?(?:\[\])?)?"
        ),
        lambda match: match.group("string").replace("''", "'"),
    ),
    DefaultRule(
        "float",
        re.compile(r"\d+\.\d+"),
        lambda match: float(match.group(0)),
    ),
    DefaultRule(
        "integer",
        re.compile(r"\d+"),
        lambda match: int(match.group(0)),
    ),
    DefaultRule(
        "boolean",
        re.compile(r"true|false"),
        lambda match: match.group(0) == "true",
    ),
)


def parse_default(raw: str) -> DefaultValue:
    """
    Classify a catalog default expression.

    Args:
        raw: Default as returned by information_schema.columns.column_default

    Returns:
        date, datetime, str, int, float or bool for recognized literals,
        SqlExpression(raw) for anything else (function calls, casts...)

    Example:
        >>> parse_default("'2020-01-01'::date")
        datetime.date(2020, 1, 1)
        >>> parse_default("now()")
        SqlExpression(text='now()')
    """
    for rule in DEFAULT_RULES:
        value = rule.parse(raw)
        if value is not None:
            return value
    return SqlExpression(raw)

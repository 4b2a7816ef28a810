"""
SQL literal escaping.

Maps each supported scalar kind to its single canonical textual form for
a dialect. Strings are single-quoted with embedded quotes doubled, so a
payload such as ``foo';DROP TABLE t;`` stays one inert string token.
"""

import math
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Union

from ..dialects import DialectConfig, get_dialect
from .exceptions import UnsupportedLiteralKind

DialectLike = Union[str, DialectConfig]

BINARY_TYPES = (bytes, bytearray, memoryview)


def escape_string(value: str, backslash_escapes: bool = False) -> str:
    """
    Single-quote a string, doubling embedded single quotes.

    With ``backslash_escapes`` backslashes are doubled first, for dialects
    that treat ``\\`` as an escape character inside string literals.

    Examples:
        >>> escape_string("it's")
        "'it''s'"
    """
    if backslash_escapes:
        value = value.replace("\\", "\\\\")
    return "'" + value.replace("'", "''") + "'"


def format_datetime(value: datetime) -> str:
    """
    Format a datetime as ``YYYY-MM-DD HH:MM:SS.mmm`` in UTC.

    Naive datetimes are taken to already be UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None).isoformat(sep=" ", timespec="milliseconds")


def _escape_float(value: float) -> str:
    if math.isnan(value):
        return "'NaN'"
    if math.isinf(value):
        return "'Infinity'" if value > 0 else "'-Infinity'"
    return repr(value)


def escape_literal(value: Any, dialect: DialectLike = "snowflake") -> str:
    """
    Render a scalar value as a dialect literal.

    Args:
        value: None, bool, int, float, Decimal, str, datetime, date,
            bytes-like or a list/tuple of those
        dialect: Dialect name or config

    Returns:
        SQL literal text

    Raises:
        UnsupportedLiteralKind: If the value is outside the supported kinds

    Examples:
        >>> escape_literal("foo';DROP TABLE myTable;")
        "'foo'';DROP TABLE myTable;'"
        >>> escape_literal(b"Sequelize")
        "X'53657175656c697a65'"
        >>> escape_literal([1, "a"])
        "(1, 'a')"
    """
    config = get_dialect(dialect)

    if value is None:
        return "NULL"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return config.true_literal if value else config.false_literal
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _escape_float(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnsupportedLiteralKind("Non-finite decimal cannot be rendered", node=value)
        return str(value)
    if isinstance(value, str):
        return escape_string(value, config.backslash_escapes)
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return escape_string(format_datetime(value))
    if isinstance(value, date):
        return escape_string(value.isoformat())
    if isinstance(value, BINARY_TYPES):
        return f"{config.blob_prefix}'{bytes(value).hex()}'"
    if isinstance(value, (list, tuple)):
        return "(" + ", ".join(escape_literal(item, config) for item in value) + ")"

    raise UnsupportedLiteralKind(
        f"Cannot render value of type {type(value).__name__} as a SQL literal",
        node=value,
    )


def is_literal(value: Any) -> bool:
    """Return True when escape_literal accepts the value's kind."""
    return value is None or isinstance(
        value,
        (bool, int, float, Decimal, str, datetime, date, list, tuple) + BINARY_TYPES,
    )


__all__ = [
    "escape_literal",
    "escape_string",
    "format_datetime",
    "is_literal",
]

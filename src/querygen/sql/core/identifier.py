"""
SQL identifier handling utilities.

Provides functions for quoting and qualifying SQL identifiers (table,
column, schema, constraint and index names). Embedded delimiters are
doubled so a name can never close its own quoting early.
"""

from typing import Optional, Union

from ..dialects import DialectConfig, get_dialect

DialectLike = Union[str, DialectConfig]


def quote_identifier(
    name: str,
    dialect: DialectLike = "snowflake",
    quoting_enabled: bool = True,
) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Dialect name or config ("snowflake", "mysql")
        quoting_enabled: When False the name is returned verbatim

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("myTable")
        '"myTable"'
        >>> quote_identifier('column"name')
        '"column""name"'
        >>> quote_identifier("table", dialect="mysql")
        '`table`'
        >>> quote_identifier("myTable", quoting_enabled=False)
        'myTable'
    """
    if not quoting_enabled:
        return name
    delimiter = get_dialect(dialect).identifier_delimiter
    escaped = name.replace(delimiter, delimiter * 2)
    return f"{delimiter}{escaped}{delimiter}"


def unquote_identifier(quoted: str, dialect: DialectLike = "snowflake") -> str:
    """
    Reverse quote_identifier for a delimiter-wrapped name.

    Examples:
        >>> unquote_identifier('"column""name"')
        'column"name'
    """
    delimiter = get_dialect(dialect).identifier_delimiter
    if len(quoted) >= 2 and quoted[0] == delimiter and quoted[-1] == delimiter:
        return quoted[1:-1].replace(delimiter * 2, delimiter)
    return quoted


def quote_identifiers(
    name: str,
    dialect: DialectLike = "snowflake",
    quoting_enabled: bool = True,
) -> str:
    """
    Quote a dotted reference part by part.

    Examples:
        >>> quote_identifiers("myTable.id")
        '"myTable"."id"'
    """
    return ".".join(
        quote_identifier(part, dialect, quoting_enabled) for part in name.split(".")
    )


def qualify_table(
    table: str,
    schema: Optional[str] = None,
    dialect: DialectLike = "snowflake",
    quoting_enabled: bool = True,
) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Args:
        table: Table name
        schema: Optional schema name
        dialect: Dialect name or config
        quoting_enabled: When False both parts are emitted verbatim

    Returns:
        Qualified table name

    Examples:
        >>> qualify_table("users", schema="public")
        '"public"."users"'
        >>> qualify_table("users")
        '"users"'
    """
    quoted_table = quote_identifier(table, dialect, quoting_enabled)
    if schema:
        return f"{quote_identifier(schema, dialect, quoting_enabled)}.{quoted_table}"
    return quoted_table


__all__ = [
    "quote_identifier",
    "unquote_identifier",
    "quote_identifiers",
    "qualify_table",
]

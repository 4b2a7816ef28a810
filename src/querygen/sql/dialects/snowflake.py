"""
Snowflake dialect configuration.

Snowflake quotes identifiers with double quotes, spells the identity
keyword AUTOINCREMENT and accepts `$name` bind markers. Backslash starts an
escape sequence inside single-quoted string constants.
"""

from .base import DialectConfig

SNOWFLAKE = DialectConfig(
    name="snowflake",
    identifier_delimiter='"',
    autoincrement_keyword="AUTOINCREMENT",
    bind_marker="${name}",
    types_without_default=frozenset(
        {
            "BLOB",
            "TINYBLOB",
            "MEDIUMBLOB",
            "LONGBLOB",
            "TEXT",
            "TINYTEXT",
            "MEDIUMTEXT",
            "LONGTEXT",
            "GEOMETRY",
            "GEOGRAPHY",
            "JSON",
            "VARIANT",
            "OBJECT",
        }
    ),
    backslash_escapes=True,
    version_function="CURRENT_VERSION()",
)

__all__ = ["SNOWFLAKE"]

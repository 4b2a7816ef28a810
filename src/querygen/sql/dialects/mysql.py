"""
MySQL dialect configuration.

MySQL quotes identifiers with backticks, spells the identity keyword
AUTO_INCREMENT and binds positionally with `?` markers; the bind map
keeps its names so callers can still order values. Backslash is an escape
character inside MySQL string literals, and an offset without a limit needs
the largest unsigned BIGINT as its row count.
"""

from .base import DialectConfig

MYSQL = DialectConfig(
    name="mysql",
    identifier_delimiter="`",
    autoincrement_keyword="AUTO_INCREMENT",
    bind_marker="?",
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
            "JSON",
        }
    ),
    current_schema_function="DATABASE()",
    backslash_escapes=True,
    offset_only_limit="18446744073709551615",
    drop_schema_cascade=False,
    version_function="VERSION()",
)

__all__ = ["MYSQL"]

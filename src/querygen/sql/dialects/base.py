"""
Dialect configuration shared by every renderer.

A DialectConfig is a frozen value: it is built once at import time, looked
up by name through the registry and passed by reference into every
renderer call. Nothing in the generator mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet

DEFAULT_TYPES_WITHOUT_DEFAULT = frozenset({"BLOB", "TEXT", "GEOMETRY", "JSON"})
DEFAULT_INDEX_HINT_KINDS = frozenset({"USE", "FORCE", "IGNORE"})


@dataclass(frozen=True)
class DialectConfig:
    """Per-dialect knobs consulted by the escaping, clause and statement layers."""

    name: str
    identifier_delimiter: str = '"'
    autoincrement_keyword: str = "AUTOINCREMENT"
    bind_marker: str = "${name}"
    bind_prefix: str = "sequelize"
    types_without_default: FrozenSet[str] = field(
        default=DEFAULT_TYPES_WITHOUT_DEFAULT
    )
    supports_index_hints: bool = True
    index_hint_kinds: FrozenSet[str] = field(default=DEFAULT_INDEX_HINT_KINDS)
    blob_prefix: str = "X"
    true_literal: str = "true"
    false_literal: str = "false"
    regexp_keyword: str = "REGEXP"
    insert_ignore_keyword: str = "IGNORE"
    information_schema: str = "INFORMATION_SCHEMA"
    current_schema_function: str = "CURRENT_SCHEMA()"
    version_function: str = "CURRENT_VERSION()"
    default_primary_key: str = "id"
    backslash_escapes: bool = False
    offset_only_limit: str = "NULL"
    drop_schema_cascade: bool = True

    def bind_placeholder(self, name: str) -> str:
        """Render the in-statement marker for a bind parameter name."""
        return self.bind_marker.format(name=name)

    def forbids_default(self, type_sql: str) -> bool:
        """Return True when columns of this base type cannot carry a DEFAULT."""
        base = type_sql.split("(", 1)[0].strip().upper()
        return base in self.types_without_default

    def with_overrides(self, **changes: Any) -> "DialectConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


__all__ = [
    "DialectConfig",
    "DEFAULT_TYPES_WITHOUT_DEFAULT",
    "DEFAULT_INDEX_HINT_KINDS",
]

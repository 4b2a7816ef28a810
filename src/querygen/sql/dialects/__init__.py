"""
Dialect registry.

Dialects are registered once at import time; the registry itself is a
read-only mapping.
"""

from types import MappingProxyType
from typing import List, Mapping, Union

from ..core.exceptions import UnknownDialectError
from .base import DialectConfig
from .mysql import MYSQL
from .snowflake import SNOWFLAKE

DEFAULT_DIALECT = SNOWFLAKE.name

DIALECTS: Mapping[str, DialectConfig] = MappingProxyType(
    {
        SNOWFLAKE.name: SNOWFLAKE,
        MYSQL.name: MYSQL,
    }
)


def get_dialect(dialect: Union[str, DialectConfig] = DEFAULT_DIALECT) -> DialectConfig:
    """
    Resolve a dialect name (or pass through a config) to its DialectConfig.

    Raises:
        UnknownDialectError: If the name is not registered
    """
    if isinstance(dialect, DialectConfig):
        return dialect
    try:
        return DIALECTS[dialect.lower()]
    except KeyError:
        raise UnknownDialectError(
            f"Unknown SQL dialect; expected one of {', '.join(sorted(DIALECTS))}",
            node=dialect,
        ) from None


def available_dialects() -> List[str]:
    """Return the registered dialect names."""
    return sorted(DIALECTS)


__all__ = [
    "DialectConfig",
    "DEFAULT_DIALECT",
    "DIALECTS",
    "SNOWFLAKE",
    "MYSQL",
    "get_dialect",
    "available_dialects",
]

"""
SQL parameter binding utilities.

Bind parameter names are assigned sequentially (``sequelize_1``,
``sequelize_2``, ...) in the order their markers appear in the rendered
statement. A collector is created per statement, so concurrent renders
never share numbering state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..dialects import DialectConfig


@dataclass(frozen=True)
class BoundQuery:
    """A rendered statement together with its bind-parameter values."""

    query: str
    bind: Dict[str, Any] = field(default_factory=dict)


class BindCollector:
    """
    Allocates bind parameter names for one statement.

    Examples:
        >>> from querygen.sql.dialects import SNOWFLAKE
        >>> collector = BindCollector(SNOWFLAKE)
        >>> collector.add("foo")
        '$sequelize_1'
        >>> collector.add(2)
        '$sequelize_2'
        >>> collector.bind
        {'sequelize_1': 'foo', 'sequelize_2': 2}
    """

    def __init__(self, dialect: DialectConfig, prefix: Optional[str] = None):
        self.dialect = dialect
        self.prefix = prefix or dialect.bind_prefix
        self.bind: Dict[str, Any] = {}

    def next_name(self) -> str:
        return f"{self.prefix}_{len(self.bind) + 1}"

    def add(self, value: Any) -> str:
        """Register a value and return the marker to embed in the statement."""
        name = self.next_name()
        self.bind[name] = value
        return self.dialect.bind_placeholder(name)

    def __len__(self) -> int:
        return len(self.bind)


__all__ = ["BoundQuery", "BindCollector"]

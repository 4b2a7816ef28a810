"""
SQL INSERT statement builders.

Single-row inserts bind every plain value (``$sequelize_1``...) in column
order; bulk inserts inline fully escaped literals, since one bind map
cannot be shared uniformly across rows by every driver.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Union

from ..core.context import RenderContext
from ..core.descriptors import StatementOptions
from ..core.exceptions import GenerationError, UnsupportedLiteralKind
from ..core.expressions import Expression
from ..core.literals import is_literal
from ..core.parameters import BindCollector, BoundQuery
from .expressions import render_value

OptionsLike = Union[None, StatementOptions, Dict[str, Any]]


def _require_row(values: Any) -> Mapping:
    if not isinstance(values, Mapping):
        raise GenerationError("Row values must be a mapping of column to value", node=values)
    return values


class InsertBuilder:
    """
    High-level builder for INSERT statements.

    Example:
        >>> builder = InsertBuilder(RenderContext.create())
        >>> result = builder.insert("myTable", {"name": "foo"})
        >>> result.query
        'INSERT INTO "myTable" ("name") VALUES ($sequelize_1);'
        >>> result.bind
        {'sequelize_1': 'foo'}
    """

    def __init__(self, ctx: RenderContext, bind_prefix: Optional[str] = None):
        """
        Initialize the InsertBuilder.

        Args:
            ctx: Render context (dialect + quoting toggle)
            bind_prefix: Bind name prefix; defaults to the dialect's
        """
        self.ctx = ctx
        self.bind_prefix = bind_prefix

    def _keyword(self, options: StatementOptions) -> str:
        if options.ignore_duplicates:
            return f"INSERT {self.ctx.dialect.insert_ignore_keyword} INTO"
        return "INSERT INTO"

    def insert(self, table: Any, values: Mapping, options: OptionsLike = None) -> BoundQuery:
        """
        Build a single-row INSERT with bind parameters.

        Args:
            table: Table name, mapping or TableRef
            values: Column -> value mapping; expression nodes are inlined
            options: omit_null / ignore_duplicates overrides

        Returns:
            BoundQuery with the statement and its bind map
        """
        opts = StatementOptions.from_value(options)
        omit_null = self.ctx.options.omit_null if opts.omit_null is None else opts.omit_null
        binds = BindCollector(self.ctx.dialect, self.bind_prefix)

        columns: List[str] = []
        placeholders: List[str] = []
        for column, value in _require_row(values).items():
            if value is None and omit_null:
                continue
            columns.append(self.ctx.quote(column))
            if isinstance(value, Expression):
                placeholders.append(render_value(value, self.ctx))
            elif is_literal(value):
                placeholders.append(binds.add(value))
            else:
                raise UnsupportedLiteralKind(
                    f"Cannot bind value of type {type(value).__name__}",
                    node=value,
                    clause="insert",
                )

        if not columns:
            raise GenerationError("INSERT needs at least one column", node=dict(values), clause="insert")

        query = (
            f"{self._keyword(opts)} {self.ctx.quote_table(table)} "
            f"({','.join(columns)}) VALUES ({','.join(placeholders)});"
        )
        return BoundQuery(query=query, bind=binds.bind)

    def bulk_insert(self, table: Any, rows: Iterable[Mapping], options: OptionsLike = None) -> str:
        """
        Build a multi-row INSERT with inlined literals.

        The column list is the union of keys across all rows in order of
        first appearance; a row missing a column gets ``NULL``. omit_null
        is not applied here because every row must share one column list.

        Returns:
            INSERT SQL statement
        """
        opts = StatementOptions.from_value(options)
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            raise GenerationError("Bulk insert rows must be a list of mappings", node=rows, clause="insert")
        rows = list(rows)
        if not rows:
            raise GenerationError("Bulk insert needs at least one row", node=rows, clause="insert")

        keys: Dict[str, None] = {}
        for row in rows:
            for column in _require_row(row):
                keys.setdefault(column, None)

        tuples = []
        for row in rows:
            rendered = ",".join(render_value(row.get(column), self.ctx) for column in keys)
            tuples.append(f"({rendered})")

        columns = ",".join(self.ctx.quote(column) for column in keys)
        return (
            f"{self._keyword(opts)} {self.ctx.quote_table(table)} "
            f"({columns}) VALUES {','.join(tuples)};"
        )

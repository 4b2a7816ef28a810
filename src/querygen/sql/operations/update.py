"""
SQL UPDATE and DELETE statement builders.

UPDATE binds SET values first and continues the same numbering through
the WHERE clause, so ``sequelize_<n>`` follows the left-to-right order of
markers in the statement. Neither statement carries a trailing ``;``.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from ..core.context import RenderContext
from ..core.descriptors import StatementOptions
from ..core.exceptions import GenerationError, UnsupportedLiteralKind
from ..core.expressions import Expression
from ..core.literals import is_literal
from ..core.parameters import BindCollector, BoundQuery
from .clauses import render_limit
from .expressions import render_value
from .where import WhereRenderer

OptionsLike = Union[None, StatementOptions, Dict[str, Any]]


class UpdateBuilder:
    """
    Builder for UPDATE statements.

    Example:
        >>> builder = UpdateBuilder(RenderContext.create())
        >>> result = builder.update("myTable", {"bar": 2}, {"name": "foo"})
        >>> result.query
        'UPDATE "myTable" SET "bar"=$sequelize_1 WHERE "name" = $sequelize_2'
    """

    def __init__(self, ctx: RenderContext, bind_prefix: Optional[str] = None):
        self.ctx = ctx
        self.bind_prefix = bind_prefix

    def update(
        self,
        table: Any,
        values: Mapping,
        where: Any = None,
        options: OptionsLike = None,
    ) -> BoundQuery:
        """
        Build an UPDATE with bind parameters.

        Args:
            table: Table name, mapping or TableRef
            values: Column -> new value; expression nodes are inlined
            where: Predicate tree, rendered with bare column names
            options: omit_null override

        Returns:
            BoundQuery with the statement and its bind map
        """
        if not isinstance(values, Mapping):
            raise GenerationError("SET values must be a mapping", node=values, clause="set")

        opts = StatementOptions.from_value(options)
        omit_null = self.ctx.options.omit_null if opts.omit_null is None else opts.omit_null
        binds = BindCollector(self.ctx.dialect, self.bind_prefix)

        assignments: List[str] = []
        for column, value in values.items():
            if value is None and omit_null:
                continue
            if isinstance(value, Expression):
                rendered = render_value(value, self.ctx)
            elif is_literal(value):
                rendered = binds.add(value)
            else:
                raise UnsupportedLiteralKind(
                    f"Cannot bind value of type {type(value).__name__}",
                    node=value,
                    clause="set",
                )
            assignments.append(f"{self.ctx.quote(column)}={rendered}")

        if not assignments:
            raise GenerationError("UPDATE needs at least one column to set", node=dict(values), clause="set")

        query = f"UPDATE {self.ctx.quote_table(table)} SET {','.join(assignments)}"
        where_sql = WhereRenderer(self.ctx, binds=binds).render(where)
        if where_sql:
            query += f" WHERE {where_sql}"
        return BoundQuery(query=query, bind=binds.bind)


class DeleteBuilder:
    """Builder for DELETE statements with inlined literals."""

    def __init__(self, ctx: RenderContext):
        self.ctx = ctx

    def delete(self, table: Any, where: Any = None, options: OptionsLike = None) -> str:
        """
        Build ``DELETE FROM t[ WHERE ...][ LIMIT n]``.

        Examples:
            >>> DeleteBuilder(RenderContext.create()).delete("myTable", {"id": 2}, {"limit": 1})
            'DELETE FROM "myTable" WHERE "id" = 2 LIMIT 1'
        """
        opts = StatementOptions.from_value(options)
        query = f"DELETE FROM {self.ctx.quote_table(table)}"
        where_sql = WhereRenderer(self.ctx).render(where)
        if where_sql:
            query += f" WHERE {where_sql}"
        if opts.limit is not None:
            query += f" {render_limit(opts.limit, None)}"
        return query

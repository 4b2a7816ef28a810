"""
SQL SELECT statement builder.

Composes the clause builders in fixed order: projection, FROM (with alias
and index hints), WHERE, GROUP BY, HAVING, ORDER BY, LIMIT/OFFSET. In
sub-query form the whole composition becomes the inner query of
``SELECT alias.* FROM (...) AS alias``.
"""

from typing import Any, Optional, Union

from ..core.context import RenderContext
from ..core.descriptors import ModelRef, SelectOptions, TableRef
from .clauses import (
    render_attributes,
    render_group,
    render_index_hints,
    render_limit,
    render_order,
)
from .where import WhereRenderer

ModelLike = Union[None, str, ModelRef]


def _model_ref(model: ModelLike) -> Optional[ModelRef]:
    if model is None or isinstance(model, ModelRef):
        return model
    return ModelRef(name=model)


class SelectBuilder:
    """
    Builder for SELECT statements.

    Example:
        >>> builder = SelectBuilder(RenderContext.create())
        >>> builder.select("myTable", {"where": {"id": 2}})
        'SELECT * FROM "myTable" WHERE "myTable"."id" = 2;'
    """

    def __init__(self, ctx: RenderContext):
        self.ctx = ctx

    def select(
        self,
        table: Any,
        options: Union[None, SelectOptions, dict] = None,
        model: ModelLike = None,
    ) -> str:
        """
        Build a SELECT statement terminated by ``;``.

        Args:
            table: Table name, mapping or TableRef
            options: Query descriptor (mapping or SelectOptions)
            model: Model name or ModelRef; aliases the main table and
                qualifies bare ORDER BY columns

        Returns:
            SELECT SQL statement
        """
        ctx = self.ctx
        opts = SelectOptions.from_value(options)
        model_ref = _model_ref(model)
        table_sql = ctx.quote_table(table)

        alias = opts.table_as or (model_ref.name if model_ref else None)
        if opts.sub_query and not alias:
            alias = TableRef.from_value(table).table_name

        qualifier = ctx.quote(alias) if alias else table_sql
        primary_key = model_ref.primary_key if model_ref else None

        head = f"SELECT {render_attributes(opts.attributes, ctx)} FROM {table_sql}"
        if alias:
            head += f" AS {ctx.quote(alias)}"
        hints = render_index_hints(opts.index_hints, ctx)
        if hints:
            head += f" {hints}"

        parts = [head]
        where_sql = WhereRenderer(ctx, prefix=qualifier, primary_key=primary_key).render(
            opts.where
        )
        if where_sql:
            parts.append(f"WHERE {where_sql}")
        group_sql = render_group(opts.group, ctx)
        if group_sql:
            parts.append(group_sql)
        having_sql = WhereRenderer(ctx, primary_key=primary_key).render(opts.having)
        if having_sql:
            parts.append(f"HAVING {having_sql}")
        order_sql = render_order(opts.order, ctx, model_ref.name if model_ref else None)
        if order_sql:
            parts.append(order_sql)
        limit_sql = render_limit(opts.limit, opts.offset, ctx.dialect.offset_only_limit)
        if limit_sql:
            parts.append(limit_sql)

        query = " ".join(parts)
        if opts.sub_query:
            quoted_alias = ctx.quote(alias)
            query = f"SELECT {quoted_alias}.* FROM ({query}) AS {quoted_alias}"
        return f"{query};"

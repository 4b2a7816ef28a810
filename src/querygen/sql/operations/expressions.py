"""
Expression node rendering.

Shared by column lists, ORDER BY / GROUP BY entries, SET values and
predicate operands. Function names and Literal nodes pass through
unescaped; every argument is rendered recursively or escaped.
"""

from typing import Any

from ..core.context import RenderContext
from ..core.exceptions import InvalidColumnReference
from ..core.expressions import And, Cast, Col, Expression, Fn, Literal, Or, Where


def render_column(name: str, ctx: RenderContext) -> str:
    """Quote a column reference, keeping ``*`` parts bare."""
    if not name:
        raise InvalidColumnReference("Column reference cannot be empty", node=name)
    return ".".join(
        "*" if part == "*" else ctx.quote(part) for part in name.split(".")
    )


def render_expression(node: Expression, ctx: RenderContext) -> str:
    """
    Render an expression node to SQL text.

    Examples:
        >>> from querygen.sql.core.expressions import col, fn
        >>> ctx = RenderContext.create()
        >>> render_expression(fn("f1", fn("f2", col("id"))), ctx)
        'f1(f2("id"))'
    """
    if isinstance(node, Col):
        return render_column(node.name, ctx)
    if isinstance(node, Fn):
        args = ", ".join(render_value(arg, ctx) for arg in node.args)
        return f"{node.name}({args})"
    if isinstance(node, Literal):
        return node.sql
    if isinstance(node, Cast):
        return f"CAST({render_value(node.expression, ctx)} AS {node.type.upper()})"
    if isinstance(node, (Where, And, Or)):
        # Predicates nested inside function arguments (e.g. COUNT(CASE ...))
        from .where import WhereRenderer

        return WhereRenderer(ctx).render(node)
    raise InvalidColumnReference("Cannot render expression node", node=node)


def render_value(value: Any, ctx: RenderContext) -> str:
    """Render an expression node, or escape a plain literal."""
    if isinstance(value, Expression):
        return render_expression(value, ctx)
    return ctx.escape(value)


__all__ = ["render_column", "render_expression", "render_value"]

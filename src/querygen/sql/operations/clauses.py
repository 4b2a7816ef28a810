"""
Per-clause renderers.

Each builder returns one fragment (without a leading space) or an empty
string when the clause is absent, so statement generators only join the
non-empty parts.
"""

from typing import Any, List, Optional, Sequence

from querygen.utils.logging import get_logger

from ..core.context import RenderContext
from ..core.descriptors import IndexHint, SelectOptions
from ..core.exceptions import GenerationError, InvalidColumnReference, InvalidOrderDirection
from ..core.expressions import Expression
from .expressions import render_column, render_expression

logger = get_logger(__name__)

ORDER_DIRECTIONS = frozenset(
    {
        "ASC",
        "DESC",
        "ASC NULLS FIRST",
        "ASC NULLS LAST",
        "DESC NULLS FIRST",
        "DESC NULLS LAST",
        "NULLS FIRST",
        "NULLS LAST",
    }
)


def _render_reference(item: Any, ctx: RenderContext, qualifier: Optional[str] = None) -> str:
    """Render a column name or expression node, qualifying bare names."""
    if isinstance(item, Expression):
        return render_expression(item, ctx)
    if isinstance(item, str):
        if qualifier and "." not in item and item != "*":
            return f"{ctx.quote(qualifier)}.{render_column(item, ctx)}"
        return render_column(item, ctx)
    raise InvalidColumnReference("Expected a column name or expression", node=item)


def render_attributes(attributes: Optional[Sequence[Any]], ctx: RenderContext) -> str:
    """
    Render the projection list.

    Entries are column names, expression nodes or ``[expression, alias]``
    pairs; no projection renders ``*``.

    Examples:
        >>> ctx = RenderContext.create()
        >>> render_attributes(["id", ["name", "title"]], ctx)
        '"id", "name" AS "title"'
    """
    if not attributes:
        return "*"

    rendered = []
    for attribute in attributes:
        if isinstance(attribute, (list, tuple)):
            if len(attribute) != 2:
                raise InvalidColumnReference(
                    "Aliased attributes must be [expression, alias] pairs",
                    node=attribute,
                    clause="attributes",
                )
            expression, alias = attribute
            rendered.append(f"{_render_reference(expression, ctx)} AS {ctx.quote(alias)}")
        else:
            rendered.append(_render_reference(attribute, ctx))
    return ", ".join(rendered)


def _order_direction(token: Any) -> str:
    if not isinstance(token, str):
        raise InvalidOrderDirection("Order direction must be a string", node=token, clause="order")
    direction = " ".join(token.upper().split())
    if direction not in ORDER_DIRECTIONS:
        raise InvalidOrderDirection("Unrecognised order direction", node=token, clause="order")
    return direction


def render_order(order: Any, ctx: RenderContext, model_alias: Optional[str] = None) -> str:
    """
    Render ``ORDER BY``.

    A flat list of strings is a list of columns, so ``['id', 'DESC']``
    orders by two columns named ``id`` and ``DESC``. Direction tokens are
    only read from nested ``[expression, direction]`` entries. When
    ``model_alias`` is given, bare column names are qualified with it.
    """
    if order is None or (isinstance(order, (list, tuple)) and not order):
        return ""
    if isinstance(order, (str, Expression)):
        order = [order]

    parts = []
    for entry in order:
        if isinstance(entry, (list, tuple)):
            if not entry:
                raise InvalidColumnReference("Empty order entry", node=entry, clause="order")
            text = _render_reference(entry[0], ctx, model_alias)
            for token in entry[1:]:
                text = f"{text} {_order_direction(token)}"
            parts.append(text)
        else:
            parts.append(_render_reference(entry, ctx, model_alias))
    return "ORDER BY " + ", ".join(parts)


def render_group(group: Any, ctx: RenderContext) -> str:
    """Render ``GROUP BY``; entries are never table-qualified."""
    if group is None or (isinstance(group, (list, tuple)) and not group):
        return ""
    if isinstance(group, (str, Expression)):
        group = [group]
    return "GROUP BY " + ", ".join(_render_reference(item, ctx) for item in group)


def _validate_count(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise GenerationError(f"{name} must be a non-negative integer", node=value, clause=name)
    return value


def render_limit(
    limit: Optional[int], offset: Optional[int], unbounded: str = "NULL"
) -> str:
    """
    Render ``LIMIT``/``OFFSET``.

    ``unbounded`` is the row count written when only an offset is given.

    Examples:
        >>> render_limit(10, 2)
        'LIMIT 10 OFFSET 2'
        >>> render_limit(None, 2)
        'LIMIT NULL OFFSET 2'
        >>> render_limit(None, 0)
        ''
    """
    if offset is not None:
        offset = _validate_count(offset, "offset")
    if limit is None:
        if offset:
            return f"LIMIT {unbounded} OFFSET {offset}"
        return ""
    fragment = f"LIMIT {_validate_count(limit, 'limit')}"
    if offset:
        fragment += f" OFFSET {offset}"
    return fragment


def render_index_hints(hints: Sequence[IndexHint], ctx: RenderContext) -> str:
    """Render recognised index hints; unknown kinds are dropped."""
    if not hints:
        return ""
    if not ctx.dialect.supports_index_hints:
        logger.debug("sql.index_hint.unsupported", dialect=ctx.dialect.name, count=len(hints))
        return ""

    fragments: List[str] = []
    for hint in hints:
        kind = hint.kind
        if kind not in ctx.dialect.index_hint_kinds:
            logger.debug("sql.index_hint.dropped", kind=kind)
            continue
        names = ",".join(ctx.quote(name) for name in hint.values)
        fragments.append(f"{kind} INDEX ({names})")
    return " ".join(fragments)


def select_from_table_fragment(
    options: Any,
    model: Any,
    attributes: Optional[Sequence[str]],
    tables: str,
    main_table_as: Optional[str],
    ctx: RenderContext,
) -> str:
    """
    Render ``SELECT <attributes> FROM <tables>[ AS alias][ hints]``.

    ``attributes`` holds already-rendered projection fragments and
    ``tables`` an already-rendered table reference.

    Examples:
        >>> ctx = RenderContext.create()
        >>> select_from_table_fragment({}, None, ["*"], '"Project"', None, ctx)
        'SELECT * FROM "Project"'
    """
    select_options = SelectOptions.from_value(options)
    projection = ", ".join(attributes) if attributes else "*"
    fragment = f"SELECT {projection} FROM {tables}"
    if main_table_as:
        fragment += f" AS {ctx.quote(main_table_as)}"
    hints = render_index_hints(select_options.index_hints, ctx)
    if hints:
        fragment += f" {hints}"
    return fragment


__all__ = [
    "ORDER_DIRECTIONS",
    "render_attributes",
    "render_order",
    "render_group",
    "render_limit",
    "render_index_hints",
    "select_from_table_fragment",
]

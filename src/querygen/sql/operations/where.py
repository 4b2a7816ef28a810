"""
Predicate tree rendering for WHERE and HAVING clauses.

Accepted predicate shapes:
- None / {} / []            -> no clause
- ['']                      -> ``1=1`` (legacy empty string-array form)
- scalar                    -> equality on the primary key
- {column: value}           -> ``column = value`` joined by AND
- {column: {Op.X: value}}   -> operator templates from the dispatch table
- {Op.AND/Op.OR: [...]}     -> parenthesized logical groups
- Where / And / Or nodes    -> expression-level predicates

Every value reaches the output through escape_literal or a bind marker.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from ..core.context import RenderContext
from ..core.exceptions import MalformedPredicate, UnknownOperator
from ..core.expressions import (
    LOGICAL_OPERATORS,
    And,
    Expression,
    Literal,
    Op,
    Or,
    Where,
)
from ..core.literals import is_literal
from ..core.parameters import BindCollector
from .expressions import render_column, render_expression, render_value

# Raw comparator tokens accepted in where(lhs, comparator, value)
COMPARATOR_TOKENS: Dict[str, Op] = {
    "=": Op.EQ,
    "!=": Op.NE,
    "<>": Op.NE,
    ">": Op.GT,
    ">=": Op.GTE,
    "<": Op.LT,
    "<=": Op.LTE,
    "IS": Op.IS,
    "IS NOT": Op.NOT,
    "IN": Op.IN,
    "NOT IN": Op.NOT_IN,
    "LIKE": Op.LIKE,
    "NOT LIKE": Op.NOT_LIKE,
    "ILIKE": Op.ILIKE,
    "NOT ILIKE": Op.NOT_ILIKE,
    "BETWEEN": Op.BETWEEN,
    "NOT BETWEEN": Op.NOT_BETWEEN,
    "REGEXP": Op.REGEXP,
    "NOT REGEXP": Op.NOT_REGEXP,
}


def _complex_size(item: Any) -> int:
    if isinstance(item, Mapping) or isinstance(item, (list, tuple)):
        return len(item)
    return 1


class WhereRenderer:
    """
    Render a predicate tree into a boolean SQL expression.

    Args:
        ctx: Render context (dialect + quoting toggle)
        prefix: Already-quoted table or alias used to qualify bare column keys;
            None renders bare names (HAVING, UPDATE, DELETE)
        binds: When given, scalar operands become bind markers allocated from it
        primary_key: Column compared against a bare scalar predicate
    """

    def __init__(
        self,
        ctx: RenderContext,
        prefix: Optional[str] = None,
        binds: Optional[BindCollector] = None,
        primary_key: Optional[str] = None,
    ):
        self.ctx = ctx
        self.prefix = prefix
        self.binds = binds
        self.primary_key = primary_key or ctx.dialect.default_primary_key
        self._operators: Dict[Op, Callable[[str, Any], str]] = {
            Op.EQ: self._eq,
            Op.NE: self._ne,
            Op.IS: self._is,
            Op.NOT: self._not,
            Op.GT: self._comparison(">"),
            Op.GTE: self._comparison(">="),
            Op.LT: self._comparison("<"),
            Op.LTE: self._comparison("<="),
            Op.BETWEEN: self._between("BETWEEN"),
            Op.NOT_BETWEEN: self._between("NOT BETWEEN"),
            Op.IN: self._in("IN"),
            Op.NOT_IN: self._in("NOT IN"),
            Op.LIKE: self._comparison("LIKE"),
            Op.NOT_LIKE: self._comparison("NOT LIKE"),
            Op.ILIKE: self._comparison("ILIKE"),
            Op.NOT_ILIKE: self._comparison("NOT ILIKE"),
            Op.STARTS_WITH: self._pattern("{}%"),
            Op.ENDS_WITH: self._pattern("%{}"),
            Op.SUBSTRING: self._pattern("%{}%"),
            Op.REGEXP: self._comparison(ctx.dialect.regexp_keyword),
            Op.NOT_REGEXP: self._comparison(f"NOT {ctx.dialect.regexp_keyword}"),
        }

    def render(self, predicate: Any) -> str:
        """Return the boolean expression, or '' when no clause should be emitted."""
        if predicate is None:
            return ""
        if isinstance(predicate, (And, Or)):
            keyword = "AND" if isinstance(predicate, And) else "OR"
            return self._group(keyword, list(predicate.items))
        if isinstance(predicate, Where):
            return self._where_node(predicate)
        if isinstance(predicate, Literal):
            return predicate.sql
        if isinstance(predicate, Expression):
            return render_expression(predicate, self.ctx)
        if isinstance(predicate, Mapping):
            return self._mapping(predicate)
        if isinstance(predicate, (list, tuple)):
            return self._sequence(predicate)
        if is_literal(predicate):
            return self._column_predicate(self._column(self.primary_key), predicate)
        raise MalformedPredicate("Unsupported predicate", node=predicate)

    # -- structure ---------------------------------------------------------

    def _sequence(self, items: Any) -> str:
        if items and all(isinstance(item, str) for item in items):
            if all(item == "" for item in items):
                return "1=1"
            raise MalformedPredicate(
                "Raw string predicates are not accepted; use literal() for trusted SQL",
                node=items,
            )
        return self._group("AND", list(items))

    def _group(self, keyword: str, items: List[Any]) -> str:
        parts = []
        for item in items:
            rendered = self.render(item)
            if not rendered:
                continue
            if _complex_size(item) > 1 and not isinstance(item, Expression):
                rendered = f"({rendered})"
            parts.append(rendered)
        if not parts:
            return ""
        joined = f" {keyword} ".join(parts)
        return f"({joined})" if len(parts) > 1 else joined

    def _logical(self, op: Op, value: Any, lhs: Optional[str] = None) -> str:
        keyword = "AND" if op is Op.AND else "OR"
        if isinstance(value, Mapping):
            items: List[Any] = [{key: item} for key, item in value.items()]
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            raise MalformedPredicate(f"{keyword} expects a list or mapping", node=value)

        if lhs is None:
            return self._group(keyword, items)

        # column-level group: {col: {Op.OR: [5, 6]}}
        parts = [self._column_predicate(lhs, item) for item in items]
        parts = [part for part in parts if part]
        if not parts:
            return ""
        joined = f" {keyword} ".join(parts)
        return f"({joined})" if len(parts) > 1 else joined

    def _mapping(self, predicate: Mapping) -> str:
        parts = []
        for key, value in predicate.items():
            if isinstance(key, Op):
                if key not in LOGICAL_OPERATORS:
                    raise MalformedPredicate(
                        "Comparison operators need a column", node=key
                    )
                rendered = self._logical(key, value)
            elif isinstance(key, str):
                rendered = self._column_predicate(self._column(key), value)
            else:
                raise MalformedPredicate("Predicate keys must be column names", node=key)
            if rendered:
                parts.append(rendered)
        return " AND ".join(parts)

    def _where_node(self, node: Where) -> str:
        attribute = node.attribute
        if isinstance(attribute, str):
            lhs = self._column(attribute)
        elif isinstance(attribute, Expression):
            lhs = render_expression(attribute, self.ctx)
        else:
            raise MalformedPredicate("where() needs a column or expression", node=attribute)

        comparator = node.comparator
        if comparator is None:
            return self._column_predicate(lhs, node.value)
        if isinstance(comparator, Op):
            return self._operator(lhs, comparator, node.value)
        if isinstance(comparator, str):
            token = " ".join(comparator.upper().split())
            if token not in COMPARATOR_TOKENS:
                raise UnknownOperator("Unknown comparator", node=comparator)
            return self._operator(lhs, COMPARATOR_TOKENS[token], node.value)
        raise UnknownOperator("Unsupported comparator", node=comparator)

    # -- columns and values ------------------------------------------------

    def _column(self, key: str) -> str:
        # $table.column$ references an included table explicitly
        if len(key) > 2 and key.startswith("$") and key.endswith("$"):
            return render_column(key[1:-1], self.ctx)
        if "." in key or self.prefix is None:
            return render_column(key, self.ctx)
        return f"{self.prefix}.{render_column(key, self.ctx)}"

    def _value(self, value: Any) -> str:
        if isinstance(value, Expression):
            return render_value(value, self.ctx)
        if self.binds is not None:
            self.ctx.escape(value)  # reject unsupported kinds before binding
            return self.binds.add(value)
        return self.ctx.escape(value)

    def _column_predicate(self, lhs: str, value: Any) -> str:
        if isinstance(value, Mapping):
            return self._operator_map(lhs, value)
        if isinstance(value, (list, tuple)):
            return self._operator(lhs, Op.IN, value)
        if isinstance(value, (Where, And, Or)):
            raise MalformedPredicate("Nested predicates cannot be compared to a column", node=value)
        return self._operator(lhs, Op.EQ, value)

    def _operator_map(self, lhs: str, operators: Mapping) -> str:
        parts = []
        for key, value in operators.items():
            op = self._resolve_operator(key)
            if op in LOGICAL_OPERATORS:
                rendered = self._logical(op, value, lhs=lhs)
            else:
                rendered = self._operator(lhs, op, value)
            if rendered:
                parts.append(rendered)
        if len(parts) > 1:
            return "(" + " AND ".join(parts) + ")"
        return parts[0] if parts else ""

    @staticmethod
    def _resolve_operator(key: Any) -> Op:
        if isinstance(key, Op):
            return key
        if isinstance(key, str):
            try:
                return Op(key)
            except ValueError:
                pass
        raise UnknownOperator("Unknown operator", node=key)

    def _operator(self, lhs: str, op: Op, value: Any) -> str:
        renderer = self._operators.get(op)
        if renderer is None:
            raise UnknownOperator("Operator has no comparison template", node=op)
        return renderer(lhs, value)

    # -- operator templates ------------------------------------------------

    def _eq(self, lhs: str, value: Any) -> str:
        if value is None:
            return f"{lhs} IS NULL"
        return f"{lhs} = {self._value(value)}"

    def _ne(self, lhs: str, value: Any) -> str:
        if value is None:
            return f"{lhs} IS NOT NULL"
        return f"{lhs} != {self._value(value)}"

    def _is(self, lhs: str, value: Any) -> str:
        if value is not None and not isinstance(value, bool):
            raise MalformedPredicate("IS only accepts NULL or a boolean", node=value)
        return f"{lhs} IS {self.ctx.escape(value)}"

    def _not(self, lhs: str, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return f"{lhs} IS NOT {self.ctx.escape(value)}"
        return f"{lhs} != {self._value(value)}"

    def _comparison(self, token: str) -> Callable[[str, Any], str]:
        def render(lhs: str, value: Any) -> str:
            return f"{lhs} {token} {self._value(value)}"

        return render

    def _pattern(self, template: str) -> Callable[[str, Any], str]:
        def render(lhs: str, value: Any) -> str:
            if not isinstance(value, str):
                raise MalformedPredicate("Pattern operators need a string", node=value)
            return f"{lhs} LIKE {self._value(template.format(value))}"

        return render

    def _between(self, token: str) -> Callable[[str, Any], str]:
        def render(lhs: str, value: Any) -> str:
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise MalformedPredicate(f"{token} needs exactly two bounds", node=value)
            low, high = value
            return f"{lhs} {token} {self._value(low)} AND {self._value(high)}"

        return render

    def _in(self, token: str) -> Callable[[str, Any], str]:
        def render(lhs: str, value: Any) -> str:
            if isinstance(value, Expression):
                return f"{lhs} {token} {render_value(value, self.ctx)}"
            if not isinstance(value, (list, tuple)):
                raise MalformedPredicate(f"{token} needs a list of values", node=value)
            if not value:
                # nothing is excluded by an empty NOT IN
                if token == "NOT IN":
                    return ""
                return f"{lhs} {token} (NULL)"
            items = ", ".join(self._value(item) for item in value)
            return f"{lhs} {token} ({items})"

        return render


def render_where(
    predicate: Any,
    ctx: RenderContext,
    prefix: Optional[str] = None,
    binds: Optional[BindCollector] = None,
    primary_key: Optional[str] = None,
) -> str:
    """Convenience wrapper around WhereRenderer.render."""
    return WhereRenderer(ctx, prefix=prefix, binds=binds, primary_key=primary_key).render(
        predicate
    )


__all__ = ["WhereRenderer", "render_where", "COMPARATOR_TOKENS"]

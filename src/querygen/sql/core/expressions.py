"""
Abstract column/function reference nodes.

The outer ORM layer builds these once per query; renderers only read
them. Function names and Literal fragments are trusted raw SQL, while
every argument or compared value still goes through quoting/escaping.

Usage:
    >>> from querygen.sql.core.expressions import col, fn, where, and_
    >>> predicate = and_(where(fn("LOWER", col("user.name")), "LIKE", "%t%"), {"type": 1})
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class Op(Enum):
    """Closed set of predicate operators."""

    EQ = "eq"
    NE = "ne"
    IS = "is"
    NOT = "not"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    BETWEEN = "between"
    NOT_BETWEEN = "notBetween"
    IN = "in"
    NOT_IN = "notIn"
    LIKE = "like"
    NOT_LIKE = "notLike"
    ILIKE = "iLike"
    NOT_ILIKE = "notILike"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    SUBSTRING = "substring"
    REGEXP = "regexp"
    NOT_REGEXP = "notRegexp"
    AND = "and"
    OR = "or"


LOGICAL_OPERATORS = frozenset({Op.AND, Op.OR})


class Expression:
    """Marker base class for renderable nodes."""

    __slots__ = ()


@dataclass(frozen=True)
class Col(Expression):
    """Column reference; dotted names are table-qualified (``user.name``)."""

    name: str


@dataclass(frozen=True)
class Fn(Expression):
    """Raw SQL function call with ordered arguments."""

    name: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Literal(Expression):
    """Trusted raw SQL fragment emitted verbatim."""

    sql: str


@dataclass(frozen=True)
class Cast(Expression):
    """``CAST(expression AS type)``."""

    expression: Any
    type: str


@dataclass(frozen=True)
class Where(Expression):
    """
    Predicate over an arbitrary left-hand expression.

    ``comparator`` is a raw comparator token (``"LIKE"``, ``"="``), an Op,
    or None when ``value`` alone decides the comparison (scalar, None or
    an operator mapping).
    """

    attribute: Any
    comparator: Any
    value: Any


@dataclass(frozen=True)
class And(Expression):
    items: Tuple[Any, ...]


@dataclass(frozen=True)
class Or(Expression):
    items: Tuple[Any, ...]


_MISSING = object()


def col(name: str) -> Col:
    return Col(name)


def fn(name: str, *args: Any) -> Fn:
    return Fn(name, tuple(args))


def literal(sql: str) -> Literal:
    return Literal(sql)


def cast(expression: Any, type_: str) -> Cast:
    return Cast(expression, type_)


def where(attribute: Any, comparator: Any, value: Any = _MISSING) -> Where:
    """
    Build a Where node.

    ``where(lhs, value)`` compares with the default comparator;
    ``where(lhs, "LIKE", value)`` uses the given comparator token.
    """
    if value is _MISSING:
        return Where(attribute, None, comparator)
    return Where(attribute, comparator, value)


def and_(*items: Any) -> And:
    return And(tuple(items))


def or_(*items: Any) -> Or:
    return Or(tuple(items))


__all__ = [
    "Op",
    "LOGICAL_OPERATORS",
    "Expression",
    "Col",
    "Fn",
    "Literal",
    "Cast",
    "Where",
    "And",
    "Or",
    "col",
    "fn",
    "literal",
    "cast",
    "where",
    "and_",
    "or_",
]

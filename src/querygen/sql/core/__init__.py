"""Core SQL utilities package."""

from .exceptions import (
    GenerationError,
    InvalidColumnReference,
    InvalidOrderDirection,
    MalformedPredicate,
    UnknownDialectError,
    UnknownOperator,
    UnsupportedLiteralKind,
)
from .identifier import qualify_table, quote_identifier, quote_identifiers
from .literals import escape_literal
from .parameters import BindCollector, BoundQuery
from .context import GeneratorOptions, RenderContext

__all__ = [
    "GenerationError",
    "InvalidColumnReference",
    "InvalidOrderDirection",
    "MalformedPredicate",
    "UnknownDialectError",
    "UnknownOperator",
    "UnsupportedLiteralKind",
    "quote_identifier",
    "quote_identifiers",
    "qualify_table",
    "escape_literal",
    "BindCollector",
    "BoundQuery",
    "GeneratorOptions",
    "RenderContext",
]

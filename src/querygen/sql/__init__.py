"""
SQL module for dialect-aware statement generation.

This module turns query descriptors and expression trees into SQL text
plus bind maps, with identifier quoting, literal escaping and
dialect-specific syntax handled in one place.
"""

from .core import (
    BindCollector,
    BoundQuery,
    GenerationError,
    GeneratorOptions,
    InvalidColumnReference,
    InvalidOrderDirection,
    MalformedPredicate,
    RenderContext,
    UnknownDialectError,
    UnknownOperator,
    UnsupportedLiteralKind,
    escape_literal,
    qualify_table,
    quote_identifier,
)
from .core.descriptors import (
    ColumnDefinition,
    IndexHint,
    IndexHintType,
    ModelRef,
    References,
    SelectOptions,
    StatementOptions,
    TableOptions,
    TableRef,
    UniqueKey,
)
from .core.expressions import Op, and_, cast, col, fn, literal, or_, where
from .dialects import MYSQL, SNOWFLAKE, DialectConfig, get_dialect
from .generator import QueryGenerator, create_query_generator

__all__ = [
    "QueryGenerator",
    "create_query_generator",
    "quote_identifier",
    "qualify_table",
    "escape_literal",
    "BindCollector",
    "BoundQuery",
    "GeneratorOptions",
    "RenderContext",
    "GenerationError",
    "InvalidColumnReference",
    "InvalidOrderDirection",
    "MalformedPredicate",
    "UnknownDialectError",
    "UnknownOperator",
    "UnsupportedLiteralKind",
    "ColumnDefinition",
    "IndexHint",
    "IndexHintType",
    "ModelRef",
    "References",
    "SelectOptions",
    "StatementOptions",
    "TableOptions",
    "TableRef",
    "UniqueKey",
    "Op",
    "and_",
    "cast",
    "col",
    "fn",
    "literal",
    "or_",
    "where",
    "DialectConfig",
    "get_dialect",
    "SNOWFLAKE",
    "MYSQL",
]

"""querygen: dialect-aware SQL query generation."""

from querygen.sql import (
    BoundQuery,
    GenerationError,
    Op,
    QueryGenerator,
    and_,
    col,
    create_query_generator,
    fn,
    literal,
    or_,
    where,
)

__version__ = "0.1.0"

__all__ = [
    "QueryGenerator",
    "create_query_generator",
    "BoundQuery",
    "GenerationError",
    "Op",
    "and_",
    "col",
    "fn",
    "literal",
    "or_",
    "where",
]

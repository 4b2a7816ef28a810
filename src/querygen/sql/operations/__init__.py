"""Clause and statement builders."""

from .clauses import (
    render_attributes,
    render_group,
    render_index_hints,
    render_limit,
    render_order,
    select_from_table_fragment,
)
from .ddl import DDLBuilder
from .expressions import render_column, render_expression, render_value
from .insert import InsertBuilder
from .introspection import IntrospectionBuilder
from .select import SelectBuilder
from .update import DeleteBuilder, UpdateBuilder
from .where import WhereRenderer, render_where

__all__ = [
    "render_attributes",
    "render_group",
    "render_index_hints",
    "render_limit",
    "render_order",
    "select_from_table_fragment",
    "render_column",
    "render_expression",
    "render_value",
    "render_where",
    "WhereRenderer",
    "SelectBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "DDLBuilder",
    "IntrospectionBuilder",
]

"""
Unit tests for RenderContext.
"""

import pytest

from querygen.sql.core.context import GeneratorOptions, RenderContext
from querygen.sql.core.descriptors import TableRef
from querygen.sql.dialects import SNOWFLAKE


@pytest.mark.unit
class TestRenderContext:
    """Tests for RenderContext helpers."""

    def test_defaults(self):
        ctx = RenderContext.create()
        assert ctx.dialect is SNOWFLAKE
        assert ctx.options == GeneratorOptions()

    def test_quote_honours_toggle(self):
        assert RenderContext.create().quote("a") == '"a"'
        assert RenderContext.create(quote_identifiers=False).quote("a") == "a"

    def test_quote_table_with_schema(self):
        ctx = RenderContext.create()
        assert ctx.quote_table(TableRef("t", "s")) == '"s"."t"'
        assert ctx.quote_table({"tableName": "t"}) == '"t"'

    def test_escape_uses_dialect(self):
        ctx = RenderContext.create("mysql")
        assert ctx.escape(True) == "true"
        assert ctx.quote("a") == "`a`"

    def test_context_is_immutable(self):
        ctx = RenderContext.create()
        with pytest.raises(AttributeError):
            ctx.dialect = None  # type: ignore[misc]

"""
Render context threaded through every clause builder.

Holds the immutable dialect configuration together with the generator
options that change the textual shape of statements (identifier quoting,
null omission). Creating one is cheap; it carries no per-statement state.
"""

from dataclasses import dataclass
from typing import Any, Union

from ..dialects import DialectConfig, get_dialect
from .descriptors import TableRef
from .identifier import qualify_table, quote_identifier, quote_identifiers
from .literals import escape_literal


@dataclass(frozen=True)
class GeneratorOptions:
    """Options selected by the caller for a generator instance."""

    quote_identifiers: bool = True
    omit_null: bool = False


@dataclass(frozen=True)
class RenderContext:
    """Dialect + options pair passed by reference into renderers."""

    dialect: DialectConfig
    options: GeneratorOptions = GeneratorOptions()

    @classmethod
    def create(
        cls,
        dialect: Union[str, DialectConfig] = "snowflake",
        quote_identifiers: bool = True,
        omit_null: bool = False,
    ) -> "RenderContext":
        return cls(
            dialect=get_dialect(dialect),
            options=GeneratorOptions(
                quote_identifiers=quote_identifiers, omit_null=omit_null
            ),
        )

    def quote(self, name: str) -> str:
        """Quote a single identifier, honouring the quoting toggle."""
        return quote_identifier(name, self.dialect, self.options.quote_identifiers)

    def quote_dotted(self, name: str) -> str:
        """Quote a possibly dotted reference part by part."""
        return quote_identifiers(name, self.dialect, self.options.quote_identifiers)

    def quote_table(self, table: Any) -> str:
        """Quote a table given as a name, mapping or TableRef."""
        ref = TableRef.from_value(table)
        return qualify_table(
            ref.table_name, ref.schema, self.dialect, self.options.quote_identifiers
        )

    def escape(self, value: Any) -> str:
        return escape_literal(value, self.dialect)


__all__ = ["GeneratorOptions", "RenderContext"]

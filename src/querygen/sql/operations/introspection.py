"""
Introspection queries against the dialect's information schema.

Table and column names appear here as string literals, not identifiers,
so they always go through escape_literal regardless of the quoting toggle.
"""

from typing import Any, Optional

from ..core.context import RenderContext
from ..core.descriptors import TableRef

SYSTEM_SCHEMAS = ("INFORMATION_SCHEMA", "PERFORMANCE_SCHEMA", "SYS", "mysql")

FOREIGN_KEY_FIELDS = (
    ("CONSTRAINT_NAME", "constraint_name"),
    ("CONSTRAINT_NAME", "constraintName"),
    ("CONSTRAINT_SCHEMA", "constraintSchema"),
    ("CONSTRAINT_SCHEMA", "constraintCatalog"),
    ("TABLE_NAME", "tableName"),
    ("TABLE_SCHEMA", "tableSchema"),
    ("TABLE_SCHEMA", "tableCatalog"),
    ("COLUMN_NAME", "columnName"),
    ("REFERENCED_TABLE_SCHEMA", "referencedTableSchema"),
    ("REFERENCED_TABLE_SCHEMA", "referencedTableCatalog"),
    ("REFERENCED_TABLE_NAME", "referencedTableName"),
    ("REFERENCED_COLUMN_NAME", "referencedColumnName"),
)


class IntrospectionBuilder:
    """Builder for catalogue lookups (table existence, foreign keys, versions)."""

    def __init__(self, ctx: RenderContext):
        self.ctx = ctx

    @property
    def _schema_view(self) -> str:
        return self.ctx.dialect.information_schema

    def table_exists(self, table: Any) -> str:
        """
        Look a base table up by name, in the given schema or the current one.

        Examples:
            >>> IntrospectionBuilder(RenderContext.create()).table_exists("myTable")
            "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES WHERE TABLE_TYPE = 'BASE TABLE' AND TABLE_SCHEMA = CURRENT_SCHEMA() AND TABLE_NAME = 'myTable';"
        """
        ref = TableRef.from_value(table)
        schema = (
            self.ctx.escape(ref.schema)
            if ref.schema
            else self.ctx.dialect.current_schema_function
        )
        return (
            f"SELECT TABLE_NAME FROM {self._schema_view}.TABLES "
            f"WHERE TABLE_TYPE = 'BASE TABLE' AND TABLE_SCHEMA = {schema} "
            f"AND TABLE_NAME = {self.ctx.escape(ref.table_name)};"
        )

    def get_foreign_key(self, table: Any, column: str) -> str:
        """
        Find key-usage rows where the column is either side of a foreign key.

        No trailing ``;``: callers embed this query as a sub-select.
        """
        ref = TableRef.from_value(table)
        table_name = self.ctx.escape(ref.table_name)
        column_name = self.ctx.escape(column)
        fields = ",".join(f"{source} as {alias}" for source, alias in FOREIGN_KEY_FIELDS)
        return (
            f"SELECT {fields} FROM {self._schema_view}.KEY_COLUMN_USAGE "
            f"WHERE (REFERENCED_TABLE_NAME = {table_name} AND REFERENCED_COLUMN_NAME = {column_name}) "
            f"OR (TABLE_NAME = {table_name} AND COLUMN_NAME = {column_name} "
            f"AND REFERENCED_TABLE_NAME IS NOT NULL)"
        )

    def show_tables(self, database: Optional[str] = None) -> str:
        """List base tables of one database, or of every non-system schema."""
        query = (
            f"SELECT TABLE_NAME FROM {self._schema_view}.TABLES "
            f"WHERE TABLE_TYPE = 'BASE TABLE'"
        )
        if database:
            query += f" AND TABLE_SCHEMA = {self.ctx.escape(database)}"
        else:
            excluded = ", ".join(self.ctx.escape(name) for name in SYSTEM_SCHEMAS)
            query += f" AND TABLE_SCHEMA NOT IN ({excluded})"
        return f"{query};"

    def show_schemas(self) -> str:
        return "SHOW SCHEMAS;"

    def version(self) -> str:
        return f"SELECT {self.ctx.dialect.version_function}"

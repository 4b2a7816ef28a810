"""
DDL statement builders: column fragments, CREATE/DROP/ALTER TABLE and
schema statements.

Column fragments are assembled in a fixed order: type, NOT NULL,
autoincrement keyword, PRIMARY KEY, DEFAULT, COMMENT, UNIQUE, REFERENCES
(with ON DELETE / ON UPDATE), FIRST, AFTER.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple, Union

from querygen.utils.logging import get_logger

from ..core.context import RenderContext
from ..core.descriptors import NOT_SET, ColumnDefinition, TableOptions, TableRef
from ..core.exceptions import GenerationError
from .expressions import render_value

logger = get_logger(__name__)

ColumnLike = Union[str, ColumnDefinition, Dict[str, Any]]

_QUOTE_CHARS = "'\"`"


def find_unquoted(fragment: str, token: str) -> int:
    """
    Index of the first ``token`` outside quoted literals and identifiers.

    A quote character opens a run that ends at the next unpaired copy of
    the same character; a backslash inside a run skips the next character.

    Examples:
        >>> find_unquoted("INTEGER COMMENT 'PRIMARY KEY' PRIMARY KEY", "PRIMARY KEY")
        30
        >>> find_unquoted("INTEGER COMMENT 'PRIMARY KEY'", "PRIMARY KEY")
        -1
    """
    index = 0
    length = len(fragment)
    while index < length:
        char = fragment[index]
        if char in _QUOTE_CHARS:
            index += 1
            while index < length:
                if fragment[index] == "\\":
                    index += 2
                    continue
                if fragment[index] == char:
                    if fragment[index + 1 : index + 2] == char:
                        index += 2
                        continue
                    break
                index += 1
            index += 1
            continue
        if fragment.startswith(token, index):
            return index
        index += 1
    return -1


class DDLBuilder:
    """
    Builder for table and schema DDL.

    Example:
        >>> builder = DDLBuilder(RenderContext.create())
        >>> builder.attributes_to_sql({"id": {"type": "INTEGER", "primaryKey": True, "autoIncrement": True}})
        {'id': 'INTEGER AUTOINCREMENT PRIMARY KEY'}
    """

    def __init__(self, ctx: RenderContext):
        self.ctx = ctx

    def attribute_to_sql(self, definition: ColumnLike) -> str:
        """Render one column definition to its DDL fragment."""
        column = ColumnDefinition.from_value(definition)
        dialect = self.ctx.dialect
        parts: List[str] = [column.type]

        if column.allow_null is False:
            parts.append("NOT NULL")
        if column.auto_increment:
            parts.append(dialect.autoincrement_keyword)
        if column.primary_key:
            parts.append("PRIMARY KEY")

        if column.default_value is not NOT_SET:
            if column.binary or dialect.forbids_default(column.type):
                logger.debug("sql.default_value.dropped", column_type=column.type)
            else:
                parts.append(f"DEFAULT {render_value(column.default_value, self.ctx)}")

        if column.comment:
            parts.append(f"COMMENT {self.ctx.escape(column.comment)}")
        if column.unique:
            parts.append("UNIQUE")

        references = self._references_sql(column)
        if references:
            parts.append(references)

        if column.first:
            parts.append("FIRST")
        if column.after:
            parts.append(f"AFTER {self.ctx.quote(column.after)}")

        return " ".join(parts)

    def _references_sql(self, column: ColumnDefinition) -> Optional[str]:
        if column.references is None:
            return None
        key = column.references.key or self.ctx.dialect.default_primary_key
        parts = [
            f"REFERENCES {self.ctx.quote_table(column.references.table)} ({self.ctx.quote(key)})"
        ]
        if column.on_delete:
            parts.append(f"ON DELETE {column.on_delete.upper()}")
        if column.on_update:
            parts.append(f"ON UPDATE {column.on_update.upper()}")
        return " ".join(parts)

    def _split_definition(self, definition: ColumnLike) -> Tuple[str, bool, Optional[str]]:
        """Return (column fragment, is primary key, REFERENCES clause)."""
        if not isinstance(definition, str):
            column = ColumnDefinition.from_value(definition)
            fragment = self.attribute_to_sql(
                replace(column, primary_key=False, references=None, on_delete=None, on_update=None)
            )
            return fragment, column.primary_key, self._references_sql(column)

        fragment = definition
        is_primary = False
        index = find_unquoted(fragment, "PRIMARY KEY")
        if index >= 0:
            is_primary = True
            fragment = fragment[:index] + fragment[index + len("PRIMARY KEY") :]

        references = None
        index = find_unquoted(fragment, "REFERENCES")
        if index >= 0:
            if index == 0 or fragment[index - 1] != " ":
                raise GenerationError(
                    "Cannot split REFERENCES from column type", node=definition, clause="create_table"
                )
            references = fragment[index:]
            fragment = fragment[: index - 1]
        return fragment, is_primary, references

    def attributes_to_sql(self, attributes: Mapping) -> Dict[str, str]:
        """Render every column definition, keeping the mapping order."""
        return {name: self.attribute_to_sql(definition) for name, definition in attributes.items()}

    def create_table(
        self,
        table: Any,
        attributes: Mapping,
        options: Union[None, TableOptions, Dict[str, Any]] = None,
    ) -> str:
        """
        Build ``CREATE TABLE IF NOT EXISTS``.

        Attribute values may be rendered DDL fragments or column
        definitions. Definitions contribute their ``primary_key`` and
        ``references`` fields as table-level constraints; in a rendered
        fragment the ``PRIMARY KEY`` and ``REFERENCES`` tokens are lifted
        out, ignoring any text inside quoted literals.

        Returns:
            CREATE TABLE SQL statement
        """
        opts = TableOptions.from_value(options)
        if not attributes:
            raise GenerationError("CREATE TABLE needs at least one column", node=attributes, clause="create_table")

        primary_keys: List[str] = []
        foreign_keys: Dict[str, str] = {}
        columns: List[str] = []

        for name, definition in attributes.items():
            data_type, is_primary, references = self._split_definition(definition)
            if is_primary:
                primary_keys.append(name)
            if references:
                foreign_keys[name] = references
            columns.append(f"{self.ctx.quote(name)} {data_type}")

        body = ", ".join(columns)

        table_name = TableRef.from_value(table).table_name
        for unique_key in opts.unique_keys:
            index_name = unique_key.name or f"uniq_{table_name}_{'_'.join(unique_key.fields)}"
            fields = ", ".join(self.ctx.quote(field) for field in unique_key.fields)
            body += f", UNIQUE {self.ctx.quote(index_name)} ({fields})"

        if primary_keys:
            body += f", PRIMARY KEY ({', '.join(self.ctx.quote(pk) for pk in primary_keys)})"

        for name, reference in foreign_keys.items():
            body += f", FOREIGN KEY ({self.ctx.quote(name)}) {reference}"

        query = f"CREATE TABLE IF NOT EXISTS {self.ctx.quote_table(table)} ({body})"
        if opts.comment:
            query += f" COMMENT {self.ctx.escape(opts.comment)}"
        if opts.charset:
            query += f" DEFAULT CHARSET={opts.charset}"
        if opts.collate:
            query += f" COLLATE {opts.collate}"
        if opts.row_format:
            query += f" ROW_FORMAT={opts.row_format}"
        return f"{query};"

    def drop_table(self, table: Any) -> str:
        return f"DROP TABLE IF EXISTS {self.ctx.quote_table(table)};"

    def truncate_table(self, table: Any) -> str:
        return f"TRUNCATE {self.ctx.quote_table(table)}"

    def add_column(self, table: Any, key: str, definition: ColumnLike) -> str:
        """``ALTER TABLE t ADD c <fragment>;``"""
        return (
            f"ALTER TABLE {self.ctx.quote_table(table)} "
            f"ADD {self.ctx.quote(key)} {self.attribute_to_sql(definition)};"
        )

    def remove_column(self, table: Any, column: str) -> str:
        return f"ALTER TABLE {self.ctx.quote_table(table)} DROP {self.ctx.quote(column)};"

    def rename_column(self, table: Any, before: str, after: str) -> str:
        return (
            f"ALTER TABLE {self.ctx.quote_table(table)} "
            f"RENAME COLUMN {self.ctx.quote(before)} TO {self.ctx.quote(after)};"
        )

    def drop_foreign_key(self, table: Any, foreign_key: str) -> str:
        return (
            f"ALTER TABLE {self.ctx.quote_table(table)} "
            f"DROP FOREIGN KEY {self.ctx.quote(foreign_key)};"
        )

    def create_schema(self, schema: str) -> str:
        return f"CREATE SCHEMA IF NOT EXISTS {self.ctx.quote(schema)};"

    def drop_schema(self, schema: str) -> str:
        query = f"DROP SCHEMA IF EXISTS {self.ctx.quote(schema)}"
        if self.ctx.dialect.drop_schema_cascade:
            query += " CASCADE"
        return f"{query};"

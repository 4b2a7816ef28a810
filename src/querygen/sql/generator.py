"""
Query generator façade.

QueryGenerator binds one immutable RenderContext (dialect + options) and
exposes every statement the ORM layer asks for. It holds no per-statement
state, so one instance can be shared freely across threads.

Usage:
    >>> from querygen.sql import QueryGenerator
    >>> generator = QueryGenerator()
    >>> generator.select_query("myTable", {"offset": 2})
    'SELECT * FROM "myTable" LIMIT NULL OFFSET 2;'
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Sized, TypeVar, Union

from querygen.config import Settings, get_settings
from querygen.utils.logging import get_logger, log_generated_sql

from .core.context import RenderContext
from .core.exceptions import GenerationError
from .core.literals import escape_literal
from .core.parameters import BoundQuery
from .dialects import DEFAULT_DIALECT, DialectConfig
from .operations.clauses import select_from_table_fragment
from .operations.ddl import DDLBuilder
from .operations.insert import InsertBuilder
from .operations.introspection import IntrospectionBuilder
from .operations.select import SelectBuilder
from .operations.update import DeleteBuilder, UpdateBuilder

logger = get_logger(__name__)

T = TypeVar("T")


class QueryGenerator:
    """
    Dialect-bound SQL generator.

    Args:
        dialect: Dialect name or DialectConfig (default: snowflake)
        quote_identifiers: Wrap identifiers in the dialect delimiter
        omit_null: Drop None-valued columns from single-row INSERT/UPDATE
        bind_prefix: Bind parameter name prefix; defaults to the dialect's
    """

    def __init__(
        self,
        dialect: Union[str, DialectConfig] = DEFAULT_DIALECT,
        quote_identifiers: bool = True,
        omit_null: bool = False,
        bind_prefix: Optional[str] = None,
    ):
        self.ctx = RenderContext.create(
            dialect, quote_identifiers=quote_identifiers, omit_null=omit_null
        )
        self.bind_prefix = bind_prefix
        self._select = SelectBuilder(self.ctx)
        self._insert = InsertBuilder(self.ctx, bind_prefix)
        self._update = UpdateBuilder(self.ctx, bind_prefix)
        self._delete = DeleteBuilder(self.ctx)
        self._ddl = DDLBuilder(self.ctx)
        self._introspection = IntrospectionBuilder(self.ctx)

    @property
    def dialect(self) -> DialectConfig:
        return self.ctx.dialect

    def _generate(self, statement: str, build: Callable[[], T], **context: Any) -> T:
        try:
            result = build()
        except GenerationError as exc:
            logger.warning(
                "sql.generation_failed",
                statement=statement,
                dialect=self.dialect.name,
                **exc.to_dict(),
            )
            raise
        log_generated_sql(logger, statement, result, dialect=self.dialect.name, **context)
        return result

    # -- primitives --------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        return self.ctx.quote(name)

    def quote_table(self, table: Any) -> str:
        return self.ctx.quote_table(table)

    def escape(self, value: Any) -> str:
        return escape_literal(value, self.dialect)

    # -- statements --------------------------------------------------------

    def attributes_to_sql(self, attributes: Mapping[str, Any]) -> Dict[str, str]:
        """Render column definitions to DDL fragments keyed by column name."""
        return self._generate(
            "attributes", lambda: self._ddl.attributes_to_sql(attributes), columns=len(attributes)
        )

    def create_table_query(
        self, table: Any, attributes: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> str:
        return self._generate(
            "create_table", lambda: self._ddl.create_table(table, attributes, options), table=str(table)
        )

    def table_exists_query(self, table: Any) -> str:
        return self._generate(
            "table_exists", lambda: self._introspection.table_exists(table), table=str(table)
        )

    def select_query(self, table: Any, options: Any = None, model: Any = None) -> str:
        """
        Build a complete SELECT statement.

        Args:
            table: Table name, mapping or TableRef
            options: SelectOptions or mapping (attributes, where, group,
                having, order, limit, offset, indexHints, subQuery, tableAs)
            model: Optional model name or ModelRef aliasing the main table
        """
        return self._generate(
            "select", lambda: self._select.select(table, options, model), table=str(table)
        )

    def select_from_table_fragment(
        self,
        options: Any,
        model: Any,
        attributes: Optional[Sequence[str]],
        tables: str,
        main_table_as: Optional[str] = None,
    ) -> str:
        return self._generate(
            "select_fragment",
            lambda: select_from_table_fragment(
                options, model, attributes, tables, main_table_as, self.ctx
            ),
        )

    def insert_query(
        self, table: Any, values: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> BoundQuery:
        return self._generate(
            "insert", lambda: self._insert.insert(table, values, options), table=str(table)
        )

    def bulk_insert_query(
        self,
        table: Any,
        rows: Iterable[Mapping[str, Any]],
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self._generate(
            "bulk_insert",
            lambda: self._insert.bulk_insert(table, rows, options),
            table=str(table),
            rows=len(rows) if isinstance(rows, Sized) else None,
        )

    def update_query(
        self,
        table: Any,
        values: Mapping[str, Any],
        where: Any = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> BoundQuery:
        return self._generate(
            "update", lambda: self._update.update(table, values, where, options), table=str(table)
        )

    def delete_query(
        self, table: Any, where: Any = None, options: Optional[Mapping[str, Any]] = None
    ) -> str:
        return self._generate(
            "delete", lambda: self._delete.delete(table, where, options), table=str(table)
        )

    def get_foreign_key_query(self, table: Any, column: str) -> str:
        return self._generate(
            "foreign_key", lambda: self._introspection.get_foreign_key(table, column), table=str(table)
        )

    def truncate_table_query(self, table: Any) -> str:
        return self._generate("truncate", lambda: self._ddl.truncate_table(table), table=str(table))

    def drop_table_query(self, table: Any) -> str:
        return self._generate("drop_table", lambda: self._ddl.drop_table(table), table=str(table))

    def add_column_query(self, table: Any, key: str, definition: Any) -> str:
        return self._generate(
            "add_column", lambda: self._ddl.add_column(table, key, definition), table=str(table)
        )

    def remove_column_query(self, table: Any, column: str) -> str:
        return self._generate(
            "remove_column", lambda: self._ddl.remove_column(table, column), table=str(table)
        )

    def rename_column_query(self, table: Any, before: str, after: str) -> str:
        return self._generate(
            "rename_column", lambda: self._ddl.rename_column(table, before, after), table=str(table)
        )

    def drop_foreign_key_query(self, table: Any, foreign_key: str) -> str:
        return self._generate(
            "drop_foreign_key",
            lambda: self._ddl.drop_foreign_key(table, foreign_key),
            table=str(table),
        )

    def show_tables_query(self, database: Optional[str] = None) -> str:
        return self._generate("show_tables", lambda: self._introspection.show_tables(database))

    def version_query(self) -> str:
        return self._generate("version", self._introspection.version)

    def create_schema_query(self, schema: str) -> str:
        return self._generate("create_schema", lambda: self._ddl.create_schema(schema), schema=schema)

    def drop_schema_query(self, schema: str) -> str:
        return self._generate("drop_schema", lambda: self._ddl.drop_schema(schema), schema=schema)

    def show_schemas_query(self) -> str:
        return self._generate("show_schemas", self._introspection.show_schemas)


def create_query_generator(settings: Optional[Settings] = None, **overrides: Any) -> QueryGenerator:
    """
    Build a QueryGenerator from settings.

    Args:
        settings: Settings instance; defaults to get_settings()
        **overrides: QueryGenerator keyword arguments taking precedence
            over settings (dialect, quote_identifiers, omit_null, bind_prefix)

    Example:
        >>> generator = create_query_generator(quote_identifiers=False)
        >>> generator.select_query("myTable")
        'SELECT * FROM myTable;'
    """
    settings = settings or get_settings()
    params: Dict[str, Any] = {
        "dialect": settings.dialect,
        "quote_identifiers": settings.quote_identifiers,
        "omit_null": settings.omit_null,
        "bind_prefix": settings.bind_prefix,
    }
    params.update(overrides)
    return QueryGenerator(**params)


__all__ = ["QueryGenerator", "create_query_generator"]

"""
Unit tests for single-row and bulk INSERT generation.
"""

from datetime import datetime, timezone

import pytest

from querygen.sql import BoundQuery, QueryGenerator, fn
from querygen.sql.core.exceptions import GenerationError, UnsupportedLiteralKind

BIRTHDAY = datetime(2011, 3, 27, 10, 1, 55, tzinfo=timezone.utc)
NEXT_BIRTHDAY = datetime(2012, 3, 27, 10, 1, 55, tzinfo=timezone.utc)


@pytest.mark.unit
class TestInsertQuery:
    """Tests for insert_query."""

    @pytest.mark.parametrize(
        "values, quoted, unquoted, bind",
        [
            (
                {"name": "foo"},
                'INSERT INTO "myTable" ("name") VALUES ($sequelize_1);',
                "INSERT INTO myTable (name) VALUES ($sequelize_1);",
                {"sequelize_1": "foo"},
            ),
            (
                {"name": "foo';DROP TABLE myTable;"},
                'INSERT INTO "myTable" ("name") VALUES ($sequelize_1);',
                "INSERT INTO myTable (name) VALUES ($sequelize_1);",
                {"sequelize_1": "foo';DROP TABLE myTable;"},
            ),
            (
                {"name": "foo", "birthday": BIRTHDAY},
                'INSERT INTO "myTable" ("name","birthday") VALUES ($sequelize_1,$sequelize_2);',
                "INSERT INTO myTable (name,birthday) VALUES ($sequelize_1,$sequelize_2);",
                {"sequelize_1": "foo", "sequelize_2": BIRTHDAY},
            ),
            (
                {"name": "foo", "foo": 1},
                'INSERT INTO "myTable" ("name","foo") VALUES ($sequelize_1,$sequelize_2);',
                "INSERT INTO myTable (name,foo) VALUES ($sequelize_1,$sequelize_2);",
                {"sequelize_1": "foo", "sequelize_2": 1},
            ),
            (
                {"data": b"Sequelize"},
                'INSERT INTO "myTable" ("data") VALUES ($sequelize_1);',
                "INSERT INTO myTable (data) VALUES ($sequelize_1);",
                {"sequelize_1": b"Sequelize"},
            ),
            (
                {"name": "foo", "foo": 1, "nullValue": None},
                'INSERT INTO "myTable" ("name","foo","nullValue") VALUES ($sequelize_1,$sequelize_2,$sequelize_3);',
                "INSERT INTO myTable (name,foo,nullValue) VALUES ($sequelize_1,$sequelize_2,$sequelize_3);",
                {"sequelize_1": "foo", "sequelize_2": 1, "sequelize_3": None},
            ),
            (
                {"foo": False},
                'INSERT INTO "myTable" ("foo") VALUES ($sequelize_1);',
                "INSERT INTO myTable (foo) VALUES ($sequelize_1);",
                {"sequelize_1": False},
            ),
            (
                {"foo": True},
                'INSERT INTO "myTable" ("foo") VALUES ($sequelize_1);',
                "INSERT INTO myTable (foo) VALUES ($sequelize_1);",
                {"sequelize_1": True},
            ),
            (
                {"foo": fn("NOW")},
                'INSERT INTO "myTable" ("foo") VALUES (NOW());',
                "INSERT INTO myTable (foo) VALUES (NOW());",
                {},
            ),
        ],
    )
    def test_insert(self, generator, unquoted_generator, values, quoted, unquoted, bind):
        assert generator.insert_query("myTable", values) == BoundQuery(quoted, bind)
        assert unquoted_generator.insert_query("myTable", values) == BoundQuery(unquoted, bind)

    def test_omit_null_generator_option(self):
        """omit_null drops None-valued columns from the column list."""
        result = QueryGenerator(omit_null=True).insert_query(
            "myTable", {"name": "foo", "foo": 1, "nullValue": None}
        )
        assert result.query == 'INSERT INTO "myTable" ("name","foo") VALUES ($sequelize_1,$sequelize_2);'
        assert result.bind == {"sequelize_1": "foo", "sequelize_2": 1}

    def test_omit_null_false_keeps_nulls(self):
        result = QueryGenerator(omit_null=False).insert_query("myTable", {"nullValue": None})
        assert result.bind == {"sequelize_1": None}

    def test_omit_null_per_call_override(self, unquoted_generator):
        result = unquoted_generator.insert_query(
            "myTable", {"name": "foo", "foo": 1, "nullValue": None}, {"omitNull": True}
        )
        assert result.query == "INSERT INTO myTable (name,foo) VALUES ($sequelize_1,$sequelize_2);"

    def test_ignore_duplicates(self, generator):
        result = generator.insert_query("myTable", {"name": "foo"}, {"ignoreDuplicates": True})
        assert result.query == 'INSERT IGNORE INTO "myTable" ("name") VALUES ($sequelize_1);'

    def test_custom_bind_prefix(self):
        result = QueryGenerator(bind_prefix="p").insert_query("myTable", {"name": "foo"})
        assert result == BoundQuery('INSERT INTO "myTable" ("name") VALUES ($p_1);', {"p_1": "foo"})

    def test_mysql_markers(self):
        result = QueryGenerator("mysql").insert_query("myTable", {"a": 1, "b": 2})
        assert result.query == "INSERT INTO `myTable` (`a`,`b`) VALUES (?,?);"
        assert result.bind == {"sequelize_1": 1, "sequelize_2": 2}

    def test_unsupported_value_raises(self, generator):
        with pytest.raises(UnsupportedLiteralKind):
            generator.insert_query("myTable", {"a": object()})

    def test_all_columns_omitted_raises(self):
        with pytest.raises(GenerationError):
            QueryGenerator(omit_null=True).insert_query("myTable", {"a": None})


@pytest.mark.unit
class TestBulkInsertQuery:
    """Tests for bulk_insert_query."""

    @pytest.mark.parametrize(
        "rows, options, quoted, unquoted",
        [
            (
                [{"name": "foo"}, {"name": "bar"}],
                None,
                "INSERT INTO \"myTable\" (\"name\") VALUES ('foo'),('bar');",
                "INSERT INTO myTable (name) VALUES ('foo'),('bar');",
            ),
            (
                [{"name": "foo';DROP TABLE myTable;"}, {"name": "bar"}],
                None,
                "INSERT INTO \"myTable\" (\"name\") VALUES ('foo'';DROP TABLE myTable;'),('bar');",
                "INSERT INTO myTable (name) VALUES ('foo'';DROP TABLE myTable;'),('bar');",
            ),
            (
                [{"name": "foo", "birthday": BIRTHDAY}, {"name": "bar", "birthday": NEXT_BIRTHDAY}],
                None,
                "INSERT INTO \"myTable\" (\"name\",\"birthday\") VALUES "
                "('foo','2011-03-27 10:01:55.000'),('bar','2012-03-27 10:01:55.000');",
                "INSERT INTO myTable (name,birthday) VALUES "
                "('foo','2011-03-27 10:01:55.000'),('bar','2012-03-27 10:01:55.000');",
            ),
            (
                [{"name": "foo", "foo": 1}, {"name": "bar", "foo": 2}],
                None,
                "INSERT INTO \"myTable\" (\"name\",\"foo\") VALUES ('foo',1),('bar',2);",
                "INSERT INTO myTable (name,foo) VALUES ('foo',1),('bar',2);",
            ),
            (
                [{"name": "foo", "foo": 1, "nullValue": None}, {"name": "bar", "nullValue": None}],
                None,
                "INSERT INTO \"myTable\" (\"name\",\"foo\",\"nullValue\") VALUES ('foo',1,NULL),('bar',NULL,NULL);",
                "INSERT INTO myTable (name,foo,nullValue) VALUES ('foo',1,NULL),('bar',NULL,NULL);",
            ),
            (
                [{"name": "foo", "foo": 1, "nullValue": None}, {"name": "bar", "foo": 2, "nullValue": None}],
                {"omitNull": True},
                "INSERT INTO \"myTable\" (\"name\",\"foo\",\"nullValue\") VALUES ('foo',1,NULL),('bar',2,NULL);",
                "INSERT INTO myTable (name,foo,nullValue) VALUES ('foo',1,NULL),('bar',2,NULL);",
            ),
            (
                [{"name": "foo", "foo": 1, "nullValue": None}, {"name": "bar", "foo": 2, "undefinedValue": None}],
                {"omitNull": True},
                "INSERT INTO \"myTable\" (\"name\",\"foo\",\"nullValue\",\"undefinedValue\") VALUES "
                "('foo',1,NULL,NULL),('bar',2,NULL,NULL);",
                "INSERT INTO myTable (name,foo,nullValue,undefinedValue) VALUES "
                "('foo',1,NULL,NULL),('bar',2,NULL,NULL);",
            ),
            (
                [{"name": "foo", "value": True}, {"name": "bar", "value": False}],
                None,
                "INSERT INTO \"myTable\" (\"name\",\"value\") VALUES ('foo',true),('bar',false);",
                "INSERT INTO myTable (name,value) VALUES ('foo',true),('bar',false);",
            ),
            (
                [{"name": "foo"}, {"name": "bar"}],
                {"ignoreDuplicates": True},
                "INSERT IGNORE INTO \"myTable\" (\"name\") VALUES ('foo'),('bar');",
                "INSERT IGNORE INTO myTable (name) VALUES ('foo'),('bar');",
            ),
        ],
    )
    def test_bulk_insert(self, generator, unquoted_generator, rows, options, quoted, unquoted):
        assert generator.bulk_insert_query("myTable", rows, options) == quoted
        assert unquoted_generator.bulk_insert_query("myTable", rows, options) == unquoted

    def test_generator_omit_null_is_ignored(self):
        """Every row shares one column list, so null columns stay."""
        result = QueryGenerator(omit_null=True).bulk_insert_query("myTable", [{"a": 1, "b": None}])
        assert result == 'INSERT INTO "myTable" ("a","b") VALUES (1,NULL);'

    def test_expression_values_inlined(self, generator):
        result = generator.bulk_insert_query("myTable", [{"at": fn("NOW")}])
        assert result == 'INSERT INTO "myTable" ("at") VALUES (NOW());'

    def test_empty_rows_raise(self, generator):
        with pytest.raises(GenerationError):
            generator.bulk_insert_query("myTable", [])

    def test_rows_from_a_generator(self, generator):
        rows = (row for row in [{"name": "foo"}, {"name": "bar"}])
        result = generator.bulk_insert_query("myTable", rows)
        assert result == "INSERT INTO \"myTable\" (\"name\") VALUES ('foo'),('bar');"

    @pytest.mark.parametrize("rows", [5, None, "rows", {"name": "foo"}])
    def test_rows_must_be_a_list_of_mappings(self, generator, rows):
        with pytest.raises(GenerationError):
            generator.bulk_insert_query("myTable", rows)

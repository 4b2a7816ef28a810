"""
Unit tests for literal escaping.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from querygen.sql.core.exceptions import UnsupportedLiteralKind
from querygen.sql.core.literals import escape_literal, format_datetime, is_literal
from querygen.sql.dialects import SNOWFLAKE


def _string_token_end(sql: str) -> int:
    """Index of the quote closing the string token opened at index 0.

    Follows MySQL lexing: backslash escapes the next character and a
    doubled quote stands for one quote.
    """
    index = 1
    while index < len(sql):
        if sql[index] == "\\":
            index += 2
        elif sql[index] == "'" and sql[index + 1 : index + 2] == "'":
            index += 2
        elif sql[index] == "'":
            return index
        else:
            index += 1
    return -1


@pytest.mark.unit
class TestEscapeLiteral:
    """Tests for escape_literal function."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "NULL"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-12, "-12"),
            (1.5, "1.5"),
            (Decimal("10.25"), "10.25"),
            ("foo", "'foo'"),
            ("it's", "'it''s'"),
            ("", "''"),
            (b"Sequelize", "X'53657175656c697a65'"),
            (bytearray(b"\x00\xff"), "X'00ff'"),
            ([1, "a", None], "(1, 'a', NULL)"),
            ((), "()"),
            (date(2011, 3, 27), "'2011-03-27'"),
        ],
    )
    def test_kinds(self, value, expected):
        """Each supported kind has one canonical rendering."""
        assert escape_literal(value) == expected

    def test_injection_payload_stays_one_literal(self):
        """Quotes inside the payload are doubled, never closing the literal."""
        rendered = escape_literal("foo';DROP TABLE myTable;")
        assert rendered == "'foo'';DROP TABLE myTable;'"
        body = rendered[1:-1]
        assert body.replace("''", "").count("'") == 0

    @pytest.mark.parametrize("dialect", ["snowflake", "mysql"])
    def test_backslashes_are_doubled(self, dialect):
        assert escape_literal("a\\'b", dialect=dialect) == "'a\\\\''b'"
        assert escape_literal("C:\\dir\\", dialect=dialect) == "'C:\\\\dir\\\\'"

    @pytest.mark.parametrize("dialect", ["snowflake", "mysql"])
    def test_trailing_backslash_cannot_close_literal(self, dialect):
        """A backslash-escaping lexer still reads the payload as one string token."""
        rendered = escape_literal("foo\\'; DROP TABLE t; -- ", dialect=dialect)

        assert rendered == "'foo\\\\''; DROP TABLE t; -- '"
        assert _string_token_end(rendered) == len(rendered) - 1

    def test_backslashes_kept_without_escape_support(self):
        ansi = SNOWFLAKE.with_overrides(name="ansi", backslash_escapes=False)
        assert escape_literal("a\\'b", dialect=ansi) == "'a\\''b'"

    def test_non_finite_floats(self):
        assert escape_literal(float("nan")) == "'NaN'"
        assert escape_literal(float("inf")) == "'Infinity'"
        assert escape_literal(float("-inf")) == "'-Infinity'"

    def test_unsupported_kind_raises(self):
        """Values outside the closed set are rejected."""
        with pytest.raises(UnsupportedLiteralKind) as exc_info:
            escape_literal(object())
        assert exc_info.value.node is not None

    def test_unsupported_kind_inside_list_raises(self):
        with pytest.raises(UnsupportedLiteralKind):
            escape_literal([1, {"a": 1}])

    def test_mysql_blob_prefix(self):
        assert escape_literal(b"\x01", dialect="mysql") == "X'01'"


@pytest.mark.unit
class TestFormatDatetime:
    """Tests for timestamp formatting."""

    def test_utc_datetime(self):
        value = datetime(2011, 3, 27, 10, 1, 55, tzinfo=timezone.utc)
        assert escape_literal(value) == "'2011-03-27 10:01:55.000'"

    def test_milliseconds_are_truncated(self):
        value = datetime(2011, 3, 27, 10, 1, 55, 123999)
        assert format_datetime(value) == "2011-03-27 10:01:55.123"

    def test_offset_datetime_converted_to_utc(self):
        tz = timezone(timedelta(hours=2))
        value = datetime(2011, 3, 27, 12, 1, 55, tzinfo=tz)
        assert format_datetime(value) == "2011-03-27 10:01:55.000"

    def test_naive_datetime_treated_as_utc(self):
        assert format_datetime(datetime(2012, 3, 27, 10, 1, 55)) == "2012-03-27 10:01:55.000"

    def test_early_years_are_zero_padded(self):
        assert format_datetime(datetime(999, 1, 2, 3, 4, 5)) == "0999-01-02 03:04:05.000"
        assert escape_literal(datetime(42, 1, 1)) == "'0042-01-01 00:00:00.000'"


@pytest.mark.unit
def test_is_literal():
    assert is_literal(None)
    assert is_literal("x")
    assert is_literal(b"x")
    assert not is_literal(object())
    assert not is_literal({"a": 1})

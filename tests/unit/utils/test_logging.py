"""Unit tests for structured logging.

Tests cover:
- get_logger returns a structlog logger whose name is preserved
- JSON rendering with ISO timestamps and log levels
- Redaction of bind maps and other sensitive fields
- Context binding
"""

import json
import logging

import pytest

from querygen.utils.logging import (
    MAX_SQL_LOG_LENGTH,
    REDACTED_VALUE,
    bind_context,
    get_logger,
    log_generated_sql,
    sanitize_for_logging,
    truncate_sql,
)


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")


@pytest.mark.unit
def test_json_output_structure(caplog: pytest.LogCaptureFixture) -> None:
    """Each record is one JSON object with event, level, logger and timestamp."""
    caplog.set_level(logging.INFO)

    get_logger("querygen.test").info("sql.select.generated", table="myTable")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "sql.select.generated"
    assert log_data["level"] == "info"
    assert log_data["logger"] == "querygen.test"
    assert log_data["table"] == "myTable"
    assert "T" in log_data["timestamp"]


@pytest.mark.unit
def test_bind_map_keeps_names_but_redacts_values() -> None:
    sanitized = sanitize_for_logging({"bind": {"sequelize_1": "foo", "sequelize_2": 2}, "table": "t"})

    assert sanitized["bind"] == {"sequelize_1": REDACTED_VALUE, "sequelize_2": REDACTED_VALUE}
    assert sanitized["table"] == "t"


@pytest.mark.unit
@pytest.mark.parametrize("key", ["value", "values", "VALUES", "db_password", "access_token", "client_secret"])
def test_sensitive_scalars_redacted(key: str) -> None:
    assert sanitize_for_logging({key: "x"})[key] == REDACTED_VALUE


@pytest.mark.unit
def test_nested_dicts_are_sanitized() -> None:
    sanitized = sanitize_for_logging({"statement": {"table": "t", "bind": {"p_1": 1}}})

    assert sanitized["statement"]["table"] == "t"
    assert sanitized["statement"]["bind"] == {"p_1": REDACTED_VALUE}


@pytest.mark.unit
def test_non_sensitive_keys_untouched() -> None:
    data = {"dialect": "snowflake", "rows": 3, "value_count": 2}

    assert sanitize_for_logging(data) == data


@pytest.mark.unit
def test_redaction_applied_to_emitted_records(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("querygen.test").info("sql.insert.generated", bind={"sequelize_1": "hunter2"})

    message = caplog.records[-1].message
    assert "hunter2" not in message
    assert json.loads(message)["bind"] == {"sequelize_1": REDACTED_VALUE}


@pytest.mark.unit
def test_context_binding_persists(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    logger = bind_context(dialect="snowflake", statement="select")
    logger.info("first_event")
    logger.info("second_event", table="t")

    events = [json.loads(record.message) for record in caplog.records[-2:]]
    assert all(event["dialect"] == "snowflake" for event in events)
    assert all(event["statement"] == "select" for event in events)
    assert events[1]["table"] == "t"


@pytest.mark.unit
def test_truncate_sql() -> None:
    short = "SELECT * FROM t;"
    long = "SELECT " + ", ".join(f'"c{i}"' for i in range(200)) + " FROM t;"

    assert truncate_sql(short) == short
    assert truncate_sql(long) == long[:MAX_SQL_LOG_LENGTH] + "..."


@pytest.mark.unit
def test_log_generated_sql_redacts_bind(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    class Result:
        query = "INSERT INTO t (a) VALUES ($sequelize_1);"
        bind = {"sequelize_1": "hunter2"}

    log_generated_sql(get_logger("querygen.test"), "insert", Result(), table="t")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "sql.insert.generated"
    assert log_data["sql"] == Result.query
    assert log_data["bind"] == {"sequelize_1": REDACTED_VALUE}
    assert log_data["table"] == "t"


@pytest.mark.unit
def test_generator_debug_record(caplog: pytest.LogCaptureFixture) -> None:
    """Statements reach the debug log; their bound values do not."""
    from querygen.sql import QueryGenerator

    caplog.set_level(logging.DEBUG)

    QueryGenerator().insert_query("myTable", {"name": "secret-value"})

    events = [json.loads(record.message) for record in caplog.records]
    generated = next(event for event in events if event["event"] == "sql.insert.generated")
    assert generated["sql"] == 'INSERT INTO "myTable" ("name") VALUES ($sequelize_1);'
    assert generated["dialect"] == "snowflake"
    assert "secret-value" not in json.dumps(events)

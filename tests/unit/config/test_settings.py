"""Unit tests for environment-driven generator settings."""

import pytest
from pydantic import ValidationError

from querygen.config import Settings, get_settings


@pytest.mark.unit
def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("QUERYGEN_DIALECT", "QUERYGEN_QUOTE_IDENTIFIERS", "QUERYGEN_OMIT_NULL", "QUERYGEN_BIND_PREFIX"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.dialect == "snowflake"
    assert settings.quote_identifiers is True
    assert settings.omit_null is False
    assert settings.bind_prefix == "sequelize"


@pytest.mark.unit
def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """QUERYGEN_* variables are picked up case-insensitively."""
    monkeypatch.setenv("QUERYGEN_DIALECT", " MySQL ")
    monkeypatch.setenv("QUERYGEN_OMIT_NULL", "true")
    monkeypatch.setenv("querygen_bind_prefix", "param")

    settings = get_settings()

    assert settings.dialect == "mysql"
    assert settings.omit_null is True
    assert settings.bind_prefix == "param"


@pytest.mark.unit
def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


@pytest.mark.unit
def test_log_level_has_no_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert get_settings().LOG_LEVEL == "DEBUG"


@pytest.mark.unit
def test_unknown_dialect_rejected() -> None:
    with pytest.raises(ValidationError, match="Unknown dialect 'oracle'"):
        Settings(dialect="oracle")


@pytest.mark.unit
@pytest.mark.parametrize("prefix", ["", "1abc", "has space", "semi;colon"])
def test_invalid_bind_prefix_rejected(prefix: str) -> None:
    with pytest.raises(ValidationError, match="bind_prefix"):
        Settings(bind_prefix=prefix)

"""Pytest configuration shared by the querygen test suite."""

from __future__ import annotations

from typing import Generator

import pytest

from querygen.config import get_settings
from querygen.sql import QueryGenerator


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast, dependency-free unit tests")


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Keep environment-driven settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def generator() -> QueryGenerator:
    """Snowflake generator with identifier quoting enabled."""
    return QueryGenerator()


@pytest.fixture
def unquoted_generator() -> QueryGenerator:
    """Snowflake generator with identifier quoting disabled."""
    return QueryGenerator(quote_identifiers=False)

"""
Configuration management for querygen.

This module provides environment-based configuration using Pydantic
BaseSettings, so the dialect, identifier quoting and null handling of the
default generator can be selected per deployment without code changes.

Environment variables are loaded with the QUERYGEN_ prefix, e.g.
QUERYGEN_DIALECT=mysql or QUERYGEN_QUOTE_IDENTIFIERS=false.
"""

import os
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from querygen.sql.dialects import available_dialects

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("QUERYGEN_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Generator settings with environment variable support.

    Fields:
    - dialect: Registered dialect name used by create_query_generator
    - quote_identifiers: Wrap identifiers in the dialect delimiter
    - omit_null: Drop None-valued columns from single-row INSERT/UPDATE
    - bind_prefix: Prefix of generated bind parameter names
    - LOG_LEVEL: Logging level (no prefix, uppercase)
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    dialect: str = Field(default="snowflake", description="SQL dialect name")
    quote_identifiers: bool = Field(
        default=True, description="Wrap identifiers in the dialect delimiter"
    )
    omit_null: bool = Field(
        default=False,
        description="Omit None-valued columns in single-row INSERT and UPDATE",
    )
    bind_prefix: str = Field(
        default="sequelize", description="Prefix for bind parameter names"
    )

    @field_validator("dialect")
    @classmethod
    def _normalize_dialect(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("bind_prefix")
    @classmethod
    def _validate_bind_prefix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(
                f"bind_prefix must be a valid identifier, got: {value!r}"
            )
        return value

    @model_validator(mode="after")
    def validate_dialect_registered(self) -> "Settings":
        """Reject dialect names the generator has no configuration for.

        Raises:
            ValueError: If the dialect is not registered
        """
        known = available_dialects()
        if self.dialect not in known:
            raise ValueError(
                f"Unknown dialect '{self.dialect}'. "
                f"Available dialects: {', '.join(known)}"
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="QUERYGEN_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    settings = Settings()
    logger.debug(
        "config.settings.loaded",
        dialect=settings.dialect,
        quote_identifiers=settings.quote_identifiers,
        omit_null=settings.omit_null,
    )
    return settings

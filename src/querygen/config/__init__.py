"""Configuration management for querygen.

Usage:
    >>> from querygen.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
    'snowflake'
"""

from querygen.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]

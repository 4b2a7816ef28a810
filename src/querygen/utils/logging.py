"""Structured logging for querygen, built on structlog.

Every generator module logs through get_logger(__name__). Records are
rendered as one JSON object per line with an ISO timestamp, the level and
the logger name.

Generated SQL is only ever logged at debug level, truncated to
MAX_SQL_LOG_LENGTH characters. Bind maps keep their parameter names but
their values are replaced with REDACTED_VALUE before rendering, since they
carry user data.

The level comes from the unprefixed LOG_LEVEL setting (default INFO).

Usage:
    >>> from querygen.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("sql.select.generated", table="myTable")
"""

import logging
import os
import re
from typing import Any, Dict, List, MutableMapping, Optional

import structlog
from structlog.types import EventDict, Processor

from querygen.config import get_settings

# Keys whose values never reach the log output
SENSITIVE_PATTERNS = [
    re.compile(r"^bind$", re.IGNORECASE),
    re.compile(r"^values?$", re.IGNORECASE),
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"
MAX_SQL_LOG_LENGTH = 500


def _is_sensitive(key: str) -> bool:
    return any(pattern.match(key) for pattern in SENSITIVE_PATTERNS)


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    A sensitive mapping (such as a bind map) keeps its keys so the log
    still shows how many parameters a statement carried.

    Example:
        >>> sanitize_for_logging({"bind": {"sequelize_1": "foo"}, "table": "t"})
        {'bind': {'sequelize_1': '[REDACTED]'}, 'table': 't'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if not _is_sensitive(key):
            sanitized[key] = sanitize_for_logging(value) if isinstance(value, dict) else value
        elif isinstance(value, dict):
            sanitized[key] = {name: REDACTED_VALUE for name in value}
        else:
            sanitized[key] = REDACTED_VALUE
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    return sanitize_for_logging(dict(event_dict))


def truncate_sql(query: str, limit: int = MAX_SQL_LOG_LENGTH) -> str:
    """Shorten a statement for logging.

    Example:
        >>> truncate_sql("SELECT * FROM t;", limit=8)
        'SELECT *...'
    """
    return query if len(query) <= limit else f"{query[:limit]}..."


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        try:
            level = get_settings().LOG_LEVEL
        except ValueError:
            # Broken QUERYGEN_* settings are reported by whoever builds a
            # generator; logging still starts
            level = os.getenv("LOG_LEVEL", "INFO")
    return getattr(logging, level.upper(), logging.INFO)


def _build_processors() -> List[Processor]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: Optional[str] = None) -> None:
    """(Re)configure structlog and the stdlib root logger.

    Args:
        level: Level name; defaults to the LOG_LEVEL setting
    """
    logging.basicConfig(format="%(message)s", level=_resolve_level(level))
    structlog.configure(
        processors=_build_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger for a module.

    Args:
        name: Logger name (typically __name__ of the calling module)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(dialect="snowflake", statement="select")
        >>> logger.debug("sql.generated", table="myTable")
    """
    return structlog.get_logger().bind(**kwargs)


def log_generated_sql(logger: Any, statement: str, result: Any, **context: Any) -> None:
    """Emit the debug record for a rendered statement.

    ``result`` is the generator's return value: a SQL string, a
    BoundQuery-like object with ``query`` and ``bind``, or a mapping of
    column fragments. Only strings and BoundQuery results carry ``sql``.
    """
    if isinstance(result, str):
        context["sql"] = truncate_sql(result)
    elif hasattr(result, "query") and hasattr(result, "bind"):
        context["sql"] = truncate_sql(result.query)
        context["bind"] = dict(result.bind)
    logger.debug(f"sql.{statement}.generated", **context)

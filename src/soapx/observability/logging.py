"""Structured logging for soapx.

structlog is routed through the standard ``logging`` module so that host
applications keep control of handlers. Two renderers are available: a
colored console renderer for development and a JSON renderer for log
shipping.

Environment Variables:
    SOAPX_LOG_FORMAT: "json" or "console" (default)
    SOAPX_LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR
    SOAPX_DEBUG: "true"/"1" disables redaction of sensitive log fields

Example:
    >>> from soapx.observability.logging import configure_logging, get_logger
    >>> configure_logging(log_format="json", log_level="DEBUG")
    >>> logger = get_logger("soapx.transport.executor")
    >>> logger.info("soapx.transport.response", status_code=200, attempts=1)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"

ENV_LOG_FORMAT = "SOAPX_LOG_FORMAT"
ENV_LOG_LEVEL = "SOAPX_LOG_LEVEL"
ENV_DEBUG = "SOAPX_DEBUG"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Case-insensitive key fragments whose values never reach the logs
_SENSITIVE_KEY_PATTERNS = frozenset({"password", "authorization", "credentials", "secret", "token"})

_logging_configured = False


def is_debug_mode() -> bool:
    """Return True if SOAPX_DEBUG is set to a truthy value."""
    return os.environ.get(ENV_DEBUG, "").strip().lower() in ("true", "1", "yes", "on")


def _is_sensitive_key(key: str) -> bool:
    lower = key.lower()
    return any(pattern in lower for pattern in _SENSITIVE_KEY_PATTERNS)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    Nested dicts are sanitized recursively. Header maps are a typical input:
    an ``Authorization`` entry is replaced while the rest is kept.

    Example:
        >>> sanitize_for_logging({"login": "alice", "password": "secret123"})
        {'login': 'alice', 'password': '***REDACTED***'}
    """
    result: dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive_key(key):
            result[key] = REDACTED_PLACEHOLDER
        elif isinstance(value, dict):
            result[key] = sanitize_for_logging(value)
        else:
            result[key] = value
    return result


def _redact_event(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor applying sanitize_for_logging unless debug mode is on."""
    if is_debug_mode():
        return event_dict
    return sanitize_for_logging(event_dict)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_event,
    ]


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    force: bool = False,
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        log_format: "json" or "console". Defaults to SOAPX_LOG_FORMAT or "console"
        log_level: Minimum level name. Defaults to SOAPX_LOG_LEVEL or "INFO"
        force: Reconfigure even if logging was already configured
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    log_level = (log_level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()

    shared = _shared_processors()
    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring defaults on first use."""
    if not _logging_configured:
        configure_logging()
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log events."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()

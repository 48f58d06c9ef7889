"""Observability for soapx: structured logging and transport metrics.

Example:
    >>> from soapx.observability import get_logger, get_metrics
    >>> logger = get_logger(__name__)
    >>> logger.info("soapx.transport.response", status_code=200)
    >>> get_metrics().get_counter("soapx_transport_retries_total")
    0.0
"""

from soapx.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)
from soapx.observability.metrics import MetricsCollector, get_metrics, reset_metrics

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_metrics",
    "is_debug_mode",
    "reset_metrics",
    "MetricsCollector",
    "sanitize_for_logging",
]

"""
Observability module.

Provides structured logging helpers, correlation ID tracking and
request logging middleware.
"""

from docchat.observability.correlation import (
    HEADER_NAME,
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from docchat.observability.logger import configure_logging, get_logger

__all__ = [
    "HEADER_NAME",
    "configure_logging",
    "correlation_scope",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
]

"""
Structured logging helpers.

Values passed as context end up as `extra` fields on the log record. They
are flattened to short strings first: extracted PDF text, message logs and
raw provider payloads can be megabytes, and API keys must never be written
out at all.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_LENGTH = 300
_SECRET_MARKERS = ("api_key", "apikey", "token", "secret", "password")


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value as a bounded string.

    Collections are summarized by size instead of being dumped.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)} keys]"
    if isinstance(value, bytes):
        return f"bytes[{len(value)}]"

    text = value if isinstance(value, str) else str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... (+{len(text) - max_length} chars)"
    return text


def _is_secret(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


def build_context(**context: Any) -> dict[str, str]:
    """
    Turn keyword context into record extras.

    Secret-looking keys are masked.
    """
    return {
        key: "***" if _is_secret(key) else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs, e.g. session_id, failure_kind
    """
    logger.log(level, message, extra=build_context(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log a caught exception with its traceback and structured context.

    Args:
        logger: Logger instance
        message: Log message
        exc: The caught exception
        **context: Additional key-value pairs
    """
    extras = build_context(**context)
    extras["error_type"] = type(exc).__name__
    extras["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extras)

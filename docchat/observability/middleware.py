"""
FastAPI middleware for observability.

CorrelationMiddleware scopes a correlation id to each request and echoes it
back in the X-Correlation-ID header. RequestLoggingMiddleware writes one
access line per request with its duration.

Dependencies: fastapi, starlette, docchat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from docchat.observability.correlation import HEADER_NAME, correlation_scope
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

# Liveness probes hit these every few seconds
QUIET_PATHS = frozenset({"/api/v1/health", "/api/v1/health/db"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency for every HTTP request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:dispatch - {method} {path} raised",
                e,
                method=method,
                path=path,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        if response.status_code >= 500:
            level = logging.WARNING
        log_with_context(
            logger,
            level,
            f"{__name__}:dispatch - {method} {path} -> {response.status_code}",
            method=method,
            path=path,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id for the duration of one request."""

    async def dispatch(self, request: Request, call_next):
        with correlation_scope(request.headers.get(HEADER_NAME)) as correlation_id:
            response: Response = await call_next(request)
        response.headers[HEADER_NAME] = correlation_id
        return response

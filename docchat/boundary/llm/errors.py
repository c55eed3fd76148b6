"""
Vendor error normalization.

Vendor SDKs raise their own exception classes. They are classified by class
name and message text into a FailureKind with the HTTP status the answer
proxy reports.

Dependencies: docchat.core.exceptions
System role: Maps vendor failures onto the generation failure taxonomy
"""

import logging

from docchat.core.exceptions import FailureKind, ProviderError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    FailureKind.QUOTA_EXCEEDED: 402,
    FailureKind.RATE_LIMITED: 429,
    FailureKind.MISCONFIGURED_CREDENTIALS: 503,
    FailureKind.NO_RESPONSE: 502,
    FailureKind.MALFORMED_RESPONSE: 502,
    FailureKind.TRANSPORT_ERROR: 500,
}

_QUOTA_MARKERS = ("insufficient_quota", "exceeded your current quota", "quota", "billing")
_RATE_MARKERS = ("rate limit", "rate_limit", "ratelimit", "too many requests", "resource_exhausted", "429")
_CREDENTIAL_MARKERS = (
    "api key",
    "api_key",
    "apikey",
    "authentication",
    "unauthorized",
    "permission denied",
    "permissiondenied",
    "invalid credentials",
    "401",
    "403",
)


def classify_provider_error(exc: Exception, provider: str) -> ProviderError:
    """
    Convert a vendor exception into a ProviderError.

    Args:
        exc: Exception raised by the vendor client
        provider: Vendor name, included in the message

    Returns:
        ProviderError: Normalized error carrying kind and status_code
    """
    if isinstance(exc, ProviderError):
        return exc

    error_str = str(exc).lower()
    error_class = exc.__class__.__name__.lower()

    if "quota" in error_class or any(marker in error_str for marker in _QUOTA_MARKERS):
        kind = FailureKind.QUOTA_EXCEEDED
    elif "ratelimit" in error_class or "resourceexhausted" in error_class or any(
        marker in error_str for marker in _RATE_MARKERS
    ):
        kind = FailureKind.RATE_LIMITED
    elif "authentication" in error_class or "permissiondenied" in error_class or any(
        marker in error_str for marker in _CREDENTIAL_MARKERS
    ):
        kind = FailureKind.MISCONFIGURED_CREDENTIALS
    else:
        # Connection failures, timeouts and unrecognized vendor errors
        kind = FailureKind.TRANSPORT_ERROR

    logger.warning(
        f"{__name__}:classify_provider_error - {provider} {exc.__class__.__name__} "
        f"classified as {kind.value}"
    )
    return ProviderError(
        kind,
        f"{provider} request failed: {exc}",
        status_code=STATUS_BY_KIND[kind],
        details={"provider": provider, "error_class": exc.__class__.__name__},
    )


def missing_key_error(provider: str, key_name: str) -> ProviderError:
    """Build the error raised when a vendor API key is not configured."""
    return ProviderError(
        FailureKind.MISCONFIGURED_CREDENTIALS,
        f"{key_name} not configured",
        status_code=STATUS_BY_KIND[FailureKind.MISCONFIGURED_CREDENTIALS],
        details={"provider": provider, "missing_key": key_name},
    )

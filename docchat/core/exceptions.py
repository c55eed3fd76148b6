"""
Exception hierarchy for docchat.

Layered exception structure mirroring the error taxonomy: extraction,
persistence, not-found, and generation failures.
All exceptions carry a details dict for observability.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Classified outcome of a failed answer-generation call."""

    QUOTA_EXCEEDED = "quota_exceeded"
    RATE_LIMITED = "rate_limited"
    MISCONFIGURED_CREDENTIALS = "misconfigured_credentials"
    NO_RESPONSE = "no_response"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_ERROR = "transport_error"


class DocChatException(Exception):
    """Base exception for all docchat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ExtractionError(DocChatException):
    """Raised when a file yields no usable text."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, details)


class PersistenceError(DocChatException):
    """Raised when a store read, write or delete fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class SessionNotFoundError(DocChatException):
    """Raised when a chat session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class DocumentNotFoundError(DocChatException):
    """Raised when one or more document ids cannot be resolved."""

    def __init__(self, document_ids: list[str], details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_ids"] = document_ids
        super().__init__("No documents found with the provided IDs", details)


class GenerationError(DocChatException):
    """Raised inside the generation path; always carries a FailureKind."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["kind"] = kind.value
        if status_code is not None:
            details["status_code"] = status_code
        self.kind = kind
        self.status_code = status_code
        super().__init__(message, details)


class ProviderError(GenerationError):
    """Raised by an LLM vendor adapter after normalizing the vendor's error."""

    pass


class ConversationBusyError(DocChatException):
    """Raised when a message is sent while a response is still outstanding."""

    def __init__(self, session_id: str | None = None) -> None:
        details = {"session_id": session_id} if session_id else {}
        super().__init__("A response is still being generated for this conversation", details)


class RemoteFetchError(DocChatException):
    """Raised when a remote PDF cannot be fetched or is not a PDF."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int = 502,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["url"] = url
        details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)

"""Adapters between domain models and persisted rows."""

from docchat.application.adapters.row_adapter import (
    document_to_row,
    message_to_row,
    row_to_document,
    row_to_message,
    row_to_session,
    summarize_document,
)

__all__ = [
    "document_to_row",
    "message_to_row",
    "row_to_document",
    "row_to_message",
    "row_to_session",
    "summarize_document",
]

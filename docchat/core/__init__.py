"""
Core business logic module.

Contains the exception hierarchy and the domain rules shared by services:
title policy, recency timestamps, generation call state, citation parsing
and the debounced saver.
"""

from docchat.core.exceptions import (
    DocChatException,
    ValidationError,
    ExtractionError,
    PersistenceError,
    SessionNotFoundError,
    DocumentNotFoundError,
    GenerationError,
    ProviderError,
    ConversationBusyError,
    RemoteFetchError,
    FailureKind,
)
from docchat.core.titles import DEFAULT_TITLE, truncate_title
from docchat.core.clock import ensure_aware, next_timestamp, utc_now
from docchat.core.generation_state import GenerationCall, GenerationState
from docchat.core.citations import parse_citations

__all__ = [
    # Exceptions
    "DocChatException",
    "ValidationError",
    "ExtractionError",
    "PersistenceError",
    "SessionNotFoundError",
    "DocumentNotFoundError",
    "GenerationError",
    "ProviderError",
    "ConversationBusyError",
    "RemoteFetchError",
    "FailureKind",
    # Domain rules
    "DEFAULT_TITLE",
    "truncate_title",
    "ensure_aware",
    "next_timestamp",
    "utc_now",
    "GenerationCall",
    "GenerationState",
    "parse_citations",
]

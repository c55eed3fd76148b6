"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, ChatSessionModel, ChatMessageModel: Persisted entities
  - document_crud, session_crud, message_crud: CRUD operation singletons

Dependencies: sqlalchemy, docchat.configs
System role: Database adapter for documents, chat sessions and message logs.
"""

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docchat.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docchat.boundary.db.models import ChatMessageModel, ChatSessionModel, DocumentModel
from docchat.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    MessageCRUD,
    SessionCRUD,
    document_crud,
    message_crud,
    session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "ChatSessionModel",
    "ChatMessageModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "MessageCRUD",
    "SessionCRUD",
    # CRUD singletons
    "document_crud",
    "message_crud",
    "session_crud",
]

"""
Database models package.

Exports:
  - DocumentModel: Uploaded document with extracted text
  - ChatSessionModel: Chat session
  - ChatMessageModel: Message log row

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from docchat.boundary.db.models.document_model import DocumentModel
from docchat.boundary.db.models.session_model import ChatSessionModel
from docchat.boundary.db.models.message_model import ChatMessageModel

__all__ = [
    "DocumentModel",
    "ChatSessionModel",
    "ChatMessageModel",
]

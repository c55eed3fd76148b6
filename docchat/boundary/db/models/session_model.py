"""
Chat session ORM model.

A titled conversation holding a snapshot of the document ids active when it
was created. Its message log lives in chat_messages.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Session persistence for conversation history
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChatSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        id: UUID string primary key
        title: Display title ("New Chat" or the truncated first question)
        document_ids: JSON list of document ids; not kept in sync with the
            document store
        created_at: Creation timestamp (UTC)
        updated_at: Bumped on every log write and rename (UTC)

    Relationships:
        messages: One-to-many with ChatMessageModel (cascade delete)
    """

    __tablename__ = "chat_sessions"

    title: Mapped[str] = mapped_column(String(255), nullable=False, default="New Chat")
    document_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    messages = relationship(
        "ChatMessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

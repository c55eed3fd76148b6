"""
Chat message ORM model.

One row per message in a session's log. Rows are replaced wholesale on every
save and read back ordered by timestamp.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Message log persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, UUIDMixin


class ChatMessageModel(Base, UUIDMixin):
    """
    Chat message ORM model.

    Attributes:
        id: Message id (client generated)
        chat_id: Owning session, ON DELETE CASCADE
        text: Message body
        sender: "user" or "bot"
        timestamp: Message time (UTC)
        source_info: JSON citation block, null for messages without citations
    """

    __tablename__ = "chat_messages"

    chat_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    sender: Mapped[str] = mapped_column(String(10), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    source_info: Mapped[dict | None] = mapped_column(JSON, nullable=True, default=None)

    session = relationship("ChatSessionModel", back_populates="messages")

"""
Document ORM model.

Represents an uploaded PDF together with its extracted text.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Document persistence
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, UUIDMixin
from docchat.core.clock import utc_now


class DocumentModel(Base, UUIDMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID string primary key
        name: Original filename
        size: File size in bytes
        type: MIME type (always application/pdf after intake filtering)
        content: Extracted text, pages joined by blank lines
        last_modified: Client-reported modification time (ms since epoch)
        created_at: Insert timestamp, used for listing order
    """

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(255), nullable=False, doc="Original filename")
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(100), nullable=False, default="application/pdf")
    content: Mapped[str] = mapped_column(Text, nullable=False)
    last_modified: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

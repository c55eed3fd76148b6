"""
Row adapters.

Translate between pydantic domain models and the column dicts / ORM rows of
the store. Citation fields missing from a stored row come back as empty
strings and an empty source list.

Dependencies: docchat.models, docchat.boundary.db.models
System role: Model <-> persistence mapping
"""

from typing import Any

from docchat.boundary.db.models import ChatMessageModel, ChatSessionModel, DocumentModel
from docchat.core.clock import ensure_aware
from docchat.models.chat import ChatMessage, Sender, SourceInfo
from docchat.models.document import Document, DocumentSummary
from docchat.models.session import ChatSession


def message_to_row(session_id: str, message: ChatMessage) -> dict[str, Any]:
    """
    Build the chat_messages column dict for a message.

    Args:
        session_id: Owning session (overrides message.session_id)
        message: Domain message

    Returns:
        dict: Column values; source_info is None when the message has none
    """
    source_info = None
    if message.source_info is not None:
        source_info = {
            "sourceDocuments": list(message.source_info.source_documents),
            "pageNumber": message.source_info.page_number,
            "sectionInfo": message.source_info.section_info,
            "paragraphInfo": message.source_info.paragraph_info,
        }
    return {
        "id": message.id,
        "chat_id": session_id,
        "text": message.text,
        "sender": message.sender.value,
        "timestamp": ensure_aware(message.timestamp),
        "source_info": source_info,
    }


def row_to_message(row: ChatMessageModel) -> ChatMessage:
    """Convert a chat_messages row into a domain message."""
    source_info = None
    if row.source_info:
        raw = row.source_info
        source_info = SourceInfo(
            source_documents=list(raw.get("sourceDocuments") or []),
            page_number=raw.get("pageNumber") or "",
            section_info=raw.get("sectionInfo") or "",
            paragraph_info=raw.get("paragraphInfo") or "",
        )
    return ChatMessage(
        id=row.id,
        session_id=row.chat_id,
        text=row.text,
        sender=Sender(row.sender),
        timestamp=ensure_aware(row.timestamp),
        source_info=source_info,
    )


def row_to_session(row: ChatSessionModel) -> ChatSession:
    """Convert a chat_sessions row into a domain session."""
    return ChatSession(
        id=row.id,
        title=row.title,
        document_ids=list(row.document_ids or []),
        created_at=ensure_aware(row.created_at),
        updated_at=ensure_aware(row.updated_at),
    )


def document_to_row(document: Document) -> dict[str, Any]:
    """Build the documents column dict for a document."""
    return {
        "id": document.id,
        "name": document.name,
        "size": document.size,
        "type": document.mime_type,
        "content": document.content,
        "last_modified": document.last_modified,
    }


def row_to_document(row: DocumentModel) -> Document:
    """Convert a documents row into a domain document."""
    return Document(
        id=row.id,
        name=row.name,
        size=row.size,
        mime_type=row.type,
        content=row.content,
        last_modified=row.last_modified,
    )


def summarize_document(document: Document) -> DocumentSummary:
    """Drop the extracted text for listings."""
    return DocumentSummary(
        id=document.id,
        name=document.name,
        size=document.size,
        mime_type=document.mime_type,
        last_modified=document.last_modified,
        content_length=len(document.content),
    )

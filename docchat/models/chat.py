"""
Chat domain models and schemas.

Messages, citation metadata and message-log request/response schemas.
JSON payloads use camelCase field names; Python attributes stay snake_case.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


class SourceInfo(BaseModel):
    """Citation metadata attached to a bot message."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_documents: list[str] = Field(default_factory=list, description="Cited document names, in order")
    page_number: str = Field(default="", description="Page reference")
    section_info: str = Field(default="", description="Section reference")
    paragraph_info: str = Field(default="", description="Paragraph reference")


class ChatMessage(BaseModel):
    """A single entry in a session's message log."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    session_id: str | None = None
    text: str
    sender: Sender
    timestamp: datetime
    source_info: SourceInfo | None = None


class SaveMessagesRequest(BaseModel):
    """Request schema for replacing a session's message log."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: list[ChatMessage] = Field(default_factory=list)


class ChatHistoryResponse(BaseModel):
    """Response schema for a session's message log."""

    messages: list[ChatMessage]
    total: int = Field(description="Total number of messages")

"""
Conversation event schemas for the WebSocket channel.

Defines event types and payloads exchanged with the conversation controller.

Dependencies: pydantic
System role: Conversation protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StreamEventType(str, Enum):
    """Server-to-client event types."""

    CONNECTED = "connected"
    SESSION_CREATED = "session_created"
    SESSION_LOADED = "session_loaded"
    MESSAGE = "message"
    AWAITING = "awaiting"
    BUSY = "busy"
    GENERATION_FAILED = "generation_failed"
    ERROR = "error"
    PONG = "pong"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    SEND = "send"
    NEW_CHAT = "new_chat"
    SWITCH_SESSION = "switch_session"
    PING = "ping"


class StreamEvent(BaseModel):
    """
    Base conversation event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}


class ClientSendEvent(BaseModel):
    """
    Client question payload.

    Attributes:
        question: User's question
        document_ids: Active documents; all stored documents when omitted
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str = Field(min_length=1)
    document_ids: list[str] | None = None


class ClientSwitchEvent(BaseModel):
    """Client request to make another session active."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str

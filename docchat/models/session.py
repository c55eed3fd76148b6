"""
Session domain models and schemas.

Request/response schemas for chat session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChatSession(BaseModel):
    """A titled conversation with a snapshot of its document ids."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    document_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CreateSessionRequest(BaseModel):
    """Request schema for creating a new session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_ids: list[str] = Field(default_factory=list, description="Documents active at creation")
    title: str | None = Field(default=None, description="Session title; defaults to 'New Chat'")


class RenameSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    title: str = Field(min_length=1, description="New session title")

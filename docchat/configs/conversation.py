"""
Conversation configuration settings.

Debounce timing and wording used by the conversation controller.

Dependencies: pydantic, pydantic_settings
System role: Chat lifecycle configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class ConversationSettings(BaseSettings):
    """Chat session lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CONVERSATION_",
        case_sensitive=False,
        extra="ignore",
    )

    save_quiet_period: float = Field(
        default=1.0,
        description="Seconds without log mutations before a save is issued",
    )
    title_max_length: int = Field(
        default=30,
        description="Characters of the first question kept in a session title",
    )
    default_title: str = Field(default="New Chat", description="Title when none is supplied")

"""
Answer generation configuration settings.

Selects the LLM vendor used by the answer proxy and tells the generation
gateway where that proxy lives.

Dependencies: pydantic, pydantic_settings
System role: LLM provider and proxy configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """LLM vendor and answer-proxy configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="gemini",
        description="Answer model vendor: 'gemini', 'openai' or 'ollama'",
    )

    gemini_model: str = Field(default="gemini-1.5-pro", description="Gemini model name")
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GENERATION_GOOGLE_API_KEY", "GOOGLE_AI_API_KEY", "GOOGLE_API_KEY"),
        description="Google AI Studio API key",
    )

    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI chat model name")
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GENERATION_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="OpenAI API key",
    )

    ollama_model: str = Field(default="llama3.2", description="Ollama model tag")
    ollama_host: str = Field(default="http://localhost:11434", description="Ollama server URL")

    temperature: float = Field(default=0.2, description="Sampling temperature")
    max_output_tokens: int = Field(default=2048, description="Maximum answer length in tokens")

    proxy_url: str = Field(
        default="http://localhost:8000/api/v1/functions/generate-ai-response",
        description="Endpoint the generation gateway posts {question, documentIds} to",
    )
    request_timeout: float = Field(default=60.0, description="Gateway request timeout in seconds")

"""
Document intake configuration settings.

Limits and endpoints for PDF upload and URL intake.

Dependencies: pydantic, pydantic_settings
System role: Upload and URL-fetch configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class IntakeSettings(BaseSettings):
    """PDF upload and URL intake configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INTAKE_",
        case_sensitive=False,
        extra="ignore",
    )

    low_text_threshold: int = Field(
        default=100,
        description="Extracted text shorter than this triggers a low-yield warning",
    )
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, description="Per-file upload limit")

    pdf_proxy_url: str = Field(
        default="http://localhost:8000/api/v1/functions/proxy-pdf",
        description="Endpoint used to fetch remote PDFs as base64",
    )
    fetch_timeout: float = Field(default=30.0, description="Remote PDF fetch timeout in seconds")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
        description="User-Agent sent when fetching remote PDFs",
    )

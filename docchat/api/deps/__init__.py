"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_answer_model_factory,
    get_answer_service,
    get_db_session_factory,
    get_document_service,
    get_generation_gateway,
    get_intake_service,
    get_message_service,
    get_pdf_proxy_client,
    get_remote_pdf_fetcher,
    get_service_cache,
    get_session_service,
)

__all__ = [
    "get_answer_model_factory",
    "get_answer_service",
    "get_db_session_factory",
    "get_document_service",
    "get_generation_gateway",
    "get_intake_service",
    "get_message_service",
    "get_pdf_proxy_client",
    "get_remote_pdf_fetcher",
    "get_service_cache",
    "get_session_service",
]

"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docchat.configs, docchat.application, docchat.boundary
System role: DI container for service injection
"""

from typing import Callable

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docchat.configs import get_settings
from docchat.boundary.db import get_async_db, get_async_session_factory
from docchat.boundary.http import AnswerProxyClient, PdfProxyClient, RemotePdfFetcher
from docchat.boundary.llm import AnswerModel, get_answer_model
from docchat.application.services import (
    AnswerService,
    DocumentService,
    GenerationGateway,
    IntakeService,
    MessageService,
    PdfExtractor,
    SessionService,
)


class ServiceCache:
    """Container for process-wide client instances."""

    def __init__(self):
        self._http_client = None
        self._pdf_extractor = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get shared httpx client (connection pooling across requests)."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(follow_redirects=True)
        return self._http_client

    @property
    def pdf_extractor(self) -> PdfExtractor:
        """Get cached PDF extractor."""
        if self._pdf_extractor is None:
            settings = get_settings()
            self._pdf_extractor = PdfExtractor(
                low_text_threshold=settings.intake.low_text_threshold,
            )
        return self._pdf_extractor

    async def aclose(self) -> None:
        """Close clients and clear all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._pdf_extractor = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_db_session_factory() -> async_sessionmaker:
    """
    Get the session factory used by long-lived connections.

    WebSocket handlers open one short AsyncSession per store call instead of
    holding a request-scoped session for the connection's lifetime.
    """
    return get_async_session_factory()


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db)


def get_message_service(db: AsyncSession = Depends(get_async_db)) -> MessageService:
    """
    Get message service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        MessageService: Message service instance
    """
    return MessageService(db=db)


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(db=db)


def get_pdf_proxy_client() -> PdfProxyClient:
    """Get PDF proxy client configured from intake settings."""
    settings = get_settings()
    return PdfProxyClient(
        proxy_url=settings.intake.pdf_proxy_url,
        timeout=settings.intake.fetch_timeout,
        client=get_service_cache().http_client,
    )


def get_intake_service(
    documents: DocumentService = Depends(get_document_service),
    pdf_proxy: PdfProxyClient = Depends(get_pdf_proxy_client),
) -> IntakeService:
    """
    Get intake service instance.

    Args:
        documents: Document service (injected)
        pdf_proxy: PDF proxy client (injected)

    Returns:
        IntakeService: Upload and URL intake service
    """
    settings = get_settings()
    return IntakeService(
        documents=documents,
        extractor=get_service_cache().pdf_extractor,
        pdf_proxy=pdf_proxy,
        max_upload_bytes=settings.intake.max_upload_bytes,
    )


def get_remote_pdf_fetcher() -> RemotePdfFetcher:
    """Get the fetcher used by the PDF proxy endpoint."""
    settings = get_settings()
    return RemotePdfFetcher(
        user_agent=settings.intake.user_agent,
        timeout=settings.intake.fetch_timeout,
        max_bytes=settings.intake.max_upload_bytes,
        client=get_service_cache().http_client,
    )


def get_generation_gateway() -> GenerationGateway:
    """
    Get generation gateway instance.

    Returns:
        GenerationGateway: Gateway posting to GENERATION_PROXY_URL
    """
    settings = get_settings()
    client = AnswerProxyClient(
        proxy_url=settings.generation.proxy_url,
        timeout=settings.generation.request_timeout,
        client=get_service_cache().http_client,
    )
    return GenerationGateway(client=client)


def get_answer_model_factory() -> Callable[[], AnswerModel]:
    """Get a factory building the configured AnswerModel on demand."""
    settings = get_settings()
    return lambda: get_answer_model(settings.generation)


def get_answer_service(
    documents: DocumentService = Depends(get_document_service),
    model_factory: Callable[[], AnswerModel] = Depends(get_answer_model_factory),
) -> AnswerService:
    """
    Get answer proxy service instance.

    Args:
        documents: Document service (injected)
        model_factory: AnswerModel factory (injected)

    Returns:
        AnswerService: Answer proxy service
    """
    return AnswerService(documents=documents, model_factory=model_factory)

"""
Chat API endpoint.

Routes: POST /chat/ask - Ask a question about the active documents

Dependencies: docchat.application.services
System role: One-shot generation HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from docchat.application.services.document_service import DocumentService
from docchat.application.services.generation_gateway import GenerationGateway
from docchat.api.deps import get_document_service, get_generation_gateway
from docchat.models.generation import AskRequest, AskResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    gateway: GenerationGateway = Depends(get_generation_gateway),
    document_service: DocumentService = Depends(get_document_service),
) -> AskResponse:
    """
    Ask a question.

    Always answers 200 with a bot message; generation failures are carried
    in the message text and the failure field.

    Args:
        request: Question, optional document ids and session id
        gateway: Injected GenerationGateway
        document_service: Injected DocumentService

    Returns:
        AskResponse: Bot message and failure kind, if any
    """
    document_ids = request.document_ids
    if document_ids is None:
        document_ids = [doc.id for doc in await document_service.list_documents()]

    result = await gateway.generate(request.question, document_ids, request.session_id)
    return AskResponse(
        message=result.message,
        failure=result.failure.value if result.failure else None,
    )

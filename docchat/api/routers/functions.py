"""
Proxy function endpoints.

Routes:
- POST /functions/generate-ai-response - Answer proxy ({question, documentIds} -> {text, ...})
- POST /functions/proxy-pdf - Fetch a remote PDF, return it base64 encoded

Both return {"error": ...} bodies with a meaningful status on failure.

Dependencies: docchat.application.services, docchat.boundary.http
System role: Server-side proxies for generation and URL intake
"""

import base64
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from docchat.application.services.answer_service import AnswerService
from docchat.api.deps import get_answer_service, get_remote_pdf_fetcher
from docchat.boundary.http.remote_pdf import RemotePdfFetcher
from docchat.core.exceptions import (
    DocumentNotFoundError,
    GenerationError,
    PersistenceError,
    RemoteFetchError,
    ValidationError,
)
from docchat.models.generation import (
    GenerateErrorResponse,
    GenerateRequest,
    GenerateResponse,
    PdfProxyRequest,
    PdfProxyResponse,
)
from docchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


def _error(status_code: int, error: str, kind: str | None = None) -> JSONResponse:
    body = GenerateErrorResponse(error=error, kind=kind).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.post(
    "/generate-ai-response",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": GenerateErrorResponse},
        404: {"model": GenerateErrorResponse},
        500: {"model": GenerateErrorResponse},
    },
)
async def generate_ai_response(
    request: GenerateRequest,
    answer_service: AnswerService = Depends(get_answer_service),
):
    """
    Answer a question from the selected documents.

    Args:
        request: {question, documentIds}
        answer_service: Injected AnswerService

    Returns:
        GenerateResponse, or an error body with status 400/404/402/429/5xx
    """
    try:
        return await answer_service.answer(request)
    except ValidationError as e:
        return _error(400, e.message)
    except DocumentNotFoundError as e:
        return _error(404, e.message)
    except GenerationError as e:
        log_with_context(
            logger,
            logging.WARNING,
            f"{__name__}:generate_ai_response - generation_failure: {e.kind.value}",
            failure_kind=e.kind.value,
            status_code=e.status_code,
        )
        return _error(e.status_code or 500, e.message, kind=e.kind.value)
    except PersistenceError as e:
        return _error(500, e.message)
    except ValueError as e:
        logger.error(f"{__name__}:generate_ai_response - {e}")
        return _error(500, str(e))


@router.post(
    "/proxy-pdf",
    response_model=PdfProxyResponse,
    responses={400: {"model": GenerateErrorResponse}, 502: {"model": GenerateErrorResponse}},
)
async def proxy_pdf(
    request: PdfProxyRequest,
    fetcher: RemotePdfFetcher = Depends(get_remote_pdf_fetcher),
):
    """
    Fetch a remote PDF on behalf of the client.

    Args:
        request: {url}
        fetcher: Injected RemotePdfFetcher

    Returns:
        PdfProxyResponse with base64 data, or an error body
    """
    if not request.url.strip():
        return _error(400, "Invalid URL provided")

    try:
        pdf = await fetcher.fetch(request.url.strip())
    except RemoteFetchError as e:
        logger.warning(f"{__name__}:proxy_pdf - {e.message}")
        return _error(e.status_code, e.message)

    return PdfProxyResponse(
        data=base64.b64encode(pdf.data).decode("ascii"),
        content_type=pdf.content_type,
        size=len(pdf.data),
    )

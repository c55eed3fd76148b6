"""
Response generation gateway.

Sends {question, documentIds} to the answer proxy and always resolves to a
bot ChatMessage. Failures are classified into a FailureKind, turned into
user-facing text and logged as a structured generation_failure record.
There is no automatic retry.

Dependencies: httpx, docchat.boundary.http, docchat.core
System role: Client-side half of answer generation
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from docchat.boundary.http.answer_proxy_client import AnswerProxyClient
from docchat.core.clock import utc_now
from docchat.core.exceptions import FailureKind, GenerationError
from docchat.core.generation_state import GenerationCall, GenerationState
from docchat.models.chat import ChatMessage, Sender, SourceInfo
from docchat.models.document import Document
from docchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = "Please upload some PDF documents first so I can answer your questions."

FAILURE_MESSAGES = {
    FailureKind.QUOTA_EXCEEDED: (
        "The AI service quota has been exceeded. Please check the API plan and "
        "billing details, then try again."
    ),
    FailureKind.RATE_LIMITED: (
        "The AI service is receiving too many requests right now. "
        "Please wait about a minute and try again."
    ),
    FailureKind.MISCONFIGURED_CREDENTIALS: (
        "The AI service is not configured correctly ({detail}). "
        "Please set the API key and try again."
    ),
    FailureKind.NO_RESPONSE: "The AI service did not return an answer. Please try asking again.",
    FailureKind.MALFORMED_RESPONSE: (
        "The AI service returned a response I couldn't read. Please try again."
    ),
    FailureKind.TRANSPORT_ERROR: (
        "I'm sorry, but I couldn't generate a response at this time. Please try again later."
    ),
}

_QUOTA_MARKERS = ("quota", "billing", "insufficient_quota")
_CREDENTIAL_MARKERS = ("api key", "api_key", "not configured", "unauthorized", "authentication")
_CITATION_FIELDS = ("pageNumber", "sectionInfo", "paragraphInfo")


@dataclass
class GenerationResult:
    """Outcome of one gateway call."""

    message: ChatMessage
    state: GenerationState
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def failure_text(kind: FailureKind, detail: str | None = None) -> str:
    """User-facing bot text for a failure kind."""
    template = FAILURE_MESSAGES[kind]
    if kind is FailureKind.MISCONFIGURED_CREDENTIALS:
        return template.format(detail=detail or "missing API key")
    return template


def _document_ids(documents: Sequence[Document | str]) -> list[str]:
    return [doc if isinstance(doc, str) else doc.id for doc in documents]


def classify_response(response: httpx.Response) -> tuple[dict[str, Any] | None, GenerationError | None]:
    """
    Classify an answer proxy response.

    Args:
        response: Proxy response

    Returns:
        tuple: (success payload, None) or (None, GenerationError)
    """
    status = response.status_code
    raw = response.text

    body: Any = None
    if raw and raw.strip():
        try:
            body = response.json()
        except ValueError:
            body = None
            if response.is_success:
                return None, GenerationError(
                    FailureKind.MALFORMED_RESPONSE,
                    "Answer proxy returned non-JSON body",
                    status_code=status,
                )

    if response.is_success:
        if body is None:
            return None, GenerationError(
                FailureKind.NO_RESPONSE, "Answer proxy returned an empty body", status_code=status
            )
        if not isinstance(body, dict):
            return None, GenerationError(
                FailureKind.MALFORMED_RESPONSE, "Answer proxy returned a non-object body", status_code=status
            )
        if isinstance(body.get("error"), str) and "text" not in body:
            return None, _classify_error(status, body)
        text = body.get("text")
        if not isinstance(text, str):
            return None, GenerationError(
                FailureKind.MALFORMED_RESPONSE, "Answer proxy payload has no text", status_code=status
            )
        if not text.strip():
            return None, GenerationError(
                FailureKind.NO_RESPONSE, "Answer proxy returned empty text", status_code=status
            )
        problem = _citation_problem(body)
        if problem:
            return None, GenerationError(FailureKind.MALFORMED_RESPONSE, problem, status_code=status)
        return body, None

    return None, _classify_error(status, body if isinstance(body, dict) else {"error": raw or ""})


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _citation_problem(body: dict[str, Any]) -> str | None:
    """Describe the first citation field with an unusable type, if any."""
    sources = body.get("sourceDocuments")
    if sources is not None and not isinstance(sources, str):
        if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
            return "sourceDocuments must be a string or a list of strings"
    for field in _CITATION_FIELDS:
        value = body.get(field)
        if value is not None and not _is_scalar(value):
            return f"{field} must be a string or a number"
    return None


def _classify_error(status: int, body: dict[str, Any]) -> GenerationError:
    error_text = str(body.get("error") or "")
    lowered = f"{error_text} {body.get('details') or ''}".lower()

    declared = body.get("kind")
    if declared in FailureKind._value2member_map_:
        kind = FailureKind(declared)
    elif status == 402 or any(marker in lowered for marker in _QUOTA_MARKERS):
        kind = FailureKind.QUOTA_EXCEEDED
    elif status == 429 or "rate limit" in lowered:
        kind = FailureKind.RATE_LIMITED
    elif status in (401, 403) or any(marker in lowered for marker in _CREDENTIAL_MARKERS):
        kind = FailureKind.MISCONFIGURED_CREDENTIALS
    elif "no response" in lowered:
        kind = FailureKind.NO_RESPONSE
    else:
        kind = FailureKind.TRANSPORT_ERROR

    return GenerationError(kind, error_text or f"Answer proxy returned {status}", status_code=status)


def _source_info(payload: dict[str, Any]) -> SourceInfo | None:
    if not any(payload.get(key) for key in ("sourceDocuments", *_CITATION_FIELDS)):
        return None
    sources = payload.get("sourceDocuments") or []
    if isinstance(sources, str):
        sources = [sources]
    return SourceInfo(
        source_documents=[str(s) for s in sources],
        page_number=str(payload.get("pageNumber") or ""),
        section_info=str(payload.get("sectionInfo") or ""),
        paragraph_info=str(payload.get("paragraphInfo") or ""),
    )


class GenerationGateway:
    """Turns a question and the active documents into a bot message."""

    def __init__(self, client: AnswerProxyClient) -> None:
        """
        Initialize gateway.

        Args:
            client: HTTP client for the answer proxy
        """
        self.client = client

    async def ask(
        self,
        question: str,
        documents: Sequence[Document | str],
        session_id: str | None = None,
    ) -> ChatMessage:
        """
        Ask a question about the active documents.

        Args:
            question: User's question
            documents: Active documents (or their ids)
            session_id: Session the answer will be appended to

        Returns:
            ChatMessage: Bot message; failures are rendered as text
        """
        result = await self.generate(question, documents, session_id)
        return result.message

    async def generate(
        self,
        question: str,
        documents: Sequence[Document | str],
        session_id: str | None = None,
    ) -> GenerationResult:
        """
        Like ask(), but also reports the call state and failure kind.

        With no documents the fixed upload prompt is returned and no request
        is made.
        """
        call = GenerationCall()
        document_ids = _document_ids(documents)

        if not document_ids:
            return GenerationResult(
                message=self._bot_message(NO_DOCUMENTS_MESSAGE, session_id),
                state=call.state,
            )

        call.start()
        try:
            response = await self.client.request_answer(question, document_ids)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = GenerationError(FailureKind.TRANSPORT_ERROR, f"{type(e).__name__}: {e}")
            return self._failed(call, error, session_id)

        payload, error = classify_response(response)
        if error is not None:
            return self._failed(call, error, session_id)

        call.deliver()
        message = self._bot_message(payload["text"], session_id, _source_info(payload))
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:generate - Answer delivered",
            session_id=session_id,
            document_count=len(document_ids),
        )
        return GenerationResult(message=message, state=call.state)

    def _failed(
        self,
        call: GenerationCall,
        error: GenerationError,
        session_id: str | None,
    ) -> GenerationResult:
        call.fail(error.kind)
        log_with_context(
            logger,
            logging.WARNING,
            f"{__name__}:generate - generation_failure: {error.kind.value}",
            failure_kind=error.kind.value,
            status_code=error.status_code,
            error_msg=error.message,
            session_id=session_id,
        )
        return GenerationResult(
            message=self._bot_message(failure_text(error.kind, error.message), session_id),
            state=call.state,
            failure=error.kind,
        )

    @staticmethod
    def _bot_message(
        text: str,
        session_id: str | None,
        source_info: SourceInfo | None = None,
    ) -> ChatMessage:
        return ChatMessage(
            id=str(uuid.uuid4()),
            session_id=session_id,
            text=text,
            sender=Sender.BOT,
            timestamp=utc_now(),
            source_info=source_info,
        )

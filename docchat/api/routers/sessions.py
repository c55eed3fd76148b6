"""
Session API endpoints.

Routes:
- POST /sessions - Create new session
- GET /sessions - List sessions, most recently updated first
- GET /sessions/{id} - Get session
- PATCH /sessions/{id} - Rename session
- DELETE /sessions/{id} - Delete session and its messages
- GET /sessions/{id}/messages - Load message log
- PUT /sessions/{id}/messages - Replace message log

Dependencies: docchat.application.services, docchat.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from docchat.application.services.message_service import MessageService
from docchat.application.services.session_service import SessionService
from docchat.api.deps import get_message_service, get_session_service
from docchat.core.exceptions import SessionNotFoundError, ValidationError
from docchat.core.titles import DEFAULT_TITLE
from docchat.models.chat import ChatHistoryResponse, SaveMessagesRequest
from docchat.models.session import ChatSession, CreateSessionRequest, RenameSessionRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=ChatSession, status_code=201)
async def create_session(
    request: CreateSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> ChatSession:
    """
    Create new session.

    Args:
        request: Document ids and optional title
        session_service: Injected SessionService

    Returns:
        ChatSession: Created session

    Raises:
        HTTPException(500): Creation failed
    """
    session = await session_service.create_session(
        request.document_ids,
        title=request.title or DEFAULT_TITLE,
    )
    if session is None:
        raise HTTPException(status_code=500, detail="Failed to create chat session.")
    return session


@router.get("", response_model=list[ChatSession])
async def list_sessions(
    limit: int = 100,
    offset: int = 0,
    session_service: SessionService = Depends(get_session_service),
) -> list[ChatSession]:
    """
    List sessions with pagination, most recently updated first.

    Args:
        limit: Maximum number of sessions (default 100)
        offset: Number to skip (default 0)
        session_service: Injected SessionService

    Returns:
        list[ChatSession]: Sessions
    """
    return await session_service.list_sessions(limit=limit, offset=offset)


@router.get("/{session_id}", response_model=ChatSession)
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> ChatSession:
    """
    Get session by ID.

    Raises:
        HTTPException(404): Session not found
    """
    session = await session_service.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


@router.patch("/{session_id}", response_model=ChatSession)
async def rename_session(
    session_id: str,
    request: RenameSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> ChatSession:
    """
    Rename a session.

    Args:
        session_id: Session id
        request: New title
        session_service: Injected SessionService

    Returns:
        ChatSession: Updated session

    Raises:
        HTTPException(400): Blank title
        HTTPException(404): Session not found
        HTTPException(500): Update failed
    """
    try:
        renamed = await session_service.rename_session(session_id, request.title)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if not renamed:
        raise HTTPException(status_code=500, detail="Failed to update chat title.")

    session = await session_service.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> Response:
    """
    Delete session and its message log.

    Raises:
        HTTPException(404): Session not found
        HTTPException(500): Deletion failed
    """
    try:
        deleted = await session_service.delete_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if not deleted:
        raise HTTPException(status_code=500, detail="Failed to delete chat session.")
    return Response(status_code=204)


@router.get("/{session_id}/messages", response_model=ChatHistoryResponse)
async def get_messages(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
    message_service: MessageService = Depends(get_message_service),
) -> ChatHistoryResponse:
    """
    Load a session's message log, oldest first.

    Raises:
        HTTPException(404): Session not found
    """
    if await session_service.get_session(session_id) is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    messages = await message_service.load_messages(session_id)
    return ChatHistoryResponse(messages=messages, total=len(messages))


@router.put("/{session_id}/messages", status_code=204)
async def save_messages(
    session_id: str,
    request: SaveMessagesRequest,
    message_service: MessageService = Depends(get_message_service),
) -> Response:
    """
    Replace a session's message log wholesale.

    Raises:
        HTTPException(404): Session not found
        HTTPException(500): Save failed; the previous log is kept
    """
    try:
        saved = await message_service.save_messages(session_id, request.messages)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if not saved:
        raise HTTPException(status_code=500, detail="Failed to save chat messages.")
    return Response(status_code=204)

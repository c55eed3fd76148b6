"""
WebSocket conversation endpoint.

One connection drives one ConversationController: one active session, one
message log, one awaiting-response guard.

Routes: WS /ws/conversation

Dependencies: docchat.application.services.conversation_service
System role: Conversation HTTP API
"""

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from docchat.application.services.conversation_service import ConversationController
from docchat.api.deps import get_db_session_factory, get_generation_gateway
from docchat.configs import get_settings
from docchat.core.exceptions import ConversationBusyError
from docchat.models.streaming import (
    ClientEventType,
    ClientSendEvent,
    ClientSwitchEvent,
    StreamEvent,
    StreamEventType,
)
from docchat.observability.correlation import HEADER_NAME, set_correlation_id

logger = logging.getLogger(__name__)
router = APIRouter(tags=["conversation"])


def _error_event(code: str, message: str) -> StreamEvent:
    return StreamEvent(event=StreamEventType.ERROR, data={"code": code, "message": message})


@router.websocket("/ws/conversation")
async def websocket_conversation(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for a conversation thread.

    Client sends:
        {"event": "send", "data": {"question": "...", "documentIds": [...]}}
        {"event": "new_chat"}
        {"event": "switch_session", "data": {"sessionId": "..."}}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"connectionId": "..."}}
        {"event": "session_created", "data": {"session": {...}}}
        {"event": "awaiting", "data": {"sessionId": "...", "message": {...}}}
        {"event": "message", "data": {"sessionId": "...", "message": {...}}}
        {"event": "generation_failed", "data": {"sessionId": "...", "kind": "..."}}
        {"event": "session_loaded", "data": {"sessionId": "...", "messages": [...]}}
        {"event": "busy", "data": {"message": "..."}}
        {"event": "error", "data": {"code": "...", "message": "..."}}

    Args:
        websocket: WebSocket connection
    """
    await websocket.accept()
    connection_id = set_correlation_id(websocket.headers.get(HEADER_NAME))
    logger.info(f"{__name__}:websocket_conversation - Connection established")

    async def emit(event: StreamEvent) -> None:
        await websocket.send_json(event.to_dict())

    settings = get_settings()
    controller = ConversationController(
        session_factory=get_db_session_factory(),
        gateway=get_generation_gateway(),
        emit=emit,
        quiet_period=settings.conversation.save_quiet_period,
        title_max_length=settings.conversation.title_max_length,
    )
    pending: set[asyncio.Task] = set()

    async def run_send(payload: ClientSendEvent) -> None:
        try:
            await controller.send(payload.question, payload.document_ids)
        except ConversationBusyError:
            await emit(
                StreamEvent(
                    event=StreamEventType.BUSY,
                    data={"message": "Please wait for the current answer"},
                )
            )
        except WebSocketDisconnect:
            logger.info(f"{__name__}:run_send - Client left before the answer arrived")
        except Exception as e:
            logger.error(f"{__name__}:run_send - Send failed: {e}", exc_info=True)
            await emit(_error_event("SEND_FAILED", "Failed to process your question"))

    await emit(StreamEvent(event=StreamEventType.CONNECTED, data={"connectionId": connection_id}))

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(f"{__name__}:websocket_conversation - Failed to parse JSON: {e}")
                await emit(_error_event("INVALID_JSON", "Invalid JSON format"))
                continue

            if not isinstance(data, dict):
                await emit(_error_event("INVALID_JSON", "Expected a JSON object"))
                continue

            event_type = data.get("event")
            event_data = data.get("data") or {}

            if event_type == ClientEventType.PING.value:
                await emit(StreamEvent(event=StreamEventType.PONG))
                continue

            if event_type == ClientEventType.SEND.value:
                try:
                    payload = ClientSendEvent.model_validate(event_data)
                except PydanticValidationError:
                    await emit(_error_event("INVALID_MESSAGE", "Question must not be empty"))
                    continue

                # Rejected here, before the task starts, so order of arrival decides
                if controller.awaiting_response:
                    await emit(
                        StreamEvent(
                            event=StreamEventType.BUSY,
                            data={"message": "Please wait for the current answer"},
                        )
                    )
                    continue

                task = asyncio.create_task(run_send(payload))
                pending.add(task)
                task.add_done_callback(pending.discard)
                # Let the task set the awaiting guard before the next receive
                await asyncio.sleep(0)
                continue

            if event_type == ClientEventType.NEW_CHAT.value:
                await controller.new_chat()
                continue

            if event_type == ClientEventType.SWITCH_SESSION.value:
                try:
                    switch = ClientSwitchEvent.model_validate(event_data)
                except PydanticValidationError:
                    await emit(_error_event("INVALID_MESSAGE", "sessionId is required"))
                    continue
                await controller.switch_session(switch.session_id)
                continue

            await emit(_error_event("UNKNOWN_EVENT", f"Unknown event type: {event_type}"))

    except WebSocketDisconnect:
        logger.info(f"{__name__}:websocket_conversation - Client disconnected")
    finally:
        for task in pending:
            task.cancel()
        await controller.close()

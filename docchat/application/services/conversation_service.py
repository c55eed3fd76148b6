"""
Conversation controller.

Owns the state of one conversation thread (one WebSocket, one browser tab):
the active session, its in-memory message log, and the awaiting-response
guard. Log mutations are persisted through a DebouncedSaver; switching
session, starting a new chat and closing all flush it first. An answer that
arrives after the user has moved to another session is discarded.

Dependencies: sqlalchemy.ext.asyncio, docchat.application.services, docchat.core
System role: Chat session lifecycle orchestration
"""

import logging
import uuid
from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import async_sessionmaker

from docchat.application.services.document_service import DocumentService
from docchat.application.services.generation_gateway import GenerationGateway, GenerationResult
from docchat.application.services.message_service import MessageService
from docchat.application.services.session_service import SessionService
from docchat.core.clock import utc_now
from docchat.core.exceptions import ConversationBusyError, SessionNotFoundError
from docchat.core.save_scheduler import DebouncedSaver
from docchat.core.titles import TITLE_MAX_LENGTH, truncate_title
from docchat.models.chat import ChatMessage, Sender
from docchat.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

EventSink = Callable[[StreamEvent], Awaitable[None]]


class ConversationController:
    """State machine for a single conversation thread."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: GenerationGateway,
        emit: EventSink,
        quiet_period: float = 1.0,
        title_max_length: int = TITLE_MAX_LENGTH,
    ) -> None:
        """
        Initialize controller.

        Args:
            session_factory: Opens a short-lived AsyncSession per store call
            gateway: Generation gateway
            emit: Coroutine receiving server events
            quiet_period: Debounce quiet period in seconds
            title_max_length: Characters of the first question kept as title
        """
        self._session_factory = session_factory
        self._gateway = gateway
        self._emit = emit
        self._title_max_length = title_max_length
        self.saver = DebouncedSaver(self._persist, quiet_period=quiet_period)

        self.active_session_id: str | None = None
        self.messages: list[ChatMessage] = []
        self.awaiting_response = False

    async def send(
        self,
        question: str,
        document_ids: list[str] | None = None,
    ) -> GenerationResult | None:
        """
        Append a user question, ask the gateway, append the answer.

        Args:
            question: User's question
            document_ids: Active documents; all stored documents when None

        Returns:
            GenerationResult | None: None when the answer was discarded
            because the active session changed meanwhile

        Raises:
            ConversationBusyError: A previous question is still awaiting its answer
        """
        if self.awaiting_response:
            raise ConversationBusyError(self.active_session_id)
        self.awaiting_response = True

        try:
            if document_ids is None:
                document_ids = await self._all_document_ids()

            user_message = ChatMessage(
                id=str(uuid.uuid4()),
                session_id=self.active_session_id,
                text=question,
                sender=Sender.USER,
                timestamp=utc_now(),
            )

            if self.active_session_id is None:
                await self._start_session(question, document_ids)
                user_message.session_id = self.active_session_id

            self._append(user_message)
            request_session_id = self.active_session_id
            await self._emit(
                StreamEvent(
                    event=StreamEventType.AWAITING,
                    data={"sessionId": request_session_id, "message": _dump(user_message)},
                )
            )

            result = await self._gateway.generate(question, document_ids, request_session_id)
        finally:
            self.awaiting_response = False

        if self.active_session_id != request_session_id:
            logger.info(
                f"{__name__}:send - Discarding answer for session {request_session_id}; "
                f"active session is now {self.active_session_id}"
            )
            return None

        self._append(result.message)
        await self._emit(
            StreamEvent(
                event=StreamEventType.MESSAGE,
                data={"sessionId": request_session_id, "message": _dump(result.message)},
            )
        )
        if result.failure is not None:
            await self._emit(
                StreamEvent(
                    event=StreamEventType.GENERATION_FAILED,
                    data={"sessionId": request_session_id, "kind": result.failure.value},
                )
            )
        return result

    async def new_chat(self) -> None:
        """Flush pending saves and clear the active session."""
        await self.saver.flush()
        self.active_session_id = None
        self.messages = []
        await self._emit(
            StreamEvent(
                event=StreamEventType.SESSION_LOADED,
                data={"sessionId": None, "messages": []},
            )
        )

    async def switch_session(self, session_id: str) -> bool:
        """
        Flush pending saves, then load another session's log.

        Args:
            session_id: Session to activate

        Returns:
            bool: False if the session does not exist
        """
        await self.saver.flush()

        async with self._session_factory() as db:
            session = await SessionService(db).get_session(session_id)
            if session is None:
                await self._emit(
                    StreamEvent(
                        event=StreamEventType.ERROR,
                        data={"message": f"Session not found: {session_id}"},
                    )
                )
                return False
            messages = await MessageService(db).load_messages(session_id)

        self.active_session_id = session_id
        self.messages = messages
        await self._emit(
            StreamEvent(
                event=StreamEventType.SESSION_LOADED,
                data={
                    "sessionId": session_id,
                    "title": session.title,
                    "messages": [_dump(m) for m in messages],
                },
            )
        )
        return True

    async def close(self) -> None:
        """Flush pending saves; call when the connection ends."""
        await self.saver.close()

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        if self.active_session_id is not None:
            self.saver.schedule(self.active_session_id, self.messages)

    async def _start_session(self, question: str, document_ids: list[str]) -> None:
        title = truncate_title(question, self._title_max_length)
        async with self._session_factory() as db:
            session = await SessionService(db).create_session(document_ids, title=title)

        if session is None:
            await self._emit(
                StreamEvent(
                    event=StreamEventType.ERROR,
                    data={"message": "Failed to create chat session. Messages will not be saved."},
                )
            )
            return

        self.active_session_id = session.id
        await self._emit(
            StreamEvent(
                event=StreamEventType.SESSION_CREATED,
                data={"session": session.model_dump(mode="json", by_alias=True)},
            )
        )

    async def _all_document_ids(self) -> list[str]:
        async with self._session_factory() as db:
            documents = await DocumentService(db).list_documents()
        return [doc.id for doc in documents]

    async def _persist(self, session_id: str, messages: list[ChatMessage]) -> bool:
        async with self._session_factory() as db:
            try:
                return await MessageService(db).save_messages(session_id, messages)
            except SessionNotFoundError:
                logger.warning(f"{__name__}:_persist - Session {session_id} no longer exists")
                return False


def _dump(message: ChatMessage) -> dict:
    return message.model_dump(mode="json", by_alias=True)

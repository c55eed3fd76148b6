"""
Message persistence service.

A save replaces a session's whole log: delete existing rows, insert the new
list, bump the session's updated_at. All three steps share one transaction,
so a failure part-way leaves the previous log intact.

Dependencies: docchat.boundary.db.CRUD, docchat.application.adapters
System role: Message log use cases
"""

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.row_adapter import message_to_row, row_to_message
from docchat.boundary.db.CRUD.message_crud import message_crud
from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.core.exceptions import SessionNotFoundError
from docchat.models.chat import ChatMessage
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class MessageService:
    """Message log persistence orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize message service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def save_messages(self, session_id: str, messages: Sequence[ChatMessage]) -> bool:
        """
        Replace a session's message log.

        An empty list clears the log.

        Args:
            session_id: Session id
            messages: Complete log in display order

        Returns:
            bool: True on success, False on persistence or partial-save failure

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        try:
            exists = await session_crud.exists(self.db, session_id)
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:save_messages - Failed to look up session",
                e,
                session_id=session_id,
            )
            return False
        if not exists:
            raise SessionNotFoundError(session_id)

        try:
            await message_crud.delete_by_session(self.db, session_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:save_messages - Failed to delete existing messages",
                e,
                session_id=session_id,
            )
            return False

        try:
            rows = [message_to_row(session_id, message) for message in messages]
            await message_crud.insert_many(self.db, rows)
            await session_crud.touch(self.db, session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:save_messages - partial_save_failure: log for {session_id} not rewritten",
                e,
                failure_kind="partial_save_failure",
                session_id=session_id,
                message_count=len(messages),
            )
            return False

        logger.debug(f"{__name__}:save_messages - Saved {len(messages)} messages for {session_id}")
        return True

    async def load_messages(self, session_id: str) -> list[ChatMessage]:
        """
        Load a session's log ordered by timestamp ascending.

        Args:
            session_id: Session id

        Returns:
            list[ChatMessage]: Messages, empty for unknown sessions or if the read failed
        """
        try:
            rows = await message_crud.get_by_session(self.db, session_id)
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:load_messages - Failed to load chat messages",
                e,
                session_id=session_id,
            )
            return []
        return [row_to_message(row) for row in rows]

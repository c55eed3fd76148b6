"""
Session service orchestrator.

Coordinates chat session lifecycle operations: create, list by recency,
rename and delete (messages first, then the session, in one transaction).

Dependencies: docchat.boundary.db.CRUD, docchat.application.adapters
System role: Chat session store use cases
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.row_adapter import row_to_session
from docchat.boundary.db.CRUD.message_crud import message_crud
from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.core.clock import utc_now
from docchat.core.exceptions import SessionNotFoundError, ValidationError
from docchat.core.titles import DEFAULT_TITLE
from docchat.models.session import ChatSession
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_session(
        self,
        document_ids: list[str],
        title: str = DEFAULT_TITLE,
    ) -> ChatSession | None:
        """
        Create a new session.

        Args:
            document_ids: Snapshot of the active document ids
            title: Session title; callers pass truncate_title(first_question)

        Returns:
            ChatSession | None: Created session, None if the write failed
        """
        title = title.strip() or DEFAULT_TITLE
        now = utc_now()
        try:
            row = await session_crud.create(
                self.db,
                title=title,
                document_ids=list(document_ids),
                created_at=now,
                updated_at=now,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:create_session - Failed to create chat session",
                e,
                title=title,
            )
            return None

        logger.info(f"{__name__}:create_session - Created session {row.id}")
        return row_to_session(row)

    async def list_sessions(
        self,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ChatSession]:
        """
        List sessions, most recently updated first.

        Args:
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            list[ChatSession]: Sessions, or an empty list if the read failed
        """
        try:
            rows = await session_crud.list_by_recency(self.db, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:list_sessions - Failed to load chat sessions",
                e,
            )
            return []
        return [row_to_session(row) for row in rows]

    async def get_session(self, session_id: str) -> ChatSession | None:
        """
        Get session by ID.

        Args:
            session_id: Session id

        Returns:
            ChatSession | None: Session, None if not found or the read failed
        """
        try:
            row = await session_crud.get_by_id(self.db, session_id)
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:get_session - Failed to load chat session",
                e,
                session_id=session_id,
            )
            return None
        return row_to_session(row) if row else None

    async def rename_session(self, session_id: str, title: str) -> bool:
        """
        Change a session's title and bump its updated_at.

        Messages are untouched.

        Args:
            session_id: Session id
            title: New title

        Returns:
            bool: True on success, False if the write failed

        Raises:
            ValidationError: If title is blank
            SessionNotFoundError: If the session does not exist
        """
        title = title.strip()
        if not title:
            raise ValidationError("Title must not be empty", field="title")

        try:
            row = await session_crud.touch(self.db, session_id, title=title)
            if row is None:
                await self.db.rollback()
                raise SessionNotFoundError(session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:rename_session - Failed to update chat title",
                e,
                session_id=session_id,
            )
            return False
        return True

    async def delete_session(self, session_id: str) -> bool:
        """
        Delete a session and its message log.

        Messages are deleted first; if that fails the session row is left
        in place. Both deletes commit together.

        Args:
            session_id: Session id

        Returns:
            bool: True if deleted, False if the delete failed

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        try:
            await message_crud.delete_by_session(self.db, session_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:delete_session - Failed to delete chat messages",
                e,
                session_id=session_id,
            )
            return False

        try:
            deleted = await session_crud.delete_by_id(self.db, session_id)
            if not deleted:
                await self.db.rollback()
                raise SessionNotFoundError(session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:delete_session - Failed to delete chat session",
                e,
                session_id=session_id,
            )
            return False

        logger.info(f"{__name__}:delete_session - Deleted session {session_id}")
        return True

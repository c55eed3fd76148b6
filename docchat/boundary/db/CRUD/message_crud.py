"""
Chat message CRUD operations.

Session-scoped operations over the chat_messages table: wholesale delete,
bulk insert and ordered read.

Dependencies: sqlalchemy, docchat.boundary.db.models.message_model
System role: Message log persistence operations
"""

from typing import Any, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.models.message_model import ChatMessageModel
from docchat.boundary.db.CRUD.base_crud import BaseCRUD


class MessageCRUD(BaseCRUD[ChatMessageModel]):
    """
    CRUD operations for ChatMessageModel.

    All operations are session-scoped: messages belong to one chat_id.
    """

    def __init__(self) -> None:
        """Initialize MessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def get_by_session(
        self,
        session: AsyncSession,
        chat_id: str,
    ) -> Sequence[ChatMessageModel]:
        """
        Retrieve a session's messages ordered by timestamp ascending.

        Ties on timestamp are broken by id so repeated loads agree.

        Args:
            session: Async database session
            chat_id: Session id

        Returns:
            Sequence of ChatMessageModels, oldest first
        """
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.chat_id == chat_id)
            .order_by(ChatMessageModel.timestamp.asc(), ChatMessageModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_session(self, session: AsyncSession, chat_id: str) -> int:
        """
        Delete every message of a session.

        Args:
            session: Async database session
            chat_id: Session id

        Returns:
            Number of rows deleted
        """
        stmt = delete(ChatMessageModel).where(ChatMessageModel.chat_id == chat_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def insert_many(
        self,
        session: AsyncSession,
        rows: Sequence[dict[str, Any]],
    ) -> int:
        """
        Insert message rows.

        Args:
            session: Async database session
            rows: Column dicts (id, chat_id, text, sender, timestamp, source_info)

        Returns:
            Number of rows inserted
        """
        if not rows:
            return 0
        session.add_all([ChatMessageModel(**row) for row in rows])
        await session.flush()
        return len(rows)


message_crud = MessageCRUD()

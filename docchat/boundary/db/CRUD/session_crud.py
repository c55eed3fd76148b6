"""
Chat session CRUD operations.

Provides Create, Read, Update, Delete operations for ChatSessionModel
with recency ordering and monotonic updated_at bumps.

Dependencies: sqlalchemy, docchat.boundary.db.models.session_model
System role: Session persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.models.session_model import ChatSessionModel
from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.core.clock import next_timestamp


class SessionCRUD(BaseCRUD[ChatSessionModel]):
    """
    CRUD operations for ChatSessionModel.

    Extends BaseCRUD with most-recent-first listing and updated_at bumps.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with ChatSessionModel."""
        super().__init__(ChatSessionModel)

    async def list_by_recency(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ChatSessionModel]:
        """
        Retrieve sessions ordered by updated_at, most recent first.

        Args:
            session: Async database session
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Sequence of ChatSessionModels
        """
        stmt = (
            select(ChatSessionModel)
            .order_by(ChatSessionModel.updated_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def touch(
        self,
        session: AsyncSession,
        id: str,
        **kwargs,
    ) -> ChatSessionModel | None:
        """
        Bump updated_at, optionally setting other fields in the same UPDATE.

        The new value is strictly later than the stored one.

        Args:
            session: Async database session
            id: Session id
            **kwargs: Extra fields to update (e.g. title)

        Returns:
            Updated ChatSessionModel if found, None otherwise
        """
        stmt = select(ChatSessionModel.updated_at).where(ChatSessionModel.id == id)
        result = await session.execute(stmt)
        previous: datetime | None = result.scalar_one_or_none()
        if previous is None:
            return None
        return await self.update_by_id(
            session,
            id,
            updated_at=next_timestamp(previous),
            **kwargs,
        )


session_crud = SessionCRUD()

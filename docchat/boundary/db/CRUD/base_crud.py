"""
Shared CRUD primitives for string-keyed docchat tables.

Every docchat table (documents, chat_sessions, chat_messages) is keyed by a
client-supplied string id, so the primary-key operations live here once and
the table-specific CRUDs add their ordering and bulk queries on top.

None of these methods commit. The caller owns the transaction so a service
can group several statements (delete messages, insert messages, bump the
session) into one unit.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations bound to one model class.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def _matches(self, id: str):
        return self.model.id == id

    async def create(self, session: AsyncSession, **values) -> ModelT:
        """
        Insert one row and load server-side defaults back onto it.

        Args:
            session: Async database session
            **values: Column values, including the id

        Returns:
            The flushed model instance
        """
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: str) -> ModelT | None:
        result = await session.execute(select(self.model).where(self._matches(id)))
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession, id: str) -> bool:
        result = await session.execute(select(self.model.id).where(self._matches(id)))
        return result.scalar_one_or_none() is not None

    async def update_by_id(self, session: AsyncSession, id: str, **values) -> ModelT | None:
        """
        Apply column values to one row in a single UPDATE ... RETURNING.

        Returns:
            The updated row, or None when the id matched nothing
        """
        stmt = update(self.model).where(self._matches(id)).values(**values).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: str) -> bool:
        """Delete one row. Returns False when the id matched nothing."""
        result = await session.execute(delete(self.model).where(self._matches(id)))
        return result.rowcount > 0

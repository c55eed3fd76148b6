"""
Document CRUD operations.

Provides Create, Read, Delete operations for DocumentModel with
listing in upload order and id-set resolution for the answer proxy.

Dependencies: sqlalchemy, docchat.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.models.document_model import DocumentModel
from docchat.boundary.db.CRUD.base_crud import BaseCRUD


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with ordered listing and multi-id lookup.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def list_in_upload_order(self, session: AsyncSession) -> Sequence[DocumentModel]:
        """
        Retrieve all documents, oldest upload first.

        Args:
            session: Async database session

        Returns:
            Sequence of DocumentModels
        """
        stmt = select(DocumentModel).order_by(DocumentModel.created_at.asc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_ids(
        self,
        session: AsyncSession,
        ids: Sequence[str],
    ) -> Sequence[DocumentModel]:
        """
        Retrieve the documents matching a set of ids.

        Unknown ids are skipped; callers decide whether an empty result
        is an error.

        Args:
            session: Async database session
            ids: Document ids

        Returns:
            Sequence of matching DocumentModels, in upload order
        """
        if not ids:
            return []
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.id.in_(list(ids)))
            .order_by(DocumentModel.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()

"""
Document service orchestrator.

Stores, lists and deletes uploaded documents, and resolves document ids to
content for the answer proxy. Store failures are logged and reported as
False / empty results rather than raised.

Dependencies: docchat.boundary.db.CRUD, docchat.application.adapters
System role: Document store use cases
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.row_adapter import document_to_row, row_to_document
from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.core.exceptions import DocumentNotFoundError, ExtractionError, PersistenceError
from docchat.models.document import Document
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentService:
    """Document service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize document service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def save_document(self, document: Document) -> bool:
        """
        Persist a document.

        Args:
            document: Document with extracted content

        Returns:
            bool: True on success, False if the store rejected the write

        Raises:
            ExtractionError: If the document has no text; nothing is stored
        """
        if not document.content.strip():
            raise ExtractionError(
                f"No text could be extracted from {document.name}",
                file_name=document.name,
            )

        try:
            await document_crud.create(self.db, **document_to_row(document))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:save_document - Failed to save document",
                e,
                document_id=document.id,
                file_name=document.name,
            )
            return False

        logger.info(f"{__name__}:save_document - Document saved: {document.name}")
        return True

    async def list_documents(self) -> list[Document]:
        """
        List all stored documents, oldest first.

        Returns:
            list[Document]: Documents, or an empty list if the read failed
        """
        try:
            rows = await document_crud.list_in_upload_order(self.db)
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:list_documents - Failed to retrieve documents",
                e,
            )
            return []
        return [row_to_document(row) for row in rows]

    async def delete_document(self, document_id: str) -> bool:
        """
        Delete a document.

        Sessions that reference the id keep it; their snapshots are not
        rewritten.

        Args:
            document_id: Document id

        Returns:
            bool: True if the row was deleted, False if the delete failed

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        try:
            deleted = await document_crud.delete_by_id(self.db, document_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:delete_document - Failed to delete document",
                e,
                document_id=document_id,
            )
            return False
        if not deleted:
            raise DocumentNotFoundError([document_id])
        return True

    async def get_documents(self, document_ids: list[str]) -> list[Document]:
        """
        Resolve ids to documents for prompt building.

        Args:
            document_ids: Requested ids; unknown ids are skipped

        Returns:
            list[Document]: Matching documents

        Raises:
            PersistenceError: If the read failed
        """
        try:
            rows = await document_crud.get_by_ids(self.db, document_ids)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to fetch documents: {e}",
                operation="get_documents",
            ) from e
        return [row_to_document(row) for row in rows]

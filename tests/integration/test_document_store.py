"""
Test suite for DocumentService on SQLite.

System role: Verification of document store adapter
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from docchat.application.services.document_service import DocumentService
from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.core.exceptions import DocumentNotFoundError, ExtractionError, PersistenceError


class TestSaveDocument:
    """Test suite for DocumentService.save_document()."""

    async def test_save_should_store_all_columns(self, session_factory, make_document) -> None:
        """Test a saved document lists with the same metadata and content."""
        # Arrange
        document = make_document("biology.pdf", "Cells divide by mitosis.")

        # Act
        async with session_factory() as db:
            saved = await DocumentService(db).save_document(document)
        async with session_factory() as db:
            documents = await DocumentService(db).list_documents()

        # Assert
        assert saved is True
        assert documents == [document]

    async def test_save_should_raise_extraction_error_for_blank_content(
        self, test_async_db, make_document
    ) -> None:
        """Test empty content is a distinct signal and nothing is stored."""
        # Arrange
        service = DocumentService(test_async_db)

        # Act & Assert
        with pytest.raises(ExtractionError):
            await service.save_document(make_document(content="   \n "))
        assert await service.list_documents() == []

    async def test_save_should_return_false_on_store_failure(self, test_async_db, make_document) -> None:
        """Test a rejected write is reported as False."""
        # Arrange
        service = DocumentService(test_async_db)

        # Act
        with patch.object(document_crud, "create", AsyncMock(side_effect=SQLAlchemyError("full"))):
            saved = await service.save_document(make_document())

        # Assert
        assert saved is False


class TestDeleteDocument:
    """Test suite for DocumentService.delete_document()."""

    async def test_delete_should_remove_document(self, session_factory, make_document) -> None:
        """Test a deleted document no longer lists."""
        # Arrange
        document = make_document()
        async with session_factory() as db:
            await DocumentService(db).save_document(document)

        # Act
        async with session_factory() as db:
            deleted = await DocumentService(db).delete_document(document.id)
        async with session_factory() as db:
            documents = await DocumentService(db).list_documents()

        # Assert
        assert deleted is True
        assert documents == []

    async def test_delete_should_raise_for_unknown_id(self, test_async_db) -> None:
        """Test deleting a missing document raises DocumentNotFoundError."""
        # Act & Assert
        with pytest.raises(DocumentNotFoundError):
            await DocumentService(test_async_db).delete_document("missing")

    async def test_delete_should_return_false_on_store_failure(self, test_async_db) -> None:
        """Test a failed delete is reported as False, not as not-found."""
        # Act
        with patch.object(document_crud, "delete_by_id", AsyncMock(side_effect=SQLAlchemyError("locked"))):
            deleted = await DocumentService(test_async_db).delete_document("d1")

        # Assert
        assert deleted is False


class TestGetDocuments:
    """Test suite for DocumentService.get_documents()."""

    async def test_get_documents_should_skip_unknown_ids(self, session_factory, make_document) -> None:
        """Test only resolvable ids are returned."""
        # Arrange
        document = make_document()
        async with session_factory() as db:
            await DocumentService(db).save_document(document)

        # Act
        async with session_factory() as db:
            found = await DocumentService(db).get_documents([document.id, "missing"])

        # Assert
        assert [d.id for d in found] == [document.id]

    async def test_get_documents_should_raise_persistence_error_on_read_failure(
        self, test_async_db
    ) -> None:
        """Test a failed lookup surfaces as PersistenceError."""
        # Act & Assert
        with patch.object(document_crud, "get_by_ids", AsyncMock(side_effect=SQLAlchemyError("gone"))):
            with pytest.raises(PersistenceError):
                await DocumentService(test_async_db).get_documents(["a"])

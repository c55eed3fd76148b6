"""
Test suite for SessionService and SessionCRUD on SQLite.

Covers creation defaults, recency ordering, rename semantics and the
messages-first delete.

System role: Verification of chat session persistence
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from unittest.mock import AsyncMock, patch

from docchat.application.services.message_service import MessageService
from docchat.application.services.session_service import SessionService
from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.boundary.db.models import ChatMessageModel
from docchat.core.exceptions import SessionNotFoundError, ValidationError
from docchat.core.titles import truncate_title


class TestCreateSession:
    """Test suite for SessionService.create_session()."""

    async def test_create_session_should_default_title_to_new_chat(self, test_async_db) -> None:
        """Test a session created without a title is called 'New Chat'."""
        # Arrange
        service = SessionService(test_async_db)

        # Act
        session = await service.create_session(["doc-1", "doc-2"])

        # Assert
        assert session is not None
        assert session.title == "New Chat"
        assert session.document_ids == ["doc-1", "doc-2"]
        assert session.created_at == session.updated_at

    async def test_create_session_should_store_truncated_first_question(self, test_async_db) -> None:
        """Test the caller-side title helper output is stored verbatim."""
        # Arrange
        service = SessionService(test_async_db)
        title = truncate_title("What is the main argument of chapter three of this book?")

        # Act
        session = await service.create_session([], title=title)

        # Assert
        assert session.title == "What is the main argument of c..."
        stored = await service.get_session(session.id)
        assert stored.title == session.title

    async def test_create_session_should_return_none_on_store_failure(self, test_async_db) -> None:
        """Test a failed insert is reported as None, not raised."""
        # Arrange
        service = SessionService(test_async_db)

        # Act
        with patch.object(session_crud, "create", AsyncMock(side_effect=SQLAlchemyError("boom"))):
            session = await service.create_session([])

        # Assert
        assert session is None


class TestListSessions:
    """Test suite for SessionService.list_sessions()."""

    async def test_list_sessions_should_order_by_most_recent_update(self, test_async_db) -> None:
        """Test renaming an older session moves it to the front."""
        # Arrange
        service = SessionService(test_async_db)
        first = await service.create_session([], title="First")
        second = await service.create_session([], title="Second")

        # Act
        await service.rename_session(first.id, "First, renamed")
        sessions = await service.list_sessions()

        # Assert
        assert [s.id for s in sessions] == [first.id, second.id]

    async def test_list_sessions_should_return_empty_list_when_store_is_empty(self, test_async_db) -> None:
        """Test an empty store lists nothing."""
        # Act
        sessions = await SessionService(test_async_db).list_sessions()

        # Assert
        assert sessions == []


class TestRenameSession:
    """Test suite for SessionService.rename_session()."""

    async def test_rename_should_bump_updated_at_strictly(self, test_async_db) -> None:
        """Test two renames in a row produce strictly increasing updated_at."""
        # Arrange
        service = SessionService(test_async_db)
        session = await service.create_session([])

        # Act
        await service.rename_session(session.id, "One")
        after_first = (await service.get_session(session.id)).updated_at
        await service.rename_session(session.id, "Two")
        after_second = (await service.get_session(session.id)).updated_at

        # Assert
        assert session.updated_at < after_first < after_second

    async def test_rename_should_keep_messages(self, session_factory, make_message) -> None:
        """Test renaming does not touch the message log."""
        # Arrange
        async with session_factory() as db:
            session = await SessionService(db).create_session([])
            await MessageService(db).save_messages(
                session.id, [make_message("Hi"), make_message("Hello", sender="bot")]
            )

        # Act
        async with session_factory() as db:
            renamed = await SessionService(db).rename_session(session.id, "Greetings")
        async with session_factory() as db:
            messages = await MessageService(db).load_messages(session.id)
            stored = await SessionService(db).get_session(session.id)

        # Assert
        assert renamed is True
        assert stored.title == "Greetings"
        assert [m.text for m in messages] == ["Hi", "Hello"]

    async def test_rename_should_raise_for_unknown_session(self, test_async_db) -> None:
        """Test renaming a missing session raises SessionNotFoundError."""
        # Act & Assert
        with pytest.raises(SessionNotFoundError):
            await SessionService(test_async_db).rename_session("missing", "Title")

    async def test_rename_should_reject_blank_title(self, test_async_db) -> None:
        """Test blank titles are refused before touching the store."""
        # Arrange
        service = SessionService(test_async_db)
        session = await service.create_session([])

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.rename_session(session.id, "   ")


class TestDeleteSession:
    """Test suite for SessionService.delete_session()."""

    async def test_delete_should_remove_session_and_messages(self, session_factory, make_message) -> None:
        """Test deleting a session leaves no orphaned messages."""
        # Arrange
        async with session_factory() as db:
            session = await SessionService(db).create_session([])
            await MessageService(db).save_messages(session.id, [make_message("a"), make_message("b")])

        # Act
        async with session_factory() as db:
            deleted = await SessionService(db).delete_session(session.id)

        # Assert
        async with session_factory() as db:
            assert deleted is True
            assert await SessionService(db).get_session(session.id) is None
            rows = (await db.execute(select(ChatMessageModel))).scalars().all()
            assert rows == []

    async def test_schema_should_cascade_messages_on_direct_session_delete(
        self, session_factory, make_message
    ) -> None:
        """Test ON DELETE CASCADE removes messages even without the service."""
        # Arrange
        async with session_factory() as db:
            session = await SessionService(db).create_session([])
            await MessageService(db).save_messages(session.id, [make_message("a")])

        # Act
        async with session_factory() as db:
            await session_crud.delete_by_id(db, session.id)
            await db.commit()

        # Assert
        async with session_factory() as db:
            rows = (await db.execute(select(ChatMessageModel))).scalars().all()
            assert rows == []

    async def test_delete_should_raise_for_unknown_session(self, test_async_db) -> None:
        """Test deleting a missing session raises SessionNotFoundError."""
        # Act & Assert
        with pytest.raises(SessionNotFoundError):
            await SessionService(test_async_db).delete_session("missing")

    async def test_delete_should_keep_session_when_message_delete_fails(self, session_factory) -> None:
        """Test the session row survives a failed message delete."""
        # Arrange
        from docchat.boundary.db.CRUD.message_crud import message_crud

        async with session_factory() as db:
            session = await SessionService(db).create_session([])

        # Act
        async with session_factory() as db:
            with patch.object(
                message_crud, "delete_by_session", AsyncMock(side_effect=SQLAlchemyError("locked"))
            ):
                deleted = await SessionService(db).delete_session(session.id)

        # Assert
        async with session_factory() as db:
            assert deleted is False
            assert await SessionService(db).get_session(session.id) is not None

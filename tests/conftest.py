"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite engine and sessions, message/document factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with foreign keys enforced.

    Yields:
        AsyncEngine: Engine with all tables created (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from docchat.boundary.db.base import Base
    from docchat.boundary.db.connection import enable_sqlite_foreign_keys
    import docchat.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Open one session on the test database.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_message():
    """
    Build ChatMessages with increasing timestamps.

    Returns:
        Callable: make_message(text, sender="user", **fields)
    """
    from docchat.models.chat import ChatMessage, Sender

    base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(text: str, sender: str = "user", **fields) -> ChatMessage:
        counter["n"] += 1
        return ChatMessage(
            id=fields.pop("id", str(uuid.uuid4())),
            text=text,
            sender=Sender(sender),
            timestamp=fields.pop("timestamp", base + timedelta(seconds=counter["n"])),
            **fields,
        )

    return _make


@pytest.fixture
def make_document():
    """
    Build Documents.

    Returns:
        Callable: make_document(name="notes.pdf", content="...")
    """
    from docchat.models.document import Document

    def _make(name: str = "notes.pdf", content: str = "Photosynthesis converts light.") -> Document:
        return Document(
            id=str(uuid.uuid4()),
            name=name,
            size=len(content),
            content=content,
            last_modified=1714564800000,
        )

    return _make

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docchat.api.deps import get_message_service, get_session_service
from docchat.api.routers.sessions import router as sessions_router
from docchat.core.exceptions import SessionNotFoundError, ValidationError
from docchat.models.chat import ChatMessage, Sender, SourceInfo
from docchat.models.session import ChatSession

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_session(session_id="s1", title="New Chat") -> ChatSession:
    return ChatSession(id=session_id, title=title, document_ids=["d1"], created_at=NOW, updated_at=NOW)


@pytest.fixture
def mock_session_service():
    return AsyncMock()


@pytest.fixture
def mock_message_service():
    return AsyncMock()


@pytest.fixture
def client(mock_session_service, mock_message_service):
    app = FastAPI()
    app.include_router(sessions_router)
    app.dependency_overrides[get_session_service] = lambda: mock_session_service
    app.dependency_overrides[get_message_service] = lambda: mock_message_service
    return TestClient(app)


def test_create_session(client, mock_session_service):
    mock_session_service.create_session.return_value = make_session()

    response = client.post("/sessions", json={"documentIds": ["d1"]})

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "s1"
    assert data["title"] == "New Chat"
    assert data["documentIds"] == ["d1"]
    mock_session_service.create_session.assert_awaited_once_with(["d1"], title="New Chat")


def test_create_session_failure(client, mock_session_service):
    mock_session_service.create_session.return_value = None

    response = client.post("/sessions", json={})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to create chat session."


def test_list_sessions(client, mock_session_service):
    mock_session_service.list_sessions.return_value = [make_session("s2"), make_session("s1")]

    response = client.get("/sessions")

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["s2", "s1"]


def test_get_session_not_found(client, mock_session_service):
    mock_session_service.get_session.return_value = None

    response = client.get("/sessions/missing")

    assert response.status_code == 404


def test_rename_session(client, mock_session_service):
    mock_session_service.rename_session.return_value = True
    mock_session_service.get_session.return_value = make_session(title="Renamed")

    response = client.patch("/sessions/s1", json={"title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    mock_session_service.rename_session.assert_awaited_once_with("s1", "Renamed")


def test_rename_session_blank_title(client, mock_session_service):
    mock_session_service.rename_session.side_effect = ValidationError("Title must not be empty")

    response = client.patch("/sessions/s1", json={"title": "  "})

    assert response.status_code == 400


def test_rename_session_failure(client, mock_session_service):
    mock_session_service.rename_session.return_value = False

    response = client.patch("/sessions/s1", json={"title": "x"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to update chat title."


def test_delete_session(client, mock_session_service):
    mock_session_service.delete_session.return_value = True

    response = client.delete("/sessions/s1")

    assert response.status_code == 204
    mock_session_service.delete_session.assert_awaited_once_with("s1")


def test_delete_session_not_found(client, mock_session_service):
    mock_session_service.delete_session.side_effect = SessionNotFoundError("missing")

    response = client.delete("/sessions/missing")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


def test_get_messages(client, mock_session_service, mock_message_service):
    mock_session_service.get_session.return_value = make_session()
    mock_message_service.load_messages.return_value = [
        ChatMessage(id="m1", session_id="s1", text="Hi", sender=Sender.USER, timestamp=NOW),
        ChatMessage(
            id="m2",
            session_id="s1",
            text="Hello",
            sender=Sender.BOT,
            timestamp=NOW,
            source_info=SourceInfo(source_documents=["a.pdf"]),
        ),
    ]

    response = client.get("/sessions/s1/messages")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["messages"][1]["sender"] == "bot"
    assert data["messages"][1]["sourceInfo"] == {
        "sourceDocuments": ["a.pdf"],
        "pageNumber": "",
        "sectionInfo": "",
        "paragraphInfo": "",
    }


def test_save_messages(client, mock_message_service):
    mock_message_service.save_messages.return_value = True

    response = client.put(
        "/sessions/s1/messages",
        json={
            "messages": [
                {"id": "m1", "text": "Hi", "sender": "user", "timestamp": NOW.isoformat()},
            ]
        },
    )

    assert response.status_code == 204
    session_id, messages = mock_message_service.save_messages.await_args.args
    assert session_id == "s1"
    assert [m.id for m in messages] == ["m1"]


def test_save_empty_messages(client, mock_message_service):
    mock_message_service.save_messages.return_value = True

    response = client.put("/sessions/s1/messages", json={"messages": []})

    assert response.status_code == 204
    assert mock_message_service.save_messages.await_args.args == ("s1", [])


def test_save_messages_failure(client, mock_message_service):
    mock_message_service.save_messages.return_value = False

    response = client.put("/sessions/s1/messages", json={"messages": []})

    assert response.status_code == 500

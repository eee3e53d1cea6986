"""Integration tests for chat and message API routes."""

from typing import Any

from fastapi.testclient import TestClient

from backend.docqa.db.inmemory import SessionState
from backend.docqa.llm.client import ProviderFailure, ProviderSuccess
from backend.docqa.orchestration.chat import EMPTY_RESPONSE_APOLOGY


def seed_receipt(client: TestClient) -> None:
    response = client.post(
        "/api/upload", files={"file": ("r.txt", b"Total: $212.40", "text/plain")}
    )
    assert response.status_code == 200


def test_chat_returns_ai_message(client: TestClient, provider: Any) -> None:
    """Test that POST /api/chat answers and returns the assistant turn."""
    seed_receipt(client)

    response = client.post("/api/chat", json={"question": "What is the total?"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    message = data["message"]
    assert set(message) == {"id", "role", "content", "timestamp"}
    assert message["role"] == "ai"
    assert message["content"] == "The total is $212.40."
    assert "Total: $212.40" in provider.calls[0][1]


def test_chat_then_messages_lists_both_turns(client: TestClient) -> None:
    """Test that the transcript holds the question then the answer."""
    seed_receipt(client)
    client.post("/api/chat", json={"question": "What is the total?"})

    messages = client.get("/api/messages").json()["messages"]

    assert [m["role"] for m in messages] == ["user", "ai"]
    assert messages[0]["content"] == "What is the total?"
    assert messages[1]["content"] == "The total is $212.40."
    assert messages[0]["id"] != messages[1]["id"]


def test_chat_without_documents_returns_400(client: TestClient, provider: Any) -> None:
    """Test that chat with an empty store is rejected before the provider."""
    response = client.post("/api/chat", json={"question": "hi"})

    assert response.status_code == 400
    assert "No documents" in response.json()["error"]
    assert provider.calls == []
    assert client.get("/api/messages").json() == {"messages": []}


def test_chat_with_empty_question_returns_400(client: TestClient) -> None:
    seed_receipt(client)

    response = client.post("/api/chat", json={"question": ""})

    assert response.status_code == 400
    assert "error" in response.json()
    assert client.get("/api/messages").json() == {"messages": []}


def test_chat_with_whitespace_question_is_answered(client: TestClient) -> None:
    seed_receipt(client)

    response = client.post("/api/chat", json={"question": "   "})

    assert response.status_code == 200
    messages = client.get("/api/messages").json()["messages"]
    assert messages[0]["content"] == "   "


def test_chat_with_malformed_body_returns_400(client: TestClient) -> None:
    """Test that a body without a string question is a client error."""
    seed_receipt(client)

    missing = client.post("/api/chat", json={})
    wrong_type = client.post("/api/chat", json={"question": 42})

    assert missing.status_code == 400
    assert "question" in missing.json()["error"]
    assert wrong_type.status_code == 400


def test_provider_failure_returns_500_and_keeps_question(
    client: TestClient, provider: Any
) -> None:
    """Test that a provider failure is a 500 without leaking provider detail."""
    provider.result = ProviderFailure(reason="APIStatusError: secret upstream detail")
    seed_receipt(client)

    response = client.post("/api/chat", json={"question": "What is the total?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process question"}
    messages = client.get("/api/messages").json()["messages"]
    assert [m["role"] for m in messages] == ["user"]


def test_empty_provider_answer_returns_apology(client: TestClient, provider: Any) -> None:
    provider.result = ProviderSuccess(text="")
    seed_receipt(client)

    response = client.post("/api/chat", json={"question": "What is the total?"})

    assert response.status_code == 200
    assert response.json()["message"]["content"] == EMPTY_RESPONSE_APOLOGY


def test_upload_chat_then_clear_resets_session(
    client: TestClient, session_state: SessionState
) -> None:
    """Test the full upload, chat, clear cycle."""
    seed_receipt(client)
    client.post("/api/chat", json={"question": "What is the total?"})
    assert len(session_state.list_messages()) == 2

    client.delete("/api/documents")

    assert client.get("/api/documents").json() == {"documents": []}
    assert client.get("/api/messages").json() == {"messages": []}

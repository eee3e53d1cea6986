"""Integration tests for health and metrics endpoints."""

from fastapi.testclient import TestClient


def test_health_returns_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_healthz_reports_provider_and_session_sizes(client: TestClient) -> None:
    """Test that /healthz reports the provider in use and session counts."""
    client.post("/api/upload", files={"file": ("r.txt", b"Total: $212.40", "text/plain")})

    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["components"] == {"provider": "recording", "documents": 1, "messages": 0}


def test_metrics_exposes_upload_and_chat_counters(client: TestClient) -> None:
    """Test that /metrics exposes our counters in Prometheus format."""
    client.post("/api/upload", files={"file": ("r.txt", b"Total: $212.40", "text/plain")})
    client.post("/api/chat", json={"question": "What is the total?"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    body = response.text
    assert 'documents_uploaded_total{format="text"}' in body
    assert 'chat_requests_total{outcome="answered"}' in body
    assert "provider_latency_ms_bucket" in body


def test_root_returns_service_info(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Document Q&A API"


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert "error" in response.json()

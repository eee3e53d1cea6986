"""Shared pytest fixtures for all test suites."""

import asyncio
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.docqa.api.dependencies import get_model_provider, get_session_state
from backend.docqa.db.inmemory import SessionState
from backend.docqa.llm.client import ProviderFailure, ProviderResult, ProviderSuccess
from backend.docqa.main import app


class RecordingProvider:
    """Provider double that records prompts and returns a canned result."""

    name = "recording"

    def __init__(self, result: ProviderResult, delay_seconds: float = 0.0) -> None:
        self.result = result
        self.delay_seconds = delay_seconds
        self.calls: list[tuple[str, str]] = []

    async def generate(self, model: str, prompt: str) -> ProviderResult:
        self.calls.append((model, prompt))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return self.result


@pytest.fixture
def session_state() -> SessionState:
    """Fresh, empty session per test."""
    return SessionState()


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider(ProviderSuccess(text="The total is $212.40."))


@pytest.fixture
def failing_provider() -> RecordingProvider:
    return RecordingProvider(ProviderFailure(reason="APIConnectionError: Connection error."))


@pytest.fixture
def client(session_state: SessionState, provider: RecordingProvider) -> Iterator[TestClient]:
    """Test client bound to an isolated session and recording provider."""
    app.dependency_overrides[get_session_state] = lambda: session_state
    app.dependency_overrides[get_model_provider] = lambda: provider

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

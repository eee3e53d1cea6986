"""Tests for LLM provider adapters.

All tests are deterministic and do not make real network calls.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from backend.docqa.config import Settings
from backend.docqa.llm.client import (
    DeterministicStubProvider,
    OpenAIProvider,
    ProviderFailure,
    ProviderSuccess,
    get_model_provider,
)


def mock_completion(content: str | None) -> MagicMock:
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content
    return mock_response


@pytest.mark.asyncio
async def test_stub_provider_is_deterministic() -> None:
    """Test that DeterministicStubProvider produces same output every time."""
    provider = DeterministicStubProvider()

    first = await provider.generate("gpt-4o-mini", "prompt text")
    second = await provider.generate("gpt-4o-mini", "prompt text")

    assert isinstance(first, ProviderSuccess)
    assert first == second
    assert "stub response" in first.text
    assert "11 characters" in first.text


@pytest.mark.asyncio
async def test_openai_provider_returns_model_text() -> None:
    """Test that OpenAIProvider calls the API and returns the content (mocked)."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=mock_completion("The total is $212.40.")
    )

    provider = OpenAIProvider(api_key="test_key", temperature=0.1)
    provider.client = mock_openai_client

    result = await provider.generate("gpt-4o-mini", "PROMPT")

    assert result == ProviderSuccess(text="The total is $212.40.")
    mock_openai_client.chat.completions.create.assert_called_once()
    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [{"role": "user", "content": "PROMPT"}]
    assert kwargs["temperature"] == 0.1


@pytest.mark.asyncio
async def test_openai_provider_none_content_is_empty_success() -> None:
    """Test that a null message content is an empty success, not a failure."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(return_value=mock_completion(None))

    provider = OpenAIProvider(api_key="test_key")
    provider.client = mock_openai_client

    result = await provider.generate("gpt-4o-mini", "PROMPT")

    assert result == ProviderSuccess(text="")


@pytest.mark.asyncio
async def test_openai_provider_no_choices_is_empty_success() -> None:
    mock_response = MagicMock()
    mock_response.choices = []
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(return_value=mock_response)

    provider = OpenAIProvider(api_key="test_key")
    provider.client = mock_openai_client

    assert await provider.generate("gpt-4o-mini", "PROMPT") == ProviderSuccess(text="")


@pytest.mark.asyncio
async def test_openai_provider_error_becomes_failure() -> None:
    """Test that API exceptions are returned as ProviderFailure, not raised."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(side_effect=Exception("API error"))

    provider = OpenAIProvider(api_key="test_key")
    provider.client = mock_openai_client

    result = await provider.generate("gpt-4o-mini", "PROMPT")

    assert isinstance(result, ProviderFailure)
    assert "API error" in result.reason


def test_get_model_provider_returns_stub_when_no_api_key() -> None:
    """Test that the factory falls back to the stub without a key."""
    settings = Settings(openai_api_key=None)

    assert isinstance(get_model_provider(settings), DeterministicStubProvider)


def test_get_model_provider_returns_stub_for_blank_api_key() -> None:
    settings = Settings(openai_api_key=SecretStr(""))

    assert isinstance(get_model_provider(settings), DeterministicStubProvider)


def test_get_model_provider_returns_openai_when_api_key_present() -> None:
    """Test that the factory builds an OpenAI provider when a key is set."""
    settings = Settings(
        openai_api_key=SecretStr("test_key"),
        openai_base_url="http://127.0.0.1:1234/v1",
        provider_timeout_seconds=5.0,
    )

    provider = get_model_provider(settings)

    assert isinstance(provider, OpenAIProvider)
    assert provider.name == "openai"
    assert str(provider.client.base_url).startswith("http://127.0.0.1:1234/v1")

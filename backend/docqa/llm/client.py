"""LLM provider adapters.

Security: Reads API key from settings only, never hardcoded.
Provides deterministic stub when no key present for testing.

Adapters never raise for provider-side failures. They return a
ProviderResult the orchestrator matches on; exceptions escaping an
adapter are bugs.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from openai import AsyncOpenAI

from backend.docqa.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSuccess:
    """Provider answered. ``text`` may be empty if the model produced nothing."""

    text: str


@dataclass(frozen=True)
class ProviderFailure:
    """Provider invocation failed outright."""

    reason: str


ProviderResult = ProviderSuccess | ProviderFailure


class ModelProvider(Protocol):
    """Protocol for generative model providers."""

    name: str

    async def generate(self, model: str, prompt: str) -> ProviderResult:
        """Send a single prompt to the model.

        Args:
            model: Provider model name
            prompt: Fully assembled prompt text

        Returns:
            ProviderSuccess with the model text, or ProviderFailure
        """
        ...


class DeterministicStubProvider:
    """Deterministic stub provider for testing (no API key required)."""

    name = "stub"

    async def generate(self, model: str, prompt: str) -> ProviderResult:
        """Generate deterministic stub answer."""
        return ProviderSuccess(
            text=(
                f"No model provider is configured (model: {model}). "
                f"Received a prompt of {len(prompt)} characters.\n\n"
                "*This is a stub response generated without an LLM.*"
            )
        )


class OpenAIProvider:
    """OpenAI-backed provider (works with any OpenAI-compatible endpoint)."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        temperature: float = 0.2,
        timeout_seconds: float = 30.0,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (read from environment)
            base_url: Optional OpenAI-compatible endpoint
            temperature: Sampling temperature
            timeout_seconds: Per-request timeout enforced by the SDK
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout_seconds)
        self.temperature = temperature

    async def generate(self, model: str, prompt: str) -> ProviderResult:
        """Generate answer using the chat completions API."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            return ProviderFailure(reason=f"{type(e).__name__}: {e}")

        if not response.choices:
            logger.warning("OpenAI returned no choices")
            return ProviderSuccess(text="")

        return ProviderSuccess(text=response.choices[0].message.content or "")


def get_model_provider(settings: Settings | None = None) -> ModelProvider:
    """Factory function to get appropriate provider based on config.

    Returns:
        OpenAIProvider if API key is configured, DeterministicStubProvider otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info(f"Using OpenAI provider with model {settings.llm_model}")
        return OpenAIProvider(
            api_key=api_key.get_secret_value(),
            base_url=settings.openai_base_url,
            temperature=settings.llm_temperature,
            timeout_seconds=settings.provider_timeout_seconds,
        )

    logger.warning("No OpenAI API key configured, using deterministic stub provider")
    return DeterministicStubProvider()

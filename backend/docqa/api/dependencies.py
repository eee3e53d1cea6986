"""FastAPI dependency providers.

The session is a process-wide singleton: there is no per-user isolation.
Tests swap any of these out via ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from backend.docqa.config import Settings, get_settings
from backend.docqa.db.inmemory import SessionState
from backend.docqa.llm.client import ModelProvider
from backend.docqa.llm.client import get_model_provider as build_model_provider
from backend.docqa.orchestration.chat import ChatOrchestrator
from backend.docqa.orchestration.context import ContextAssembler, TruncateDocuments
from backend.docqa.utils.metrics import PrometheusChatMetrics

_session_state = SessionState()
_metrics = PrometheusChatMetrics()


def get_session_state() -> SessionState:
    """Return the process-wide session."""
    return _session_state


def get_metrics() -> PrometheusChatMetrics:
    return _metrics


@lru_cache
def get_model_provider() -> ModelProvider:
    """Return the cached provider built from settings."""
    return build_model_provider(get_settings())


def get_context_assembler(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ContextAssembler:
    if settings.max_document_chars:
        return ContextAssembler(transform=TruncateDocuments(settings.max_document_chars))
    return ContextAssembler()


def get_chat_orchestrator(
    settings: Annotated[Settings, Depends(get_settings)],
    session: Annotated[SessionState, Depends(get_session_state)],
    provider: Annotated[ModelProvider, Depends(get_model_provider)],
    assembler: Annotated[ContextAssembler, Depends(get_context_assembler)],
    metrics: Annotated[PrometheusChatMetrics, Depends(get_metrics)],
) -> ChatOrchestrator:
    return ChatOrchestrator(
        session=session,
        provider=provider,
        model=settings.llm_model,
        timeout_seconds=settings.provider_timeout_seconds,
        assembler=assembler,
        metrics=metrics,
    )

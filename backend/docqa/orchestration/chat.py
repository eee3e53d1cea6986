"""Chat orchestration - question to grounded answer.

One pass per request:

    validate -> require documents -> record user turn -> assemble prompt
    -> call provider -> record assistant turn -> return it

The user turn is recorded before the provider call, so a failed call still
leaves the question in the transcript. Validation and precondition failures
happen before anything is recorded.

If the session is cleared while the provider call is in flight, the answer is
still returned but not recorded, so the transcript never outlives its
documents.
"""

import asyncio
import logging
import time

from backend.docqa.db.repositories import SessionRepository
from backend.docqa.errors import InvalidQuestionError, NoDocumentsError, ProviderError
from backend.docqa.llm.client import (
    ModelProvider,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
)
from backend.docqa.models.messages import Message, MessageRole
from backend.docqa.orchestration.context import ContextAssembler
from backend.docqa.utils.logging import StructuredProviderLogger
from backend.docqa.utils.metrics import PrometheusChatMetrics

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_APOLOGY = "I apologize, but I couldn't generate a response."


class ChatOrchestrator:
    """Coordinates a single question against the current session."""

    def __init__(
        self,
        *,
        session: SessionRepository,
        provider: ModelProvider,
        model: str,
        timeout_seconds: float,
        assembler: ContextAssembler | None = None,
        metrics: PrometheusChatMetrics | None = None,
        provider_logger: StructuredProviderLogger | None = None,
    ) -> None:
        self.session = session
        self.provider = provider
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.assembler = assembler or ContextAssembler()
        self.metrics = metrics or PrometheusChatMetrics()
        self.provider_logger = provider_logger or StructuredProviderLogger()

    async def ask(self, question: object) -> Message:
        """Answer a question from the held documents.

        Args:
            question: Raw question from the request body

        Returns:
            The assistant Message, recorded unless the session was cleared
            during the provider call

        Raises:
            InvalidQuestionError: question is not a non-empty string
            NoDocumentsError: no documents are held
            ProviderError: the provider call failed or timed out
        """
        if not isinstance(question, str) or not question:
            self.metrics.inc_chat("invalid_question")
            raise InvalidQuestionError()

        generation, documents = self.session.snapshot()
        if not documents:
            self.metrics.inc_chat("no_documents")
            raise NoDocumentsError()

        _, recorded = self.session.append_message_if_current(
            MessageRole.user, question, generation
        )
        if not recorded:
            # Cleared between the snapshot and the append
            self.metrics.inc_chat("no_documents")
            raise NoDocumentsError()

        prompt = self.assembler.build_prompt(documents, question)
        logger.info(
            f"[chat] {len(documents)} document(s), prompt {len(prompt)} chars, model={self.model}"
        )

        result = await self._invoke_provider(prompt)

        if isinstance(result, ProviderFailure):
            self.metrics.inc_chat("provider_error")
            raise ProviderError(result.reason)

        content = result.text
        if not content.strip():
            logger.warning("[chat] provider returned empty content, using apology")
            content = EMPTY_RESPONSE_APOLOGY

        message, recorded = self.session.append_message_if_current(
            MessageRole.assistant, content, generation
        )
        if not recorded:
            logger.info("[chat] session cleared during provider call, answer not recorded")
        self.metrics.inc_chat("answered")
        return message

    async def _invoke_provider(self, prompt: str) -> ProviderResult:
        start = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self.provider.generate(self.model, prompt), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            result = ProviderFailure(reason=f"timed out after {self.timeout_seconds:g}s")

        latency_ms = (time.perf_counter() - start) * 1000
        outcome = "success" if isinstance(result, ProviderSuccess) else "failure"
        self.metrics.record_provider_latency(outcome, latency_ms)
        self.provider_logger.log_call(
            provider=self.provider.name,
            model=self.model,
            outcome=outcome,
            latency_ms=latency_ms,
            prompt_chars=len(prompt),
            error_reason=result.reason if isinstance(result, ProviderFailure) else None,
        )
        return result

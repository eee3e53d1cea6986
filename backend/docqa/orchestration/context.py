"""Prompt assembly from held documents.

Every document is concatenated verbatim. Nothing here counts tokens, so
prompt size grows with the number and size of held documents. A
ContextTransform can be injected to reshape documents before
concatenation; the default leaves them untouched.
"""

from collections.abc import Sequence
from typing import Protocol

from backend.docqa.models.docs import Document

DOCUMENT_SEPARATOR = "\n\n---\n\n"

PROMPT_TEMPLATE = """You are a helpful assistant that answers questions based on the provided document content.

Document Content:
{context}

User Question: {question}

Please provide a clear, accurate answer based only on the information in the documents. If the answer cannot be found in the documents, politely say so."""


class ContextTransform(Protocol):
    """Strategy applied to the document list before concatenation."""

    def __call__(self, documents: Sequence[Document]) -> list[Document]: ...


def identity_transform(documents: Sequence[Document]) -> list[Document]:
    return list(documents)


class TruncateDocuments:
    """Cap each document's content at ``max_chars`` characters."""

    marker = "\n[... truncated]"

    def __init__(self, max_chars: int) -> None:
        if max_chars <= 0:
            raise ValueError("max_chars must be positive")
        self.max_chars = max_chars

    def __call__(self, documents: Sequence[Document]) -> list[Document]:
        result: list[Document] = []
        for doc in documents:
            if len(doc.content) <= self.max_chars:
                result.append(doc)
            else:
                result.append(
                    doc.model_copy(update={"content": doc.content[: self.max_chars] + self.marker})
                )
        return result


def format_document_block(document: Document) -> str:
    return f"Document: {document.name}\n\n{document.content}"


def build_context(documents: Sequence[Document]) -> str:
    """Join document blocks with a horizontal-rule separator."""
    return DOCUMENT_SEPARATOR.join(format_document_block(doc) for doc in documents)


def build_prompt(documents: Sequence[Document], question: str) -> str:
    """Build the final model prompt.

    Deterministic: same documents and question give byte-identical output.

    Args:
        documents: Documents in insertion order
        question: Raw user question

    Returns:
        Prompt text with grounding context and instructions
    """
    return PROMPT_TEMPLATE.format(context=build_context(documents), question=question)


class ContextAssembler:
    """Applies the configured transform, then builds the prompt."""

    def __init__(self, transform: ContextTransform | None = None) -> None:
        self.transform: ContextTransform = transform or identity_transform

    def build_prompt(self, documents: Sequence[Document], question: str) -> str:
        return build_prompt(self.transform(documents), question)

"""Models package - re-exports for convenience."""

from backend.docqa.models.docs import Document, DocumentSummary
from backend.docqa.models.messages import Message, MessageOut, MessageRole

__all__ = [
    "Document",
    "DocumentSummary",
    "Message",
    "MessageOut",
    "MessageRole",
]

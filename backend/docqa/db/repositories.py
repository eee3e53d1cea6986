"""Repository protocol interfaces for session data access."""

from typing import Protocol

from backend.docqa.models.docs import Document
from backend.docqa.models.messages import Message, MessageRole


class DocumentStore(Protocol):
    """Registry of uploaded documents."""

    def add_document(
        self, *, name: str, size_bytes: int, content: str, media_type: str
    ) -> Document:
        """Store a new document under a freshly generated id.

        Uploading the same name twice yields two distinct documents.

        Args:
            name: Original filename
            size_bytes: Original upload size
            content: Extracted text
            media_type: Declared content type

        Returns:
            The stored Document
        """
        ...

    def list_documents(self) -> list[Document]:
        """List documents in insertion order."""
        ...

    def remove_document(self, document_id: str) -> None:
        """Remove a document; no-op if absent.

        Removing the last document also clears the transcript.
        """
        ...

    def clear_documents(self) -> None:
        """Remove every document and clear the transcript."""
        ...

    def document_count(self) -> int:
        ...


class Transcript(Protocol):
    """Append-only log of chat turns."""

    def append_message(self, role: MessageRole, content: str) -> Message:
        """Append a turn, assigning its id and timestamp.

        Args:
            role: Author of the turn
            content: Turn text

        Returns:
            The appended Message
        """
        ...

    def list_messages(self) -> list[Message]:
        """List turns in append order."""
        ...

    def clear_messages(self) -> None:
        ...


class SessionRepository(DocumentStore, Transcript, Protocol):
    """Documents and transcript owned together, as the orchestrator needs them.

    Every transcript clear starts a new generation. A turn tagged with an
    older generation belongs to a cleared session and is not recorded.
    """

    def snapshot(self) -> tuple[int, list[Document]]:
        """Return the current generation and documents in one read."""
        ...

    def append_message_if_current(
        self, role: MessageRole, content: str, generation: int
    ) -> tuple[Message, bool]:
        """Append a turn unless the transcript was cleared since ``generation``.

        Returns:
            The message and whether it was recorded
        """
        ...

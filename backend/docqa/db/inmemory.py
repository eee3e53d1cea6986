"""In-memory implementations of repository interfaces."""

import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from backend.docqa.models.docs import Document
from backend.docqa.models.messages import Message, MessageRole


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionState:
    """Process-wide session: the document set plus the chat transcript.

    Implements both DocumentStore and Transcript. All reads and writes go
    through one lock so that dropping to zero documents and clearing the
    transcript happen as a single step. Nothing here blocks for long;
    callers must never hold the lock across a provider call.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        # dicts keep insertion order, which prompt assembly relies on
        self._documents: dict[str, Document] = {}
        self._messages: list[Message] = []
        # Bumped by every transcript clear; turns tagged with an older
        # generation are not recorded
        self._generation = 0

    # Documents

    def add_document(
        self, *, name: str, size_bytes: int, content: str, media_type: str
    ) -> Document:
        """Store a new document under a fresh uuid4 id."""
        document = Document(
            id=str(uuid.uuid4()),
            name=name,
            size_bytes=size_bytes,
            media_type=media_type,
            content=content,
        )
        with self._lock:
            self._documents[document.id] = document
        return document

    def list_documents(self) -> list[Document]:
        """List documents in insertion order."""
        with self._lock:
            return list(self._documents.values())

    def remove_document(self, document_id: str) -> None:
        """Remove a document if present.

        Dropping to zero documents clears the transcript in the same
        critical section.
        """
        with self._lock:
            self._documents.pop(document_id, None)
            if not self._documents:
                self._clear_transcript()

    def clear_documents(self) -> None:
        """Remove all documents and the transcript."""
        with self._lock:
            self._documents = {}
            self._clear_transcript()

    def document_count(self) -> int:
        with self._lock:
            return len(self._documents)

    def snapshot(self) -> tuple[int, list[Document]]:
        """Return the current clear generation and documents, read together."""
        with self._lock:
            return self._generation, list(self._documents.values())

    # Transcript

    def append_message(self, role: MessageRole, content: str) -> Message:
        """Append a turn. Order is append order, not timestamp order."""
        with self._lock:
            message = self._new_message(role, content)
            self._messages.append(message)
        return message

    def append_message_if_current(
        self, role: MessageRole, content: str, generation: int
    ) -> tuple[Message, bool]:
        """Append a turn only if no clear happened since ``generation``.

        Args:
            role: Author of the turn
            content: Turn text
            generation: Generation returned by ``snapshot``

        Returns:
            The message and whether it was recorded
        """
        with self._lock:
            message = self._new_message(role, content)
            if generation != self._generation:
                return message, False
            self._messages.append(message)
        return message, True

    def list_messages(self) -> list[Message]:
        with self._lock:
            return list(self._messages)

    def clear_messages(self) -> None:
        with self._lock:
            self._clear_transcript()

    def _new_message(self, role: MessageRole, content: str) -> Message:
        return Message(
            id=str(uuid.uuid4()),
            role=role,
            content=content,
            timestamp=self._clock(),
        )

    def _clear_transcript(self) -> None:
        # Caller holds the lock
        self._messages = []
        self._generation += 1

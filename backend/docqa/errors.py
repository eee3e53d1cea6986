"""Domain error taxonomy.

Every error carries the HTTP status it maps to and a human-readable message
that is safe to show to the caller. Routes translate these into
HTTPException.
"""

from fastapi import status


class DocQAError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(DocQAError):
    """Caller sent something we cannot accept (400)."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidQuestionError(ClientInputError):
    def __init__(self, message: str = "Question must be a non-empty string") -> None:
        super().__init__(message)


class MissingFileError(ClientInputError):
    def __init__(self, message: str = "No file uploaded") -> None:
        super().__init__(message)


class FileTooLargeError(ClientInputError):
    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        limit_mb = limit_bytes / (1024 * 1024)
        super().__init__(f"File size exceeds {limit_mb:g}MB limit")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class UnsupportedFormatError(ClientInputError):
    """Upload resolved to a format we never extract."""


class ExtractionError(DocQAError):
    """Parser rejected the byte stream (400)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ExtractionFailedError(ExtractionError):
    """Parser-level failure; ``reason`` holds the parser's own message."""

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class PreconditionError(DocQAError):
    status_code = status.HTTP_400_BAD_REQUEST


class NoDocumentsError(PreconditionError):
    def __init__(self, message: str = "No documents uploaded") -> None:
        super().__init__(message)


class ProviderError(DocQAError):
    """Model provider invocation failed outright (500).

    ``reason`` is for logs only; the caller sees the generic message.
    """

    def __init__(self, reason: str, message: str = "Failed to process question") -> None:
        super().__init__(message)
        self.reason = reason

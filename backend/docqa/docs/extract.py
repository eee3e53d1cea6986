"""Document text extraction - bytes + declared media type to plain text.

Formats form a closed set. Resolution looks at the declared media type
first and only falls back to the filename suffix when the type says nothing
useful (browsers send ``application/octet-stream`` or an empty string for
anything they don't recognise).

Size limits are the caller's job; by the time bytes reach here they have
already passed the upload ceiling.
"""

import io
import logging
from collections.abc import Callable
from enum import Enum
from pathlib import PurePath

from docx import Document as DocxDocument
from pypdf import PdfReader

from backend.docqa.errors import ExtractionFailedError, UnsupportedFormatError

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

AMBIGUOUS_MEDIA_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})

TEXT_LIKE_MEDIA_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/x-yaml",
        "application/yaml",
        "application/javascript",
        "application/x-ndjson",
    }
)

TEXT_SUFFIXES = frozenset(
    {".txt", ".md", ".markdown", ".csv", ".tsv", ".json", ".xml", ".yaml", ".yml", ".log", ".html", ".htm"}
)

PDF_EMPTY_PLACEHOLDER = (
    "[PDF uploaded but contains no extractable text. This may be a scanned image PDF.]"
)
DOCX_EMPTY_PLACEHOLDER = "[DOCX uploaded but contains no extractable text.]"


class DocumentFormat(str, Enum):
    """Supported upload formats."""

    TEXT = "text"
    PDF = "pdf"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"


def _normalize_media_type(media_type: str | None) -> str:
    # Drop parameters such as "; charset=utf-8"
    return (media_type or "").split(";", 1)[0].strip().lower()


def _suffix(filename: str | None) -> str:
    return PurePath(filename or "").suffix.lower()


def resolve_format(media_type: str | None, filename: str | None) -> DocumentFormat:
    """Resolve the upload format from its declared media type and filename.

    Args:
        media_type: Content type declared by the client (may be empty)
        filename: Original filename as uploaded

    Returns:
        The matching DocumentFormat; UNSUPPORTED when nothing matches
    """
    kind = _normalize_media_type(media_type)
    suffix = _suffix(filename)

    if kind == PDF_MEDIA_TYPE:
        return DocumentFormat.PDF
    if kind == DOCX_MEDIA_TYPE or suffix == ".docx":
        return DocumentFormat.DOCX
    if suffix == ".doc":
        return DocumentFormat.UNSUPPORTED
    if kind.startswith("text/"):
        return DocumentFormat.TEXT

    if kind in AMBIGUOUS_MEDIA_TYPES:
        if suffix == ".pdf":
            return DocumentFormat.PDF
        if suffix in TEXT_SUFFIXES:
            return DocumentFormat.TEXT
        return DocumentFormat.UNSUPPORTED

    if kind in TEXT_LIKE_MEDIA_TYPES:
        return DocumentFormat.TEXT

    return DocumentFormat.UNSUPPORTED


def _extract_plain_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionFailedError(
            f"Failed to read text file: {e}. Please ensure it is UTF-8 encoded.",
            reason=str(e),
        ) from e


def _extract_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
    except Exception as e:
        logger.warning(f"PDF parsing error: {e}")
        reason = str(e) or type(e).__name__
        raise ExtractionFailedError(
            f"Failed to parse PDF: {reason}. Please ensure it's a valid PDF file.",
            reason=reason,
        ) from e

    if not text.strip():
        logger.warning("PDF parsed but no text extracted")
        return PDF_EMPTY_PLACEHOLDER
    return text


def _extract_docx(data: bytes) -> str:
    try:
        document = DocxDocument(io.BytesIO(data))
        text = "\n".join(paragraph.text for paragraph in document.paragraphs)
    except Exception as e:
        logger.warning(f"DOCX parsing error: {e}")
        reason = str(e) or type(e).__name__
        raise ExtractionFailedError(
            f"Failed to parse DOCX: {reason}. Please ensure it's a valid Word document.",
            reason=reason,
        ) from e

    if not text.strip():
        logger.warning("DOCX parsed but no text extracted")
        return DOCX_EMPTY_PLACEHOLDER
    return text


_EXTRACTORS: dict[DocumentFormat, Callable[[bytes], str]] = {
    DocumentFormat.TEXT: _extract_plain_text,
    DocumentFormat.PDF: _extract_pdf,
    DocumentFormat.DOCX: _extract_docx,
}


def extract_text(data: bytes, media_type: str | None, filename: str | None) -> str:
    """Convert an uploaded byte buffer into plain text.

    Args:
        data: Raw upload bytes
        media_type: Declared content type
        filename: Original filename

    Returns:
        Extracted text, or a placeholder when a PDF/DOCX has no text layer

    Raises:
        UnsupportedFormatError: Legacy .doc or an unrecognised binary type
        ExtractionFailedError: Parser rejected the bytes
    """
    fmt = resolve_format(media_type, filename)

    if fmt is DocumentFormat.UNSUPPORTED:
        if _suffix(filename) == ".doc":
            raise UnsupportedFormatError("Old .doc format not supported. Please convert to .docx")
        raise UnsupportedFormatError(
            f"Unsupported file type: {media_type or 'unknown'}. "
            "Please upload a text, PDF, or DOCX file."
        )

    return _EXTRACTORS[fmt](data)

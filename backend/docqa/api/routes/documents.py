"""Document endpoints - POST /api/upload, GET/DELETE /api/documents."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from backend.docqa.api.dependencies import get_metrics, get_session_state
from backend.docqa.config import Settings, get_settings
from backend.docqa.db.inmemory import SessionState
from backend.docqa.docs.extract import extract_text, resolve_format
from backend.docqa.errors import DocQAError, FileTooLargeError, MissingFileError
from backend.docqa.models.docs import DocumentSummary
from backend.docqa.utils.metrics import PrometheusChatMetrics

router = APIRouter(prefix="/api", tags=["documents"])
logger = logging.getLogger(__name__)


class UploadResponse(BaseModel):
    """Response for POST /api/upload."""

    success: bool = True
    document: DocumentSummary


class DocumentListResponse(BaseModel):
    """Response for GET /api/documents."""

    documents: list[DocumentSummary]


class SuccessResponse(BaseModel):
    success: bool = True


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    session: Annotated[SessionState, Depends(get_session_state)],
    settings: Annotated[Settings, Depends(get_settings)],
    metrics: Annotated[PrometheusChatMetrics, Depends(get_metrics)],
    file: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """Upload a document and extract its text into the session.

    The size ceiling is enforced before any parsing happens.

    Args:
        session: Process-wide session
        settings: Application settings (upload ceiling)
        metrics: Upload counters
        file: Multipart form field ``file``

    Returns:
        Stored document metadata (never its content)

    Raises:
        HTTPException: 400 for missing/oversized/unsupported/unparseable files,
            500 for anything unexpected
    """
    try:
        if file is None:
            raise MissingFileError()

        limit = settings.max_upload_bytes
        # Read one byte past the ceiling so oversize is detectable without
        # buffering the whole upload
        data = await file.read(limit + 1)
        size_bytes = file.size if file.size is not None else len(data)
        if size_bytes > limit or len(data) > limit:
            raise FileTooLargeError(max(size_bytes, len(data)), limit)

        name = file.filename or "upload"
        media_type = file.content_type or ""
        fmt = resolve_format(media_type, name)

        content = await run_in_threadpool(extract_text, data, media_type, name)

        document = session.add_document(
            name=name,
            size_bytes=size_bytes,
            content=content,
            media_type=media_type,
        )
    except DocQAError as e:
        logger.info(f"[POST /api/upload] rejected: {e.message}")
        metrics.inc_upload_rejection(type(e).__name__)
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"[POST /api/upload] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file",
        ) from e

    metrics.inc_upload(fmt.value)
    logger.info(
        f"[POST /api/upload] stored {document.id} name={document.name!r} "
        f"size={document.size_bytes} format={fmt.value}"
    )
    return UploadResponse(document=DocumentSummary.from_document(document))


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    session: Annotated[SessionState, Depends(get_session_state)],
) -> DocumentListResponse:
    """List held documents in upload order, without content."""
    try:
        documents = session.list_documents()
    except Exception as e:
        logger.error(f"[GET /api/documents] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get documents",
        ) from e

    return DocumentListResponse(
        documents=[DocumentSummary.from_document(doc) for doc in documents]
    )


@router.delete("/documents/{document_id}", response_model=SuccessResponse)
async def remove_document(
    document_id: str,
    session: Annotated[SessionState, Depends(get_session_state)],
) -> SuccessResponse:
    """Remove one document. Idempotent; removing the last one clears the chat."""
    try:
        session.remove_document(document_id)
    except Exception as e:
        logger.error(f"[DELETE /api/documents/{document_id}] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove document",
        ) from e

    return SuccessResponse()


@router.delete("/documents", response_model=SuccessResponse)
async def clear_documents(
    session: Annotated[SessionState, Depends(get_session_state)],
) -> SuccessResponse:
    """Remove all documents and the chat transcript."""
    try:
        session.clear_documents()
    except Exception as e:
        logger.error(f"[DELETE /api/documents] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to clear documents",
        ) from e

    logger.info("[DELETE /api/documents] session cleared")
    return SuccessResponse()

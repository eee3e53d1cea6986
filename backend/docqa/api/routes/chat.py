"""Chat endpoints - POST /api/chat, GET /api/messages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from backend.docqa.api.dependencies import get_chat_orchestrator, get_session_state
from backend.docqa.db.inmemory import SessionState
from backend.docqa.errors import DocQAError, ProviderError
from backend.docqa.models.messages import MessageOut
from backend.docqa.orchestration.chat import ChatOrchestrator

router = APIRouter(prefix="/api", tags=["chat"])
logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    question: str


class ChatResponse(BaseModel):
    """Response for POST /api/chat."""

    success: bool = True
    message: MessageOut


class MessageListResponse(BaseModel):
    """Response for GET /api/messages."""

    messages: list[MessageOut]


@router.post("/chat", response_model=ChatResponse, status_code=status.HTTP_200_OK)
async def chat(
    request: ChatRequest,
    orchestrator: Annotated[ChatOrchestrator, Depends(get_chat_orchestrator)],
) -> ChatResponse:
    """Answer a question grounded in the uploaded documents.

    Args:
        request: Question payload
        orchestrator: Chat orchestrator bound to the session

    Returns:
        The assistant message that was appended to the transcript

    Raises:
        HTTPException: 400 for an empty question or no documents,
            500 if the provider or anything else fails
    """
    try:
        message = await orchestrator.ask(request.question)
    except ProviderError as e:
        # Provider detail stays in the log
        logger.error(f"[POST /api/chat] provider failure: {e.reason}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except DocQAError as e:
        logger.info(f"[POST /api/chat] rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"[POST /api/chat] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process question",
        ) from e

    return ChatResponse(message=MessageOut.from_message(message))


@router.get("/messages", response_model=MessageListResponse)
async def list_messages(
    session: Annotated[SessionState, Depends(get_session_state)],
) -> MessageListResponse:
    """Return the transcript in append order."""
    try:
        messages = session.list_messages()
    except Exception as e:
        logger.error(f"[GET /api/messages] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get messages",
        ) from e

    return MessageListResponse(messages=[MessageOut.from_message(m) for m in messages])

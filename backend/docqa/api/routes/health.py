"""Health check endpoints.

There is no database or cache; the only external collaborator is the model
provider, which is reported but never pinged.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from backend.docqa.api.dependencies import get_model_provider, get_session_state
from backend.docqa.db.inmemory import SessionState
from backend.docqa.llm.client import ModelProvider

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz(
    session: Annotated[SessionState, Depends(get_session_state)],
    provider: Annotated[ModelProvider, Depends(get_model_provider)],
) -> dict[str, Any]:
    """Health check with component details.

    Returns:
        Provider in use and current session sizes
    """
    return {
        "status": "ok",
        "components": {
            "provider": provider.name,
            "documents": session.document_count(),
            "messages": len(session.list_messages()),
        },
    }

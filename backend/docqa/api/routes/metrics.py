"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Expose upload and chat metrics.

    - documents_uploaded_total{format}
    - upload_rejections_total{reason}
    - chat_requests_total{outcome}
    - provider_latency_ms{outcome}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

"""Prometheus metrics for uploads and chat."""

from prometheus_client import Counter, Histogram

# Upload metrics
documents_uploaded_total = Counter(
    "documents_uploaded_total",
    "Total documents accepted into the session",
    ["format"],
)

upload_rejections_total = Counter(
    "upload_rejections_total",
    "Total uploads rejected before storage",
    ["reason"],
)

# Chat metrics
chat_requests_total = Counter(
    "chat_requests_total",
    "Total chat requests by outcome",
    ["outcome"],
)

provider_latency_ms = Histogram(
    "provider_latency_ms",
    "Model provider latency in milliseconds",
    ["outcome"],
    buckets=[100, 250, 500, 1000, 2000, 4000, 8000, 16000, 32000],
)


class PrometheusChatMetrics:
    """Prometheus-based metrics implementation."""

    def inc_upload(self, fmt: str) -> None:
        documents_uploaded_total.labels(format=fmt).inc()

    def inc_upload_rejection(self, reason: str) -> None:
        upload_rejections_total.labels(reason=reason).inc()

    def inc_chat(self, outcome: str) -> None:
        chat_requests_total.labels(outcome=outcome).inc()

    def record_provider_latency(self, outcome: str, latency_ms: float) -> None:
        """Record provider call latency."""
        provider_latency_ms.labels(outcome=outcome).observe(latency_ms)

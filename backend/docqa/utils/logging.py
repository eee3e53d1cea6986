"""Logging setup and structured logging for provider calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class StructuredProviderLogger:
    """Structured logger for model provider calls."""

    def log_call(
        self,
        *,
        provider: str,
        model: str,
        outcome: str,
        latency_ms: float,
        prompt_chars: int,
        error_reason: str | None = None,
    ) -> None:
        """Log provider invocation with structured data."""
        log_data: dict[str, Any] = {
            "provider": provider,
            "model": model,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "prompt_chars": prompt_chars,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Provider call: {provider}/{model} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

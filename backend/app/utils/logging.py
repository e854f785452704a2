"""Structured logging for roadmap generations."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the API process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


class StructuredGenerationLogger:
    """Structured logger for session generations."""

    def log_generation(
        self,
        session_id: str,
        mode: str,
        outcome: str,
        latency_ms: float,
        day_count: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log one completed generation with structured data."""
        log_data: dict[str, Any] = {
            "session_id": session_id,
            "mode": mode,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if day_count is not None:
            log_data["day_count"] = day_count
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Roadmap generation: {mode} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_rejection(self, session_id: str, reason: str) -> None:
        """Log a rejected submit."""
        logger.warning(
            f"Submit rejected: {reason}",
            extra={"structured": {"session_id": session_id, "reason": reason}},
        )

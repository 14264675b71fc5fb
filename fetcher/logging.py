"""Structured logging helpers for GitHub API requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.models import RequestLog
from core.structured_logging import emit_json_event


def _isoformat(value: datetime | None) -> str | None:
    """Serialize datetimes for logs."""
    if value is None:
        return None
    return value.isoformat()


def request_log_to_dict(request_log: RequestLog) -> dict[str, Any]:
    """Convert RequestLog to a JSON-safe dictionary."""
    return {
        "id": request_log.id,
        "method": request_log.method,
        "url": request_log.url,
        "status_code": request_log.status_code,
        "latency_ms": request_log.latency_ms,
        "error": request_log.error,
        "timestamp": _isoformat(request_log.created_at),
    }


def emit_event(event_type: str, *, level: str = "info", **payload: Any) -> str:
    """Emit a structured event log line and return it for testability."""
    return emit_json_event(event_type, run_id=payload.pop("run_id", None), level=level, **payload)


def emit_request_log(request_log: RequestLog, run_id: str | None = None) -> str:
    """Emit a debug-level `github_request` line for one API call."""
    payload = request_log_to_dict(request_log)
    payload.pop("timestamp")
    level = "warning" if request_log.error else "debug"
    return emit_json_event("github_request", run_id=run_id, level=level, **payload)

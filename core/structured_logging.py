"""Shared structured JSON logging helpers."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from core.config import GitHubConfig, get_log_file_path, get_log_level


def _level_rank(level: str) -> int:
    """Map a level name onto its position in GitHubConfig.LOG_LEVELS."""
    name = level.upper()
    if name == "WARN":
        name = "WARNING"
    if name not in GitHubConfig.LOG_LEVELS:
        return GitHubConfig.LOG_LEVELS.index("INFO")
    return GitHubConfig.LOG_LEVELS.index(name)


def emit_json_event(
    event_type: str,
    *,
    run_id: str | None,
    level: str = "info",
    **payload: Any,
) -> str:
    """
    Emit one JSON event line to stdout and return the rendered line.

    Lines below LOG_LEVEL are rendered but not printed. With
    LOG_FILE_ENABLED=true every line is also appended to LOG_FILE_PATH.
    """
    event: dict[str, Any] = {
        "event_type": event_type,
        "level": level,
        "timestamp": datetime.now(UTC).isoformat(),
        "run_id": run_id,
    }
    event.update(payload)
    line = json.dumps(event, ensure_ascii=True, sort_keys=True, default=str)
    if _level_rank(level) >= _level_rank(get_log_level()):
        print(line)

    log_path = get_log_file_path()
    if log_path:
        with open(log_path, "a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return line

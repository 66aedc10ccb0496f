"""Tool-call journal.

Append-only JSON Lines file: a ``request`` entry when a tool call starts
and a ``response`` entry when it finishes, correlated by request id.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class AuditLogger:
    """Writes one JSON object per line and flushes after each entry."""

    def __init__(self, log_path: Path) -> None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        self.path = log_path
        self._stream = log_path.open("a", encoding="utf-8")

    def _append(self, kind: str, request_id: Any, **fields: Any) -> None:
        entry = {"type": kind, "timestamp": _utc_now(), "request_id": request_id, **fields}
        self._stream.write(json.dumps(entry, default=str) + "\n")
        self._stream.flush()

    def log_request(self, request_id: Any, tool_name: str, arguments: dict[str, Any]) -> None:
        """Record a tool call before it runs."""
        self._append("request", request_id, tool_name=tool_name, arguments=arguments)

    def log_response(self, request_id: Any, status: str, duration_ms: float) -> None:
        """Record how a tool call ended.

        Args:
            request_id: Id given to the matching ``log_request``.
            status: ``success`` or ``error``.
            duration_ms: Wall time spent in the tool.
        """
        self._append(
            "response", request_id, result_status=status, execution_time_ms=duration_ms
        )

    def close(self) -> None:
        if not self._stream.closed:
            self._stream.close()

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

"""JSON Lines Telemetry adapter.

Implements the Telemetry port by appending one JSON object per event to a
file. Fields that could carry configuration values or credentials are
replaced by a redaction token before anything touches disk.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional


class JsonlTelemetry:
    _REDACTION_TOKEN = "***REDACTED***"
    _DEFAULT_SECRET_KEYS = frozenset(
        {
            "value",
            "aws_access_key",
            "aws_secret_access_key",
            "secret",
            "password",
            "token",
        }
    )

    def __init__(
        self,
        sink_path: Path,
        component: str = "biconfig",
        env: Optional[str] = None,
        secret_keys: Iterable[str] = _DEFAULT_SECRET_KEYS,
    ) -> None:
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)
        self._component = component
        self._env = env
        self._secret_keys = frozenset(secret_keys)
        self._lock = threading.Lock()

    def log(self, event: str, **fields: Any) -> None:
        sanitized_fields, redacted = self._sanitize_fields(fields)

        record: dict[str, Any] = {
            "event": event,
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "component": self._component,
            **sanitized_fields,
        }
        if self._env is not None:
            record["env"] = self._env
        if redacted:
            record["redacted_fields"] = sorted(redacted)

        self._write_record(record)

    def _sanitize_fields(self, fields: Mapping[str, Any]) -> tuple[dict[str, Any], set[str]]:
        sanitized: dict[str, Any] = {}
        redacted: set[str] = set()
        for key, value in fields.items():
            if key in self._secret_keys:
                sanitized[key] = self._REDACTION_TOKEN
                redacted.add(key)
            else:
                sanitized[key] = value

        return sanitized, redacted

    def _write_record(self, record: Mapping[str, Any]) -> None:
        payload = json.dumps(
            record, sort_keys=True, separators=(",", ":"), ensure_ascii=True, default=str
        )
        with self._lock:
            self._sink_path.parent.mkdir(parents=True, exist_ok=True)
            with self._sink_path.open("a", encoding="utf-8") as handle:
                handle.write(payload + "\n")

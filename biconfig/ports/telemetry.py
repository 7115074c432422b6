"""Telemetry Port Interface.

Contract: record structured resolution events (which source answered a key,
which deletes failed). Sinks are responsible for redacting values.
"""

from __future__ import annotations

from typing import Any, Protocol


class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...

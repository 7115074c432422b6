"""Configuration Port Interface.

Contract: read, write and enumerate string values by flat key. Implemented by
the Parameter Store adapter, the environment adapter and the dual-source
resolver, so any of them can stand in for another.
"""

from __future__ import annotations

from typing import Protocol


class Configuration(Protocol):
    def create(self, key: str, value: str) -> None: ...

    """Store a new value; fails if the key already exists."""

    def set(self, key: str, value: str) -> None: ...

    """Store or overwrite a value."""

    def delete(self, key: str) -> None: ...

    def get(self, key: str) -> str: ...

    """Return the value for ``key`` or raise KeyNotFoundError."""

    def get_environment(self) -> dict[str, str]: ...

    """
    Return the key/value mapping known to this source. What "known" means is
    source specific: a full remote listing for Parameter Store, only the
    observed values for the process environment.
    """

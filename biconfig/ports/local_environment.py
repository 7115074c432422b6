"""LocalEnvironmentPort Interface.

Contract: get/set/unset process environment variables by exact name. No case
or delimiter transformation happens at this layer.
"""

from __future__ import annotations

from typing import Optional, Protocol


class LocalEnvironmentPort(Protocol):
    def getenv(self, name: str) -> Optional[str]: ...

    def setenv(self, name: str, value: str) -> None: ...

    def unsetenv(self, name: str) -> None: ...

    """
    Remove ``name`` from the environment. Removing a variable that is not set
    is not an error.
    """

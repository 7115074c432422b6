from __future__ import annotations

import logging
import os
import threading
from typing import Optional

from biconfig.config.configs import EnvironmentSettings
from biconfig.errors.errors import (
    KeyAlreadyExistsError,
    KeyNotFoundError,
    LocalOperationError,
)
from biconfig.ports.configuration import Configuration
from biconfig.ports.local_environment import LocalEnvironmentPort

_LOGGER = logging.getLogger(__name__)

SOURCE = "env"


class OsEnvironment(LocalEnvironmentPort):
    """LocalEnvironmentPort backed by ``os.environ`` (process-global)."""

    def getenv(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def setenv(self, name: str, value: str) -> None:
        os.environ[name] = value

    def unsetenv(self, name: str) -> None:
        os.environ.pop(name, None)


class EnvironmentConfiguration(Configuration):
    """
    Configuration source backed by process environment variables.

    Every successful get or set records the key in an observed-values cache;
    delete removes it. ``get_environment`` returns that cache only, never a
    scan of the whole process environment: it reflects the keys this instance
    has touched. The Parameter Store source, by contrast, lists everything
    under its environment root.
    """

    def __init__(
        self,
        environment: Optional[LocalEnvironmentPort] = None,
        use_upper: bool = False,
        values: Optional[dict[str, str]] = None,
    ) -> None:
        self._environment = environment if environment is not None else OsEnvironment()
        self._use_upper = use_upper
        self._values: dict[str, str] = dict(values or {})
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: EnvironmentSettings,
        environment: Optional[LocalEnvironmentPort] = None,
    ) -> EnvironmentConfiguration:
        return cls(environment=environment, use_upper=settings.use_upper)

    @property
    def values(self) -> dict[str, str]:
        """Copy of the observed-values cache."""
        with self._lock:
            return dict(self._values)

    def get(self, key: str) -> str:
        value = self._environment.getenv(self._var_name(key))
        if not value:
            raise KeyNotFoundError(key, source=SOURCE)

        with self._lock:
            self._values[key] = value
        _LOGGER.debug(
            "config_key_read",
            extra={"event": "config_key_read", "key": key, "source": SOURCE},
        )
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._environment.setenv(self._var_name(key), value)
        except (OSError, ValueError) as exc:
            raise LocalOperationError(
                f"error setting environmental variable {key} - {exc}", key=key
            ) from exc

        with self._lock:
            self._values[key] = value
        _LOGGER.debug(
            "config_key_written",
            extra={"event": "config_key_written", "key": key, "source": SOURCE},
        )

    def create(self, key: str, value: str) -> None:
        if self._environment.getenv(self._var_name(key)):
            raise KeyAlreadyExistsError(
                f"error creating a new entry - environmental variable {key} already set",
                key=key,
                operation="create",
            )
        self.set(key, value)

    def delete(self, key: str) -> None:
        try:
            self._environment.unsetenv(self._var_name(key))
        except (OSError, ValueError) as exc:
            raise LocalOperationError(
                f"error unsetting environmental variable {key} - {exc}", key=key
            ) from exc

        with self._lock:
            self._values.pop(key, None)
        _LOGGER.debug(
            "config_key_deleted",
            extra={"event": "config_key_deleted", "key": key, "source": SOURCE},
        )

    def get_environment(self) -> dict[str, str]:
        """Return the previously read or written variables (see class docstring)."""
        return self.values

    def forget(self, key: str) -> None:
        """Drop ``key`` from the observed values without touching the environment."""
        with self._lock:
            self._values.pop(key, None)

    def _var_name(self, key: str) -> str:
        return key.upper() if self._use_upper else key

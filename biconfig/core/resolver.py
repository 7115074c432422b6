"""
Dual-source configuration resolver.

Composes the environment source (always present) with an optional Parameter
Store source behind the Configuration port.

Resolution order for get():
    1. override cache
    2. Parameter Store, when configured (any failure falls through)
    3. process environment (its failure is the one surfaced)

Without a Parameter Store source the resolver behaves like the environment
source alone.
"""

from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional

from biconfig.adapters.env_provider import EnvironmentConfiguration
from biconfig.adapters.ssm_provider import SSMConfiguration
from biconfig.config.configs import Settings
from biconfig.errors.errors import ConfigurationAccessError
from biconfig.ports.configuration import Configuration
from biconfig.ports.local_environment import LocalEnvironmentPort
from biconfig.ports.telemetry import Telemetry

_LOGGER = logging.getLogger(__name__)

SOURCE_OVERRIDE = "override"
SOURCE_REMOTE = "ssm"
SOURCE_LOCAL = "env"


class BiConfiguration(Configuration):
    def __init__(
        self,
        env_configuration: EnvironmentConfiguration,
        ssm_configuration: Optional[Configuration] = None,
        overrides: Optional[Mapping[str, str]] = None,
        telemetry: Optional[Telemetry] = None,
    ) -> None:
        """
        Args:
            env_configuration: Local source, always consulted last
            ssm_configuration: Remote source; None degrades to local-only behavior
            overrides: Values returned before either source is asked
            telemetry: Optional sink for resolution events
        """
        self._env_configuration = env_configuration
        self._ssm_configuration = ssm_configuration
        self._values: dict[str, str] = dict(overrides or {})
        self._telemetry = telemetry
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        environment: Optional[LocalEnvironmentPort] = None,
        telemetry: Optional[Telemetry] = None,
    ) -> BiConfiguration:
        """
        Build both sources from settings. Construction errors of the
        Parameter Store source (missing credentials, session setup) surface.
        """
        env_configuration = EnvironmentConfiguration.from_settings(
            settings.environment, environment=environment
        )
        ssm_configuration = (
            SSMConfiguration.from_settings(settings.ssm) if settings.ssm is not None else None
        )
        return cls(env_configuration, ssm_configuration, telemetry=telemetry)

    @property
    def remote_configured(self) -> bool:
        return self._ssm_configuration is not None

    @property
    def overrides(self) -> dict[str, str]:
        with self._lock:
            return dict(self._values)

    def override(self, key: str, value: str) -> None:
        """Pin ``key`` to ``value`` for this resolver, ahead of both sources."""
        with self._lock:
            self._values[key] = value

    def get(self, key: str) -> str:
        with self._lock:
            pinned = self._values.get(key)
        if pinned is not None:
            self._emit("config_key_resolved", key=key, source=SOURCE_OVERRIDE)
            return pinned

        if self._ssm_configuration is not None:
            try:
                value = self._ssm_configuration.get(key)
            except ConfigurationAccessError as exc:
                _LOGGER.debug(
                    "config_remote_fallback",
                    extra={
                        "event": "config_remote_fallback",
                        "key": key,
                        "error_type": type(exc).__name__,
                    },
                )
            else:
                self._emit("config_key_resolved", key=key, source=SOURCE_REMOTE)
                return value

        value = self._env_configuration.get(key)
        self._emit("config_key_resolved", key=key, source=SOURCE_LOCAL)
        return value

    def get_environment(self) -> dict[str, str]:
        """
        Observed local values overlaid with the full Parameter Store listing;
        remote wins on collision. Only a failing remote listing raises.
        """
        values = self._env_configuration.get_environment()

        if self._ssm_configuration is not None:
            values.update(self._ssm_configuration.get_environment())

        return values

    def set(self, key: str, value: str) -> None:
        """Write-through to Parameter Store when configured, else to the environment."""
        self._target().set(key, value)
        with self._lock:
            self._values.pop(key, None)

    def create(self, key: str, value: str) -> None:
        """
        Create on Parameter Store when configured, else in the environment.
        A successful create drops any override for ``key``.
        """
        self._target().create(key, value)
        with self._lock:
            self._values.pop(key, None)

    def delete(self, key: str) -> None:
        """
        Best-effort delete from both sources. Never raises; failures are
        logged and reported to telemetry.
        """
        if self._ssm_configuration is not None:
            self._delete_quietly(self._ssm_configuration, key, SOURCE_REMOTE)
        self._delete_quietly(self._env_configuration, key, SOURCE_LOCAL)

        with self._lock:
            self._values.pop(key, None)
        self._env_configuration.forget(key)

    def _target(self) -> Configuration:
        if self._ssm_configuration is not None:
            return self._ssm_configuration
        return self._env_configuration

    def _delete_quietly(self, source: Configuration, key: str, source_name: str) -> None:
        try:
            source.delete(key)
        except ConfigurationAccessError as exc:
            _LOGGER.warning(
                "config_delete_failed",
                extra={
                    "event": "config_delete_failed",
                    "key": key,
                    "source": source_name,
                    "error": str(exc),
                },
            )
            self._emit(
                "config_delete_failed",
                key=key,
                source=source_name,
                error_type=type(exc).__name__,
            )

    def _emit(self, event: str, **fields: str) -> None:
        if self._telemetry is not None:
            self._telemetry.log(event, **fields)

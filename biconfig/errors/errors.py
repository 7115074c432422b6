"""
Exceptions raised by the configuration sources.

Exception hierarchy:
- ConfigurationAccessError (base)
  - SettingsError: invalid or unloadable settings
    - MissingCredentialsError: no AWS credentials resolvable
  - SessionInitError: boto3 session/client setup failed
  - KeyNotFoundError: key absent at the queried source
  - RemoteOperationError: Parameter Store call failed
    - KeyAlreadyExistsError: create on an existing key
  - LocalOperationError: process environment call failed
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigurationAccessError(Exception):
    """Base exception for all configuration access errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class SettingsError(ConfigurationAccessError):
    """Raised when settings are invalid or cannot be loaded."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        errors: Optional[list[dict[str, str]]] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.errors = errors or []
        details = details or {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, component=component, details=details)


class MissingCredentialsError(SettingsError):
    """Raised when neither static nor environment-sourced credentials are available."""


class SessionInitError(ConfigurationAccessError):
    """Raised when the AWS session or SSM client cannot be created."""

    def __init__(
        self,
        message: str,
        *,
        region: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.region = region
        details = details or {}
        if region:
            details["region"] = region
        super().__init__(message, component=component, details=details)


class KeyNotFoundError(ConfigurationAccessError):
    """Raised when a key has no value at the queried source."""

    def __init__(
        self,
        key: str,
        *,
        source: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.key = key
        self.source = source
        # plain message: callers match on it
        super().__init__(message or f"no value with key {key}")


class RemoteOperationError(ConfigurationAccessError):
    """Raised when a Parameter Store call fails."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.key = key
        self.operation = operation
        self.error_code = error_code
        details = details or {}
        if operation:
            details["operation"] = operation
        if error_code:
            details["error_code"] = error_code
        super().__init__(message, component=component, details=details)


class KeyAlreadyExistsError(RemoteOperationError):
    """Raised by create when the key already holds a value."""


class LocalOperationError(ConfigurationAccessError):
    """Raised when reading or writing a process environment variable fails."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.key = key
        super().__init__(message, component=component, details=details)

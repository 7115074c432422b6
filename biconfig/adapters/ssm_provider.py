"""
AWS Systems Manager Parameter Store adapter.

Keys are translated to paths scoped by environment (``HELLO_WORLD`` in ``dev``
becomes ``/dev/hello/world``). Reads are always live; nothing is cached here.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from biconfig.config.configs import DEFAULT_KEY_DELIMITER, SSMSettings
from biconfig.core.key_path import environment_root, key_of, path_of
from biconfig.errors.errors import (
    KeyAlreadyExistsError,
    KeyNotFoundError,
    MissingCredentialsError,
    RemoteOperationError,
    SessionInitError,
)
from biconfig.ports.configuration import Configuration

_LOGGER = logging.getLogger(__name__)

SOURCE = "ssm"
PARAMETER_TYPE = "String"

_NOT_FOUND_CODES = frozenset({"ParameterNotFound"})
_ALREADY_EXISTS_CODES = frozenset({"ParameterAlreadyExists"})


def _error_code(exc: Exception) -> Optional[str]:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


class SSMConfiguration(Configuration):
    def __init__(
        self,
        client: Any,
        env: str,
        key_delimiter: str = DEFAULT_KEY_DELIMITER,
    ) -> None:
        """
        Wrap an existing SSM client.

        Args:
            client: boto3 SSM client (or anything exposing the same calls)
            env: Environment scope every path is confined to
            key_delimiter: Delimiter marking hierarchy in flat keys
        """
        self._client = client
        self._env = env
        self._key_delimiter = key_delimiter or DEFAULT_KEY_DELIMITER

    @classmethod
    def from_settings(cls, settings: SSMSettings) -> SSMConfiguration:
        """
        Select credentials, open a boto3 session and build the SSM client.

        Raises:
            MissingCredentialsError: no static key pair and no env flag, or the
                env flag is set but nothing is resolvable
            SessionInitError: boto3/botocore failed to build the session or client
        """
        if settings.use_env_params:
            session_kwargs: dict[str, Any] = {"region_name": settings.region}
        else:
            if not settings.has_static_credentials:
                raise MissingCredentialsError(
                    "no aws_access_key and/or aws_secret_access_key provided",
                    component=SOURCE,
                )
            session_kwargs = {
                "region_name": settings.region,
                "aws_access_key_id": settings.aws_access_key,
                "aws_secret_access_key": settings.aws_secret_access_key,
            }

        try:
            session = boto3.session.Session(**session_kwargs)
            if settings.use_env_params and session.get_credentials() is None:
                raise MissingCredentialsError(
                    "no AWS credentials found in the environment", component=SOURCE
                )
            client = session.client(
                "ssm", region_name=settings.region, endpoint_url=settings.endpoint_url
            )
        # botocore rejects a malformed endpoint_url with a plain ValueError
        except (BotoCoreError, ValueError) as exc:
            raise SessionInitError(
                f"error initializing aws session - {exc}",
                region=settings.region,
                component=SOURCE,
            ) from exc

        _LOGGER.debug(
            "ssm_client_initialized",
            extra={
                "event": "ssm_client_initialized",
                "env": settings.env,
                "region": settings.region,
                "credentials": "env" if settings.use_env_params else "static",
            },
        )
        return cls(client, env=settings.env, key_delimiter=settings.key_delimiter)

    @property
    def env(self) -> str:
        return self._env

    @property
    def key_delimiter(self) -> str:
        return self._key_delimiter

    def path(self, key: str) -> str:
        return path_of(key, self._env, self._key_delimiter)

    def create(self, key: str, value: str) -> None:
        """Create a new parameter; fails if the key already exists."""
        try:
            self._put(key, value, overwrite=False)
        except (ClientError, BotoCoreError) as exc:
            code = _error_code(exc)
            error_type = (
                KeyAlreadyExistsError if code in _ALREADY_EXISTS_CODES else RemoteOperationError
            )
            raise error_type(
                f"error creating a new entry - {exc}",
                key=key,
                operation="create",
                error_code=code,
                component=SOURCE,
            ) from exc

    def set(self, key: str, value: str) -> None:
        """Create or overwrite a parameter."""
        try:
            self._put(key, value, overwrite=True)
        except (ClientError, BotoCoreError) as exc:
            raise RemoteOperationError(
                f"error setting an entry with key {key} - {exc}",
                key=key,
                operation="set",
                error_code=_error_code(exc),
                component=SOURCE,
            ) from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete_parameter(Name=self.path(key))
        except (ClientError, BotoCoreError) as exc:
            code = _error_code(exc)
            if code in _NOT_FOUND_CODES:
                raise KeyNotFoundError(
                    key, source=SOURCE, message=f"error deleting key {key} - {exc}"
                ) from exc
            raise RemoteOperationError(
                f"error deleting key {key} - {exc}",
                key=key,
                operation="delete",
                error_code=code,
                component=SOURCE,
            ) from exc
        _LOGGER.debug(
            "config_key_deleted",
            extra={"event": "config_key_deleted", "key": key, "source": SOURCE},
        )

    def get(self, key: str) -> str:
        """Return the live value of ``key`` from Parameter Store."""
        try:
            response = self._client.get_parameter(Name=self.path(key))
        except (ClientError, BotoCoreError) as exc:
            code = _error_code(exc)
            if code in _NOT_FOUND_CODES:
                raise KeyNotFoundError(
                    key, source=SOURCE, message=f"error retrieving key {key} - {exc}"
                ) from exc
            raise RemoteOperationError(
                f"error retrieving key {key} - {exc}",
                key=key,
                operation="get",
                error_code=code,
                component=SOURCE,
            ) from exc
        return response["Parameter"]["Value"]

    def get_environment(self) -> dict[str, str]:
        """
        Return every parameter under the environment root, translated back to
        flat keys. Pages are followed until the service reports the last one.
        """
        values: dict[str, str] = {}
        pages = 0
        try:
            paginator = self._client.get_paginator("get_parameters_by_path")
            for page in paginator.paginate(Path=environment_root(self._env), Recursive=True):
                pages += 1
                for param in page.get("Parameters", []):
                    key = key_of(param["Name"], self._env, self._key_delimiter)
                    values[key] = param["Value"]
        except (ClientError, BotoCoreError) as exc:
            raise RemoteOperationError(
                f"error retrieving parameters by environment - {exc}",
                operation="get_environment",
                error_code=_error_code(exc),
                component=SOURCE,
            ) from exc

        _LOGGER.debug(
            "ssm_environment_listed",
            extra={
                "event": "ssm_environment_listed",
                "env": self._env,
                "pages": pages,
                "keys_total": len(values),
            },
        )
        return values

    def _put(self, key: str, value: str, *, overwrite: bool) -> None:
        self._client.put_parameter(
            Name=self.path(key),
            Value=value,
            Type=PARAMETER_TYPE,
            Overwrite=overwrite,
        )

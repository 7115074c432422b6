"""
Purpose:
    - Load Settings from a TOML file ([ssm] and [environment] tables)
    - Load Settings from BICONFIG_* environment variables
    - Layer explicit overrides (CLI flags) on top of either
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from biconfig.config.configs import Settings
from biconfig.core.utility import deep_merge, validation_error_parser
from biconfig.errors.errors import SettingsError

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "BICONFIG_"

# environment variable suffix -> dotted settings path
ENV_FIELDS: dict[str, str] = {
    "SSM_ENV": "ssm.env",
    "SSM_KEY_DELIMITER": "ssm.key_delimiter",
    "SSM_REGION": "ssm.region",
    "SSM_AWS_ACCESS_KEY": "ssm.aws_access_key",
    "SSM_AWS_SECRET_ACCESS_KEY": "ssm.aws_secret_access_key",
    "SSM_USE_ENV_PARAMS": "ssm.use_env_params",
    "SSM_ENDPOINT_URL": "ssm.endpoint_url",
    "USE_UPPER": "environment.use_upper",
}


class SettingsLoader:
    """
    Settings loader; TOML file or prefixed environment variables.
    """

    def __init__(self, base_dir: str = ".") -> None:
        self._base_dir = base_dir

    def load(
        self, file_name: str, overrides: Optional[Mapping[str, Any]] = None
    ) -> Settings:
        path = Path(file_name)
        if not path.is_absolute():
            path = Path(self._base_dir) / file_name

        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}", field="file")

        try:
            with path.open("rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise SettingsError(f"Settings file is not valid TOML: {path}: {exc}") from exc

        _LOGGER.debug(
            "settings_file_loaded",
            extra={"event": "settings_file_loaded", "path": str(path), "tables": sorted(raw)},
        )
        return self.build(raw, overrides)

    def from_environ(
        self,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> Settings:
        """Build Settings from ``<prefix><FIELD>`` variables (``os.environ`` by default)."""
        source = os.environ if environ is None else environ
        raw: dict[str, Any] = {}
        for suffix, dotted in ENV_FIELDS.items():
            value = source.get(f"{prefix}{suffix}")
            if value is None or value == "":
                continue
            section, field = dotted.split(".")
            raw.setdefault(section, {})[field] = value
        return self.build(raw, overrides)

    def build(
        self, raw: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None
    ) -> Settings:
        merged = deep_merge(raw, overrides) if overrides else dict(raw)
        try:
            return Settings.model_validate(merged)
        except ValidationError as e:
            parsed_error = validation_error_parser(e)
            _LOGGER.warning(
                "settings_validation_error",
                extra={"event": "settings_validation_error", "errors": parsed_error},
            )
            paths = ", ".join(sorted({err["path"] for err in parsed_error}))
            raise SettingsError(f"Invalid settings: {paths}", errors=parsed_error) from e

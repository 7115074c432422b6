"""
Configuration access over AWS Parameter Store and process environment variables.

Components:
- SSMConfiguration: Parameter Store source, keys mapped to /<env>/<path>
- EnvironmentConfiguration: process environment source with observed-values cache
- BiConfiguration: resolver checking overrides, then Parameter Store, then environment

Usage:
    from biconfig import BiConfiguration, EnvironmentConfiguration, SSMConfiguration
    from biconfig.config.configs import SSMSettings

    ssm = SSMConfiguration.from_settings(SSMSettings(env="dev", use_env_params=True))
    config = BiConfiguration(EnvironmentConfiguration(), ssm)
    config.get("DATABASE_URL")  # /dev/database/url, else $DATABASE_URL
"""

from biconfig.adapters.env_provider import EnvironmentConfiguration, OsEnvironment
from biconfig.adapters.ssm_provider import SSMConfiguration
from biconfig.core.key_path import key_of, path_of
from biconfig.core.resolver import BiConfiguration
from biconfig.errors.errors import (
    ConfigurationAccessError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
    LocalOperationError,
    MissingCredentialsError,
    RemoteOperationError,
    SessionInitError,
    SettingsError,
)
from biconfig.ports.configuration import Configuration

__all__ = [
    # Sources
    "BiConfiguration",
    "EnvironmentConfiguration",
    "OsEnvironment",
    "SSMConfiguration",
    "Configuration",
    # Key translation
    "key_of",
    "path_of",
    # Errors
    "ConfigurationAccessError",
    "KeyAlreadyExistsError",
    "KeyNotFoundError",
    "LocalOperationError",
    "MissingCredentialsError",
    "RemoteOperationError",
    "SessionInitError",
    "SettingsError",
]

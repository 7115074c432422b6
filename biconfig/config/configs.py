from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REGION = "eu-north-1"
DEFAULT_KEY_DELIMITER = "_"


class SSMSettings(BaseModel):
    """
    Everything needed to build a Parameter Store source.

    Either a static key pair or ``use_env_params=True`` must be given; the check
    happens when the client is built, not here, so that settings can be loaded
    and inspected without credentials.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
    env: str = Field(min_length=1, description="Environment scope, e.g. dev or prod")
    key_delimiter: str = Field(
        default=DEFAULT_KEY_DELIMITER, description="Delimiter marking hierarchy in flat keys"
    )
    region: str = Field(default=DEFAULT_REGION, description="AWS region of the parameter store")
    aws_access_key: Optional[str] = Field(default=None, description="Static access key id")
    aws_secret_access_key: Optional[str] = Field(default=None, description="Static secret key")
    use_env_params: bool = Field(
        default=False, description="Source credentials from the process environment"
    )
    endpoint_url: Optional[str] = Field(
        default=None, description="Override the SSM endpoint (local emulators)"
    )

    # empty strings fall back to the defaults
    @field_validator("key_delimiter", mode="before")
    @classmethod
    def _default_delimiter(cls, value: Optional[str]) -> str:
        return value or DEFAULT_KEY_DELIMITER

    @field_validator("region", mode="before")
    @classmethod
    def _default_region(cls, value: Optional[str]) -> str:
        return value or DEFAULT_REGION

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.aws_access_key) and bool(self.aws_secret_access_key)


class EnvironmentSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    use_upper: bool = Field(
        default=False, description="Upper-case variable names before reading or writing"
    )


class Settings(BaseModel):
    """Top-level settings; ``ssm`` is None for environment-only deployments."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    ssm: Optional[SSMSettings] = Field(default=None, description="Remote source settings")
    environment: EnvironmentSettings = Field(
        default_factory=EnvironmentSettings, description="Local source settings"
    )

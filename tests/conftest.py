import logging

import pytest

from biconfig.adapters.env_provider import EnvironmentConfiguration
from biconfig.adapters.ssm_provider import SSMConfiguration
from tests.fixtures.fixtures import FakeSSMClient, InMemoryEnvironment, StubTelemetry


@pytest.fixture(autouse=True)
def reset_logging_handlers():
    # Keep test logging deterministic and avoid leaking handlers between tests.
    for name in ("biconfig.adapters.env_provider", "biconfig.adapters.ssm_provider"):
        logging.getLogger(name).handlers = []


@pytest.fixture
def memory_env() -> InMemoryEnvironment:
    return InMemoryEnvironment()


@pytest.fixture
def env_config(memory_env: InMemoryEnvironment) -> EnvironmentConfiguration:
    return EnvironmentConfiguration(environment=memory_env)


@pytest.fixture
def ssm_client() -> FakeSSMClient:
    return FakeSSMClient()


@pytest.fixture
def ssm_config(ssm_client: FakeSSMClient) -> SSMConfiguration:
    return SSMConfiguration(ssm_client, env="dev")


@pytest.fixture
def telemetry() -> StubTelemetry:
    return StubTelemetry()

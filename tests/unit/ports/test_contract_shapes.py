import importlib
import inspect

import pytest

from biconfig.adapters.env_provider import EnvironmentConfiguration, OsEnvironment
from biconfig.adapters.ssm_provider import SSMConfiguration
from biconfig.adapters.telemetry.jsonl import JsonlTelemetry
from biconfig.core.resolver import BiConfiguration

CONFIGURATION_METHODS = {
    "create": 2,
    "set": 2,
    "delete": 1,
    "get": 1,
    "get_environment": 0,
}

# Mapping of module -> (ProtocolName, required_methods: {name: arity})
PORT_PROTOCOLS = {
    "biconfig.ports.configuration": ("Configuration", CONFIGURATION_METHODS),
    "biconfig.ports.local_environment": (
        "LocalEnvironmentPort",
        {"getenv": 1, "setenv": 2, "unsetenv": 1},
    ),
    "biconfig.ports.telemetry": ("Telemetry", {"log": -1}),  # variable kwargs
}

# Port -> classes that must satisfy it
IMPLEMENTATIONS = {
    "Configuration": [EnvironmentConfiguration, SSMConfiguration, BiConfiguration],
    "LocalEnvironmentPort": [OsEnvironment],
    "Telemetry": [JsonlTelemetry],
}


def _positional_params(fn) -> list[inspect.Parameter]:
    sig = inspect.signature(fn)
    # remove self / cls
    return [p for p in sig.parameters.values() if p.kind == p.POSITIONAL_OR_KEYWORD][1:]


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_required_port_signatures(module_name, meta):
    proto_name, methods = meta
    module = importlib.import_module(module_name)
    proto = getattr(module, proto_name)
    assert inspect.isclass(proto), f"{proto_name} not a class"
    for method_name, arity in methods.items():
        fn = getattr(proto, method_name, None)
        assert fn is not None, f"Missing method {method_name} on {proto_name}"
        if arity >= 0:
            params = _positional_params(fn)
            assert (
                len(params) == arity
            ), f"{proto_name}.{method_name} expected {arity} args got {len(params)}"


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_implementations_match_port(module_name, meta):
    proto_name, methods = meta
    for impl in IMPLEMENTATIONS[proto_name]:
        for method_name, arity in methods.items():
            fn = getattr(impl, method_name, None)
            assert callable(fn), f"{impl.__name__} lacks {method_name}"
            if arity >= 0:
                assert len(_positional_params(fn)) == arity, f"{impl.__name__}.{method_name}"

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from botocore.exceptions import ClientError


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    """Build the ClientError botocore raises for a failed SSM call."""
    return ClientError(
        {"Error": {"Code": code, "Message": message or code}},
        operation,
    )


class InMemoryEnvironment:
    """LocalEnvironmentPort over a plain dict; never touches os.environ."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.variables: Dict[str, str] = dict(initial or {})
        self.fail_with: Optional[Exception] = None

    def getenv(self, name: str) -> Optional[str]:
        return self.variables.get(name)

    def setenv(self, name: str, value: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.variables[name] = value

    def unsetenv(self, name: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.variables.pop(name, None)


class FakePaginator:
    def __init__(self, client: "FakeSSMClient") -> None:
        self._client = client

    def paginate(self, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        self._client.calls.append(("get_parameters_by_path", kwargs))
        if self._client.list_error is not None:
            raise self._client.list_error
        path = kwargs["Path"]
        names = sorted(name for name in self._client.parameters if name.startswith(path))
        size = self._client.page_size
        if not names:
            yield {"Parameters": []}
            return
        for start in range(0, len(names), size):
            chunk = names[start : start + size]
            page: Dict[str, Any] = {
                "Parameters": [
                    {"Name": name, "Type": "String", "Value": self._client.parameters[name]}
                    for name in chunk
                ]
            }
            if start + size < len(names):
                page["NextToken"] = f"token-{start + size}"
            yield page


class FakeSSMClient:
    """
    Path-addressed in-memory stand-in for the boto3 SSM client, raising the
    same ClientError codes the service does.
    """

    def __init__(self, parameters: Optional[Dict[str, str]] = None, page_size: int = 10) -> None:
        self.parameters: Dict[str, str] = dict(parameters or {})
        self.page_size = page_size
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.list_error: Optional[Exception] = None
        self.get_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    def put_parameter(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("put_parameter", kwargs))
        name = kwargs["Name"]
        if name in self.parameters and not kwargs.get("Overwrite", False):
            raise client_error("ParameterAlreadyExists", "PutParameter")
        self.parameters[name] = kwargs["Value"]
        return {"Version": 1}

    def get_parameter(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("get_parameter", kwargs))
        if self.get_error is not None:
            raise self.get_error
        name = kwargs["Name"]
        if name not in self.parameters:
            raise client_error("ParameterNotFound", "GetParameter")
        return {"Parameter": {"Name": name, "Type": "String", "Value": self.parameters[name]}}

    def delete_parameter(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("delete_parameter", kwargs))
        if self.delete_error is not None:
            raise self.delete_error
        name = kwargs["Name"]
        if name not in self.parameters:
            raise client_error("ParameterNotFound", "DeleteParameter")
        del self.parameters[name]
        return {}

    def get_paginator(self, operation_name: str) -> FakePaginator:
        assert operation_name == "get_parameters_by_path"
        return FakePaginator(self)


@dataclass
class StubTelemetry:
    events: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def log(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> List[str]:
        return [event for event, _ in self.events]

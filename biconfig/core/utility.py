from typing import Any, Mapping

from pydantic import ValidationError


def validation_error_parser(
    error: ValidationError, component: str = "config.settings"
) -> list[dict[str, str]]:
    parsed_error = [
        {
            "component": component,
            "path": ".".join(map(str, err["loc"])),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    return parsed_error


def insert_path(tree: dict[str, Any], dotted_key: str, value: Any) -> None:
    """
    Insert ``value`` at ``dotted_key`` creating intermediate dicts,
    e.g. "ssm.region" -> {"ssm": {"region": value}}.
    """
    parts = [part for part in dotted_key.split(".") if part]
    if not parts:
        raise ValueError(f"Empty key path: {dotted_key!r}")
    node = tree
    for part in parts[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Key path {dotted_key!r} collides with a scalar at {part!r}")
        node = child
    node[parts[-1]] = value


def deep_merge(a: Mapping[str, Any], b: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out

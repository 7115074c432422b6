"""
Translate flat configuration keys to Parameter Store paths and back.

    path_of("HELLO_WORLD", "dev", "_")      -> "/dev/hello/world"
    key_of("/dev/hello/world", "dev", ".")  -> "hello.world"
"""

from __future__ import annotations

DEFAULT_KEY_DELIMITER = "_"
PATH_SEPARATOR = "/"


def environment_root(env: str) -> str:
    """Root path under which every parameter of ``env`` lives."""
    return f"{PATH_SEPARATOR}{env}{PATH_SEPARATOR}"


def path_of(key: str, env: str, delimiter: str = DEFAULT_KEY_DELIMITER) -> str:
    path = environment_root(env) + key.replace(delimiter, PATH_SEPARATOR)
    return path.lower()


def key_of(path: str, env: str, delimiter: str = DEFAULT_KEY_DELIMITER) -> str:
    # only the first occurrence is stripped; a path outside the scope passes through
    key = path.replace(environment_root(env), "", 1)
    key = key.replace(PATH_SEPARATOR, delimiter)
    return key.lower()

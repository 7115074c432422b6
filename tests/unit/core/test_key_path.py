import pytest

from biconfig.core.key_path import environment_root, key_of, path_of


def test_path_of_lowercases_and_splits_on_delimiter():
    assert path_of("HELLO_WORLD", "dev", "_") == "/dev/hello/world"


def test_key_of_strips_environment_and_joins_with_delimiter():
    assert key_of("/dev/hello/world", "dev", ".") == "hello.world"


def test_default_delimiter_is_underscore():
    assert path_of("DB_HOST", "prod") == "/prod/db/host"
    assert key_of("/prod/db/host", "prod") == "db_host"


def test_environment_root():
    assert environment_root("dev") == "/dev/"


def test_key_of_only_strips_first_environment_segment():
    assert key_of("/dev/dev/value", "dev", "_") == "dev_value"


def test_key_of_path_outside_environment_is_translated_unstripped():
    assert key_of("/prod/hello", "dev", "_") == "_prod_hello"


@pytest.mark.parametrize(
    "key,env,delimiter",
    [
        ("HELLO_WORLD", "dev", "_"),
        ("Service.Db.Password", "prod", "."),
        ("single", "staging", "_"),
        ("a-b-c", "qa", "-"),
    ],
)
def test_round_trip_reproduces_lowercased_key(key, env, delimiter):
    assert key_of(path_of(key, env, delimiter), env, delimiter) == key.lower()


def test_path_round_trip():
    path = "/dev/hello/world"
    assert path_of(key_of(path, "dev", "_"), "dev", "_") == path

"""biconfig CLI entrypoint.

Subcommands: get, set, create, delete, env.

Settings come from --settings FILE (TOML) or BICONFIG_* environment variables,
with the remaining flags layered on top. Without any [ssm] settings the
commands act on the process environment only.

Exit codes: 0 success, 1 configuration access error, 2 usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO

from biconfig.adapters.telemetry.jsonl import JsonlTelemetry
from biconfig.config.config_loader import SettingsLoader
from biconfig.config.configs import Settings
from biconfig.core.resolver import BiConfiguration
from biconfig.core.utility import insert_path
from biconfig.errors.errors import ConfigurationAccessError
from biconfig.ports.local_environment import LocalEnvironmentPort
from biconfig.ports.telemetry import Telemetry

_LOGGER = logging.getLogger(__name__)

# argparse dest -> dotted settings path
FLAG_PATHS: dict[str, str] = {
    "env": "ssm.env",
    "region": "ssm.region",
    "delimiter": "ssm.key_delimiter",
    "endpoint_url": "ssm.endpoint_url",
}


def build_parser() -> argparse.ArgumentParser:
    """
    Return the top-level CLI argument parser.
    """
    p = argparse.ArgumentParser(prog="biconfig")
    sub = p.add_subparsers(dest="command", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        """Add arguments shared across all subcommands."""
        sp.add_argument("--settings", type=Path, help="TOML settings file")
        sp.add_argument("--env", help="Parameter Store environment scope")
        sp.add_argument("--region", help="AWS region")
        sp.add_argument("--delimiter", help="Key delimiter (default '_')")
        sp.add_argument("--endpoint-url", dest="endpoint_url", help="SSM endpoint override")
        sp.add_argument(
            "--use-env-credentials",
            dest="use_env_credentials",
            action="store_true",
            help="Source AWS credentials from the environment",
        )
        sp.add_argument(
            "--use-upper",
            dest="use_upper",
            action="store_true",
            help="Upper-case environment variable names",
        )
        sp.add_argument(
            "--local-only",
            dest="local_only",
            action="store_true",
            help="Ignore Parameter Store settings",
        )
        sp.add_argument("--events", type=Path, help="Append JSONL telemetry events to this file")
        sp.add_argument(
            "--log-level",
            dest="log_level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        )

    get = sub.add_parser("get", help="Resolve a key")
    add_common(get)
    get.add_argument("key")

    for name, help_text in (("set", "Create or overwrite a key"), ("create", "Create a new key")):
        sp = sub.add_parser(name, help=help_text)
        add_common(sp)
        sp.add_argument("key")
        sp.add_argument("value")

    delete = sub.add_parser("delete", help="Delete a key from every source")
    add_common(delete)
    delete.add_argument("key")

    env = sub.add_parser("env", help="Print all known keys as JSON")
    add_common(env)
    return p


def _flag_overrides(args: argparse.Namespace) -> Mapping[str, Any]:
    overrides: dict[str, Any] = {}
    for dest, dotted in FLAG_PATHS.items():
        value = getattr(args, dest, None)
        if value:
            insert_path(overrides, dotted, value)
    if args.use_env_credentials:
        insert_path(overrides, "ssm.use_env_params", True)
    if args.use_upper:
        insert_path(overrides, "environment.use_upper", True)
    return overrides


def load_settings(
    args: argparse.Namespace,
    loader: Optional[SettingsLoader] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    loader = loader or SettingsLoader()
    overrides = _flag_overrides(args)
    if args.settings is not None:
        settings = loader.load(str(args.settings), overrides=overrides)
    else:
        settings = loader.from_environ(environ, overrides=overrides)

    if args.local_only:
        settings = settings.model_copy(update={"ssm": None})
    return settings


def run(
    args: argparse.Namespace,
    *,
    environment: Optional[LocalEnvironmentPort] = None,
    environ: Optional[Mapping[str, str]] = None,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    """Execute one parsed command against a freshly built resolver."""
    try:
        settings = load_settings(args, environ=environ)
        telemetry: Optional[Telemetry] = None
        if args.events is not None:
            telemetry = JsonlTelemetry(
                sink_path=args.events,
                component="biconfig.cli",
                env=settings.ssm.env if settings.ssm is not None else None,
            )
        config = BiConfiguration.from_settings(
            settings, environment=environment, telemetry=telemetry
        )

        if telemetry is not None:
            telemetry.log(
                "cli_invocation",
                command=args.command,
                remote_configured=config.remote_configured,
            )

        if args.command == "get":
            print(config.get(args.key), file=stdout)
        elif args.command == "set":
            config.set(args.key, args.value)
        elif args.command == "create":
            config.create(args.key, args.value)
        elif args.command == "delete":
            config.delete(args.key)
        elif args.command == "env":
            print(json.dumps(config.get_environment(), indent=2, sort_keys=True), file=stdout)
    except ConfigurationAccessError as exc:
        _LOGGER.debug(
            "cli_command_failed",
            extra={"event": "cli_command_failed", "command": args.command},
        )
        print(f"error: {exc}", file=stderr)
        return 1
    except OSError as exc:
        # unwritable --events sink
        _LOGGER.debug(
            "cli_command_failed",
            extra={"event": "cli_command_failed", "command": args.command},
        )
        print(f"error: {exc}", file=stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint wrapper compatible with setuptools scripts."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return run(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Command-line interface for cloudbuild."""

from __future__ import annotations

import argparse
import re
import sys
from functools import partial
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Sequence

from rich.console import Console

from cloudbuild.cli.commands import ActionContext, CommandRegistry, build_registry, run_command
from cloudbuild.cli.config import CLIConfig, ConfigError, load_cli_config
from cloudbuild.cli.flags import SchemaError
from cloudbuild.cli.logging import configure_cli_logging
from cloudbuild.cli.prompts import InteractionAborted, ask_questions
from cloudbuild.client import CredentialsService
from cloudbuild.errors import CredentialFileError, RemoteError, ServiceRequestError

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_REMOTE_ERROR = 2
EXIT_ABORTED = 3

_SENSITIVE_FIELDS = (
    "apiKey",
    "api_key",
    "certPass",
    "certificatePass",
    "password",
    "authorization",
    "token",
)


def _cli_version() -> str:
    try:
        return pkg_version("cloudbuild-cli")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser(registry: CommandRegistry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudbuild",
        allow_abbrev=False,
        description="Manage iOS signing credentials on Unity Cloud Build.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cloudbuild-cli {_cli_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.cloudbuild/config.toml)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log requests to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    for command in registry:
        command_parser = sub.add_parser(
            command.name,
            allow_abbrev=False,
            help=command.help_text,
            description=command.help_text,
        )
        command.flags.bind(command_parser)
        command_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    return parser


def _sanitize_error_text(value: str) -> str:
    redacted = re.sub(r"(?i)(\bbasic\s+)([A-Za-z0-9+/=._-]+)", r"\1[REDACTED]", value)
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^,\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {_sanitize_error_text(message)}", file=stderr)
    return code


def _print_service_request_error(stderr, exc: ServiceRequestError, *, code: int) -> int:
    if exc.status_code == 401:
        return _print_error(
            stderr,
            "cloud build error",
            f"{exc} (the apiKey was rejected; copy it again from the Cloud Build dashboard)",
            code=code,
        )
    if exc.status_code == 403:
        return _print_error(
            stderr,
            "cloud build error",
            f"{exc} (the apiKey has no access to this orgId or project)",
            code=code,
        )
    return _print_error(stderr, "cloud build error", str(exc), code=code)


def _build_credentials_service(
    api_key: str,
    org_id: str,
    *,
    config: CLIConfig,
) -> CredentialsService:
    return CredentialsService(
        api_key=api_key,
        org_id=org_id,
        base_url=config.api_base,
        timeout=config.timeout,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout=sys.stdout,
    stderr=sys.stderr,
    stdin=None,
) -> int:
    try:
        registry = build_registry()
    except SchemaError as exc:
        return _print_error(stderr, "schema error", str(exc), code=EXIT_VALIDATION_ERROR)

    parser = _build_parser(registry)
    args = parser.parse_args(argv)
    configure_cli_logging(verbose=args.verbose, stream=stderr)

    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return _print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    flags = registry.schema(args.command).extract(args)

    context = ActionContext(
        ask=partial(ask_questions, console=Console(file=stderr), stream=stdin),
        client_factory=partial(_build_credentials_service, config=config),
        as_json=args.json,
    )

    try:
        output = run_command(registry, args.command, flags, context)
    except SchemaError as exc:
        return _print_error(stderr, "schema error", str(exc), code=EXIT_VALIDATION_ERROR)
    except InteractionAborted as exc:
        return _print_error(stderr, "aborted", str(exc), code=EXIT_ABORTED)
    except CredentialFileError as exc:
        return _print_error(stderr, "file error", str(exc), code=EXIT_VALIDATION_ERROR)
    except ServiceRequestError as exc:
        return _print_service_request_error(stderr, exc, code=EXIT_REMOTE_ERROR)
    except RemoteError as exc:
        return _print_error(stderr, "cloud build error", str(exc), code=EXIT_REMOTE_ERROR)

    print(output, file=stdout)
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())

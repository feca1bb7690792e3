"""Command catalog for the cloudbuild CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Iterator, Mapping, Sequence

from cloudbuild.cli.flags import FlagSchema, SchemaError, create_flag_set
from cloudbuild.cli.prompts import Asker, ask_questions
from cloudbuild.cli.resolver import FieldSpec, resolve_args
from cloudbuild.client import CredentialsService
from cloudbuild.credentials import IOSCredential

COMMAND_ORDER = ("getCred", "listCreds", "updateCred", "uploadCred", "deleteCred")

AUTH_FIELDS = (
    FieldSpec("api_key", "apiKey", secret=True),
    FieldSpec("org_id", "orgId"),
)


class RegistryConfigError(SchemaError):
    """Raised when the command catalog and its display order disagree."""


@dataclass(frozen=True)
class ActionContext:
    ask: Asker = ask_questions
    client_factory: Callable[[str, str], CredentialsService] = CredentialsService
    as_json: bool = False

    def resolve(self, flags: Mapping[str, str], *fields: FieldSpec):
        return resolve_args(flags, (*AUTH_FIELDS, *fields), self.ask)

    def client(self, record) -> CredentialsService:
        return self.client_factory(record.api_key, record.org_id)


Action = Callable[[Mapping[str, str], ActionContext], str]


@dataclass(frozen=True)
class Command:
    name: str
    help_text: str
    flags: FlagSchema
    action: Action


class CommandRegistry:
    """Read-only command catalog with a fixed display order."""

    def __init__(self, commands: Mapping[str, Command], order: Sequence[str]) -> None:
        self._commands = dict(commands)
        self._order = tuple(order)
        self.check()

    def check(self) -> None:
        if len(set(self._order)) != len(self._order):
            raise RegistryConfigError("command order lists a command more than once")
        missing = [name for name in self._order if name not in self._commands]
        if missing:
            raise RegistryConfigError(
                f"command order names unknown commands: {', '.join(missing)}"
            )
        unlisted = sorted(set(self._commands) - set(self._order))
        if unlisted:
            raise RegistryConfigError(
                f"commands missing from command order: {', '.join(unlisted)}"
            )
        for key, command in self._commands.items():
            if command.name != key:
                raise RegistryConfigError(f"command {command.name!r} is registered as {key!r}")
            if command.flags.command != key:
                raise RegistryConfigError(
                    f"command {key!r} uses the flag schema of {command.flags.command!r}"
                )

    def lookup(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError:
            raise SchemaError(f"unknown command: {name}") from None

    def schema(self, name: str) -> FlagSchema:
        return self.lookup(name).flags

    def ordered_names(self) -> tuple[str, ...]:
        return self._order

    def __iter__(self) -> Iterator[Command]:
        return (self._commands[name] for name in self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


def _flatten(payload: Mapping[str, object], prefix: str = "") -> list[tuple[str, object]]:
    items: list[tuple[str, object]] = []
    for key, value in payload.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            items.extend(_flatten(value, prefix=f"{name}."))
        else:
            items.append((name, value))
    return items


def _credential_payload(credential: IOSCredential) -> dict:
    return credential.model_dump(by_alias=True, exclude_none=True)


def render_credential(credential: IOSCredential, *, as_json: bool = False) -> str:
    payload = _credential_payload(credential)
    if as_json:
        return json.dumps(payload, sort_keys=True)
    return "\n".join(f"{key}: {value}" for key, value in _flatten(payload))


def render_credentials(credentials: Sequence[IOSCredential], *, as_json: bool = False) -> str:
    if as_json:
        return json.dumps([_credential_payload(item) for item in credentials], sort_keys=True)
    if not credentials:
        return "no credentials"
    return "\n\n".join(render_credential(item) for item in credentials)


def render_status(status: str, *, as_json: bool = False) -> str:
    if as_json:
        return json.dumps({"status": status}, sort_keys=True)
    return status


def _get_cred_flags() -> FlagSchema:
    flags = create_flag_set("getCred")
    flags.declare("projectId", "", "Project Id")
    flags.declare("credId", "", "Credential Id")
    return flags


def _get_cred(flags: Mapping[str, str], context: ActionContext) -> str:
    record = context.resolve(
        flags,
        FieldSpec("project_id", "projectId"),
        FieldSpec("cred_id", "credId"),
    )
    credential = context.client(record).get_ios(record.project_id, record.cred_id)
    return render_credential(credential, as_json=context.as_json)


def _list_creds_flags() -> FlagSchema:
    flags = create_flag_set("listCreds")
    flags.declare("projectId", "", "Project Id")
    return flags


def _list_creds(flags: Mapping[str, str], context: ActionContext) -> str:
    record = context.resolve(flags, FieldSpec("project_id", "projectId"))
    credentials = context.client(record).get_all_ios(record.project_id)
    return render_credentials(credentials, as_json=context.as_json)


def _update_cred_flags() -> FlagSchema:
    flags = create_flag_set("updateCred")
    flags.declare("projectId", "", "Project Id")
    flags.declare("certId", "", "Certificate Id")
    flags.declare("label", "", "Label")
    flags.declare("certPath", "", "Certificate Path")
    flags.declare("profilePath", "", "Provisioning Profile Path")
    flags.declare("certPass", "", "Certificate password")
    return flags


def _update_cred(flags: Mapping[str, str], context: ActionContext) -> str:
    record = context.resolve(
        flags,
        FieldSpec("project_id", "projectId"),
        FieldSpec("cert_id", "certId"),
        FieldSpec("label", "label"),
        FieldSpec("cert_path", "certPath"),
        FieldSpec("profile_path", "profilePath"),
        FieldSpec("cert_pass", "certPass", secret=True),
    )
    credential = context.client(record).update_ios(
        record.project_id,
        record.cert_id,
        record.label,
        record.cert_path,
        record.profile_path,
        record.cert_pass,
    )
    return render_credential(credential, as_json=context.as_json)


def _upload_cred_flags() -> FlagSchema:
    flags = create_flag_set("uploadCred")
    flags.declare("projectId", "", "Project Id")
    flags.declare("label", "", "Label")
    flags.declare("certPath", "", "Certificate Path")
    flags.declare("profilePath", "", "Provisioning Profile Path")
    flags.declare("certPass", "", "Certificate password")
    return flags


def _upload_cred(flags: Mapping[str, str], context: ActionContext) -> str:
    record = context.resolve(
        flags,
        FieldSpec("project_id", "projectId"),
        FieldSpec("label", "label"),
        FieldSpec("cert_path", "certPath"),
        FieldSpec("profile_path", "profilePath"),
        FieldSpec("cert_pass", "certPass", secret=True),
    )
    credential = context.client(record).upload_ios(
        record.project_id,
        record.label,
        record.cert_path,
        record.profile_path,
        record.cert_pass,
    )
    return render_credential(credential, as_json=context.as_json)


def _delete_cred_flags() -> FlagSchema:
    flags = create_flag_set("deleteCred")
    flags.declare("projectId", "", "Project Id")
    flags.declare("credId", "", "Credential Id")
    return flags


def _delete_cred(flags: Mapping[str, str], context: ActionContext) -> str:
    record = context.resolve(
        flags,
        FieldSpec("project_id", "projectId"),
        FieldSpec("cred_id", "credId"),
    )
    status = context.client(record).delete_ios(record.project_id, record.cred_id)
    return render_status(status, as_json=context.as_json)


def build_registry() -> CommandRegistry:
    commands = [
        Command("getCred", "Get IOS Credential Details", _get_cred_flags(), _get_cred),
        Command("listCreds", "List all IOS Credentials", _list_creds_flags(), _list_creds),
        Command("updateCred", "Update a IOS Credential", _update_cred_flags(), _update_cred),
        Command("uploadCred", "Upload a IOS Credential", _upload_cred_flags(), _upload_cred),
        Command("deleteCred", "Delete a IOS Credential", _delete_cred_flags(), _delete_cred),
    ]
    return CommandRegistry({command.name: command for command in commands}, COMMAND_ORDER)


def run_command(
    registry: CommandRegistry,
    name: str,
    flags: Mapping[str, str],
    context: ActionContext | None = None,
) -> str:
    command = registry.lookup(name)
    unknown = sorted(set(flags) - set(command.flags.names()))
    if unknown:
        raise SchemaError(f"{name}: unknown flag(s): {', '.join(unknown)}")
    return command.action(flags, context or ActionContext())

"""Per-command flag schemas."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Iterator

AUTH_FLAGS = (
    ("apiKey", "Cloud Build API key"),
    ("orgId", "Organization Id"),
)


class SchemaError(LookupError):
    """Raised when a command or flag is not part of the static catalog."""


@dataclass(frozen=True)
class Flag:
    name: str
    default: str
    help: str


class FlagSchema:
    """Ordered set of string flags recognized by one command."""

    def __init__(self, command: str) -> None:
        self.command = command
        self._flags: dict[str, Flag] = {}

    def declare(self, name: str, default: str = "", help: str = "") -> Flag:
        # Redeclaring keeps the original position and replaces the definition.
        flag = Flag(name=name, default=default, help=help)
        self._flags[name] = flag
        return flag

    def flags(self) -> Iterator[Flag]:
        return iter(list(self._flags.values()))

    def names(self) -> list[str]:
        return list(self._flags)

    def get(self, name: str) -> Flag:
        try:
            return self._flags[name]
        except KeyError:
            raise SchemaError(f"{self.command}: unknown flag {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    def bind(self, parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        """Add one ``--<name>`` option per flag; absent flags stay out of the namespace."""
        for flag in self.flags():
            help_text = flag.help
            if flag.default:
                help_text = f"{help_text} (default: {flag.default})"
            parser.add_argument(
                f"--{flag.name}",
                dest=flag.name,
                metavar=flag.name.upper(),
                default=argparse.SUPPRESS,
                help=help_text,
            )
        return parser

    def extract(self, namespace: argparse.Namespace) -> dict[str, str]:
        values = vars(namespace)
        # An empty value counts as not supplied so the field is asked for instead.
        return {name: values[name] for name in self._flags if values.get(name)}


def create_flag_set(command: str) -> FlagSchema:
    schema = FlagSchema(command)
    for name, help_text in AUTH_FLAGS:
        schema.declare(name, "", help_text)
    return schema

"""Reconcile parsed flags against a command's parameter record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Mapping, Sequence

from cloudbuild.cli.prompts import Asker, InteractionAborted, Question, ask_questions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """One record field and the flag/prompt name it is looked up by."""

    attr: str
    key: str | None = None
    secret: bool = False

    @property
    def lookup(self) -> str:
        return self.key or self.attr


def resolve_args(
    flags: Mapping[str, str],
    fields: Sequence[FieldSpec],
    ask: Asker = ask_questions,
) -> SimpleNamespace:
    """Build a parameter record from flags, asking the operator for the rest.

    Non-empty flag values are copied as given. Every field without a
    non-empty flag becomes one question; all questions are asked in a single
    batch and the accepted answers (non-empty, lowercased) are written back
    by lookup name.
    """
    values: dict[str, str] = {}
    pending: dict[str, FieldSpec] = {}
    questions: list[Question] = []

    for field in fields:
        name = field.lookup
        if flags.get(name):
            values[field.attr] = flags[name]
            continue
        pending[name] = field
        questions.append(Question(name=name, message=name, secret=field.secret))

    if questions:
        logger.debug("asking for %d missing field(s): %s", len(questions), ", ".join(pending))
        answers = ask(questions)
        for name, field in pending.items():
            if name not in answers:
                raise InteractionAborted(f"no answer for {name}")
            values[field.attr] = answers[name]

    return SimpleNamespace(**{field.attr: values[field.attr] for field in fields})

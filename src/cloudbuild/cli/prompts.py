"""Interactive question batches on the operator's terminal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence, TextIO

from rich.console import Console
from rich.prompt import InvalidResponse, Prompt


class InteractionAborted(RuntimeError):
    """Raised when the operator closes or interrupts the interactive session."""


class AnswerRequiredError(InvalidResponse):
    """Raised for an empty answer to a required question."""


def required(value: str) -> None:
    if not value:
        raise AnswerRequiredError("[prompt.invalid]Value is required")


def to_lower(value: str) -> str:
    return value.lower()


@dataclass(frozen=True)
class Question:
    name: str
    message: str
    validate: Callable[[str], None] = required
    transform: Callable[[str], str] = to_lower
    secret: bool = False


Asker = Callable[[Sequence[Question]], Mapping[str, str]]


class QuestionPrompt(Prompt):
    """rich prompt applying a question's validation and transform to each answer."""

    def __init__(
        self,
        question: Question,
        *,
        console: Console | None = None,
        password: bool = False,
    ) -> None:
        super().__init__(question.message, console=console, password=password)
        self.question = question

    @classmethod
    def get_input(
        cls,
        console: Console,
        prompt,
        password: bool,
        stream: TextIO | None = None,
    ) -> str:
        value = super().get_input(console, prompt, password, stream=stream)
        # readline() returns "" only once the stream is exhausted.
        if stream is not None and value == "":
            raise EOFError
        return value

    def process_response(self, value: str) -> str:
        answer = super().process_response(value)
        self.question.validate(answer)
        return self.question.transform(answer)


def ask_questions(
    questions: Sequence[Question],
    *,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> dict[str, str]:
    """Ask every question in order and return answers keyed by question name.

    Invalid answers are re-asked until accepted. Closing the input or
    interrupting the prompt raises InteractionAborted.
    """
    console = console or Console(stderr=True)
    answers: dict[str, str] = {}
    for question in questions:
        prompt = QuestionPrompt(
            question,
            console=console,
            password=question.secret and stream is None,
        )
        try:
            answers[question.name] = prompt(stream=stream)
        except (EOFError, KeyboardInterrupt) as exc:
            raise InteractionAborted(f"input closed while asking for {question.name}") from exc
    return answers

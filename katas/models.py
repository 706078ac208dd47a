"""Core data models for the katas runner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from katas import style


class ExerciseKind(Enum):
    """Exercise kinds, keyed by file extension."""

    RUST = "rs"
    CIRCOM = "circom"
    MARKDOWN = "md"

    @property
    def display(self) -> str:
        labels = {
            "rs": "Rust",
            "circom": "Circom",
            "md": "Quiz",
        }
        return labels[self.value]

    @classmethod
    def from_extension(cls, ext: str) -> Optional[ExerciseKind]:
        """Map a file extension to its kind, or None if no pipeline handles it.

        The match is exact: `RS` or `.rs` are not Rust exercises.
        """
        try:
            return cls(ext)
        except ValueError:
            return None


@dataclass(frozen=True)
class Exercise:
    """One exercise as described by the catalog. Read-only for a run."""

    name: str
    ext: str
    # Path of the exercise file starting with the `exercises/` directory.
    path: str
    test: bool = True
    strict_clippy: bool = False
    hint: str = ""
    done: bool = False
    dir: Optional[str] = None

    @property
    def kind(self) -> Optional[ExerciseKind]:
        return ExerciseKind.from_extension(self.ext)

    @property
    def solution_bin_name(self) -> str:
        return f"{self.name}_sol"

    def terminal_link(self) -> str:
        """Clickable link to the exercise file for terminals that support OSC 8."""
        return style.link(Path(self.path).resolve().as_uri(), self.path)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class CommandSpec:
    """Everything needed to run one external program."""

    program: str
    args: tuple[str, ...] = ()
    cwd: Optional[Path] = None
    # Shown in logs and in spawn errors.
    description: str = ""
    hide_warnings: bool = False
    # Extra environment variables as (name, value) pairs.
    env: tuple[tuple[str, str], ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class QuestionAnswer:
    """Question and canonical answer pulled out of a quiz document.

    Both fields keep the raw accumulated text; callers trim at display
    and compare time.
    """

    question: str
    answer: str

    @property
    def display_question(self) -> str:
        return self.question.strip()

    @property
    def expected_answer(self) -> str:
        return self.answer.strip()

    def is_correct(self, reply: str) -> bool:
        return reply.strip() == self.expected_answer

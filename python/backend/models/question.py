"""Question model for the color vision quiz."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Union

from backend.models.color import GRAY, TRANSPARENT, ColorName, ColorSample


class GameMode(StrEnum):
    NORMAL = "NORMAL"
    REVERSE = "REVERSE"
    SHADE = "SHADE"


class Difficulty(StrEnum):
    MEDIUM = "MEDIUM"
    HARD = "HARD"


# -- answers ------------------------------------------------------------------
#
# NORMAL questions are answered with a name, REVERSE and SHADE questions
# with a sample.  The two answer classes never compare equal to each other.


@dataclass(frozen=True)
class NameAnswer:
    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class SampleAnswer:
    sample: ColorSample

    @property
    def label(self) -> str:
        if self.sample.is_transparent:
            return "(none)"
        return self.sample.hex


Answer = Union[NameAnswer, SampleAnswer]

SKIPPED_NAME = NameAnswer("Skipped")
SKIPPED_SAMPLE = SampleAnswer(TRANSPARENT)

GENERATION_ERROR = "Could not generate a question"


def skipped_answer(mode: GameMode) -> Answer:
    """Return the sentinel answer recorded when *mode*'s question is skipped."""
    if mode is GameMode.NORMAL:
        return SKIPPED_NAME
    return SKIPPED_SAMPLE


# -- questions ----------------------------------------------------------------


@dataclass(frozen=True)
class Question:
    """One quiz question.

    ``color`` is the swatch shown with the question: the sample to name in
    NORMAL mode, the target in REVERSE mode, the reference shade in SHADE
    mode.  ``options`` holds exactly one entry equal to ``correct``.
    """

    mode: GameMode
    prompt: str
    correct_name: ColorName | None
    color: ColorSample
    correct: Answer
    options: tuple[Answer, ...]
    is_error: bool = False

    @classmethod
    def error(cls, mode: GameMode, text: str = GENERATION_ERROR) -> Question:
        """Placeholder shown when no question could be generated."""
        label = NameAnswer(text)
        return cls(
            mode=mode,
            prompt=text,
            correct_name=None,
            color=GRAY,
            correct=NameAnswer("Error"),
            options=(label,),
            is_error=True,
        )

    def is_correct(self, answer: object) -> bool:
        return answer == self.correct


@dataclass(frozen=True)
class AnsweredRecord:
    question: Question
    selected: object
    was_correct: bool
    mode: GameMode
    elapsed_ms: int

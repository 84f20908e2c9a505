"""Tracks the mutable state of a quiz session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.preferences import DEFAULT_HIGH_SCORE, UNSET_AVERAGE_TIME
from backend.models.question import (
    Answer,
    AnsweredRecord,
    Difficulty,
    GameMode,
    Question,
)

DEFAULT_TOTAL_QUESTIONS = 10


class Screen(StrEnum):
    HOME = "home"
    GAME = "game"
    RESULT = "result"


class SessionPhase(StrEnum):
    HOME = "home"
    GAME = "game"
    GAME_FEEDBACK = "game_feedback"
    RESULT = "result"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a ``SessionState`` handed to the presentation layer."""

    screen: Screen
    mode: GameMode
    difficulty: Difficulty
    total_questions: int
    current_index: int
    current_question: Question | None
    correct_count: int
    times: tuple[int, ...]
    incorrect_answers: tuple[AnsweredRecord, ...]
    answered: bool
    feedback_active: bool
    last_answer_correct: bool | None
    correct_option: Answer | None
    selected_answer: object | None
    high_score: float
    high_score_average_time: float
    final_score: float | None
    question_started_at: float

    @property
    def phase(self) -> SessionPhase:
        if self.screen is Screen.GAME and self.feedback_active:
            return SessionPhase.GAME_FEEDBACK
        return SessionPhase(self.screen.value)


@dataclass
class SessionState:
    """Holds the session counters; mutated only by ``SessionStateMachine``."""

    screen: Screen = Screen.HOME
    mode: GameMode = GameMode.NORMAL
    difficulty: Difficulty = Difficulty.MEDIUM
    total_questions: int = DEFAULT_TOTAL_QUESTIONS
    current_index: int = 0
    current_question: Question | None = None
    correct_count: int = 0
    times: list[int] = field(default_factory=list)
    incorrect_answers: list[AnsweredRecord] = field(default_factory=list)
    answered: bool = False
    feedback_active: bool = False
    last_answer_correct: bool | None = None
    correct_option: Answer | None = None
    selected_answer: object | None = None
    high_score: float = DEFAULT_HIGH_SCORE
    high_score_average_time: float = UNSET_AVERAGE_TIME
    final_score: float | None = None
    question_started_at: float = 0.0

    # -- transitions helpers --------------------------------------------------

    def reset_progress(self) -> None:
        """Clear everything a new session starts without."""
        self.current_index = 0
        self.current_question = None
        self.correct_count = 0
        self.times.clear()
        self.incorrect_answers.clear()
        self.answered = False
        self.final_score = None
        self.selected_answer = None
        self.clear_feedback()

    def clear_feedback(self) -> None:
        self.feedback_active = False
        self.last_answer_correct = None
        self.correct_option = None

    # -- queries --------------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self.snapshot().phase

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            screen=self.screen,
            mode=self.mode,
            difficulty=self.difficulty,
            total_questions=self.total_questions,
            current_index=self.current_index,
            current_question=self.current_question,
            correct_count=self.correct_count,
            times=tuple(self.times),
            incorrect_answers=tuple(self.incorrect_answers),
            answered=self.answered,
            feedback_active=self.feedback_active,
            last_answer_correct=self.last_answer_correct,
            correct_option=self.correct_option,
            selected_answer=self.selected_answer,
            high_score=self.high_score,
            high_score_average_time=self.high_score_average_time,
            final_score=self.final_score,
            question_started_at=self.question_started_at,
        )

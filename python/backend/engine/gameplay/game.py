"""Quiz session state machine — processes intents and advances questions."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from backend.engine.palette import ColorPalette
from backend.engine.questiongenerator import QuestionGenerator
from backend.engine.scheduler import ScheduledTask, TaskQueue
from backend.engine.scoring import ScoringEngine, Verdict
from backend.engine.sessionstate import (
    DEFAULT_TOTAL_QUESTIONS,
    Screen,
    SessionPhase,
    SessionSnapshot,
    SessionState,
)
from backend.models.preferences import (
    DEFAULT_HIGH_SCORE,
    UNSET_AVERAGE_TIME,
    PreferenceStore,
)
from backend.models.question import (
    AnsweredRecord,
    Difficulty,
    GameMode,
    Question,
    skipped_answer,
)

logger = logging.getLogger(__name__)

FEEDBACK_DURATION_MS_CORRECT = 500
FEEDBACK_DURATION_MS_INCORRECT = 1000

PREFERENCES_FILE = "preferences.json"

MODE_LABELS = {
    GameMode.NORMAL: "Mode: Name the color",
    GameMode.REVERSE: "Mode: Find the named color",
    GameMode.SHADE: "Mode: Match the shade",
}

Listener = Callable[[SessionSnapshot], None]


@dataclass(frozen=True)
class SessionSummary:
    mode: GameMode
    correct: int
    total: int
    accuracy_percent: int
    average_seconds: float | None
    score: float
    verdict: Verdict

    def to_text(self) -> str:
        if self.average_seconds is None:
            time_line = "Average time: n/a"
        else:
            time_line = f"Average time: {self.average_seconds:.2f}s"
        return "\n".join(
            [
                MODE_LABELS[self.mode],
                f"Correct: {self.correct}/{self.total} ({self.accuracy_percent}%)",
                time_line,
                "",
                f"Verdict: {self.verdict.value}",
            ]
        )


class SessionStateMachine:
    """Owns one quiz session from the home screen to the result.

    Every public method is an intent from the presentation layer.  Intents
    that do not apply in the current phase return without changing
    anything.  Subscribers receive a fresh ``SessionSnapshot`` after each
    change.
    """

    def __init__(
        self,
        generator: QuestionGenerator,
        preferences: PreferenceStore,
        scheduler: TaskQueue,
        clock: Callable[[], float] = time.monotonic,
        total_questions: int = DEFAULT_TOTAL_QUESTIONS,
    ) -> None:
        self.generator = generator
        self.preferences = preferences
        self.scheduler = scheduler
        self.clock = clock

        self._state = SessionState(
            mode=preferences.game_mode,
            difficulty=preferences.difficulty,
            total_questions=max(1, total_questions),
            high_score=preferences.high_score,
            high_score_average_time=preferences.high_score_average_time,
        )
        self._listeners: list[Listener] = []
        self._feedback_task: ScheduledTask | None = None
        # Bumped on start/reset so a stale feedback task can tell it is stale.
        self._generation = 0

    @classmethod
    def create(
        cls,
        data_dir: Path | None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        total_questions: int = DEFAULT_TOTAL_QUESTIONS,
    ) -> "SessionStateMachine":
        """Wire a machine with the default palette and a JSON preference file."""
        rng = random.Random(seed)
        generator = QuestionGenerator(ColorPalette(rng=rng))
        prefs_path = None if data_dir is None else data_dir / PREFERENCES_FILE
        return cls(
            generator,
            PreferenceStore(prefs_path),
            TaskQueue(clock),
            clock=clock,
            total_questions=total_questions,
        )

    # -- observation ----------------------------------------------------------

    @property
    def state(self) -> SessionSnapshot:
        return self._state.snapshot()

    def snapshot(self) -> SessionSnapshot:
        return self._state.snapshot()

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self._state.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Session listener %r failed", listener)

    # -- settings (home screen only) ------------------------------------------

    def _settings_locked(self, what: str) -> bool:
        if self._state.screen is not Screen.HOME:
            logger.debug("Ignoring %s change on %s screen", what, self._state.screen)
            return True
        return False

    def set_game_mode(self, mode: GameMode) -> None:
        if self._settings_locked("game mode"):
            return
        try:
            mode = GameMode(mode)
        except ValueError:
            logger.debug("Ignoring unknown game mode %r", mode)
            return
        self._state.mode = mode
        self._persist(lambda: setattr(self.preferences, "game_mode", mode))
        self._notify()

    def set_difficulty(self, difficulty: Difficulty) -> None:
        if self._settings_locked("difficulty"):
            return
        try:
            difficulty = Difficulty(difficulty)
        except ValueError:
            logger.debug("Ignoring unknown difficulty %r", difficulty)
            return
        self._state.difficulty = difficulty
        self._persist(lambda: setattr(self.preferences, "difficulty", difficulty))
        self._notify()

    def set_total_questions(self, count: int) -> None:
        if count <= 0 or self._settings_locked("question count"):
            return
        self._state.total_questions = count
        self._notify()

    def clear_high_score(self) -> None:
        self._state.high_score = DEFAULT_HIGH_SCORE
        self._state.high_score_average_time = UNSET_AVERAGE_TIME
        self._persist(self.preferences.clear_high_score)
        self._notify()

    # -- session lifecycle ----------------------------------------------------

    def start(self) -> None:
        self._cancel_feedback()
        self._generation += 1
        state = self._state
        state.reset_progress()
        state.current_question = self._generate()
        state.screen = Screen.GAME
        self._mark_start()
        logger.debug(
            "Session %d started: %s, %d questions",
            self._generation, state.mode, state.total_questions,
        )
        self._notify()

    def reset_game(self) -> None:
        self._cancel_feedback()
        self._generation += 1
        self._state.screen = Screen.HOME
        self._state.clear_feedback()
        self._notify()

    def mark_question_start(self) -> None:
        """Record the moment the current question became visible."""
        self._mark_start()

    # -- answering ------------------------------------------------------------

    def submit_answer(self, option: object) -> None:
        question = self._state.current_question
        if not self._can_answer() or question is None:
            return
        self._handle_answer(option, question.is_correct(option))

    def skip_question(self) -> None:
        if not self._can_answer():
            return
        self._handle_answer(skipped_answer(self._state.mode), False)

    def _can_answer(self) -> bool:
        state = self._state
        if state.screen is not Screen.GAME or state.answered or state.feedback_active:
            logger.debug("Ignoring answer in phase %s", state.phase)
            return False
        return True

    def _handle_answer(self, selected: object, is_correct: bool) -> None:
        state = self._state
        question = state.current_question
        assert question is not None

        elapsed = max(0, round((self.clock() - state.question_started_at) * 1000))
        state.times.append(elapsed)
        state.selected_answer = selected
        state.answered = True
        state.correct_option = question.correct
        state.last_answer_correct = is_correct

        if is_correct:
            state.correct_count += 1
        else:
            state.incorrect_answers.append(
                AnsweredRecord(
                    question=question,
                    selected=selected,
                    was_correct=False,
                    mode=question.mode,
                    elapsed_ms=elapsed,
                )
            )

        state.feedback_active = True
        delay = FEEDBACK_DURATION_MS_CORRECT if is_correct else FEEDBACK_DURATION_MS_INCORRECT
        generation = self._generation
        self._feedback_task = self.scheduler.call_later(
            delay, lambda: self._end_feedback(generation)
        )
        self._notify()

    def _end_feedback(self, generation: int) -> None:
        state = self._state
        if generation != self._generation or state.screen is not Screen.GAME:
            return
        self._feedback_task = None
        state.clear_feedback()

        next_index = state.current_index + 1
        if next_index >= state.total_questions:
            state.screen = Screen.RESULT
            self._finish_session()
        else:
            state.current_index = next_index
            state.current_question = self._generate()
            state.selected_answer = None
            state.answered = False
            self._mark_start()
        self._notify()

    def _finish_session(self) -> None:
        state = self._state
        score = ScoringEngine.final_score(
            state.correct_count, state.total_questions, state.times
        )
        state.final_score = score
        logger.info("Session %d finished with score %.1f", self._generation, score)

        if score > state.high_score:
            average = ScoringEngine.average_seconds(state.times)
            state.high_score = score
            state.high_score_average_time = average
            self._persist(lambda: self.preferences.set_high_score(score, average))

    # -- summary --------------------------------------------------------------

    def summary(self) -> SessionSummary:
        state = self._state
        if state.final_score is None:
            score = ScoringEngine.final_score(
                state.correct_count, state.total_questions, state.times
            )
        else:
            score = state.final_score
        return SessionSummary(
            mode=state.mode,
            correct=state.correct_count,
            total=state.total_questions,
            accuracy_percent=ScoringEngine.accuracy_percent(
                state.correct_count, state.total_questions
            ),
            average_seconds=(
                ScoringEngine.average_seconds(state.times) if state.times else None
            ),
            score=score,
            verdict=ScoringEngine.verdict(score),
        )

    def summary_text(self) -> str:
        return self.summary().to_text()

    # -- helpers --------------------------------------------------------------

    def _generate(self) -> Question:
        state = self._state
        return self.generator.generate(state.mode, state.difficulty)

    def _mark_start(self) -> None:
        self._state.question_started_at = self.clock()

    def _cancel_feedback(self) -> None:
        if self._feedback_task is not None:
            self._feedback_task.cancel()
            self._feedback_task = None

    @staticmethod
    def _persist(write: Callable[[], None]) -> None:
        try:
            write()
        except OSError:
            logger.exception("Could not save preferences")

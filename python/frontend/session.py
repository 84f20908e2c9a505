"""Session wiring shared by every frontend."""

from __future__ import annotations

from pathlib import Path

from backend.engine.gameplay import SessionStateMachine
from backend.models.question import Difficulty, GameMode

MODE_CYCLE = list(GameMode)
DIFFICULTY_CYCLE = list(Difficulty)
QUESTION_COUNTS = [5, 10, 15, 20]


def open_session(
    data_dir: Path,
    total_questions: int = 10,
    mode: GameMode | None = None,
    difficulty: Difficulty | None = None,
    seed: int | None = None,
) -> SessionStateMachine:
    """Create a machine on the home screen with the requested settings.

    *mode* and *difficulty* override (and persist over) the saved ones.
    """
    machine = SessionStateMachine.create(data_dir, seed=seed, total_questions=total_questions)
    if mode is not None:
        machine.set_game_mode(mode)
    if difficulty is not None:
        machine.set_difficulty(difficulty)
    return machine


def next_in(cycle: list, current):
    return cycle[(cycle.index(current) + 1) % len(cycle)]


def step_count(current: int, step: int) -> int:
    """Move to the neighbouring preset question count."""
    if current not in QUESTION_COUNTS:
        return QUESTION_COUNTS[1]
    i = QUESTION_COUNTS.index(current) + step
    return QUESTION_COUNTS[max(0, min(len(QUESTION_COUNTS) - 1, i))]


def format_high_score(score: float, average_time: float) -> str:
    if score <= 0:
        return "No high score yet"
    if average_time < 0:
        return f"High score: {score:.1f}"
    return f"High score: {score:.1f}  (avg {average_time:.2f}s)"


def elapsed_seconds(machine: SessionStateMachine) -> float:
    snap = machine.state
    if snap.answered and snap.times:
        return snap.times[-1] / 1000.0
    return max(0.0, machine.clock() - snap.question_started_at)

"""Frontend-independent helpers: session wiring, setting cycles, key mapping."""

from __future__ import annotations

import pytest

from backend.engine.sessionstate import Screen
from backend.models.preferences import PreferenceStore
from backend.models.question import Difficulty, GameMode
from frontend.cli.input_handler import _resolve, option_index
from frontend.session import (
    MODE_CYCLE,
    QUESTION_COUNTS,
    format_high_score,
    next_in,
    open_session,
    step_count,
)


def test_open_session_applies_and_saves_overrides(tmp_path) -> None:
    machine = open_session(
        tmp_path, total_questions=5, mode=GameMode.SHADE, difficulty=Difficulty.HARD, seed=1
    )
    snap = machine.state
    assert snap.screen is Screen.HOME
    assert snap.total_questions == 5
    assert snap.mode is GameMode.SHADE

    stored = PreferenceStore(tmp_path / "preferences.json")
    assert stored.game_mode is GameMode.SHADE
    assert stored.difficulty is Difficulty.HARD


def test_mode_cycle_wraps_around() -> None:
    assert next_in(MODE_CYCLE, GameMode.NORMAL) is GameMode.REVERSE
    assert next_in(MODE_CYCLE, GameMode.SHADE) is GameMode.NORMAL


@pytest.mark.parametrize("current, step, expected", [
    (10, 1, 15),
    (10, -1, 5),
    (5, -1, 5),
    (20, 1, 20),
    (7, 1, QUESTION_COUNTS[1]),
])
def test_step_count(current: int, step: int, expected: int) -> None:
    assert step_count(current, step) == expected


@pytest.mark.parametrize("score, avg, text", [
    (0.0, -1.0, "No high score yet"),
    (72.25, -1.0, "High score: 72.2"),
    (88.0, 1.5, "High score: 88.0  (avg 1.50s)"),
])
def test_format_high_score(score: float, avg: float, text: str) -> None:
    assert format_high_score(score, avg) == text


@pytest.mark.parametrize("key, index", [
    ("1", 0),
    ("9", 8),
    ("0", None),
    ("skip", None),
    (None, None),
])
def test_option_index(key, index) -> None:
    assert option_index(key) == index


@pytest.mark.parametrize("raw, action", [
    ("Q", "quit"),
    (" ", "skip"),
    ("\r", "enter"),
    ("3", "3"),
    ("\x1b", ""),
])
def test_resolve_keys(raw: str, action: str) -> None:
    assert _resolve(raw) == action

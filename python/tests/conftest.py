"""Shared fixtures — a controllable clock and a seeded session machine."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from backend.engine.gameplay import SessionStateMachine
from backend.engine.palette import ColorPalette
from backend.engine.questiongenerator import QuestionGenerator
from backend.engine.scheduler import TaskQueue
from backend.models.preferences import PreferenceStore


class FakeClock:
    """Monotonic clock advanced by hand, in whole milliseconds."""

    def __init__(self) -> None:
        self.ms = 0

    def __call__(self) -> float:
        return self.ms / 1000

    def advance(self, ms: int) -> None:
        self.ms += ms


def build_machine(
    clock: FakeClock,
    prefs_path: Path | None = None,
    total: int = 1,
    seed: int = 7,
    palette: ColorPalette | None = None,
) -> SessionStateMachine:
    palette = palette or ColorPalette(rng=random.Random(seed))
    return SessionStateMachine(
        QuestionGenerator(palette),
        PreferenceStore(prefs_path),
        TaskQueue(clock),
        clock=clock,
        total_questions=total,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "preferences.json"


@pytest.fixture
def machine(clock: FakeClock, prefs_path: Path) -> SessionStateMachine:
    return build_machine(clock, prefs_path)


@pytest.fixture
def make_machine(clock: FakeClock, prefs_path: Path):
    """Factory for machines sharing the test's clock and preference file."""

    def make(**kwargs) -> SessionStateMachine:
        kwargs.setdefault("prefs_path", prefs_path)
        return build_machine(clock, **kwargs)

    return make

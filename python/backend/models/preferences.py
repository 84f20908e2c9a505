"""Preference persistence — high score and chosen settings."""

from __future__ import annotations

import json
import logging
import math
from enum import StrEnum
from pathlib import Path
from typing import TypeVar

from backend.models.question import Difficulty, GameMode

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"
HIGH_SCORE_AVG_TIME_KEY = "highScoreAverageTime"
GAME_MODE_KEY = "gameMode"
DIFFICULTY_KEY = "difficulty"

DEFAULT_HIGH_SCORE = 0.0
UNSET_AVERAGE_TIME = -1.0

_E = TypeVar("_E", bound=StrEnum)


class PreferenceStore:
    """Loads and saves the quiz preferences as a flat JSON object.

    Missing or corrupted values fall back to their defaults.  With
    ``filepath=None`` nothing touches the disk.
    """

    def __init__(self, filepath: Path | None = None) -> None:
        self.filepath = filepath
        self._values: dict[str, object] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath is None or not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences %s: %s", self.filepath, exc)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences %s: not a JSON object", self.filepath)
            return
        self._values = data

    def save(self) -> None:
        if self.filepath is None:
            return
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(json.dumps(self._values, indent=2) + "\n")

    # -- typed accessors ------------------------------------------------------

    def _get_float(self, key: str, default: float) -> float:
        value = self._values.get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Preference %r has invalid value %r", key, value)
            return default
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        if not math.isfinite(number):
            logger.warning("Preference %r has non-finite value %r", key, value)
            return default
        return number

    def _get_enum(self, key: str, enum_cls: type[_E], default: _E) -> _E:
        value = self._values.get(key)
        if value is None:
            return default
        try:
            return enum_cls[value]
        except (KeyError, TypeError):
            logger.warning("Preference %r has unknown value %r", key, value)
            return default

    # -- high score -----------------------------------------------------------

    @property
    def high_score(self) -> float:
        return self._get_float(HIGH_SCORE_KEY, DEFAULT_HIGH_SCORE)

    @property
    def high_score_average_time(self) -> float:
        return self._get_float(HIGH_SCORE_AVG_TIME_KEY, UNSET_AVERAGE_TIME)

    def set_high_score(self, score: float, average_time: float) -> None:
        self._values[HIGH_SCORE_KEY] = float(score)
        self._values[HIGH_SCORE_AVG_TIME_KEY] = float(average_time)
        self.save()

    def clear_high_score(self) -> None:
        self._values.pop(HIGH_SCORE_KEY, None)
        self._values.pop(HIGH_SCORE_AVG_TIME_KEY, None)
        self.save()

    # -- settings -------------------------------------------------------------

    @property
    def game_mode(self) -> GameMode:
        return self._get_enum(GAME_MODE_KEY, GameMode, GameMode.NORMAL)

    @game_mode.setter
    def game_mode(self, mode: GameMode) -> None:
        self._values[GAME_MODE_KEY] = mode.name
        self.save()

    @property
    def difficulty(self) -> Difficulty:
        return self._get_enum(DIFFICULTY_KEY, Difficulty, Difficulty.MEDIUM)

    @difficulty.setter
    def difficulty(self, difficulty: Difficulty) -> None:
        self._values[DIFFICULTY_KEY] = difficulty.name
        self.save()

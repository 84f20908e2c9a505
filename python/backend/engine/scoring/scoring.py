"""Final score computation — accuracy blended with answer speed."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum


class Verdict(StrEnum):
    NO_STRONG_SIGNS = "No strong signs of color blindness"
    MILD_SIGNS = "Mild signs of color vision deficiency"
    SIGNIFICANT_SIGNS = "Significant signs of color vision deficiency"


class ScoringEngine:
    """Stateless scorer — all methods are static."""

    ACCURACY_WEIGHT = 0.75
    TIME_WEIGHT = 0.25

    # Average answer time breakpoints, in seconds.
    FAST_TIME_THRESHOLD = 2.0
    MEDIUM_TIME_THRESHOLD = 5.0
    SLOW_TIME_THRESHOLD = 8.0

    NO_SIGNS_THRESHOLD = 80.0
    MILD_SIGNS_THRESHOLD = 60.0

    @staticmethod
    def time_score(avg_seconds: float) -> float:
        """Map an average answer time to a score in ``[-100, 100]``.

        100 up to 2 s, falling linearly to 0 at 5 s and to -100 at 8 s.
        """
        fast = ScoringEngine.FAST_TIME_THRESHOLD
        medium = ScoringEngine.MEDIUM_TIME_THRESHOLD
        slow = ScoringEngine.SLOW_TIME_THRESHOLD

        if avg_seconds <= fast:
            return 100.0
        if avg_seconds <= medium:
            return (medium - avg_seconds) / (medium - fast) * 100.0
        if avg_seconds <= slow:
            return (slow - avg_seconds) / (slow - medium) * 100.0 - 100.0
        return -100.0

    @staticmethod
    def average_seconds(times_ms: Sequence[int]) -> float:
        if not times_ms:
            return 0.0
        return sum(times_ms) / len(times_ms) / 1000.0

    @staticmethod
    def accuracy_percent(correct: int, total: int) -> int:
        if total <= 0:
            return 0
        return correct * 100 // total

    @staticmethod
    def final_score(correct: int, total: int, times_ms: Sequence[int]) -> float:
        """Return the session score in ``[0, 100]``."""
        accuracy = correct / max(total, 1) * 100.0
        time_score = ScoringEngine.time_score(ScoringEngine.average_seconds(times_ms))
        combined = (
            ScoringEngine.ACCURACY_WEIGHT * accuracy
            + ScoringEngine.TIME_WEIGHT * (time_score + 100.0) / 2.0
        )
        return min(100.0, max(0.0, combined))

    @staticmethod
    def verdict(score: float) -> Verdict:
        if score >= ScoringEngine.NO_SIGNS_THRESHOLD:
            return Verdict.NO_STRONG_SIGNS
        if score >= ScoringEngine.MILD_SIGNS_THRESHOLD:
            return Verdict.MILD_SIGNS
        return Verdict.SIGNIFICANT_SIGNS

"""Scoring tests — time curve, blended score, and verdict thresholds."""

from __future__ import annotations

import pytest

from backend.engine.scoring import ScoringEngine, Verdict


# -- time score ---------------------------------------------------------------


@pytest.mark.parametrize("seconds, expected", [
    (0.0, 100.0),
    (0.5, 100.0),
    (2.0, 100.0),
    (3.5, 50.0),
    (5.0, 0.0),
    (6.5, -50.0),
    (8.0, -100.0),
    (10.0, -100.0),
])
def test_time_score_breakpoints(seconds: float, expected: float) -> None:
    assert ScoringEngine.time_score(seconds) == pytest.approx(expected)


def test_time_score_never_increases_with_time() -> None:
    scores = [ScoringEngine.time_score(i / 20) for i in range(0, 241)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


# -- aggregates ---------------------------------------------------------------


def test_average_seconds_of_no_answers_is_zero() -> None:
    assert ScoringEngine.average_seconds([]) == 0.0


def test_average_seconds_converts_milliseconds() -> None:
    assert ScoringEngine.average_seconds([1000, 2000, 4500]) == pytest.approx(2.5)


@pytest.mark.parametrize("correct, total, expected", [
    (0, 10, 0),
    (7, 10, 70),
    (2, 3, 66),
    (10, 10, 100),
    (0, 0, 0),
])
def test_accuracy_percent_truncates(correct: int, total: int, expected: int) -> None:
    assert ScoringEngine.accuracy_percent(correct, total) == expected


# -- final score --------------------------------------------------------------


def test_perfect_fast_session_scores_100() -> None:
    assert ScoringEngine.final_score(1, 1, [1000]) == pytest.approx(100.0)


def test_single_skip_scores_the_time_component_only() -> None:
    # 0.75 * 0 + 0.25 * (100 + 100) / 2
    assert ScoringEngine.final_score(0, 1, [0]) == pytest.approx(25.0)


def test_all_wrong_and_slow_scores_zero() -> None:
    assert ScoringEngine.final_score(0, 5, [9000] * 5) == pytest.approx(0.0)


def test_zero_total_is_treated_as_one() -> None:
    assert ScoringEngine.final_score(0, 0, []) == pytest.approx(25.0)


@pytest.mark.parametrize("correct", [0, 3, 7, 10])
@pytest.mark.parametrize("time_ms", [0, 1500, 4000, 7000, 12000])
def test_final_score_stays_within_bounds(correct: int, time_ms: int) -> None:
    score = ScoringEngine.final_score(correct, 10, [time_ms] * 10)
    assert 0.0 <= score <= 100.0


# -- verdict ------------------------------------------------------------------


@pytest.mark.parametrize("score, verdict", [
    (100.0, Verdict.NO_STRONG_SIGNS),
    (80.0, Verdict.NO_STRONG_SIGNS),
    (79.99, Verdict.MILD_SIGNS),
    (60.0, Verdict.MILD_SIGNS),
    (59.99, Verdict.SIGNIFICANT_SIGNS),
    (0.0, Verdict.SIGNIFICANT_SIGNS),
])
def test_verdict_thresholds(score: float, verdict: Verdict) -> None:
    assert ScoringEngine.verdict(score) is verdict

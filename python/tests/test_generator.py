"""Question generator tests — option sets per mode, confusable preference,
and the error question when generation cannot succeed.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.palette import ColorPalette
from backend.engine.palette.palette import BASE_RANGES
from backend.engine.questiongenerator import QuestionGenerator
from backend.engine.questiongenerator.generator import (
    NAME_OPTION_COUNT,
    SHADE_OPTION_COUNT,
)
from backend.models.color import ColorName, ColorSample, ColorSwatch, RGBRange
from backend.models.question import (
    GENERATION_ERROR,
    Difficulty,
    GameMode,
    NameAnswer,
    SampleAnswer,
)


def _generator(seed: int = 3, **palette_kwargs) -> QuestionGenerator:
    return QuestionGenerator(ColorPalette(rng=random.Random(seed), **palette_kwargs))


def _swatches(*names: ColorName) -> list[ColorSwatch]:
    # One fixed, distinct sample per name.
    return [ColorSwatch(name, ColorSample(10 * i, 0, 0)) for i, name in enumerate(names)]


# -- NORMAL -------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(10))
def test_normal_question_has_four_unique_names(seed: int) -> None:
    gen = _generator(seed)
    q = gen.generate(GameMode.NORMAL)

    assert not q.is_error
    assert len(q.options) == NAME_OPTION_COUNT
    assert len(set(q.options)) == NAME_OPTION_COUNT
    assert all(isinstance(o, NameAnswer) for o in q.options)
    assert q.options.count(q.correct) == 1
    assert q.correct == NameAnswer(q.correct_name)
    assert q.color in gen.palette.range_of(q.correct_name)


def test_normal_with_fewer_names_uses_all_of_them() -> None:
    ranges = {n: BASE_RANGES[n] for n in (ColorName.RED, ColorName.GREEN)}
    q = _generator(ranges=ranges).generate(GameMode.NORMAL)
    assert sorted(o.name for o in q.options) == ["Green", "Red"]


# -- REVERSE ------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(10))
def test_reverse_question_has_four_distinct_samples(seed: int) -> None:
    q = _generator(seed).generate(GameMode.REVERSE)

    assert not q.is_error
    assert len(q.options) == NAME_OPTION_COUNT
    assert len(set(q.options)) == NAME_OPTION_COUNT
    assert all(isinstance(o, SampleAnswer) for o in q.options)
    assert q.options.count(q.correct) == 1
    assert q.correct == SampleAnswer(q.color)
    assert q.correct_name in q.prompt


def test_reverse_distractors_are_all_confusables_when_enough_exist() -> None:
    gen = _generator()
    swatches = _swatches(*ColorName)
    brown = next(s for s in swatches if s.name is ColorName.BROWN)

    for _ in range(20):
        chosen = gen.pick_distractors(brown, swatches, 3)
        assert {s.name for s in chosen} == {
            ColorName.RED,
            ColorName.GREEN,
            ColorName.ORANGE,
        }


def test_reverse_distractors_fill_up_after_confusables() -> None:
    gen = _generator()
    swatches = _swatches(*ColorName)
    blue = next(s for s in swatches if s.name is ColorName.BLUE)

    for _ in range(20):
        chosen = gen.pick_distractors(blue, swatches, 3)
        names = [s.name for s in chosen]
        assert len(names) == 3
        assert len(set(names)) == 3
        assert ColorName.PURPLE in names
        assert ColorName.BLUE not in names


def test_reverse_distractors_skip_confusables_missing_from_palette() -> None:
    gen = _generator()
    swatches = _swatches(ColorName.RED, ColorName.BLUE, ColorName.PINK, ColorName.YELLOW)
    red = swatches[0]

    chosen = gen.pick_distractors(red, swatches, 3)
    assert {s.name for s in chosen} == {ColorName.BLUE, ColorName.PINK, ColorName.YELLOW}


def test_reverse_distractors_never_repeat_the_target_sample() -> None:
    gen = _generator()
    same = ColorSample(1, 2, 3)
    swatches = [
        ColorSwatch(ColorName.RED, same),
        ColorSwatch(ColorName.BROWN, same),
        ColorSwatch(ColorName.ORANGE, ColorSample(4, 5, 6)),
    ]
    chosen = gen.pick_distractors(swatches[0], swatches, 3)
    assert [s.name for s in chosen] == [ColorName.ORANGE]


# -- SHADE --------------------------------------------------------------------


@pytest.mark.parametrize("difficulty, spread", [
    (Difficulty.MEDIUM, 24),
    (Difficulty.HARD, 10),
])
@pytest.mark.parametrize("seed", range(5))
def test_shade_question_options_stay_near_the_reference(seed, difficulty, spread) -> None:
    gen = _generator(seed)
    q = gen.generate(GameMode.SHADE, difficulty)

    assert not q.is_error
    assert len(q.options) == SHADE_OPTION_COUNT
    assert len(set(q.options)) == SHADE_OPTION_COUNT
    assert q.options.count(q.correct) == 1

    base = gen.palette.range_of(q.correct_name)
    for option in q.options:
        assert option.sample in base
        for got, ref in zip(option.sample.as_tuple, q.color.as_tuple):
            assert abs(got - ref) <= spread


def test_shade_with_too_narrow_range_returns_error_question() -> None:
    ranges = {ColorName.RED: RGBRange.of((10, 10), (10, 10), (10, 11))}
    q = _generator(ranges=ranges).generate(GameMode.SHADE)
    assert q.is_error


def test_shade_option_count_is_configurable() -> None:
    gen = QuestionGenerator(ColorPalette(rng=random.Random(5)), shade_options=4)
    assert len(gen.generate(GameMode.SHADE).options) == 4


def test_shade_option_count_below_two_is_rejected() -> None:
    with pytest.raises(ValueError):
        QuestionGenerator(ColorPalette(), shade_options=1)


# -- failure and determinism --------------------------------------------------


@pytest.mark.parametrize("mode", list(GameMode))
def test_empty_palette_gives_error_question(mode: GameMode) -> None:
    q = _generator(ranges={}).generate(mode)

    assert q.is_error
    assert q.mode is mode
    assert q.prompt == GENERATION_ERROR
    assert q.options == (NameAnswer(GENERATION_ERROR),)
    assert not q.is_correct(q.options[0])


@pytest.mark.parametrize("mode", list(GameMode))
def test_same_seed_gives_same_questions(mode: GameMode) -> None:
    first, second = _generator(11), _generator(11)
    for _ in range(5):
        assert first.generate(mode) == second.generate(mode)

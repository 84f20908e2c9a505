"""Palette and color model tests.

Sampling is driven by a seeded ``random.Random`` so every draw below is
reproducible.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.palette import ColorPalette
from backend.engine.palette.palette import BASE_RANGES, CONFUSABLE_COLORS
from backend.errors import ConfigurationError
from backend.models.color import (
    TRANSPARENT,
    ChannelRange,
    ColorName,
    ColorSample,
    RGBRange,
)
from backend.models.question import Difficulty


def _palette(seed: int = 1, **kwargs) -> ColorPalette:
    return ColorPalette(rng=random.Random(seed), **kwargs)


# -- color model --------------------------------------------------------------


@pytest.mark.parametrize("low, high", [(-1, 10), (10, 256), (20, 10)])
def test_channel_range_rejects_invalid_bounds(low: int, high: int) -> None:
    with pytest.raises(ValueError):
        ChannelRange(low, high)


@pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
def test_color_sample_rejects_out_of_range_channels(channels) -> None:
    with pytest.raises(ValueError):
        ColorSample(*channels)


def test_transparent_never_equals_an_opaque_black() -> None:
    assert TRANSPARENT != ColorSample(0, 0, 0)
    assert TRANSPARENT.is_transparent
    assert not ColorSample(0, 0, 0).is_transparent


def test_narrowed_range_is_clipped_to_the_base_range() -> None:
    base = RGBRange.of((100, 140), (40, 75), (10, 40))
    window = base.narrowed(ColorSample(105, 70, 25), 10)
    assert window == RGBRange.of((100, 115), (60, 75), (15, 35))
    assert window.size == 16 * 16 * 21


def test_hex_is_lowercase_and_zero_padded() -> None:
    assert ColorSample(10, 0, 255).hex == "#0a00ff"


# -- sampling -----------------------------------------------------------------


@pytest.mark.parametrize("name", list(ColorName))
def test_sample_color_stays_inside_its_range(name: ColorName) -> None:
    palette = _palette()
    rgb = palette.range_of(name)
    for _ in range(200):
        assert palette.sample_color(name) in rgb


def test_sampling_includes_both_endpoints() -> None:
    palette = _palette()
    rgb = RGBRange.of((0, 1), (254, 255), (7, 7))
    samples = [palette.sample_in(rgb) for _ in range(200)]
    assert {s.red for s in samples} == {0, 1}
    assert {s.green for s in samples} == {254, 255}
    assert {s.blue for s in samples} == {7}


def test_same_seed_gives_same_samples() -> None:
    first = [_palette(seed=42).sample_color(ColorName.GREEN) for _ in range(5)]
    second = [_palette(seed=42).sample_color(ColorName.GREEN) for _ in range(5)]
    assert first == second


def test_unknown_name_raises_configuration_error() -> None:
    ranges = {n: r for n, r in BASE_RANGES.items() if n is not ColorName.PINK}
    palette = _palette(ranges=ranges)
    with pytest.raises(ConfigurationError):
        palette.sample_color(ColorName.PINK)
    with pytest.raises(ConfigurationError):
        palette.sample_color("Teal")  # type: ignore[arg-type]


def test_generate_palette_has_one_swatch_per_name_in_order() -> None:
    palette = _palette()
    swatches = palette.generate_palette()
    assert [s.name for s in swatches] == list(ColorName)
    for swatch in swatches:
        assert swatch.sample in palette.range_of(swatch.name)


def test_generate_palette_follows_configured_subset() -> None:
    ranges = {
        ColorName.PINK: BASE_RANGES[ColorName.PINK],
        ColorName.RED: BASE_RANGES[ColorName.RED],
    }
    swatches = _palette(ranges=ranges).generate_palette()
    assert [s.name for s in swatches] == [ColorName.RED, ColorName.PINK]


# -- confusion data -----------------------------------------------------------


def test_confusables_follow_the_default_map() -> None:
    palette = _palette()
    assert palette.confusables_of(ColorName.BROWN) == [
        ColorName.RED,
        ColorName.GREEN,
        ColorName.ORANGE,
    ]
    assert palette.confusables_of(ColorName.BLUE) == [ColorName.PURPLE]


def test_confusables_of_unmapped_name_is_empty() -> None:
    confusions = {ColorName.RED: [ColorName.BROWN]}
    assert _palette(confusions=confusions).confusables_of(ColorName.BLUE) == []


def test_confusables_returns_a_copy() -> None:
    palette = _palette()
    palette.confusables_of(ColorName.RED).append(ColorName.PINK)
    assert palette.confusables_of(ColorName.RED) == CONFUSABLE_COLORS[ColorName.RED]


# -- shade windows ------------------------------------------------------------


@pytest.mark.parametrize("difficulty, spread", [
    (Difficulty.MEDIUM, 24),
    (Difficulty.HARD, 10),
])
def test_shade_range_is_centred_on_the_sample(difficulty, spread) -> None:
    palette = _palette()
    centre = ColorSample(190, 25, 25)
    window = palette.shade_range(ColorName.RED, centre, difficulty)
    assert centre in window
    assert window.red == ChannelRange(190 - spread, min(220, 190 + spread))
    assert window.green == ChannelRange(max(0, 25 - spread), 25 + spread)


def test_shade_range_without_spread_raises() -> None:
    palette = _palette(shade_spread={Difficulty.MEDIUM: 24})
    with pytest.raises(ConfigurationError):
        palette.shade_range(ColorName.RED, ColorSample(190, 25, 25), Difficulty.HARD)

"""Base color ranges, confusion data, and random shade sampling."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence

from backend.errors import ConfigurationError
from backend.models.color import ColorName, ColorSample, ColorSwatch, RGBRange
from backend.models.question import Difficulty

BASE_RANGES: dict[ColorName, RGBRange] = {
    # brighter, purer reds
    ColorName.RED: RGBRange.of((160, 220), (0, 50), (0, 50)),
    # yellowish greens, more red in the green channel
    ColorName.GREEN: RGBRange.of((80, 135), (160, 255), (0, 50)),
    ColorName.BLUE: RGBRange.of((0, 30), (0, 80), (200, 255)),
    # R and G kept close
    ColorName.YELLOW: RGBRange.of((190, 255), (190, 235), (0, 50)),
    ColorName.ORANGE: RGBRange.of((210, 255), (130, 170), (0, 40)),
    ColorName.PURPLE: RGBRange.of((125, 150), (0, 50), (150, 220)),
    ColorName.BROWN: RGBRange.of((100, 140), (40, 75), (10, 40)),
    ColorName.PINK: RGBRange.of((220, 255), (120, 160), (160, 200)),
}

CONFUSABLE_COLORS: dict[ColorName, list[ColorName]] = {
    ColorName.GREEN: [ColorName.YELLOW, ColorName.BROWN],
    ColorName.RED: [ColorName.BROWN, ColorName.ORANGE],
    ColorName.PURPLE: [ColorName.BLUE, ColorName.PINK],
    ColorName.BLUE: [ColorName.PURPLE],
    ColorName.YELLOW: [ColorName.GREEN, ColorName.ORANGE],
    ColorName.BROWN: [ColorName.RED, ColorName.GREEN, ColorName.ORANGE],
    ColorName.ORANGE: [ColorName.RED, ColorName.YELLOW, ColorName.BROWN],
    ColorName.PINK: [ColorName.PURPLE, ColorName.RED],
}

# Half-width of the per-channel window SHADE options are drawn from.
SHADE_SPREAD: dict[Difficulty, int] = {
    Difficulty.MEDIUM: 24,
    Difficulty.HARD: 10,
}


class ColorPalette:
    """Draws random shades of the named base colors.

    All randomness comes from *rng*, so a seeded ``random.Random`` makes
    every draw reproducible.
    """

    def __init__(
        self,
        ranges: Mapping[ColorName, RGBRange] | None = None,
        confusions: Mapping[ColorName, Sequence[ColorName]] | None = None,
        rng: random.Random | None = None,
        shade_spread: Mapping[Difficulty, int] | None = None,
    ) -> None:
        self.ranges = dict(BASE_RANGES if ranges is None else ranges)
        self.confusions = {
            name: list(others)
            for name, others in (
                CONFUSABLE_COLORS if confusions is None else confusions
            ).items()
        }
        self.rng = rng or random.Random()
        self.shade_spread = dict(SHADE_SPREAD if shade_spread is None else shade_spread)

    # -- queries --------------------------------------------------------------

    @property
    def names(self) -> list[ColorName]:
        """Configured names in canonical enum order."""
        return [name for name in ColorName if name in self.ranges]

    def range_of(self, name: ColorName) -> RGBRange:
        try:
            return self.ranges[name]
        except KeyError:
            raise ConfigurationError(f"Unknown color: {name!r}") from None

    def confusables_of(self, name: ColorName) -> list[ColorName]:
        return list(self.confusions.get(name, []))

    # -- sampling -------------------------------------------------------------

    def sample_in(self, rgb: RGBRange) -> ColorSample:
        return ColorSample(
            self.rng.randint(rgb.red.low, rgb.red.high),
            self.rng.randint(rgb.green.low, rgb.green.high),
            self.rng.randint(rgb.blue.low, rgb.blue.high),
        )

    def sample_color(self, name: ColorName) -> ColorSample:
        """Return a random shade of *name*."""
        return self.sample_in(self.range_of(name))

    def generate_palette(self) -> list[ColorSwatch]:
        """Return one freshly sampled swatch per configured name."""
        return [ColorSwatch(name, self.sample_color(name)) for name in self.names]

    def shade_range(
        self, name: ColorName, centre: ColorSample, difficulty: Difficulty
    ) -> RGBRange:
        """The range of *name* narrowed around *centre* for *difficulty*."""
        try:
            spread = self.shade_spread[difficulty]
        except KeyError:
            raise ConfigurationError(
                f"No shade spread for difficulty {difficulty!r}"
            ) from None
        return self.range_of(name).narrowed(centre, spread)

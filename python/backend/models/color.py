"""Color model — names, channel ranges, and concrete samples."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ColorName(StrEnum):
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"
    YELLOW = "Yellow"
    ORANGE = "Orange"
    PURPLE = "Purple"
    BROWN = "Brown"
    PINK = "Pink"


CHANNEL_MIN = 0
CHANNEL_MAX = 255


@dataclass(frozen=True)
class ColorSample:
    """A concrete RGB color.

    ``alpha`` is only ever lowered for the transparent sentinel, so a
    sampled color can never compare equal to it.
    """

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not CHANNEL_MIN <= channel <= CHANNEL_MAX:
                raise ValueError(
                    f"Channel value {channel} outside "
                    f"{CHANNEL_MIN}..{CHANNEL_MAX}."
                )

    @property
    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @property
    def is_transparent(self) -> bool:
        return self.alpha == 0


TRANSPARENT = ColorSample(0, 0, 0, alpha=0)
GRAY = ColorSample(128, 128, 128)


@dataclass(frozen=True)
class ChannelRange:
    """Inclusive integer interval for one channel."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if not CHANNEL_MIN <= self.low <= self.high <= CHANNEL_MAX:
            raise ValueError(
                f"Invalid channel range {self.low}..{self.high}."
            )

    def __contains__(self, value: int) -> bool:
        return self.low <= value <= self.high

    def narrowed(self, centre: int, spread: int) -> ChannelRange:
        """Intersect with ``[centre - spread, centre + spread]``.

        *centre* must lie inside the range, so the result is never empty.
        """
        return ChannelRange(
            max(self.low, centre - spread),
            min(self.high, centre + spread),
        )

    @property
    def width(self) -> int:
        return self.high - self.low + 1


@dataclass(frozen=True)
class RGBRange:
    red: ChannelRange
    green: ChannelRange
    blue: ChannelRange

    @classmethod
    def of(
        cls,
        red: tuple[int, int],
        green: tuple[int, int],
        blue: tuple[int, int],
    ) -> RGBRange:
        """Build a range from ``(low, high)`` pairs.

        Example::

            RGBRange.of((160, 220), (0, 50), (0, 50))
        """
        return cls(ChannelRange(*red), ChannelRange(*green), ChannelRange(*blue))

    def __contains__(self, sample: ColorSample) -> bool:
        return (
            sample.red in self.red
            and sample.green in self.green
            and sample.blue in self.blue
        )

    def narrowed(self, centre: ColorSample, spread: int) -> RGBRange:
        return RGBRange(
            self.red.narrowed(centre.red, spread),
            self.green.narrowed(centre.green, spread),
            self.blue.narrowed(centre.blue, spread),
        )

    @property
    def size(self) -> int:
        """Number of distinct samples the range can produce."""
        return self.red.width * self.green.width * self.blue.width


@dataclass(frozen=True)
class ColorSwatch:
    name: ColorName
    sample: ColorSample

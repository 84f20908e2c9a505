"""Exceptions raised by the quiz engine."""

from __future__ import annotations


class ColorTestError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ColorTestError):
    """A color name was requested that the palette has no range for."""


class GenerationDegraded(ColorTestError):
    """A question could not be built from the current palette."""

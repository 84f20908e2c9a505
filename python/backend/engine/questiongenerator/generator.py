"""Builds quiz questions for each game mode."""

from __future__ import annotations

import logging
import random

from backend.engine.palette import ColorPalette
from backend.errors import ColorTestError, GenerationDegraded
from backend.models.color import ColorSwatch
from backend.models.question import (
    Answer,
    Difficulty,
    GameMode,
    NameAnswer,
    Question,
    SampleAnswer,
)

logger = logging.getLogger(__name__)

NAME_OPTION_COUNT = 4
SHADE_OPTION_COUNT = 9
SHADE_PROMPT = "Find the matching shade"
REVERSE_PROMPT = "Which color is {name}?"

# Redraws allowed per SHADE distractor before giving up.
_SHADE_ATTEMPTS_PER_OPTION = 50


class QuestionGenerator:
    """Creates one ``Question`` per call from a ``ColorPalette``.

    The generator shares the palette's random source unless given its
    own, so a single seed reproduces the whole question sequence.
    """

    def __init__(
        self,
        palette: ColorPalette,
        rng: random.Random | None = None,
        shade_options: int = SHADE_OPTION_COUNT,
    ) -> None:
        if shade_options < 2:
            raise ValueError("SHADE questions need at least 2 options.")
        self.palette = palette
        self.rng = rng or palette.rng
        self.shade_options = shade_options

    def generate(self, mode: GameMode, difficulty: Difficulty = Difficulty.MEDIUM) -> Question:
        """Return a question for *mode*, or an error question if none can be built."""
        try:
            swatches = self.palette.generate_palette()
            if not swatches:
                raise GenerationDegraded("Palette has no colors.")
            if mode is GameMode.NORMAL:
                return self._normal(swatches)
            if mode is GameMode.REVERSE:
                return self._reverse(swatches)
            return self._shade(swatches, difficulty)
        except ColorTestError as exc:
            logger.warning("Question generation failed (%s): %s", mode, exc)
            return Question.error(mode)

    # -- modes ----------------------------------------------------------------

    def _normal(self, swatches: list[ColorSwatch]) -> Question:
        correct = self.rng.choice(swatches)
        others = [s.name for s in swatches if s.name != correct.name]
        picked = self.rng.sample(others, min(NAME_OPTION_COUNT - 1, len(others)))
        options: list[Answer] = [NameAnswer(correct.name)]
        options += [NameAnswer(name) for name in picked]
        self.rng.shuffle(options)
        return Question(
            mode=GameMode.NORMAL,
            prompt="",
            correct_name=correct.name,
            color=correct.sample,
            correct=NameAnswer(correct.name),
            options=tuple(options),
        )

    def _reverse(self, swatches: list[ColorSwatch]) -> Question:
        target = self.rng.choice(swatches)
        distractors = self.pick_distractors(target, swatches, NAME_OPTION_COUNT - 1)
        options: list[Answer] = [SampleAnswer(target.sample)]
        options += [SampleAnswer(s.sample) for s in distractors]
        self.rng.shuffle(options)
        return Question(
            mode=GameMode.REVERSE,
            prompt=REVERSE_PROMPT.format(name=target.name),
            correct_name=target.name,
            color=target.sample,
            correct=SampleAnswer(target.sample),
            options=tuple(options),
        )

    def _shade(self, swatches: list[ColorSwatch], difficulty: Difficulty) -> Question:
        base = self.rng.choice(swatches)
        window = self.palette.shade_range(base.name, base.sample, difficulty)
        wanted = self.shade_options - 1
        if window.size <= wanted:
            raise GenerationDegraded(
                f"Shade range of {base.name} too narrow for {self.shade_options} options."
            )

        seen = {base.sample}
        distractors = []
        attempts = wanted * _SHADE_ATTEMPTS_PER_OPTION
        while len(distractors) < wanted:
            if attempts == 0:
                raise GenerationDegraded(
                    f"Gave up drawing distinct shades of {base.name}."
                )
            attempts -= 1
            sample = self.palette.sample_in(window)
            if sample in seen:
                continue
            seen.add(sample)
            distractors.append(sample)

        options: list[Answer] = [SampleAnswer(base.sample)]
        options += [SampleAnswer(s) for s in distractors]
        self.rng.shuffle(options)
        return Question(
            mode=GameMode.SHADE,
            prompt=SHADE_PROMPT,
            correct_name=base.name,
            color=base.sample,
            correct=SampleAnswer(base.sample),
            options=tuple(options),
        )

    # -- helpers --------------------------------------------------------------

    def pick_distractors(
        self, target: ColorSwatch, swatches: list[ColorSwatch], count: int
    ) -> list[ColorSwatch]:
        """Choose up to *count* swatches, confusable names first.

        Swatches sharing the target's name or sample are never chosen.
        """
        by_name = {
            s.name: s
            for s in swatches
            if s.name != target.name and s.sample != target.sample
        }
        confusing = self.palette.confusables_of(target.name)
        self.rng.shuffle(confusing)

        chosen: list[ColorSwatch] = []
        for name in confusing:
            if len(chosen) == count:
                break
            swatch = by_name.pop(name, None)
            if swatch is not None:
                chosen.append(swatch)

        remaining = list(by_name.values())
        self.rng.shuffle(remaining)
        chosen += remaining[: count - len(chosen)]
        return chosen

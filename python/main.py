#!/usr/bin/env python3
"""Color Vision Test.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -m REVERSE # Rich terminal, reverse mode
    python main.py -f pygame -n 20    # Pygame GUI, 20 questions
    python main.py --scores           # view the high score
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gameplay.game import PREFERENCES_FILE  # noqa: E402
from backend.models.preferences import PreferenceStore  # noqa: E402
from backend.models.question import Difficulty, GameMode  # noqa: E402
from frontend.session import format_high_score  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def _preferences() -> PreferenceStore:
    return PreferenceStore(DATA_DIR / PREFERENCES_FILE)


def _print_highscore() -> None:
    prefs = _preferences()
    print("\n  === HIGH SCORE ===")
    print(f"  {format_high_score(prefs.high_score, prefs.high_score_average_time)}")
    print(f"  Saved mode: {prefs.game_mode.value}   difficulty: {prefs.difficulty.value}\n")


def _menu_loop(**options) -> None:
    choices = {
        "1": Frontend.vanilla,
        "2": Frontend.rich,
        "3": Frontend.pygame,
        "4": Frontend.pyqt,
    }
    while True:
        print()
        print("  ====================================")
        print("      C O L O R   V I S I O N         ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  Play  (PyQt GUI)")
        print("  5.  View High Score")
        print("  6.  Clear High Score")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in choices:
            mod = importlib.import_module(_RUNNERS[choices[choice]])
            mod.run(data_dir=DATA_DIR, **options)

        elif choice == "5":
            _print_highscore()

        elif choice == "6":
            _preferences().clear_high_score()
            print("  High score cleared.")

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    questions: int = typer.Option(
        10, "-n", "--questions",
        min=1, max=100,
        help="Questions per session.",
    ),
    mode: Optional[GameMode] = typer.Option(
        None, "-m", "--mode",
        case_sensitive=False,
        help="Game mode (saved for next time).",
    ),
    difficulty: Optional[Difficulty] = typer.Option(
        None, "-d", "--difficulty",
        case_sensitive=False,
        help="Shade-mode difficulty (saved for next time).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the color generator for a reproducible session.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show the high score and exit.",
    ),
    clear_scores: bool = typer.Option(
        False, "--clear-scores",
        help="Clear the high score and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine activity to stderr.",
    ),
) -> None:
    """Color Vision Test."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if clear_scores:
        _preferences().clear_high_score()
        print("  High score cleared.")
        return

    if scores:
        _print_highscore()
        return

    options = {
        "total_questions": questions,
        "mode": mode,
        "difficulty": difficulty,
        "seed": seed,
    }

    if frontend is None:
        _menu_loop(**options)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(data_dir=DATA_DIR, **options)


if __name__ == "__main__":
    app()

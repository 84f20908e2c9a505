"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI truecolor codes, tty/termios) for
rendering and input.  Needs a terminal with 24-bit colour support.
"""

from __future__ import annotations

import sys
from pathlib import Path

from backend.engine.gameplay import SessionStateMachine
from backend.engine.sessionstate import Screen
from backend.models.color import ColorSample
from backend.models.question import Difficulty, GameMode, NameAnswer, SampleAnswer
from frontend.cli.input_handler import get_key, get_key_timeout, option_index
from frontend.session import (
    DIFFICULTY_CYCLE,
    MODE_CYCLE,
    elapsed_seconds,
    format_high_score,
    next_in,
    open_session,
    step_count,
)


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _swatch(sample: ColorSample, width: int = 8) -> str:
    if sample.is_transparent:
        return f"{_DIM}{'(none)':^{width}}{_R}"
    r, g, b = sample.as_tuple
    return f"\033[48;2;{r};{g};{b}m{' ' * width}{_R}"


def _answer(answer: object, width: int = 8) -> str:
    if isinstance(answer, SampleAnswer):
        return _swatch(answer.sample, width)
    if isinstance(answer, NameAnswer):
        return f"{_BOLD}{answer.name}{_R}"
    return str(answer)


# -- screens ------------------------------------------------------------------


def _draw_home(machine: SessionStateMachine) -> None:
    snap = machine.state
    _clear()
    print()
    print(f"  {_C}=================================={_R}")
    print(f"  {_C}    C O L O R   V I S I O N      {_R}")
    print(f"  {_C}=================================={_R}")
    print()
    print(f"  Mode:        {_Y}{snap.mode.value}{_R}")
    print(f"  Difficulty:  {_Y}{snap.difficulty.value}{_R}"
          + ("" if snap.mode is GameMode.SHADE else f"  {_DIM}(shade mode only){_R}"))
    print(f"  Questions:   {_Y}{snap.total_questions}{_R}")
    print()
    print(f"  {format_high_score(snap.high_score, snap.high_score_average_time)}")
    print()
    print(f"  {_DIM}Enter start   M mode   D difficulty   +/- questions"
          f"   C clear score   Q quit{_R}")


def _draw_game(machine: SessionStateMachine) -> None:
    snap = machine.state
    question = snap.current_question
    assert question is not None
    _clear()
    print()
    print(
        f"  Question {_Y}{snap.current_index + 1}/{snap.total_questions}{_R}"
        f"  |  Correct: {_Y}{snap.correct_count}{_R}"
        f"  |  Time: {_Y}{elapsed_seconds(machine):.1f}s{_R}"
    )
    print()

    if question.is_error:
        print(f"  {_RED}{question.prompt}{_R}")
    elif question.mode is GameMode.NORMAL:
        print("  What color is this?")
        print()
        for _ in range(3):
            print(f"  {_swatch(question.color, 24)}")
    elif question.mode is GameMode.SHADE:
        print(f"  {question.prompt}")
        print()
        print(f"  {_swatch(question.color, 24)}")
    else:
        print(f"  {question.prompt}")
    print()

    for i, option in enumerate(question.options):
        mark = ""
        if snap.feedback_active:
            if option == snap.correct_option:
                mark = f"  {_G}<- correct{_R}"
            elif option == snap.selected_answer:
                mark = f"  {_RED}<- your answer{_R}"
        print(f"  {_C}{i + 1}{_R}  {_answer(option, 10)}{mark}")

    print()
    if snap.feedback_active:
        print(f"  {_G}Correct!{_R}" if snap.last_answer_correct else f"  {_RED}Wrong{_R}")
    else:
        print(f"  {_DIM}1-9 answer   S skip   Q back{_R}")
    sys.stdout.flush()


def _draw_result(machine: SessionStateMachine) -> None:
    snap = machine.state
    _clear()
    print()
    print(f"  {_G}Score: {snap.final_score or 0.0:.1f} / 100{_R}")
    print()
    for line in machine.summary_text().splitlines():
        print(f"  {line}")
    print()
    print(f"  {_Y}{format_high_score(snap.high_score, snap.high_score_average_time)}{_R}")

    if snap.incorrect_answers:
        print()
        print(f"  {_BOLD}Review{_R}")
        for i, record in enumerate(snap.incorrect_answers, 1):
            q = record.question
            shown = q.prompt if q.mode is GameMode.REVERSE else _swatch(q.color)
            print(
                f"  {i:>2}. {shown}  correct {_answer(q.correct)}"
                f"  yours {_answer(record.selected)}"
                f"  {_DIM}{record.elapsed_ms / 1000:.1f}s{_R}"
            )
    print()
    print(f"  {_DIM}R play again   Q home{_R}")


# -- loops --------------------------------------------------------------------


def _play(machine: SessionStateMachine) -> bool:
    """Run one session.  Returns True if the player asked to play again."""
    machine.start()
    shown = None
    while machine.state.screen is Screen.GAME:
        snap = machine.state
        view = (snap, int(elapsed_seconds(machine)))
        if view != shown:
            shown = view
            _draw_game(machine)

        key = get_key_timeout(0.05)
        machine.scheduler.run_pending()
        if key is None:
            continue

        picked = option_index(key)
        options = snap.current_question.options  # type: ignore[union-attr]
        if picked is not None and picked < len(options):
            machine.submit_answer(options[picked])
        elif key == "skip":
            machine.skip_question()
        elif key == "quit":
            machine.reset_game()
            return False

    _draw_result(machine)
    while True:
        key = get_key()
        if key == "restart":
            return True
        if key in ("quit", "enter"):
            machine.reset_game()
            return False


def _home_loop(machine: SessionStateMachine) -> None:
    while True:
        _draw_home(machine)
        snap = machine.state
        key = get_key()

        if key == "quit":
            _clear()
            print("\n  Goodbye!\n")
            return
        elif key == "enter":
            while _play(machine):
                pass
        elif key == "mode":
            machine.set_game_mode(next_in(MODE_CYCLE, snap.mode))
        elif key == "difficulty":
            machine.set_difficulty(next_in(DIFFICULTY_CYCLE, snap.difficulty))
        elif key == "more":
            machine.set_total_questions(step_count(snap.total_questions, 1))
        elif key == "fewer":
            machine.set_total_questions(step_count(snap.total_questions, -1))
        elif key == "clear":
            machine.clear_high_score()


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path,
    total_questions: int = 10,
    mode: GameMode | None = None,
    difficulty: Difficulty | None = None,
    seed: int | None = None,
) -> None:
    """Launch the vanilla CLI on its home screen."""
    machine = open_session(data_dir, total_questions, mode, difficulty, seed)
    _home_loop(machine)

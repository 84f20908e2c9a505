"""Rich terminal frontend — colour swatches, panels, and a review table.

Uses the ``rich`` library for truecolor output while sharing the same
input handler and backend as the vanilla CLI.  The home screen doubles
as the settings menu.
"""

from __future__ import annotations

from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import SessionStateMachine
from backend.engine.sessionstate import Screen, SessionSnapshot
from backend.models.color import ColorSample
from backend.models.question import (
    Answer,
    AnsweredRecord,
    Difficulty,
    GameMode,
    NameAnswer,
    SampleAnswer,
)
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

console = Console()

_POLL_SECONDS = 0.05


# -- helpers ------------------------------------------------------------------


def _swatch(sample: ColorSample, width: int = 8) -> Text:
    if sample.is_transparent:
        return Text("(none)".center(width), style="dim")
    return Text(" " * width, style=f"on {sample.hex}")


def _answer_text(answer: object, width: int = 8) -> Text:
    if isinstance(answer, SampleAnswer):
        return _swatch(answer.sample, width)
    if isinstance(answer, NameAnswer):
        return Text(answer.name, style="bold")
    return Text(str(answer), style="dim")


# -- home screen --------------------------------------------------------------


def _draw_home(snap: SessionSnapshot) -> None:
    console.clear()

    settings = Table.grid(padding=(0, 2))
    settings.add_column(justify="right", style="dim")
    settings.add_column()
    settings.add_row("Mode", Text(snap.mode.value, style="bold cyan"))
    difficulty_style = "bold cyan" if snap.mode is GameMode.SHADE else "dim"
    settings.add_row("Difficulty", Text(snap.difficulty.value, style=difficulty_style))
    settings.add_row("Questions", Text(str(snap.total_questions), style="bold cyan"))

    best = Text(
        format_high_score(snap.high_score, snap.high_score_average_time),
        style="bold yellow",
    )

    opts = Text()
    opts.append("  Enter", style="bold green")
    opts.append("  start   ", style="dim")
    opts.append("M", style="bold cyan")
    opts.append("  mode   ", style="dim")
    opts.append("D", style="bold cyan")
    opts.append("  difficulty   ", style="dim")
    opts.append("\u2190 \u2192", style="bold cyan")
    opts.append("  questions   ", style="dim")
    opts.append("C", style="bold red")
    opts.append("  clear score   ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  quit", style="dim")

    body = Group(
        Text(""),
        Align.center(settings),
        Text(""),
        Align.center(best),
        Text(""),
        Align.center(opts),
    )
    panel = Panel(
        body,
        title="[bold]C O L O R   V I S I O N   T E S T[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


# -- game screen --------------------------------------------------------------


def _option_row(index: int, option: Answer, snap: SessionSnapshot) -> Text:
    row = Text()
    row.append(f" {index + 1} ", style="bold cyan")
    row.append(" ")
    row.append_text(_answer_text(option, width=10))
    if snap.feedback_active:
        if option == snap.correct_option:
            row.append("  \u2714", style="bold green")
        elif option == snap.selected_answer:
            row.append("  \u2718", style="bold red")
    return row


def _draw_game(machine: SessionStateMachine) -> None:
    snap = machine.state
    question = snap.current_question
    assert question is not None
    console.clear()

    stats = Text()
    stats.append("  Question ", style="dim")
    stats.append(f"{snap.current_index + 1}/{snap.total_questions}", style="bold yellow")
    stats.append("    Correct: ", style="dim")
    stats.append(str(snap.correct_count), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(f"{elapsed_seconds(machine):.1f}s", style="bold yellow")

    parts: list = []
    if question.is_error:
        parts.append(Align.center(Text(question.prompt, style="bold red")))
    elif question.mode is GameMode.NORMAL:
        parts.append(Align.center(Text("What color is this?", style="bold")))
        parts.append(Text(""))
        for _ in range(3):
            parts.append(Align.center(_swatch(question.color, width=24)))
    elif question.mode is GameMode.SHADE:
        parts.append(Align.center(Text(question.prompt, style="bold")))
        parts.append(Text(""))
        parts.append(Align.center(_swatch(question.color, width=24)))
    else:
        parts.append(Align.center(Text(question.prompt, style="bold")))
    parts.append(Text(""))

    options = Table.grid(padding=(0, 1))
    options.add_column()
    for i, option in enumerate(question.options):
        options.add_row(_option_row(i, option, snap))
    parts.append(Align.center(options))

    if snap.feedback_active:
        if snap.last_answer_correct:
            verdict = Text("Correct!", style="bold green")
        else:
            verdict = Text("Wrong", style="bold red")
        parts.append(Text(""))
        parts.append(Align.center(verdict))

    controls = Text()
    controls.append("  1-9", style="bold cyan")
    controls.append("  answer   ", style="dim")
    controls.append("S", style="bold cyan")
    controls.append("  skip   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    border = "bright_blue"
    if snap.feedback_active:
        border = "green" if snap.last_answer_correct else "red"
    panel = Panel(
        Group(*parts),
        title=f"[bold cyan]{question.mode.value}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    console.print(Align.center(controls))


# -- result screen ------------------------------------------------------------


def _review_table(records: tuple[AnsweredRecord, ...]) -> Table:
    table = Table(
        title="Review",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Shown")
    table.add_column("Correct")
    table.add_column("Your answer")
    table.add_column("Time", justify="right", style="yellow")
    for i, record in enumerate(records, 1):
        q = record.question
        shown = _swatch(q.color) if q.mode is not GameMode.REVERSE else Text(q.prompt)
        table.add_row(
            str(i),
            shown,
            _answer_text(q.correct),
            _answer_text(record.selected),
            f"{record.elapsed_ms / 1000:.1f}s",
        )
    return table


def _draw_result(machine: SessionStateMachine) -> None:
    snap = machine.state
    console.clear()

    score = Text()
    score.append("\n  Score: ", style="dim")
    score.append(f"{snap.final_score or 0.0:.1f}", style="bold green")
    score.append(" / 100\n", style="dim")

    parts: list = [
        Align.center(score),
        Align.center(Text(machine.summary_text())),
        Text(""),
        Align.center(
            Text(
                format_high_score(snap.high_score, snap.high_score_average_time),
                style="yellow",
            )
        ),
    ]
    if snap.incorrect_answers:
        parts.append(Text(""))
        parts.append(Align.center(_review_table(snap.incorrect_answers)))

    panel = Panel(
        Group(*parts),
        title="[bold green]R E S U L T[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to go home.\n", style="dim"))
    )


# -- loops --------------------------------------------------------------------


def _play(machine: SessionStateMachine) -> bool:
    """Run one session.  Returns True if the player asked to play again."""
    dirty = True

    def _mark(_snap: SessionSnapshot) -> None:
        nonlocal dirty
        dirty = True

    unsubscribe = machine.subscribe(_mark)
    last_second = -1
    try:
        machine.start()
        while machine.state.screen is Screen.GAME:
            second = int(elapsed_seconds(machine))
            if dirty or second != last_second:
                dirty = False
                last_second = second
                _draw_game(machine)

            key = get_key_timeout(_POLL_SECONDS)
            machine.scheduler.run_pending()
            if key is None:
                continue

            picked = option_index(key)
            options = machine.state.current_question.options  # type: ignore[union-attr]
            if picked is not None and picked < len(options):
                machine.submit_answer(options[picked])
            elif key == "skip":
                machine.skip_question()
            elif key == "quit":
                machine.reset_game()
                return False
    finally:
        unsubscribe()

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
        snap = machine.state
        _draw_home(snap)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("enter", "1"):
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
    """Launch the Rich CLI on its home screen."""
    machine = open_session(data_dir, total_questions, mode, difficulty, seed)
    _home_loop(machine)

"""PyQt6 GUI frontend — fully self-contained.

Includes the home screen with settings, the quiz page, and the result
page with the review list.  A ``QTimer`` drives the session's task queue
so feedback delays run on the Qt event loop.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameplay import SessionStateMachine
from backend.engine.sessionstate import Screen, SessionSnapshot
from backend.models.question import (
    Answer,
    Difficulty,
    GameMode,
    NameAnswer,
    Question,
    SampleAnswer,
)
from frontend.session import (
    QUESTION_COUNTS,
    elapsed_seconds,
    format_high_score,
    open_session,
)

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_TICK_MS = 30


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    min_w: int = 0,
    min_h: int = 44,
    border: str = "none",
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    _restyle(btn, bg=bg, hover=hover, fg=fg, border=border)
    return btn


def _restyle(
    btn: QPushButton, *, bg: str, hover: str, fg: str = _TEXT, border: str = "none"
) -> None:
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg}; border:{border};"
        f" border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )


def _label(text: str, size: int, colour: str = _TEXT, bold: bool = False) -> QLabel:
    lbl = QLabel(text)
    lbl.setFont(QFont("Helvetica", size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    lbl.setStyleSheet(f"color:{colour};")
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    return lbl


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _HomePage(QWidget):
    """Settings, high score, start and clear buttons."""

    def __init__(self, machine: SessionStateMachine) -> None:
        super().__init__()
        self.setObjectName("page")
        self._machine = machine

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(10)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("COLOR  VISION  TEST", 30, bold=True))
        self._best = _label("", 14, _YELLOW)
        root.addWidget(self._best)
        root.addSpacerItem(QSpacerItem(0, 18))

        self._mode_btns = self._choice_row(
            root, "Game mode", list(GameMode), lambda m: m.value, machine.set_game_mode
        )
        self._diff_btns = self._choice_row(
            root, "Difficulty (shade mode)", list(Difficulty), lambda d: d.value,
            machine.set_difficulty,
        )
        self._count_btns = self._choice_row(
            root, "Questions", QUESTION_COUNTS, str, machine.set_total_questions
        )

        root.addSpacerItem(QSpacerItem(0, 18))
        self.start_btn = _styled_btn(
            "S T A R T", bg=_BLUE, hover=_LAVENDER, fg=_BASE, font_size=16, min_w=240, min_h=52,
        )
        self.start_btn.clicked.connect(machine.start)
        root.addWidget(self.start_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.clear_btn = _styled_btn("CLEAR HIGH SCORE", min_w=240, font_size=12)
        self.clear_btn.clicked.connect(machine.clear_high_score)
        root.addWidget(self.clear_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.quit_btn = _styled_btn(
            "Q U I T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=240, font_size=13
        )
        root.addWidget(self.quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    @staticmethod
    def _choice_row(root, title, values, text, on_pick) -> dict:
        root.addWidget(_label(title, 13, _SUBTEXT))
        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hbox.setSpacing(10)
        btns = {}
        for value in values:
            btn = _styled_btn(text(value), min_w=72, min_h=40, font_size=12)
            btn.clicked.connect(lambda _, v=value: on_pick(v))
            hbox.addWidget(btn)
            btns[value] = btn
        root.addLayout(hbox)
        return btns

    def sync(self, snap: SessionSnapshot) -> None:
        self._best.setText(format_high_score(snap.high_score, snap.high_score_average_time))
        for group, current in (
            (self._mode_btns, snap.mode),
            (self._diff_btns, snap.difficulty),
            (self._count_btns, snap.total_questions),
        ):
            for value, btn in group.items():
                if value == current:
                    _restyle(btn, bg=_GREEN, hover=_GREEN_H, fg=_BASE)
                else:
                    _restyle(btn, bg=_SURFACE0, hover=_SURFACE1)


class _GamePage(QWidget):
    """Prompt, reference swatch, and one button per option."""

    def __init__(self, machine: SessionStateMachine) -> None:
        super().__init__()
        self.setObjectName("page")
        self._machine = machine
        self._question: Question | None = None
        self._option_btns: list[tuple[QPushButton, Answer]] = []

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(16, 10, 16, 10)

        self._title = _label("", 17, bold=True)
        root.addWidget(self._title)
        self._stats = _label("", 13, _PINK)
        root.addWidget(self._stats)
        self._prompt = _label("", 16, bold=True)
        root.addWidget(self._prompt)

        self._swatch = QFrame()
        self._swatch.setFixedSize(200, 150)
        root.addWidget(self._swatch, alignment=Qt.AlignmentFlag.AlignCenter)

        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        self._grid = QGridLayout(frame)
        self._grid.setSpacing(8)
        self._grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._feedback = _label("", 18, bold=True)
        root.addWidget(self._feedback)

        self.skip_btn = _styled_btn("SKIP (S)", bg=_YELLOW, hover="#fff0c8", fg=_BASE, min_w=160)
        self.skip_btn.clicked.connect(machine.skip_question)
        root.addWidget(self.skip_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        root.addWidget(_label("1-9  answer     S  skip     Esc  home", 11, _OVERLAY0))

    def _rebuild(self, question: Question) -> None:
        self._question = question
        for btn, _ in self._option_btns:
            self._grid.removeWidget(btn)
            btn.deleteLater()
        self._option_btns = []

        cols = 3 if question.mode is GameMode.SHADE else 2
        for i, option in enumerate(question.options):
            if isinstance(option, SampleAnswer):
                btn = _styled_btn("", min_w=110, min_h=80)
            else:
                btn = _styled_btn(option.label, min_w=160, min_h=46)
            btn.clicked.connect(lambda _, o=option: self._machine.submit_answer(o))
            self._grid.addWidget(btn, i // cols, i % cols)
            self._option_btns.append((btn, option))

        show_swatch = question.mode is not GameMode.REVERSE and not question.is_error
        self._swatch.setVisible(show_swatch)
        self._swatch.setStyleSheet(f"background:{question.color.hex}; border-radius:12px;")
        self._machine.mark_question_start()

    def sync(self, snap: SessionSnapshot) -> None:
        question = snap.current_question
        if question is None:
            return
        if question is not self._question:
            self._rebuild(question)

        self._title.setText(f"Question {snap.current_index + 1}/{snap.total_questions}")
        if question.is_error:
            self._prompt.setStyleSheet(f"color:{_RED};")
        else:
            self._prompt.setStyleSheet(f"color:{_TEXT};")
        self._prompt.setText(question.prompt or "What color is this?")

        for btn, option in self._option_btns:
            border = "none"
            if snap.feedback_active and option == snap.correct_option:
                border = f"4px solid {_GREEN}"
            elif snap.feedback_active and option == snap.selected_answer:
                border = f"4px solid {_RED}"
            if isinstance(option, SampleAnswer):
                colour = option.sample.hex
                _restyle(btn, bg=colour, hover=colour, border=border)
            else:
                _restyle(btn, bg=_SURFACE0, hover=_SURFACE1, border=border)

        if snap.feedback_active:
            ok = snap.last_answer_correct
            self._feedback.setText("Correct!" if ok else "Wrong")
            self._feedback.setStyleSheet(f"color:{_GREEN if ok else _RED};")
        else:
            self._feedback.setText("")
        self.tick()

    def tick(self) -> None:
        snap = self._machine.state
        self._stats.setText(
            f"Correct: {snap.correct_count}    Time: {elapsed_seconds(self._machine):.1f}s"
        )

    def pick(self, index: int) -> None:
        if 0 <= index < len(self._option_btns):
            self._machine.submit_answer(self._option_btns[index][1])


class _ResultPage(QWidget):
    """Score, summary text, and the review of wrong answers."""

    def __init__(self, machine: SessionStateMachine) -> None:
        super().__init__()
        self.setObjectName("page")
        self._machine = machine

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(24, 20, 24, 16)

        self._score = _label("", 30, _GREEN, bold=True)
        root.addWidget(self._score)
        self._summary = _label("", 13, _SUBTEXT)
        root.addWidget(self._summary)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setStyleSheet(f"QScrollArea {{ border:none; background:{_BASE}; }}")
        root.addWidget(self._scroll)

        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.again_btn = _styled_btn(
            "PLAY AGAIN", bg=_GREEN, hover=_GREEN_H, fg=_BASE, font_size=15, min_w=200,
        )
        self.again_btn.clicked.connect(machine.start)
        self.home_btn = _styled_btn("H O M E", min_w=160, font_size=13)
        self.home_btn.clicked.connect(machine.reset_game)
        hbox.addWidget(self.again_btn)
        hbox.addWidget(self.home_btn)
        root.addLayout(hbox)

    def sync(self, snap: SessionSnapshot) -> None:
        self._score.setText(f"Score  {snap.final_score or 0.0:.1f}")
        self._summary.setText(self._machine.summary_text())

        content = QWidget()
        content.setObjectName("page")
        vbox = QVBoxLayout(content)
        vbox.setSpacing(4)
        if not snap.incorrect_answers:
            vbox.addWidget(_label("No mistakes!", 14, _GREEN))
        for record in snap.incorrect_answers:
            row = QHBoxLayout()
            chip = QFrame()
            chip.setFixedSize(28, 20)
            chip.setStyleSheet(f"background:{record.question.color.hex}; border-radius:4px;")
            row.addWidget(chip)
            chosen = record.selected
            if isinstance(chosen, NameAnswer):
                desc = f"answered {chosen.name}"
            elif isinstance(chosen, SampleAnswer) and not chosen.sample.is_transparent:
                desc = f"picked {chosen.sample.hex}"
            else:
                desc = "skipped"
            text = QLabel(
                f"{record.question.correct_name}: {desc}"
                f"   ({record.elapsed_ms / 1000:.1f}s)"
            )
            text.setStyleSheet(f"color:{_SUBTEXT};")
            row.addWidget(text)
            row.addStretch()
            vbox.addLayout(row)
        vbox.addStretch()
        self._scroll.setWidget(content)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_PAGE_INDEX = {Screen.HOME: 0, Screen.GAME: 1, Screen.RESULT: 2}


class _MainWindow(QMainWindow):
    def __init__(self, machine: SessionStateMachine) -> None:
        super().__init__()
        self._machine = machine

        self.setWindowTitle("Color Vision Test")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(520, 660)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._home = _HomePage(machine)
        self._home.quit_btn.clicked.connect(self.close)
        self._game = _GamePage(machine)
        self._result = _ResultPage(machine)
        for page in (self._home, self._game, self._result):
            self._stack.addWidget(page)

        machine.subscribe(self._on_change)
        self._on_change(machine.state)

        # Runs due feedback tasks and refreshes the elapsed-time label.
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(_TICK_MS)

    def _on_change(self, snap: SessionSnapshot) -> None:
        page = {
            Screen.HOME: self._home,
            Screen.GAME: self._game,
            Screen.RESULT: self._result,
        }[snap.screen]
        page.sync(snap)
        self._stack.setCurrentIndex(_PAGE_INDEX[snap.screen])

    def _tick(self) -> None:
        self._machine.scheduler.run_pending()
        if self._machine.state.screen is Screen.GAME:
            self._game.tick()

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        screen = self._machine.state.screen

        if screen is Screen.HOME:
            if key == Qt.Key.Key_Return:
                self._machine.start()
            elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()

        elif screen is Screen.GAME:
            if Qt.Key.Key_1.value <= key <= Qt.Key.Key_9.value:
                self._game.pick(key - Qt.Key.Key_1.value)
            elif key in (Qt.Key.Key_S, Qt.Key.Key_Space):
                self._machine.skip_question()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._machine.reset_game()

        elif screen is Screen.RESULT:
            if key in (Qt.Key.Key_R, Qt.Key.Key_Return):
                self._machine.start()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._machine.reset_game()

        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    data_dir: Path = Path("data"),
    total_questions: int = 10,
    mode: GameMode | None = None,
    difficulty: Difficulty | None = None,
    seed: int | None = None,
) -> None:
    """Launch the PyQt6 GUI (opens directly to the home screen)."""
    machine = open_session(data_dir, total_questions, mode, difficulty, seed)
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(machine)
    window.show()
    qapp.exec()

"""Pygame GUI frontend — fully self-contained.

Includes the home screen with settings, the quiz screen with clickable
swatches and name buttons, and the result screen with the review list.
No terminal interaction required.
"""

from __future__ import annotations

from pathlib import Path

import pygame

from backend.engine.gameplay import SessionStateMachine
from backend.engine.sessionstate import Screen
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
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 520, 680
MARGIN = 20
OPTION_GAP = 10


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        if self.text:
            lbl = self.font.render(self.text, True, self.fg)
            surf.blit(
                lbl,
                (
                    self.rect.centerx - lbl.get_width() // 2,
                    self.rect.centery - lbl.get_height() // 2,
                ),
            )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _row(count: int, w: int, gap: int = 8) -> list[int]:
    """x positions for *count* items of width *w* centred in the window."""
    sx = _cx(count * w + (count - 1) * gap)
    return [sx + i * (w + gap) for i in range(count)]


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, machine: SessionStateMachine) -> None:
        self._machine = machine

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Color Vision Test")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 34, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._shown_question: Question | None = None
        self._option_btns: list[tuple[_Btn, Answer]] = []

        self._build_home_btns()
        self._build_game_btns()
        self._build_result_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_home_btns(self) -> None:
        self._mode_btns = {
            mode: _Btn((x, 200, 140, 42), mode.value, self._f_btn_sm)
            for mode, x in zip(GameMode, _row(len(GameMode), 140))
        }
        self._diff_btns = {
            diff: _Btn((x, 290, 140, 38), diff.value, self._f_btn_sm)
            for diff, x in zip(Difficulty, _row(len(Difficulty), 140))
        }
        self._count_btns = {
            n: _Btn((x, 376, 70, 38), str(n), self._f_btn_sm)
            for n, x in zip(QUESTION_COUNTS, _row(len(QUESTION_COUNTS), 70))
        }
        bw = 220
        self._start_btn = _Btn(
            (_cx(bw), 490, bw, 50), "S T A R T", self._f_btn,
            bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE,
        )
        self._clear_btn = _Btn(
            (_cx(bw), 554, bw, 40), "CLEAR HIGH SCORE", self._f_btn_sm,
        )
        self._quit_btn = _Btn(
            (_cx(bw), 606, bw, 40), "Q U I T", self._f_btn_sm,
            bg=COL_RED, hover=(255, 170, 185), fg=COL_BASE,
        )
        self._home_all: list[_Btn] = [
            *self._mode_btns.values(),
            *self._diff_btns.values(),
            *self._count_btns.values(),
            self._start_btn,
            self._clear_btn,
            self._quit_btn,
        ]

    def _build_game_btns(self) -> None:
        self._skip_btn = _Btn(
            (_cx(140), WIN_H - 70, 140, 40), "SKIP (S)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )

    def _build_result_btns(self) -> None:
        bw = 200
        xs = _row(2, bw, 12)
        self._again_btn = _Btn(
            (xs[0], WIN_H - 70, bw, 46), "PLAY AGAIN", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._home_btn = _Btn((xs[1], WIN_H - 70, bw, 46), "H O M E", self._f_btn_sm)

    def _layout_options(self, question: Question) -> None:
        """Rebuild the option buttons for a newly shown question."""
        self._option_btns = []
        if question.mode is GameMode.NORMAL or question.is_error:
            w, h, cols = 200, 48, 2
        elif question.mode is GameMode.REVERSE:
            w, h, cols = 200, 110, 2
        else:
            w, h, cols = 120, 90, 3
        top = 300 if question.mode is not GameMode.REVERSE else 150
        rows = [question.options[i : i + cols] for i in range(0, len(question.options), cols)]
        for r, row in enumerate(rows):
            for x, option in zip(_row(len(row), w, OPTION_GAP), row):
                rect = (x, top + r * (h + OPTION_GAP), w, h)
                if isinstance(option, SampleAnswer):
                    colour = option.sample.as_tuple
                    btn = _Btn(rect, "", self._f_btn, bg=colour, hover=colour)
                else:
                    btn = _Btn(rect, option.label, self._f_btn)
                self._option_btns.append((btn, option))

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_home(self) -> None:
        snap = self._machine.state
        self._surf.fill(COL_BASE)

        _blit_center(self._surf, self._f_big.render("COLOR  VISION  TEST", True, COL_TEXT), 60)
        _blit_center(
            self._surf,
            self._f_body.render(
                format_high_score(snap.high_score, snap.high_score_average_time),
                True, COL_YELLOW,
            ),
            120,
        )

        _blit_center(self._surf, self._f_body.render("Game mode", True, COL_SUBTEXT), 172)
        for mode, btn in self._mode_btns.items():
            btn.bg = COL_GREEN if mode is snap.mode else COL_SURFACE0
            btn.fg = COL_BASE if mode is snap.mode else COL_TEXT
            btn.draw(self._surf)

        label = "Difficulty" if snap.mode is GameMode.SHADE else "Difficulty (shade mode)"
        _blit_center(self._surf, self._f_body.render(label, True, COL_SUBTEXT), 262)
        for diff, btn in self._diff_btns.items():
            btn.bg = COL_GREEN if diff is snap.difficulty else COL_SURFACE0
            btn.fg = COL_BASE if diff is snap.difficulty else COL_TEXT
            btn.draw(self._surf)

        _blit_center(self._surf, self._f_body.render("Questions", True, COL_SUBTEXT), 348)
        for n, btn in self._count_btns.items():
            btn.bg = COL_GREEN if n == snap.total_questions else COL_SURFACE0
            btn.fg = COL_BASE if n == snap.total_questions else COL_TEXT
            btn.draw(self._surf)

        self._start_btn.draw(self._surf)
        self._clear_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_game(self) -> None:
        machine = self._machine
        snap = machine.state
        question = snap.current_question
        assert question is not None

        if question is not self._shown_question:
            self._shown_question = question
            self._layout_options(question)
            machine.mark_question_start()

        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_title.render(
                f"Question {snap.current_index + 1}/{snap.total_questions}", True, COL_TEXT
            ),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Correct: {snap.correct_count}    Time: {elapsed_seconds(machine):.1f}s",
                True, COL_PINK,
            ),
            44,
        )

        if question.is_error:
            _blit_center(self._surf, self._f_body.render(question.prompt, True, COL_RED), 120)
        elif question.mode is GameMode.REVERSE:
            _blit_center(self._surf, self._f_title.render(question.prompt, True, COL_TEXT), 100)
        else:
            prompt = question.prompt or "What color is this?"
            _blit_center(self._surf, self._f_body.render(prompt, True, COL_SUBTEXT), 80)
            pygame.draw.rect(
                self._surf, question.color.as_tuple,
                pygame.Rect(_cx(200), 110, 200, 170), border_radius=12,
            )

        for btn, option in self._option_btns:
            btn.draw(self._surf)
            if snap.feedback_active:
                if option == snap.correct_option:
                    pygame.draw.rect(self._surf, COL_GREEN, btn.rect, width=5, border_radius=8)
                elif option == snap.selected_answer:
                    pygame.draw.rect(self._surf, COL_RED, btn.rect, width=5, border_radius=8)

        if snap.feedback_active:
            text, col = ("Correct!", COL_GREEN) if snap.last_answer_correct else ("Wrong", COL_RED)
            _blit_center(self._surf, self._f_title.render(text, True, col), WIN_H - 110)
        self._skip_btn.draw(self._surf)

    def _draw_result(self) -> None:
        machine = self._machine
        snap = machine.state
        self._surf.fill(COL_BASE)

        _blit_center(
            self._surf,
            self._f_big.render(f"Score  {snap.final_score or 0.0:.1f}", True, COL_GREEN),
            30,
        )
        y = 90
        for line in machine.summary_text().splitlines():
            _blit_center(self._surf, self._f_body.render(line, True, COL_SUBTEXT), y)
            y += 22

        if snap.incorrect_answers:
            y += 10
            _blit_center(self._surf, self._f_btn_sm.render("Review", True, COL_BLUE), y)
            y += 26
            for record in snap.incorrect_answers:
                if y > WIN_H - 110:
                    break
                q = record.question
                pygame.draw.rect(
                    self._surf, q.color.as_tuple, pygame.Rect(MARGIN + 20, y, 28, 20),
                    border_radius=4,
                )
                chosen = record.selected
                if isinstance(chosen, SampleAnswer) and not chosen.sample.is_transparent:
                    pygame.draw.rect(
                        self._surf, chosen.sample.as_tuple,
                        pygame.Rect(MARGIN + 56, y, 28, 20), border_radius=4,
                    )
                    desc = f"{q.correct_name}: picked the wrong shade"
                elif isinstance(chosen, NameAnswer):
                    desc = f"{q.correct_name}: answered {chosen.name}"
                else:
                    desc = f"{q.correct_name}: skipped"
                self._surf.blit(
                    self._f_small.render(
                        f"{desc}   ({record.elapsed_ms / 1000:.1f}s)", True, COL_SUBTEXT
                    ),
                    (MARGIN + 96, y + 2),
                )
                y += 26

        self._again_btn.draw(self._surf)
        self._home_btn.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_home(self, ev: pygame.event.Event) -> bool:
        machine = self._machine
        if ev.type == pygame.MOUSEMOTION:
            for b in self._home_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for mode, b in self._mode_btns.items():
                if b.hit(ev.pos):
                    machine.set_game_mode(mode)
            for diff, b in self._diff_btns.items():
                if b.hit(ev.pos):
                    machine.set_difficulty(diff)
            for n, b in self._count_btns.items():
                if b.hit(ev.pos):
                    machine.set_total_questions(n)
            if self._start_btn.hit(ev.pos):
                machine.start()
            elif self._clear_btn.hit(ev.pos):
                machine.clear_high_score()
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                machine.start()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        machine = self._machine
        if ev.type == pygame.MOUSEMOTION:
            self._skip_btn.motion(ev.pos)
            for btn, _ in self._option_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._skip_btn.hit(ev.pos):
                machine.skip_question()
                return True
            for btn, option in self._option_btns:
                if btn.hit(ev.pos):
                    machine.submit_answer(option)
                    return True
        elif ev.type == pygame.KEYDOWN:
            digit = ev.key - pygame.K_1
            if 0 <= digit < len(self._option_btns):
                machine.submit_answer(self._option_btns[digit][1])
            elif ev.key in (pygame.K_s, pygame.K_SPACE):
                machine.skip_question()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                machine.reset_game()
        return True

    def _ev_result(self, ev: pygame.event.Event) -> bool:
        machine = self._machine
        if ev.type == pygame.MOUSEMOTION:
            self._again_btn.motion(ev.pos)
            self._home_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._again_btn.hit(ev.pos):
                machine.start()
            elif self._home_btn.hit(ev.pos):
                machine.reset_game()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                machine.start()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                machine.reset_game()
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            Screen.HOME: self._ev_home,
            Screen.GAME: self._ev_game,
            Screen.RESULT: self._ev_result,
        }
        _draw = {
            Screen.HOME: self._draw_home,
            Screen.GAME: self._draw_game,
            Screen.RESULT: self._draw_result,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch[self._machine.state.screen]
                if not handler(ev):
                    running = False
                    break

            self._machine.scheduler.run_pending()

            _draw[self._machine.state.screen]()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


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
    """Launch the Pygame GUI (opens directly to the home screen)."""
    machine = open_session(data_dir, total_questions, mode, difficulty, seed)
    app = PygameApp(machine)
    app.run_loop()

"""Single-keypress reader shared by the terminal frontends.

Keys are read without waiting for Enter and normalised to action
strings.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "s": "skip",
    " ": "skip",
    "r": "restart",
    "m": "mode",
    "d": "difficulty",
    "c": "clear",
    "+": "more",
    "=": "more",
    "-": "fewer",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "more",
    "D": "fewer",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Digits come back unchanged so callers can pick options by number.
    """
    action = _KEY_MAP.get(ch.lower())
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def option_index(key: str | None) -> int | None:
    """Return the zero-based option picked by a digit key, if any."""
    if key is not None and len(key) == 1 and key.isdigit() and key != "0":
        return int(key) - 1
    return None


# -- platform readers ----------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        if timeout is not None:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None

        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch != "\x1b":
            return _resolve(ch)

        # ESC [ A/B/C/D for arrows, anything else is a bare Escape.
        if not select.select([fd], [], [], 0.1)[0]:
            return "quit"
        if os.read(fd, 1).decode("utf-8", errors="ignore") != "[":
            return "quit"
        if not select.select([fd], [], [], 0.1)[0]:
            return ""
        return _ARROW_MAP.get(os.read(fd, 1).decode("utf-8", errors="ignore"), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    return _resolve(msvcrt.getwch())


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "1" .. "9"               — pick an option
        "skip"                   — s / Space
        "quit"                   — q / Ctrl-C / Escape
        "restart"                — r
        "mode", "difficulty"     — m / d (home screen)
        "more", "fewer"          — + / - / right / left (question count)
        "clear"                  — c (clear high score)
        "enter"                  — Enter / Return
        "<char>"                 — unmapped printable char
        ""                       — unrecognised key
    """
    key = _read(None)
    assert key is not None
    return key


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but return ``None`` after *timeout* seconds."""
    return _read(timeout)

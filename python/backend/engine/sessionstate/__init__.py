from backend.engine.sessionstate.state import (
    DEFAULT_TOTAL_QUESTIONS,
    Screen,
    SessionPhase,
    SessionSnapshot,
    SessionState,
)

__all__ = [
    "DEFAULT_TOTAL_QUESTIONS",
    "Screen",
    "SessionPhase",
    "SessionSnapshot",
    "SessionState",
]

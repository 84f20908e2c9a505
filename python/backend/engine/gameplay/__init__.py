from backend.engine.gameplay.game import SessionStateMachine, SessionSummary

__all__ = ["SessionStateMachine", "SessionSummary"]

from backend.engine.scoring.scoring import ScoringEngine, Verdict

__all__ = ["ScoringEngine", "Verdict"]

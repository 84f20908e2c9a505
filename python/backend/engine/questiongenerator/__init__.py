from backend.engine.questiongenerator.generator import QuestionGenerator

__all__ = ["QuestionGenerator"]

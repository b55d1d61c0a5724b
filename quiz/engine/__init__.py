"""Quiz Engines - Lógica de negócios."""

from .access_policy import QuizAccessPolicy
from .code_generator import QuizCodeGenerator
from .scoring_engine import QuizScoringEngine, ScoreResult

__all__ = ["QuizAccessPolicy", "QuizCodeGenerator", "QuizScoringEngine", "ScoreResult"]

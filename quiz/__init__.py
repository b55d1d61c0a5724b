"""Quiz Module - Quizzes autocorrigidos do portal de estudos.

Arquitetura:
- models/: Enums e Schemas Pydantic
- engine/: CodeGenerator, ScoringEngine, AccessPolicy
- storage/: QuizStore (SQLite via apsw)
- service.py: QuizService (ciclo de vida)
- router.py: FastAPI endpoints
- exceptions.py: Erros de domínio
"""

from .engine import QuizAccessPolicy, QuizCodeGenerator, QuizScoringEngine, ScoreResult
from .exceptions import (
    CodeGenerationError,
    DuplicateCodeError,
    NotFoundError,
    PermissionDeniedError,
    QuizError,
    StoreError,
    ValidationError,
)
from .models import (
    AnswerRecord,
    AnswerSubmission,
    AttemptStats,
    QuestionType,
    Quiz,
    QuizAttempt,
    QuizData,
    QuizQuestion,
)
from .service import QuizService
from .storage import QuizStore

__all__ = [
    # Models
    "QuestionType",
    "QuizQuestion",
    "QuizData",
    "Quiz",
    "AnswerSubmission",
    "AnswerRecord",
    "QuizAttempt",
    "AttemptStats",
    # Engines
    "QuizCodeGenerator",
    "QuizScoringEngine",
    "ScoreResult",
    "QuizAccessPolicy",
    # Storage / Service
    "QuizStore",
    "QuizService",
    # Errors
    "QuizError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    "StoreError",
    "DuplicateCodeError",
    "CodeGenerationError",
]

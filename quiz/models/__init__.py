"""Quiz Models - Enums e Schemas."""

from .enums import QuestionType
from .schemas import (
    AnswerRecord,
    AnswerSubmission,
    AnswerValue,
    AttemptStats,
    DeleteQuizRequest,
    MessageResponse,
    Quiz,
    QuizAttempt,
    QuizAttemptData,
    QuizData,
    QuizQuestion,
)

__all__ = [
    # Enums
    "QuestionType",
    # Quiz
    "QuizQuestion",
    "QuizData",
    "Quiz",
    # Tentativas
    "AnswerValue",
    "AnswerSubmission",
    "QuizAttemptData",
    "AnswerRecord",
    "QuizAttempt",
    "AttemptStats",
    # Auxiliares
    "DeleteQuizRequest",
    "MessageResponse",
]

"""Quiz Enums - Tipos de questão."""

from enum import Enum


class QuestionType(str, Enum):
    """Tipos de questão suportados."""

    MULTIPLE_CHOICE = "multipleChoice"  # >= 2 alternativas preenchidas
    TRUE_FALSE = "trueFalse"  # exatamente 2 alternativas (صح / خطأ)
    SHORT_ANSWER = "shortAnswer"  # sem alternativas

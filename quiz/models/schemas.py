"""Quiz Schemas - Modelos Pydantic para domínio e request/response.

Os campos são snake_case em Python e camelCase no JSON (``creatorName``,
``correctAnswer``, ``isCorrect``...), via ``alias_generator``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import QuestionType

# Resposta: texto único ou conjunto de textos (multi-seleção)
AnswerValue = str | list[str]


class CamelModel(BaseModel):
    """Base com aliases camelCase aceitando também os nomes Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# QUIZ
# =============================================================================


class QuizQuestion(CamelModel):
    """Questão de um quiz."""

    id: str | None = Field(None, description="ID da questão (gerado se ausente)")
    type: QuestionType = Field(..., description="multipleChoice, trueFalse ou shortAnswer")
    text: str = Field(..., description="Enunciado da questão")
    options: list[str] | None = Field(None, description="Alternativas (ausente em shortAnswer)")
    correct_answer: AnswerValue = Field(
        ..., description="Resposta correta; lista é comparada como conjunto"
    )


class QuizData(CamelModel):
    """Definição de quiz enviada pelo criador."""

    title: str = Field(..., description="Título (mínimo 3 caracteres)")
    subject: str = Field(..., description="Matéria do quiz")
    creator_name: str = Field(..., description="Nome do criador (usado na exclusão)")
    questions: list[QuizQuestion] = Field(..., description="Questões (mínimo 1)")


class Quiz(QuizData):
    """Quiz persistido."""

    id: int = Field(..., description="ID atribuído pelo store")
    code: str = Field(..., description="Código único de compartilhamento")
    created_at: datetime = Field(..., description="Data de criação (UTC)")


# =============================================================================
# TENTATIVAS
# =============================================================================


class AnswerSubmission(CamelModel):
    """Resposta enviada para uma questão."""

    question_id: str
    answer: AnswerValue


class QuizAttemptData(CamelModel):
    """Request de envio de tentativa."""

    quiz_id: int = Field(..., description="ID do quiz respondido")
    user_name: str = Field(..., description="Nome de quem respondeu")
    answers: list[AnswerSubmission] = Field(default_factory=list)


class AnswerRecord(CamelModel):
    """Resposta corrigida."""

    question_id: str
    answer: AnswerValue
    is_correct: bool


class QuizAttempt(CamelModel):
    """Tentativa corrigida e persistida."""

    id: int
    quiz_id: int
    user_name: str
    score: int = Field(..., ge=0, description="Respostas corretas")
    total_questions: int = Field(..., description="Questões do quiz no momento da correção")
    answers: list[AnswerRecord]
    completed_at: datetime


class AttemptStats(CamelModel):
    """Estatísticas de tentativas de um quiz."""

    quiz_id: int
    total_attempts: int = Field(..., description="Número de tentativas")
    average_score: float = Field(..., description="Percentual médio de acerto (0-100)")
    success_rate: int = Field(..., description="Percentual de tentativas aprovadas (0-100)")
    pass_threshold: float = Field(..., description="Aproveitamento mínimo para aprovação")


# =============================================================================
# REQUESTS / RESPONSES AUXILIARES
# =============================================================================


class DeleteQuizRequest(CamelModel):
    """Body do DELETE /quizzes/{id}."""

    creator_name: str | None = Field(None, description="Nome do criador ou 'admin'")


class MessageResponse(BaseModel):
    """Resposta simples com mensagem."""

    message: str

"""Quiz Service - Ciclo de vida de quizzes e tentativas.

Orquestra validação, geração de código, correção e autorização sobre o
``QuizStore``. Erros de domínio (``quiz.exceptions``) sobem até o handler
HTTP registrado em ``server.py``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from .engine.access_policy import QuizAccessPolicy
from .engine.code_generator import QuizCodeGenerator
from .engine.scoring_engine import QuizScoringEngine
from .exceptions import (
    CodeGenerationError,
    DuplicateCodeError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .models.enums import QuestionType
from .models.schemas import (
    AnswerSubmission,
    AnswerValue,
    AttemptStats,
    Quiz,
    QuizAttempt,
    QuizData,
    QuizQuestion,
)
from .storage.quiz_store import QuizStore

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
TRUE_FALSE_OPTIONS = 2
MIN_CHOICE_OPTIONS = 2


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _has_answer(value: AnswerValue) -> bool:
    if isinstance(value, list):
        return bool(value) and all(item.strip() for item in value)
    return bool(value.strip())


class QuizService:
    """Operações de quiz expostas pela API.

    Example:
        >>> service = QuizService(QuizStore(":memory:"))
        >>> quiz = service.create(data)
        >>> attempt = service.submit_attempt(quiz.id, "Sara", answers)
    """

    DEFAULT_MAX_CODE_RETRIES = 5

    def __init__(
        self,
        store: QuizStore,
        code_generator: QuizCodeGenerator | None = None,
        scoring: QuizScoringEngine | None = None,
        policy: QuizAccessPolicy | None = None,
        max_code_retries: int = DEFAULT_MAX_CODE_RETRIES,
    ):
        self.store = store
        self.code_generator = code_generator or QuizCodeGenerator()
        self.scoring = scoring or QuizScoringEngine()
        self.policy = policy or QuizAccessPolicy()
        self.max_code_retries = max(1, max_code_retries)

    # =========================================================================
    # VALIDAÇÃO
    # =========================================================================

    def _validate_question(self, index: int, question: QuizQuestion) -> QuizQuestion:
        label = f"Question {index + 1}"

        if not question.text.strip():
            raise ValidationError(f"{label}: text is required")
        if not _has_answer(question.correct_answer):
            raise ValidationError(f"{label}: correct answer is required")

        options = question.options
        if question.type == QuestionType.MULTIPLE_CHOICE:
            filled = [o for o in options or [] if o.strip()]
            if len(filled) < MIN_CHOICE_OPTIONS:
                raise ValidationError(
                    f"{label}: multiple choice needs at least {MIN_CHOICE_OPTIONS} options"
                )
        elif question.type == QuestionType.TRUE_FALSE:
            if options is None or len(options) != TRUE_FALSE_OPTIONS:
                raise ValidationError(
                    f"{label}: true/false needs exactly {TRUE_FALSE_OPTIONS} options"
                )
        elif question.type == QuestionType.SHORT_ANSWER:
            if options:
                raise ValidationError(f"{label}: short answer must not have options")
            options = None

        return question.model_copy(
            update={"id": question.id or str(uuid.uuid4()), "options": options}
        )

    def validate(self, data: QuizData) -> QuizData:
        """Valida a definição e retorna uma copia com IDs de questão preenchidos.

        Raises:
            ValidationError: Se algum campo obrigatório faltar ou uma questão
                não respeitar o formato do seu tipo
        """
        if len(data.title.strip()) < MIN_TITLE_LENGTH:
            raise ValidationError(f"Title must be at least {MIN_TITLE_LENGTH} characters")
        if not data.subject.strip():
            raise ValidationError("Subject is required")
        if not data.creator_name.strip():
            raise ValidationError("Creator name is required")
        if not data.questions:
            raise ValidationError("At least one question is required")

        questions = [self._validate_question(i, q) for i, q in enumerate(data.questions)]

        ids = [q.id for q in questions]
        if len(set(ids)) != len(ids):
            raise ValidationError("Question ids must be unique within a quiz")

        return data.model_copy(update={"questions": questions})

    # =========================================================================
    # QUIZZES
    # =========================================================================

    def create(self, data: QuizData) -> Quiz:
        """Valida e persiste um quiz com código único.

        Em caso de colisão de código, gera outro e tenta novamente até
        ``max_code_retries`` vezes.

        Raises:
            ValidationError: Definição inválida
            CodeGenerationError: Todas as tentativas colidiram
        """
        valid = self.validate(data)
        created_at = _now()

        for attempt in range(1, self.max_code_retries + 1):
            code = self.code_generator.generate()
            try:
                quiz = self.store.create_quiz(
                    code=code,
                    title=valid.title,
                    subject=valid.subject,
                    creator_name=valid.creator_name,
                    questions=valid.questions,
                    created_at=created_at,
                )
            except DuplicateCodeError:
                logger.warning(
                    f"Colisão de código {code} (tentativa {attempt}/{self.max_code_retries})"
                )
                continue

            logger.info(
                f"[Quiz {quiz.id}] Criado por {quiz.creator_name!r} "
                f"com código {quiz.code} ({len(quiz.questions)} questões)"
            )
            return quiz

        raise CodeGenerationError(
            message="Could not generate a unique quiz code, please retry",
            details={"attempts": self.max_code_retries},
        )

    def list_all(self) -> list[Quiz]:
        """Todos os quizzes, mais recentes primeiro."""
        return self.store.list_quizzes()

    def get_by_id(self, quiz_id: int) -> Quiz:
        quiz = self.store.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found", details={"quiz_id": quiz_id})
        return quiz

    def get_by_code(self, code: str) -> Quiz:
        quiz = self.store.get_quiz_by_code(code.strip())
        if quiz is None:
            raise NotFoundError("Quiz not found with this code", details={"code": code})
        return quiz

    def search(self, term: str | None) -> list[Quiz]:
        """Busca por código exato ou trecho de título, matéria ou criador.

        Termo vazio retorna lista vazia (não "todos os quizzes").
        """
        term = (term or "").strip()
        if not term:
            return []
        return self.store.search_quizzes(term)

    def delete(self, quiz_id: int, requester_name: str | None) -> None:
        """Exclui o quiz e suas tentativas se o solicitante for autorizado.

        As tentativas são removidas antes do quiz, em duas operações.

        Raises:
            ValidationError: Nome do solicitante ausente
            NotFoundError: Quiz inexistente
            PermissionDeniedError: Solicitante não e criador nem admin
        """
        if not requester_name or not requester_name.strip():
            raise ValidationError("Creator name is required")

        quiz = self.get_by_id(quiz_id)

        if not self.policy.can_delete(quiz, requester_name):
            logger.warning(f"[Quiz {quiz_id}] Exclusão recusada para {requester_name!r}")
            raise PermissionDeniedError(
                "not authorized to delete this quiz",
                details={"quiz_id": quiz_id, "requester": requester_name},
            )

        removed = self.store.delete_attempts(quiz_id)
        self.store.delete_quiz(quiz_id)
        logger.info(
            f"[Quiz {quiz_id}] Excluído por {requester_name!r} ({removed} tentativas removidas)"
        )

    # =========================================================================
    # TENTATIVAS
    # =========================================================================

    def submit_attempt(
        self, quiz_id: int, user_name: str, answers: Sequence[AnswerSubmission]
    ) -> QuizAttempt:
        """Corrige e registra uma tentativa.

        Cada chamada gera uma nova tentativa; não há bloqueio de repetição.
        """
        if not user_name or not user_name.strip():
            raise ValidationError("User name is required")

        quiz = self.get_by_id(quiz_id)
        result = self.scoring.score(quiz, answers)

        attempt = self.store.create_attempt(
            quiz_id=quiz.id,
            user_name=user_name,
            score=result.score,
            total_questions=result.total_questions,
            answers=result.graded_answers,
            completed_at=_now(),
        )
        logger.info(
            f"[Quiz {quiz_id}] Tentativa de {user_name!r}: "
            f"{attempt.score}/{attempt.total_questions}"
        )
        return attempt

    def list_attempts(self, quiz_id: int) -> list[QuizAttempt]:
        """Tentativas do quiz, mais recentes primeiro."""
        return self.store.list_attempts(quiz_id)

    def get_attempt(self, quiz_id: int, user_name: str | None) -> QuizAttempt | None:
        """Primeira tentativa do usuário no quiz, se houver."""
        if not user_name or not user_name.strip():
            raise ValidationError("Username is required")
        return self.store.get_user_attempt(quiz_id, user_name)

    def get_stats(self, quiz_id: int, requester_name: str | None) -> AttemptStats:
        """Estatísticas das tentativas, visíveis ao criador e ao admin."""
        if not requester_name or not requester_name.strip():
            raise ValidationError("Requester name is required")

        quiz = self.get_by_id(quiz_id)
        if not self.policy.can_view_analytics(quiz, requester_name):
            raise PermissionDeniedError(
                "not authorized to view this quiz analytics",
                details={"quiz_id": quiz_id, "requester": requester_name},
            )

        return self.scoring.summarize(quiz_id, self.store.list_attempts(quiz_id))

"""Quiz Router - Endpoints FastAPI."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

import app_state

from .models.schemas import (
    AttemptStats,
    DeleteQuizRequest,
    MessageResponse,
    Quiz,
    QuizAttempt,
    QuizAttemptData,
    QuizData,
)
from .service import QuizService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["Quiz"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_quiz_service() -> QuizService:
    """Dependency para obter QuizService configurado."""
    return app_state.get_quiz_service()


# =============================================================================
# QUIZZES
# =============================================================================


@router.get("", response_model=list[Quiz])
async def list_quizzes(service: QuizService = Depends(get_quiz_service)):
    """Lista todos os quizzes, mais recentes primeiro."""
    return service.list_all()


@router.get("/search", response_model=list[Quiz])
async def search_quizzes(
    term: str = Query("", description="Código exato ou trecho de título/matéria/criador"),
    service: QuizService = Depends(get_quiz_service),
):
    """Busca quizzes. Termo vazio retorna lista vazia."""
    return service.search(term)


@router.get("/code/{code}", response_model=Quiz)
async def get_quiz_by_code(code: str, service: QuizService = Depends(get_quiz_service)):
    """Busca quiz pelo código (sem diferenciar maiúsculas)."""
    return service.get_by_code(code)


@router.get("/{quiz_id}", response_model=Quiz)
async def get_quiz(quiz_id: int, service: QuizService = Depends(get_quiz_service)):
    return service.get_by_id(quiz_id)


@router.post("", response_model=Quiz, status_code=status.HTTP_201_CREATED)
async def create_quiz(data: QuizData, service: QuizService = Depends(get_quiz_service)):
    """Cria um quiz.

    - Valida título, matéria, criador e formato de cada questão
    - Gera IDs para questões sem ID
    - Atribui um código único de 6 caracteres
    """
    return service.create(data)


@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(
    quiz_id: int,
    request: DeleteQuizRequest | None = None,
    service: QuizService = Depends(get_quiz_service),
):
    """Exclui o quiz e suas tentativas (criador ou admin)."""
    service.delete(quiz_id, request.creator_name if request else None)
    return MessageResponse(message="Quiz deleted successfully")


# =============================================================================
# TENTATIVAS
# =============================================================================


@router.post("/attempts", response_model=QuizAttempt, status_code=status.HTTP_201_CREATED)
async def submit_attempt(data: QuizAttemptData, service: QuizService = Depends(get_quiz_service)):
    """Corrige e registra uma tentativa.

    - Respostas para questões inexistentes são ignoradas
    - O total considera todas as questões do quiz
    """
    return service.submit_attempt(data.quiz_id, data.user_name, data.answers)


@router.get("/{quiz_id}/attempts", response_model=list[QuizAttempt])
async def list_attempts(quiz_id: int, service: QuizService = Depends(get_quiz_service)):
    return service.list_attempts(quiz_id)


@router.get("/{quiz_id}/my-attempt", response_model=QuizAttempt | None)
async def get_my_attempt(
    quiz_id: int,
    user_name: str | None = Query(None, alias="userName"),
    service: QuizService = Depends(get_quiz_service),
):
    """Tentativa do usuário nesse quiz, ou null se ainda não respondeu."""
    return service.get_attempt(quiz_id, user_name)


@router.get("/{quiz_id}/stats", response_model=AttemptStats)
async def get_quiz_stats(
    quiz_id: int,
    requester_name: str | None = Query(None, alias="requesterName"),
    service: QuizService = Depends(get_quiz_service),
):
    """Estatísticas das tentativas (apenas criador ou admin)."""
    return service.get_stats(quiz_id, requester_name)

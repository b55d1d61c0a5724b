"""Core module - shared state and helper functions."""

from __future__ import annotations

import logging
from typing import Optional

from config import PortalConfig, get_config
from quiz.engine import QuizAccessPolicy, QuizCodeGenerator, QuizScoringEngine
from quiz.service import QuizService
from quiz.storage import QuizStore

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL INSTANCES
# =============================================================================

# Store compartilhado pelo processo (aberto sob demanda, fechado no shutdown)
store: Optional[QuizStore] = None
quiz_service: Optional[QuizService] = None


def build_service(quiz_store: QuizStore, config: PortalConfig) -> QuizService:
    """Monta o QuizService com os componentes configurados."""
    return QuizService(
        store=quiz_store,
        code_generator=QuizCodeGenerator(length=config.code_length),
        scoring=QuizScoringEngine(),
        policy=QuizAccessPolicy(admin_name=config.admin_name),
        max_code_retries=config.code_max_retries,
    )


def get_store() -> QuizStore:
    """Retorna o store global, abrindo o banco na primeira chamada."""
    global store
    if store is None:
        config = get_config()
        store = QuizStore(config.database_path)
        logger.info(f"Banco de quizzes aberto: {config.database_path}")
    return store


def get_quiz_service() -> QuizService:
    """Dependency FastAPI para obter o QuizService."""
    global quiz_service
    if quiz_service is None:
        quiz_service = build_service(get_store(), get_config())
    return quiz_service


def reset_state() -> None:
    """Fecha o store e descarta as instâncias globais."""
    global store, quiz_service
    if store is not None:
        store.close()
        logger.info("Banco de quizzes fechado")
    store = None
    quiz_service = None

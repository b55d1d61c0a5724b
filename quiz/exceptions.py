"""Quiz Exceptions - Taxonomia de erros do módulo de quiz.

Cada erro carrega uma mensagem legível, detalhes opcionais (para log) e o
status HTTP usado pelo handler registrado em ``server.py``.
"""

from __future__ import annotations

from typing import Any


class QuizError(Exception):
    """Erro base do módulo de quiz."""

    status_code = 500
    retryable = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Corpo de resposta exposto ao cliente."""
        return {"message": self.message}


class ValidationError(QuizError):
    """Campos ausentes ou com formato inválido."""

    status_code = 400


class NotFoundError(QuizError):
    """Quiz ou tentativa inexistente."""

    status_code = 404


class PermissionDeniedError(QuizError):
    """Política de acesso recusou a operação."""

    status_code = 403


class StoreError(QuizError):
    """Falha de persistência. A mensagem nunca expoe detalhes internos."""

    status_code = 500


class DuplicateCodeError(StoreError):
    """Outro quiz já usa o mesmo código (restrição UNIQUE)."""

    status_code = 409
    retryable = True


class CodeGenerationError(StoreError):
    """Tentativas de gerar um código único esgotadas."""

    status_code = 503
    retryable = True

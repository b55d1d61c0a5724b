"""Quiz Store - Persistência de quizzes e tentativas em SQLite (apsw)."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Sequence

import apsw

from ..exceptions import DuplicateCodeError, StoreError
from ..models.schemas import AnswerRecord, Quiz, QuizAttempt, QuizQuestion

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS quizzes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    code TEXT NOT NULL UNIQUE COLLATE NOCASE,
    title TEXT NOT NULL,
    subject TEXT NOT NULL,
    creator_name TEXT NOT NULL,
    created_at TEXT NOT NULL,
    questions TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS quiz_attempts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    quiz_id INTEGER NOT NULL,
    user_name TEXT NOT NULL,
    score INTEGER NOT NULL,
    total_questions INTEGER NOT NULL,
    answers TEXT NOT NULL,
    completed_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_quiz_attempts_quiz_user
    ON quiz_attempts (quiz_id, user_name);
"""

# Faixa do INTEGER do SQLite; IDs fora dela não existem no banco
MAX_ROW_ID = 2**63 - 1

QUIZ_COLUMNS = "id, code, title, subject, creator_name, created_at, questions"
ATTEMPT_COLUMNS = "id, quiz_id, user_name, score, total_questions, answers, completed_at"


def _fits_row_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


def _casefold(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def _timestamp(value: datetime) -> str:
    # Microsegundos fixos para que a ordenação textual siga a cronológica
    return value.isoformat(timespec="microseconds")


class QuizStore:
    """Repositório de quizzes e tentativas sobre SQLite via apsw.

    Tabelas:
        - quizzes: definição do quiz, questões serializadas em JSON
        - quiz_attempts: tentativas corrigidas, respostas em JSON

    O código do quiz é UNIQUE com COLLATE NOCASE, então a busca por código
    ignora maiúsculas e um código repetido gera ``DuplicateCodeError``.

    Example:
        >>> store = QuizStore(":memory:")
        >>> quiz = store.create_quiz(data, code="AB12CD", created_at=now)
        >>> store.get_quiz_by_code("ab12cd").id == quiz.id
        True
    """

    def __init__(self, db_path: str | Path = MEMORY_DB):
        """Abre (ou cria) o banco e garante o schema.

        Args:
            db_path: Caminho do arquivo SQLite ou ``:memory:``
        """
        self.db_path = str(db_path)
        if self.db_path != MEMORY_DB:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        with self._translate_errors("abrir banco de quizzes"):
            self.conn = apsw.Connection(self.db_path)
            self.conn.createscalarfunction("casefold", _casefold, 1, deterministic=True)
            with self.conn:
                self.conn.execute(SCHEMA)

        logger.debug(f"QuizStore aberto: {self.db_path}")

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except apsw.Error as e:
            logger.error(f"Erro no store ao {action}: {e}")
            raise StoreError(
                message="Storage operation failed",
                details={"action": action, "error": str(e)},
            ) from e

    def close(self) -> None:
        """Fecha a conexão."""
        self.conn.close()

    def ping(self) -> bool:
        """Verifica se o banco responde."""
        try:
            self.conn.execute("SELECT 1").fetchone()
            return True
        except apsw.Error:
            return False

    # =========================================================================
    # QUIZZES
    # =========================================================================

    def _row_to_quiz(self, row: Sequence[Any]) -> Quiz:
        quiz_id, code, title, subject, creator_name, created_at, questions = row
        return Quiz(
            id=quiz_id,
            code=code,
            title=title,
            subject=subject,
            creator_name=creator_name,
            created_at=datetime.fromisoformat(created_at),
            questions=[QuizQuestion.model_validate(q) for q in json.loads(questions)],
        )

    def create_quiz(
        self,
        *,
        code: str,
        title: str,
        subject: str,
        creator_name: str,
        questions: Sequence[QuizQuestion],
        created_at: datetime,
    ) -> Quiz:
        """Insere um quiz.

        Raises:
            DuplicateCodeError: Se o código já estiver em uso
            StoreError: Em qualquer outra falha do banco
        """
        payload = json.dumps(
            [q.model_dump(mode="json") for q in questions], ensure_ascii=False
        )

        try:
            with self._translate_errors("criar quiz"):
                with self.conn:
                    try:
                        self.conn.execute(
                            "INSERT INTO quizzes (code, title, subject, creator_name, "
                            "created_at, questions) VALUES (?, ?, ?, ?, ?, ?)",
                            (code, title, subject, creator_name, _timestamp(created_at), payload),
                        )
                    except apsw.ConstraintError as e:
                        raise DuplicateCodeError(
                            message=f"Quiz code already in use: {code}",
                            details={"code": code, "error": str(e)},
                        ) from e
                    quiz_id = self.conn.last_insert_rowid()
        except DuplicateCodeError:
            logger.warning(f"Código de quiz repetido: {code}")
            raise

        logger.debug(f"Quiz salvo: {quiz_id} ({code})")
        return Quiz(
            id=quiz_id,
            code=code,
            title=title,
            subject=subject,
            creator_name=creator_name,
            created_at=created_at,
            questions=list(questions),
        )

    def get_quiz(self, quiz_id: int) -> Quiz | None:
        """Busca quiz por ID."""
        if not _fits_row_id(quiz_id):
            return None
        with self._translate_errors("buscar quiz"):
            row = self.conn.execute(
                f"SELECT {QUIZ_COLUMNS} FROM quizzes WHERE id = ?", (quiz_id,)
            ).fetchone()
        return self._row_to_quiz(row) if row else None

    def get_quiz_by_code(self, code: str) -> Quiz | None:
        """Busca quiz por código, ignorando maiúsculas/minúsculas."""
        with self._translate_errors("buscar quiz por código"):
            row = self.conn.execute(
                f"SELECT {QUIZ_COLUMNS} FROM quizzes WHERE code = ?", (code,)
            ).fetchone()
        return self._row_to_quiz(row) if row else None

    def list_quizzes(self) -> list[Quiz]:
        """Lista todos os quizzes, mais recentes primeiro."""
        with self._translate_errors("listar quizzes"):
            rows = self.conn.execute(
                f"SELECT {QUIZ_COLUMNS} FROM quizzes ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_quiz(row) for row in rows]

    def search_quizzes(self, term: str) -> list[Quiz]:
        """Busca por código exato ou trecho de título/matéria/criador.

        Comparações usam ``str.casefold`` (registrada como função SQL), que
        cobre letras fora do ASCII.
        """
        needle = term.casefold()
        with self._translate_errors("buscar quizzes"):
            rows = self.conn.execute(
                f"SELECT {QUIZ_COLUMNS} FROM quizzes "
                "WHERE casefold(code) = :term "
                "OR instr(casefold(title), :term) > 0 "
                "OR instr(casefold(subject), :term) > 0 "
                "OR instr(casefold(creator_name), :term) > 0 "
                "ORDER BY created_at DESC, id DESC",
                {"term": needle},
            ).fetchall()
        return [self._row_to_quiz(row) for row in rows]

    def delete_quiz(self, quiz_id: int) -> bool:
        """Remove o quiz. Retorna False se não existia."""
        if not _fits_row_id(quiz_id):
            return False
        with self._translate_errors("excluir quiz"):
            self.conn.execute("DELETE FROM quizzes WHERE id = ?", (quiz_id,))
            deleted = self.conn.changes() > 0
        logger.info(f"Quiz excluído do store: {quiz_id}")
        return deleted

    # =========================================================================
    # TENTATIVAS
    # =========================================================================

    def _row_to_attempt(self, row: Sequence[Any]) -> QuizAttempt:
        attempt_id, quiz_id, user_name, score, total, answers, completed_at = row
        return QuizAttempt(
            id=attempt_id,
            quiz_id=quiz_id,
            user_name=user_name,
            score=score,
            total_questions=total,
            answers=[AnswerRecord.model_validate(a) for a in json.loads(answers)],
            completed_at=datetime.fromisoformat(completed_at),
        )

    def create_attempt(
        self,
        *,
        quiz_id: int,
        user_name: str,
        score: int,
        total_questions: int,
        answers: Sequence[AnswerRecord],
        completed_at: datetime,
    ) -> QuizAttempt:
        """Insere uma tentativa corrigida."""
        payload = json.dumps([a.model_dump(mode="json") for a in answers], ensure_ascii=False)

        with self._translate_errors("salvar tentativa"):
            with self.conn:
                self.conn.execute(
                    "INSERT INTO quiz_attempts (quiz_id, user_name, score, "
                    "total_questions, answers, completed_at) VALUES (?, ?, ?, ?, ?, ?)",
                    (quiz_id, user_name, score, total_questions, payload, _timestamp(completed_at)),
                )
                attempt_id = self.conn.last_insert_rowid()

        return QuizAttempt(
            id=attempt_id,
            quiz_id=quiz_id,
            user_name=user_name,
            score=score,
            total_questions=total_questions,
            answers=list(answers),
            completed_at=completed_at,
        )

    def list_attempts(self, quiz_id: int) -> list[QuizAttempt]:
        """Lista tentativas de um quiz, mais recentes primeiro."""
        if not _fits_row_id(quiz_id):
            return []
        with self._translate_errors("listar tentativas"):
            rows = self.conn.execute(
                f"SELECT {ATTEMPT_COLUMNS} FROM quiz_attempts WHERE quiz_id = ? "
                "ORDER BY completed_at DESC, id DESC",
                (quiz_id,),
            ).fetchall()
        return [self._row_to_attempt(row) for row in rows]

    def get_user_attempt(self, quiz_id: int, user_name: str) -> QuizAttempt | None:
        """Primeira tentativa registrada do usuário nesse quiz."""
        if not _fits_row_id(quiz_id):
            return None
        with self._translate_errors("buscar tentativa"):
            row = self.conn.execute(
                f"SELECT {ATTEMPT_COLUMNS} FROM quiz_attempts "
                "WHERE quiz_id = ? AND user_name = ? ORDER BY id ASC LIMIT 1",
                (quiz_id, user_name),
            ).fetchone()
        return self._row_to_attempt(row) if row else None

    def delete_attempts(self, quiz_id: int) -> int:
        """Remove todas as tentativas de um quiz. Retorna quantas removeu."""
        if not _fits_row_id(quiz_id):
            return 0
        with self._translate_errors("excluir tentativas"):
            self.conn.execute("DELETE FROM quiz_attempts WHERE quiz_id = ?", (quiz_id,))
            return self.conn.changes()

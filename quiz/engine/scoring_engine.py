"""Quiz Scoring Engine - Correção de tentativas e estatísticas."""

import math
from dataclasses import dataclass, field
from typing import Sequence

from ..models.schemas import (
    AnswerRecord,
    AnswerSubmission,
    AnswerValue,
    AttemptStats,
    Quiz,
    QuizAttempt,
    QuizQuestion,
)


@dataclass
class ScoreResult:
    """Resultado da correção de uma tentativa.

    Attributes:
        score: Número de respostas corretas
        total_questions: Número de questões do quiz (denominador)
        graded_answers: Respostas reconhecidas, na ordem de envio
    """

    score: int
    total_questions: int
    graded_answers: list[AnswerRecord] = field(default_factory=list)


class QuizScoringEngine:
    """Motor de correção para quizzes.

    Regras de correção:
        - Resposta correta em lista: a resposta enviada também deve ser uma
          lista, comparada como conjunto (ordem ignorada)
        - Resposta correta em texto: igualdade exata com o texto enviado
        - Resposta para questão inexistente: ignorada (não pontua e não
          aparece no resultado)
        - Respostas repetidas para a mesma questão: cada uma é corrigida e
          registrada

    O denominador é sempre o total de questões do quiz, então questões
    puladas contam como erradas.

    Example:
        >>> engine = QuizScoringEngine()
        >>> result = engine.score(quiz, answers)
        >>> print(f"{result.score}/{result.total_questions}")
    """

    # Aproveitamento mínimo para uma tentativa contar como aprovada
    PASS_THRESHOLD = 0.5

    def is_correct(self, question: QuizQuestion, answer: AnswerValue) -> bool:
        """Verifica se a resposta enviada está correta."""
        expected = question.correct_answer

        if isinstance(expected, list):
            if not isinstance(answer, list):
                return False
            return sorted(answer) == sorted(expected)

        return isinstance(answer, str) and answer == expected

    def score(self, quiz: Quiz, answers: Sequence[AnswerSubmission]) -> ScoreResult:
        """Corrige as respostas de uma tentativa.

        Args:
            quiz: Quiz respondido
            answers: Respostas enviadas (questionId + answer)

        Returns:
            ScoreResult com pontuação, total e respostas corrigidas
        """
        questions = {q.id: q for q in quiz.questions}
        graded: list[AnswerRecord] = []

        for submission in answers:
            question = questions.get(submission.question_id)
            if question is None:
                continue

            graded.append(
                AnswerRecord(
                    question_id=submission.question_id,
                    answer=submission.answer,
                    is_correct=self.is_correct(question, submission.answer),
                )
            )

        return ScoreResult(
            score=sum(1 for record in graded if record.is_correct),
            total_questions=len(quiz.questions),
            graded_answers=graded,
        )

    def summarize(self, quiz_id: int, attempts: Sequence[QuizAttempt]) -> AttemptStats:
        """Calcula estatísticas agregadas das tentativas de um quiz.

        Args:
            quiz_id: ID do quiz
            attempts: Tentativas registradas

        Returns:
            AttemptStats com média de acerto e taxa de aprovação
        """
        total_attempts = len(attempts)
        total_score = sum(a.score for a in attempts)
        total_questions = sum(a.total_questions for a in attempts)

        average = (total_score / total_questions * 100) if total_questions > 0 else 0.0

        passed = sum(
            1
            for a in attempts
            if a.total_questions > 0 and a.score / a.total_questions >= self.PASS_THRESHOLD
        )
        success_rate = (passed / total_attempts * 100) if total_attempts > 0 else 0.0

        return AttemptStats(
            quiz_id=quiz_id,
            total_attempts=total_attempts,
            average_score=round(average, 1),
            # Arredondamento "half up" (50.5 -> 51)
            success_rate=math.floor(success_rate + 0.5),
            pass_threshold=self.PASS_THRESHOLD,
        )

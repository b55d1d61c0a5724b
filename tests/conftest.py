# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Store em memória, service, clientes FastAPI e quizzes de exemplo
# =============================================================================

from datetime import datetime, timezone

import pytest


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client():
    """Cliente de teste FastAPI."""
    from fastapi.testclient import TestClient

    from server import app

    return TestClient(app)


@pytest.fixture
def async_client():
    """Cliente assíncrono para testes async."""
    from httpx import ASGITransport, AsyncClient

    from server import app

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


# =============================================================================
# FIXTURES DE STORE / SERVICE
# =============================================================================


class SequenceCodeGenerator:
    """Gerador determinístico: devolve os códigos na ordem informada."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def sequence_codes():
    """Fábrica de geradores de código determinísticos."""
    return SequenceCodeGenerator


@pytest.fixture
def quiz_store():
    """QuizStore em memória."""
    from quiz.storage.quiz_store import QuizStore

    store = QuizStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def quiz_service(quiz_store):
    """QuizService sobre o store em memória."""
    from quiz.service import QuizService

    return QuizService(quiz_store)


# =============================================================================
# FIXTURES DE DADOS DE TESTE
# =============================================================================


@pytest.fixture
def sample_questions():
    """Questões cobrindo os três tipos e uma multi-seleção."""
    from quiz.models.schemas import QuizQuestion

    return [
        QuizQuestion(
            id="q1",
            type="multipleChoice",
            text="Qual é o símbolo químico do carbono?",
            options=["C", "Ca", "Co", "Cu"],
            correct_answer="C",
        ),
        QuizQuestion(
            id="q2",
            type="trueFalse",
            text="A água ferve a 100 graus ao nível do mar.",
            options=["صح", "خطأ"],
            correct_answer="صح",
        ),
        QuizQuestion(
            id="q3",
            type="multipleChoice",
            text="Quais destes são gases nobres?",
            options=["He", "Ne", "O", "N"],
            correct_answer=["He", "Ne"],
        ),
        QuizQuestion(
            id="q4",
            type="shortAnswer",
            text="Qual é a fórmula da água?",
            correct_answer="H2O",
        ),
    ]


@pytest.fixture
def sample_quiz_data(sample_questions):
    """Definição de quiz válida."""
    from quiz.models.schemas import QuizData

    return QuizData(
        title="Química - Revisão do Capítulo 1",
        subject="chemistry",
        creator_name="Sara",
        questions=sample_questions,
    )


@pytest.fixture
def sample_quiz(sample_questions):
    """Quiz já persistido (sem passar pelo store)."""
    from quiz.models.schemas import Quiz

    return Quiz(
        id=1,
        code="AB12CD",
        title="Química - Revisão do Capítulo 1",
        subject="chemistry",
        creator_name="Sara",
        created_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
        questions=sample_questions,
    )


@pytest.fixture
def sample_quiz_payload():
    """Body JSON (camelCase) para POST /quizzes."""
    return {
        "title": "اختبار الفيزياء",
        "subject": "physics",
        "creatorName": "Sara",
        "questions": [
            {
                "type": "trueFalse",
                "text": "الضوء أسرع من الصوت",
                "options": ["صح", "خطأ"],
                "correctAnswer": "صح",
            },
            {
                "id": "unit",
                "type": "multipleChoice",
                "text": "ما وحدة قياس القوة؟",
                "options": ["نيوتن", "جول", "واط", ""],
                "correctAnswer": "نيوتن",
            },
        ],
    }


@pytest.fixture
def true_false_quiz_data():
    """Quiz com uma única questão verdadeiro/falso."""
    from quiz.models.schemas import QuizData, QuizQuestion

    return QuizData(
        title="اختبار قصير",
        subject="arabic",
        creator_name="Sara",
        questions=[
            QuizQuestion(
                type="trueFalse",
                text="اللغة العربية تكتب من اليمين إلى اليسار",
                options=["صح", "خطأ"],
                correct_answer="صح",
            )
        ],
    )


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificação em testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog

# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, fixtures e dados de exemplo
# =============================================================================

import os
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "ANTHROPIC_API_KEY": "test-key-123",
        "QUIZ_STORAGE_BACKEND": "memory",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_env():
    """Limpa variaveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


# =============================================================================
# FIXTURES DE TEMPO
# =============================================================================


@pytest.fixture
def frozen_time() -> datetime:
    """Instante fixo usado como inicio do relogio."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(frozen_time):
    """Relogio deterministico."""
    from coursequiz.core.clock import FixedClock

    return FixedClock(frozen_time)


# =============================================================================
# FIXTURES DE DADOS DE TESTE
# =============================================================================


@pytest.fixture
def sample_questions():
    """Quatro questoes de 2 pontos (total 8), uma de cada formato."""
    from coursequiz.models.enums import QuestionType
    from coursequiz.models.schemas import Question

    return [
        Question(
            id="q1",
            question_text="What is the capital of France?",
            question_type=QuestionType.MULTIPLE_CHOICE,
            options=["Paris", "London", "Berlin", "Madrid"],
            correct_answer="Paris",
            explanation="Paris has been the capital of France since 987.",
            points=2,
            topic="Geography",
        ),
        Question(
            id="q2",
            question_text="Water boils at 100 degrees Celsius at sea level.",
            question_type=QuestionType.TRUE_FALSE,
            correct_answer="True",
            explanation="At standard pressure water boils at 100 degrees Celsius.",
            points=2,
            topic="Physics",
        ),
        Question(
            id="q3",
            question_text="Which process lets plants turn light into energy?",
            question_type=QuestionType.SHORT_ANSWER,
            correct_answer="Photosynthesis",
            explanation="Photosynthesis converts light energy into chemical energy.",
            points=2,
            topic="Biology",
        ),
        Question(
            id="q4",
            question_text="Name the two primary colors of light besides green.",
            question_type=QuestionType.SHORT_ANSWER,
            correct_answer=["Red", "Blue"],
            explanation="The additive primaries are red, green and blue.",
            points=2,
            topic="Physics",
        ),
    ]


@pytest.fixture
def sample_quiz_create(sample_questions):
    """Payload de criacao de quiz."""
    from coursequiz.models.enums import QuizDifficulty
    from coursequiz.models.schemas import QuizCreate

    return QuizCreate(
        course_id="course-1",
        title="Science Basics",
        description="Mixed science review",
        questions=sample_questions,
        created_by="teacher-1",
        difficulty=QuizDifficulty.MEDIUM,
    )


@pytest.fixture
def empty_quiz_create():
    """Payload de quiz sem questoes."""
    from coursequiz.models.enums import QuizDifficulty
    from coursequiz.models.schemas import QuizCreate

    return QuizCreate(
        course_id="course-1",
        title="Empty Quiz",
        created_by="teacher-1",
        difficulty=QuizDifficulty.EASY,
    )


@pytest.fixture
def candidate_factory():
    """Factory de candidatas validas (dicts no formato do modelo)."""

    def _make(index: int, **overrides: Any) -> dict[str, Any]:
        data = {
            "id": f"q{index}",
            "question_text": f"Which statement best describes concept number {index}?",
            "question_type": "multiple-choice",
            "options": ["Option A", "Option B", "Option C", "Option D"],
            "correct_answer": "Option A",
            "explanation": f"Concept {index} is described in section {index} of the course.",
            "points": 3,
            "topic": "Core Concepts",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def generate_request():
    """Request de geracao com 5 questoes."""
    from coursequiz.models.schemas import GenerateQuizRequest

    return GenerateQuizRequest(
        course_content="Variables store values. Functions group reusable logic.",
        learning_objectives="Variables and types. Reusable functions.",
        number_of_questions=5,
    )


# =============================================================================
# FIXTURES DO MODELO (ADAPTER)
# =============================================================================


class FakeAdapter:
    """Adapter em memoria que devolve candidatas pre-definidas."""

    def __init__(self, candidates: list[dict] | None = None, error: Exception | None = None):
        self.candidates = candidates or []
        self.error = error
        self.requests = []

    async def generate(self, request):
        from coursequiz.models.schemas import CandidateQuestion

        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return [CandidateQuestion.model_validate(c) for c in self.candidates]


@pytest.fixture
def fake_adapter_cls():
    """Classe do adapter fake (para instanciar com candidatas)."""
    return FakeAdapter


@pytest.fixture
def mock_claude_response():
    """Mensagem mock do Claude com o JSON das questoes."""
    from dataclasses import dataclass, field

    @dataclass
    class MockTextBlock:
        text: str

    @dataclass
    class MockMessage:
        content: list = field(default_factory=list)

    def _make(text: str) -> MockMessage:
        return MockMessage(content=[MockTextBlock(text=text)])

    return _make


# =============================================================================
# FIXTURES DE REPOSITORIO
# =============================================================================


@pytest.fixture
def quiz_repository(fixed_clock):
    """Repositorio de quizzes em memoria com relogio fixo."""
    from coursequiz.storage.repository import InMemoryQuizRepository

    return InMemoryQuizRepository(clock=fixed_clock)


@pytest.fixture
def attempt_repository():
    """Repositorio de tentativas em memoria."""
    from coursequiz.storage.repository import InMemoryAttemptRepository

    return InMemoryAttemptRepository()


@pytest.fixture
def lifecycle(quiz_repository, attempt_repository, fixed_clock):
    """AttemptLifecycle sobre repositorios em memoria."""
    from coursequiz.engine.attempt_lifecycle import AttemptLifecycle

    return AttemptLifecycle(quiz_repository, attempt_repository, clock=fixed_clock)


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock completo do AgentFS."""
    mock = MagicMock()

    # KV Store
    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    # Lifecycle
    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS com KV em dicionario."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def app_factory(fixed_clock):
    """Factory de apps isoladas (repositorios novos a cada chamada)."""
    from coursequiz.config import QuizConfig
    from server import create_app

    def _make(adapter=None, **config_overrides):
        config = QuizConfig(log_level="ERROR", **config_overrides)
        return create_app(config=config, adapter=adapter or FakeAdapter(), clock=fixed_clock)

    return _make


@pytest.fixture
def client(app_factory):
    """Cliente de teste FastAPI."""
    from fastapi.testclient import TestClient

    return TestClient(app_factory())

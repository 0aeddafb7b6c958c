"""Course Quiz - Geracao de quizzes com IA e motor de avaliacao.

Arquitetura:
- models/: Enums, Schemas Pydantic, resultados
- engine/: TopicExtractor, GenerationOrchestrator, QuestionValidator,
  ScoringEngine, StatisticsEngine, AttemptLifecycle
- llm/: ModelPromptAdapter, ClaudeQuizAdapter, LLMClientFactory
- storage/: Repositorios (memoria e AgentFS)
- prompts/: Templates de prompts
- core/: Erros, logging, relogio
- router.py: FastAPI endpoints
"""

from .config import QuizConfig
from .engine import (
    AttemptLifecycle,
    GenerationOrchestrator,
    QuestionValidator,
    ScoringEngine,
    StatisticsEngine,
    TopicExtractor,
)
from .llm import ClaudeQuizAdapter, LLMClientFactory, ModelPromptAdapter
from .models import (
    Answer,
    Attempt,
    AttemptState,
    AttemptStatus,
    GenerationResult,
    PerformanceBand,
    Question,
    QuestionType,
    Quiz,
    QuizCreate,
    QuizDifficulty,
)
from .storage import (
    AgentFSAttemptRepository,
    AgentFSQuizRepository,
    InMemoryAttemptRepository,
    InMemoryQuizRepository,
)

__all__ = [
    # Config
    "QuizConfig",
    # Models
    "QuestionType",
    "QuizDifficulty",
    "AttemptStatus",
    "AttemptState",
    "PerformanceBand",
    "Question",
    "QuizCreate",
    "Quiz",
    "Answer",
    "Attempt",
    "GenerationResult",
    # Engines
    "TopicExtractor",
    "QuestionValidator",
    "GenerationOrchestrator",
    "ScoringEngine",
    "StatisticsEngine",
    "AttemptLifecycle",
    # LLM
    "ModelPromptAdapter",
    "ClaudeQuizAdapter",
    "LLMClientFactory",
    # Storage
    "InMemoryQuizRepository",
    "InMemoryAttemptRepository",
    "AgentFSQuizRepository",
    "AgentFSAttemptRepository",
]

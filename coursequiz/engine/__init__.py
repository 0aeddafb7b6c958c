"""Quiz Engines - Logica de negocios."""

from .attempt_lifecycle import AttemptLifecycle
from .generation_orchestrator import GenerationOrchestrator
from .question_validator import QuestionValidator
from .scoring_engine import ScoringEngine
from .statistics_engine import StatisticsEngine
from .topic_extractor import TopicExtractor

__all__ = [
    "TopicExtractor",
    "QuestionValidator",
    "GenerationOrchestrator",
    "ScoringEngine",
    "StatisticsEngine",
    "AttemptLifecycle",
]

"""Quiz Models - Enums, Schemas e Resultados."""

from .enums import AttemptState, AttemptStatus, PerformanceBand, QuestionType, QuizDifficulty
from .results import (
    PARTIAL_THRESHOLD,
    GenerationResult,
    RejectedCandidate,
    ScoreResult,
    ValidationResult,
)
from .schemas import (
    Answer,
    Attempt,
    AttemptCreate,
    AttemptStateResponse,
    CandidateQuestion,
    GenerateQuizRequest,
    GenerateQuizResponse,
    ModelGenerationRequest,
    Question,
    QuestionStatistics,
    Quiz,
    QuizCreate,
    QuizStatistics,
    StartAttemptRequest,
    SubmitAttemptRequest,
    unique_topics,
)

__all__ = [
    # Enums
    "QuestionType",
    "QuizDifficulty",
    "AttemptStatus",
    "AttemptState",
    "PerformanceBand",
    # Schemas
    "Question",
    "QuizCreate",
    "Quiz",
    "Answer",
    "AttemptCreate",
    "Attempt",
    "GenerateQuizRequest",
    "GenerateQuizResponse",
    "ModelGenerationRequest",
    "CandidateQuestion",
    "StartAttemptRequest",
    "SubmitAttemptRequest",
    "AttemptStateResponse",
    "QuestionStatistics",
    "QuizStatistics",
    "unique_topics",
    # Results
    "PARTIAL_THRESHOLD",
    "ValidationResult",
    "RejectedCandidate",
    "GenerationResult",
    "ScoreResult",
]

"""Quiz Prompts - Templates e constantes de geracao."""

from .templates import (
    DIFFICULTY_GUIDANCE,
    FALLBACK_TOPICS,
    POINTS_BY_DIFFICULTY,
    QUESTION_TYPE_MIX,
    QUIZ_GENERATION_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    build_generation_prompt,
    question_type_counts,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "QUIZ_GENERATION_PROMPT",
    "QUESTION_TYPE_MIX",
    "POINTS_BY_DIFFICULTY",
    "DIFFICULTY_GUIDANCE",
    "FALLBACK_TOPICS",
    "build_generation_prompt",
    "question_type_counts",
]

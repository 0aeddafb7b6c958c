"""Core - Erros, logging e relogio compartilhados."""

from .clock import Clock, FixedClock, utc_now
from .exceptions import (
    AttemptAlreadyCompletedError,
    AttemptNotFoundError,
    ConfigurationError,
    GenerationError,
    GenerationExhaustedError,
    ModelOutputError,
    ModelUnavailableError,
    QuizChangedError,
    QuizError,
    QuizHasNoQuestionsError,
    QuizNotFoundError,
)
from .logger import configure_logging, get_logger

__all__ = [
    # Clock
    "Clock",
    "FixedClock",
    "utc_now",
    # Errors
    "QuizError",
    "ConfigurationError",
    "GenerationError",
    "ModelUnavailableError",
    "ModelOutputError",
    "GenerationExhaustedError",
    "QuizNotFoundError",
    "QuizHasNoQuestionsError",
    "QuizChangedError",
    "AttemptNotFoundError",
    "AttemptAlreadyCompletedError",
    # Logging
    "get_logger",
    "configure_logging",
]

"""Quiz Storage - Repositorios em memoria e AgentFS."""

from .agentfs_store import AgentFSAttemptRepository, AgentFSQuizRepository
from .repository import (
    AttemptRepository,
    InMemoryAttemptRepository,
    InMemoryQuizRepository,
    QuizRepository,
)

__all__ = [
    "QuizRepository",
    "AttemptRepository",
    "InMemoryQuizRepository",
    "InMemoryAttemptRepository",
    "AgentFSQuizRepository",
    "AgentFSAttemptRepository",
]

"""Quiz Repositories - Contratos de persistencia e implementacao em memoria."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Protocol, runtime_checkable

from ..core.clock import Clock, utc_now
from ..core.exceptions import AttemptAlreadyCompletedError, AttemptNotFoundError
from ..models.enums import AttemptStatus
from ..models.schemas import Attempt, AttemptCreate, Quiz, QuizCreate

logger = logging.getLogger(__name__)


def new_quiz_id() -> str:
    return f"quiz-{uuid.uuid4().hex[:12]}"


def new_attempt_id() -> str:
    return f"attempt-{uuid.uuid4().hex[:12]}"


# =============================================================================
# CONTRATOS
# =============================================================================


@runtime_checkable
class QuizRepository(Protocol):
    """Armazenamento de quizzes (documento inteiro, nunca questao a questao)."""

    async def add(self, data: QuizCreate) -> Quiz: ...

    async def get(self, quiz_id: str) -> Quiz | None: ...

    async def list_all(self) -> list[Quiz]: ...

    async def list_by_course(self, course_id: str) -> list[Quiz]: ...

    async def list_by_teacher(self, teacher_id: str) -> list[Quiz]: ...

    async def replace(self, quiz_id: str, data: QuizCreate) -> Quiz | None: ...

    async def delete(self, quiz_id: str) -> bool: ...


@runtime_checkable
class AttemptRepository(Protocol):
    """Armazenamento de tentativas."""

    async def add(self, data: AttemptCreate) -> Attempt: ...

    async def get(self, attempt_id: str) -> Attempt | None: ...

    async def list_by_quiz(self, quiz_id: str) -> list[Attempt]: ...

    async def list_by_student(self, student_id: str) -> list[Attempt]: ...

    async def get_latest(self, quiz_id: str, student_id: str) -> Attempt | None: ...

    async def complete(self, attempt: Attempt) -> Attempt: ...

    async def delete(self, attempt_id: str) -> bool: ...

    async def delete_by_quiz(self, quiz_id: str) -> int: ...


def newest_first(items: list, attr: str) -> list:
    """Ordena por timestamp decrescente."""
    return sorted(items, key=lambda item: getattr(item, attr), reverse=True)


def check_completable(stored: Attempt | None, attempt_id: str) -> Attempt:
    """Valida a transicao in-progress -> completed contra o registro atual.

    Raises:
        AttemptNotFoundError: Tentativa nao existe mais
        AttemptAlreadyCompletedError: Tentativa ja foi concluida
    """
    if stored is None:
        raise AttemptNotFoundError(
            f"Attempt {attempt_id} not found", details={"attempt_id": attempt_id}
        )
    if stored.status != AttemptStatus.IN_PROGRESS:
        raise AttemptAlreadyCompletedError(
            f"Attempt {attempt_id} was already submitted",
            details={"attempt_id": attempt_id, "score": stored.score},
        )
    return stored


# =============================================================================
# MEMORIA
# =============================================================================


class InMemoryQuizRepository:
    """Repositorio de quizzes em memoria (por instancia, nunca global).

    Example:
        >>> repo = InMemoryQuizRepository()
        >>> quiz = await repo.add(QuizCreate(...))
        >>> await repo.get(quiz.id) == quiz
        True
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._quizzes: dict[str, Quiz] = {}

    async def add(self, data: QuizCreate) -> Quiz:
        quiz = Quiz.from_create(data, quiz_id=new_quiz_id(), created_at=self._clock())
        self._quizzes[quiz.id] = quiz
        logger.info(
            f"Quiz added: {quiz.id} - '{quiz.title}' ({len(quiz.questions)} questions)"
        )
        return quiz

    async def get(self, quiz_id: str) -> Quiz | None:
        return self._quizzes.get(quiz_id)

    async def list_all(self) -> list[Quiz]:
        return newest_first(list(self._quizzes.values()), "created_at")

    async def list_by_course(self, course_id: str) -> list[Quiz]:
        return [q for q in await self.list_all() if q.course_id == course_id]

    async def list_by_teacher(self, teacher_id: str) -> list[Quiz]:
        return [q for q in await self.list_all() if q.created_by == teacher_id]

    async def replace(self, quiz_id: str, data: QuizCreate) -> Quiz | None:
        current = self._quizzes.get(quiz_id)
        if current is None:
            return None

        quiz = Quiz.from_create(data, quiz_id=quiz_id, created_at=current.created_at)
        self._quizzes[quiz_id] = quiz
        logger.info(f"Quiz replaced: {quiz_id}")
        return quiz

    async def delete(self, quiz_id: str) -> bool:
        removed = self._quizzes.pop(quiz_id, None) is not None
        if removed:
            logger.info(f"Quiz deleted: {quiz_id}")
        return removed


class InMemoryAttemptRepository:
    """Repositorio de tentativas em memoria.

    `complete` e um compare-and-set protegido por lock: apenas uma de duas
    submissoes concorrentes da mesma tentativa vence.
    """

    def __init__(self):
        self._attempts: dict[str, Attempt] = {}
        self._lock = asyncio.Lock()

    async def add(self, data: AttemptCreate) -> Attempt:
        attempt = Attempt(id=new_attempt_id(), **data.model_dump())
        self._attempts[attempt.id] = attempt
        logger.debug(f"Attempt added: {attempt.id}")
        return attempt

    async def get(self, attempt_id: str) -> Attempt | None:
        return self._attempts.get(attempt_id)

    async def list_by_quiz(self, quiz_id: str) -> list[Attempt]:
        attempts = [a for a in self._attempts.values() if a.quiz_id == quiz_id]
        return newest_first(attempts, "started_at")

    async def list_by_student(self, student_id: str) -> list[Attempt]:
        attempts = [a for a in self._attempts.values() if a.student_id == student_id]
        return newest_first(attempts, "started_at")

    async def get_latest(self, quiz_id: str, student_id: str) -> Attempt | None:
        attempts = [a for a in await self.list_by_quiz(quiz_id) if a.student_id == student_id]
        return attempts[0] if attempts else None

    async def complete(self, attempt: Attempt) -> Attempt:
        async with self._lock:
            check_completable(self._attempts.get(attempt.id), attempt.id)
            self._attempts[attempt.id] = attempt
        logger.debug(f"Attempt completed: {attempt.id}")
        return attempt

    async def delete(self, attempt_id: str) -> bool:
        return self._attempts.pop(attempt_id, None) is not None

    async def delete_by_quiz(self, quiz_id: str) -> int:
        ids = [a.id for a in self._attempts.values() if a.quiz_id == quiz_id]
        for attempt_id in ids:
            del self._attempts[attempt_id]
        if ids:
            logger.info(f"Deleted {len(ids)} attempts of quiz {quiz_id}")
        return len(ids)

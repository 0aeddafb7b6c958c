"""AgentFS Store - Repositorios de quiz e tentativas sobre o KV do AgentFS."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..core.clock import Clock, utc_now
from ..models.schemas import Attempt, AttemptCreate, Quiz, QuizCreate
from .repository import check_completable, new_attempt_id, new_quiz_id, newest_first

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)


def _entry_key(entry: Any) -> str:
    """Chave de uma entrada de `kv.list` (dict ou texto)."""
    return entry.get("key", "") if isinstance(entry, dict) else str(entry)


class _AgentFSCollection:
    """Colecao de documentos JSON sob um prefixo do KV store.

    Estrutura de chaves:
        - {prefix}:{id} -> Documento completo (model_dump em modo JSON)
    """

    KEY_PREFIX = ""

    def __init__(self, agentfs: AgentFS):
        """Inicializa com instancia do AgentFS.

        Args:
            agentfs: Instancia aberta do AgentFS
        """
        self.agentfs = agentfs

    def _key(self, item_id: str) -> str:
        return f"{self.KEY_PREFIX}:{item_id}"

    async def _load(self, item_id: str) -> dict | None:
        data = await self.agentfs.kv.get(self._key(item_id))
        if not data:
            return None
        return data

    async def _save(self, item_id: str, document: dict) -> None:
        await self.agentfs.kv.set(self._key(item_id), document)

    async def _load_all(self) -> list[dict]:
        entries = await self.agentfs.kv.list(prefix=f"{self.KEY_PREFIX}:")
        documents = []
        for entry in entries:
            data = await self.agentfs.kv.get(_entry_key(entry))
            if data:
                documents.append(data)
        return documents

    async def _remove(self, item_id: str) -> bool:
        key = self._key(item_id)
        if not await self.agentfs.kv.get(key):
            return False
        await self.agentfs.kv.delete(key)
        return True


class AgentFSQuizRepository(_AgentFSCollection):
    """Repositorio de quizzes persistido no AgentFS.

    Example:
        >>> afs = await AgentFS.open(AgentFSOptions(id="coursequiz"))
        >>> repo = AgentFSQuizRepository(afs)
        >>> quiz = await repo.add(QuizCreate(...))
    """

    KEY_PREFIX = "quiz"

    def __init__(self, agentfs: AgentFS, clock: Clock = utc_now):
        super().__init__(agentfs)
        self._clock = clock

    async def add(self, data: QuizCreate) -> Quiz:
        quiz = Quiz.from_create(data, quiz_id=new_quiz_id(), created_at=self._clock())
        await self._save(quiz.id, quiz.model_dump(mode="json"))
        logger.info(f"Quiz stored in AgentFS: {quiz.id}")
        return quiz

    async def get(self, quiz_id: str) -> Quiz | None:
        data = await self._load(quiz_id)
        if data is None:
            logger.debug(f"Quiz not found: {quiz_id}")
            return None
        return Quiz.model_validate(data)

    async def list_all(self) -> list[Quiz]:
        quizzes = [Quiz.model_validate(d) for d in await self._load_all()]
        return newest_first(quizzes, "created_at")

    async def list_by_course(self, course_id: str) -> list[Quiz]:
        return [q for q in await self.list_all() if q.course_id == course_id]

    async def list_by_teacher(self, teacher_id: str) -> list[Quiz]:
        return [q for q in await self.list_all() if q.created_by == teacher_id]

    async def replace(self, quiz_id: str, data: QuizCreate) -> Quiz | None:
        current = await self.get(quiz_id)
        if current is None:
            return None

        quiz = Quiz.from_create(data, quiz_id=quiz_id, created_at=current.created_at)
        await self._save(quiz_id, quiz.model_dump(mode="json"))
        logger.info(f"Quiz replaced in AgentFS: {quiz_id}")
        return quiz

    async def delete(self, quiz_id: str) -> bool:
        removed = await self._remove(quiz_id)
        if removed:
            logger.info(f"Quiz deleted from AgentFS: {quiz_id}")
        return removed


class AgentFSAttemptRepository(_AgentFSCollection):
    """Repositorio de tentativas persistido no AgentFS.

    `complete` rele o registro dentro do lock antes de gravar, garantindo
    no maximo uma conclusao por tentativa nesta instancia.
    """

    KEY_PREFIX = "attempt"

    def __init__(self, agentfs: AgentFS):
        super().__init__(agentfs)
        self._lock = asyncio.Lock()

    async def add(self, data: AttemptCreate) -> Attempt:
        attempt = Attempt(id=new_attempt_id(), **data.model_dump())
        await self._save(attempt.id, attempt.model_dump(mode="json"))
        logger.debug(f"Attempt stored in AgentFS: {attempt.id}")
        return attempt

    async def get(self, attempt_id: str) -> Attempt | None:
        data = await self._load(attempt_id)
        return Attempt.model_validate(data) if data is not None else None

    async def _list(self) -> list[Attempt]:
        return [Attempt.model_validate(d) for d in await self._load_all()]

    async def list_by_quiz(self, quiz_id: str) -> list[Attempt]:
        attempts = [a for a in await self._list() if a.quiz_id == quiz_id]
        return newest_first(attempts, "started_at")

    async def list_by_student(self, student_id: str) -> list[Attempt]:
        attempts = [a for a in await self._list() if a.student_id == student_id]
        return newest_first(attempts, "started_at")

    async def get_latest(self, quiz_id: str, student_id: str) -> Attempt | None:
        attempts = [a for a in await self.list_by_quiz(quiz_id) if a.student_id == student_id]
        return attempts[0] if attempts else None

    async def complete(self, attempt: Attempt) -> Attempt:
        async with self._lock:
            check_completable(await self.get(attempt.id), attempt.id)
            await self._save(attempt.id, attempt.model_dump(mode="json"))
        logger.debug(f"Attempt completed in AgentFS: {attempt.id}")
        return attempt

    async def delete(self, attempt_id: str) -> bool:
        return await self._remove(attempt_id)

    async def delete_by_quiz(self, quiz_id: str) -> int:
        attempts = await self.list_by_quiz(quiz_id)
        for attempt in attempts:
            await self.agentfs.kv.delete(self._key(attempt.id))
        if attempts:
            logger.info(f"Deleted {len(attempts)} attempts of quiz {quiz_id} from AgentFS")
        return len(attempts)

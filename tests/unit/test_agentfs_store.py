# =============================================================================
# TESTES - AgentFS Store
# =============================================================================
# Testes unitarios para persistencia de quizzes e tentativas no AgentFS
# =============================================================================

import pytest


class TestAgentFSKeys:
    """Testes para formato das chaves."""

    def test_quiz_key_format(self, mock_agentfs):
        """Verifica formato da chave de quiz."""
        from coursequiz.storage.agentfs_store import AgentFSQuizRepository

        assert AgentFSQuizRepository(mock_agentfs)._key("abc-123") == "quiz:abc-123"

    def test_attempt_key_format(self, mock_agentfs):
        """Verifica formato da chave de tentativa."""
        from coursequiz.storage.agentfs_store import AgentFSAttemptRepository

        assert AgentFSAttemptRepository(mock_agentfs)._key("abc-123") == "attempt:abc-123"


class TestAgentFSQuizRepository:
    """Testes para AgentFSQuizRepository."""

    @pytest.mark.asyncio
    async def test_add_writes_json_document(self, mock_agentfs, sample_quiz_create, fixed_clock):
        """Verifica que o quiz e salvo como documento JSON."""
        from coursequiz.storage.agentfs_store import AgentFSQuizRepository

        repo = AgentFSQuizRepository(mock_agentfs, clock=fixed_clock)

        quiz = await repo.add(sample_quiz_create)

        mock_agentfs.kv.set.assert_called_once()
        key, document = mock_agentfs.kv.set.call_args[0]
        assert key == f"quiz:{quiz.id}"
        assert document["total_points"] == 8
        assert document["questions"][0]["question_type"] == "multiple-choice"
        assert isinstance(document["created_at"], str)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, mock_agentfs):
        """Verifica quiz inexistente."""
        from coursequiz.storage.agentfs_store import AgentFSQuizRepository

        assert await AgentFSQuizRepository(mock_agentfs).get("quiz-missing") is None

    @pytest.mark.asyncio
    async def test_round_trip_and_listing(
        self, mock_agentfs_with_data, sample_quiz_create, fixed_clock
    ):
        """Verifica leitura, listagem e filtros sobre o KV."""
        from coursequiz.storage.agentfs_store import AgentFSQuizRepository

        repo = AgentFSQuizRepository(mock_agentfs_with_data, clock=fixed_clock)
        first = await repo.add(sample_quiz_create)
        fixed_clock.advance(minutes=1)
        second = await repo.add(sample_quiz_create.model_copy(update={"course_id": "course-2"}))

        assert await repo.get(first.id) == first
        assert [q.id for q in await repo.list_all()] == [second.id, first.id]
        assert [q.id for q in await repo.list_by_course("course-2")] == [second.id]
        assert len(await repo.list_by_teacher("teacher-1")) == 2

    @pytest.mark.asyncio
    async def test_replace_and_delete(self, mock_agentfs_with_data, sample_quiz_create):
        """Verifica substituicao e remocao."""
        from coursequiz.storage.agentfs_store import AgentFSQuizRepository

        repo = AgentFSQuizRepository(mock_agentfs_with_data)
        quiz = await repo.add(sample_quiz_create)

        updated = await repo.replace(
            quiz.id, sample_quiz_create.model_copy(update={"title": "Updated"})
        )
        assert updated.title == "Updated"
        assert updated.created_at == quiz.created_at

        assert await repo.delete(quiz.id) is True
        assert await repo.delete(quiz.id) is False
        assert f"quiz:{quiz.id}" not in mock_agentfs_with_data._storage


class TestAgentFSAttemptRepository:
    """Testes para AgentFSAttemptRepository."""

    def _create(self, quiz_id, student_id, started_at):
        from coursequiz.models.schemas import AttemptCreate

        return AttemptCreate(
            quiz_id=quiz_id,
            student_id=student_id,
            course_id="course-1",
            max_score=8,
            started_at=started_at,
        )

    @pytest.mark.asyncio
    async def test_queries(self, mock_agentfs_with_data, fixed_clock):
        """Verifica listagens e tentativa mais recente."""
        from coursequiz.storage.agentfs_store import AgentFSAttemptRepository

        repo = AgentFSAttemptRepository(mock_agentfs_with_data)
        old = await repo.add(self._create("quiz-1", "s-1", fixed_clock()))
        fixed_clock.advance(minutes=1)
        new = await repo.add(self._create("quiz-1", "s-1", fixed_clock()))
        await repo.add(self._create("quiz-2", "s-2", fixed_clock()))

        assert [a.id for a in await repo.list_by_quiz("quiz-1")] == [new.id, old.id]
        assert len(await repo.list_by_student("s-2")) == 1
        assert (await repo.get_latest("quiz-1", "s-1")).id == new.id

    @pytest.mark.asyncio
    async def test_complete_once(self, mock_agentfs_with_data, fixed_clock):
        """Verifica compare-and-set da conclusao."""
        from coursequiz.core.exceptions import AttemptAlreadyCompletedError
        from coursequiz.models.enums import AttemptStatus
        from coursequiz.storage.agentfs_store import AgentFSAttemptRepository

        repo = AgentFSAttemptRepository(mock_agentfs_with_data)
        attempt = await repo.add(self._create("quiz-1", "s-1", fixed_clock()))
        done = attempt.model_copy(
            update={"status": AttemptStatus.COMPLETED, "completed_at": fixed_clock()}
        )

        await repo.complete(done)
        assert (await repo.get(attempt.id)).is_completed

        with pytest.raises(AttemptAlreadyCompletedError):
            await repo.complete(done)

    @pytest.mark.asyncio
    async def test_delete_by_quiz(self, mock_agentfs_with_data, fixed_clock):
        """Verifica remocao em cascata."""
        from coursequiz.storage.agentfs_store import AgentFSAttemptRepository

        repo = AgentFSAttemptRepository(mock_agentfs_with_data)
        await repo.add(self._create("quiz-1", "s-1", fixed_clock()))
        await repo.add(self._create("quiz-1", "s-2", fixed_clock()))
        kept = await repo.add(self._create("quiz-2", "s-1", fixed_clock()))

        assert await repo.delete_by_quiz("quiz-1") == 2
        assert list(mock_agentfs_with_data._storage) == [f"attempt:{kept.id}"]

    @pytest.mark.asyncio
    async def test_lifecycle_over_agentfs(
        self, mock_agentfs_with_data, sample_quiz_create, fixed_clock
    ):
        """Verifica ciclo completo com os repositorios AgentFS."""
        from coursequiz.engine.attempt_lifecycle import AttemptLifecycle
        from coursequiz.storage.agentfs_store import (
            AgentFSAttemptRepository,
            AgentFSQuizRepository,
        )

        quizzes = AgentFSQuizRepository(mock_agentfs_with_data, clock=fixed_clock)
        attempts = AgentFSAttemptRepository(mock_agentfs_with_data)
        lifecycle = AttemptLifecycle(quizzes, attempts, clock=fixed_clock)

        quiz = await quizzes.add(sample_quiz_create)
        attempt = await lifecycle.start(quiz.id, "s-1")
        done = await lifecycle.submit(attempt.id, {"q1": "Paris", "q2": "True"})

        assert done.score == 4
        assert (await attempts.get(attempt.id)).score == 4

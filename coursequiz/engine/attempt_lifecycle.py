"""Attempt Lifecycle - Ciclo de vida das tentativas (inicio, submissao, estado)."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..core.clock import Clock, utc_now
from ..core.exceptions import (
    AttemptAlreadyCompletedError,
    AttemptNotFoundError,
    QuizChangedError,
    QuizHasNoQuestionsError,
    QuizNotFoundError,
)
from ..models.enums import AttemptState, AttemptStatus
from ..models.schemas import Attempt, AttemptCreate, Quiz
from ..storage.repository import AttemptRepository, QuizRepository
from .scoring_engine import ScoringEngine, StudentAnswer

logger = logging.getLogger(__name__)


class AttemptLifecycle:
    """Gerencia tentativas: in-progress -> completed, sem volta.

    Regras:
        - Iniciar sempre cria uma tentativa nova (varias por aluno sao permitidas)
        - Submeter pontua no servidor e conclui a tentativa uma unica vez
        - Todas as checagens rodam antes de qualquer escrita; em caso de erro
          a tentativa fica intacta
        - max_score e fixado no inicio; se o total do quiz mudar, a submissao
          e recusada
        - A tentativa canonica de um aluno e a concluida mais recente

    Example:
        >>> lifecycle = AttemptLifecycle(quizzes, attempts)
        >>> attempt = await lifecycle.start("quiz-1", "student-1")
        >>> done = await lifecycle.submit(attempt.id, {"q1": "True"})
        >>> done.status
        <AttemptStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        quizzes: QuizRepository,
        attempts: AttemptRepository,
        scoring: ScoringEngine | None = None,
        clock: Clock = utc_now,
    ):
        """Inicializa o ciclo de vida.

        Args:
            quizzes: Repositorio de quizzes
            attempts: Repositorio de tentativas
            scoring: Motor de pontuacao (default: ScoringEngine())
            clock: Fonte de timestamps (started_at / completed_at)
        """
        self.quizzes = quizzes
        self.attempts = attempts
        self.scoring = scoring or ScoringEngine()
        self.clock = clock

    async def _load_scorable_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.quizzes.get(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(f"Quiz {quiz_id} not found", details={"quiz_id": quiz_id})
        if not quiz.questions:
            raise QuizHasNoQuestionsError(
                f"Quiz {quiz_id} has no questions", details={"quiz_id": quiz_id}
            )
        return quiz

    async def start(self, quiz_id: str, student_id: str) -> Attempt:
        """Cria uma tentativa em andamento.

        Raises:
            QuizNotFoundError: Quiz inexistente
            QuizHasNoQuestionsError: Quiz sem questoes
        """
        quiz = await self._load_scorable_quiz(quiz_id)

        attempt = await self.attempts.add(
            AttemptCreate(
                quiz_id=quiz.id,
                student_id=student_id,
                course_id=quiz.course_id,
                max_score=quiz.total_points,
                started_at=self.clock(),
            )
        )
        logger.info(f"Attempt started: {attempt.id} (quiz={quiz_id}, student={student_id})")
        return attempt

    async def submit(self, attempt_id: str, answers: Mapping[str, StudentAnswer]) -> Attempt:
        """Pontua e conclui uma tentativa.

        Args:
            attempt_id: ID da tentativa em andamento
            answers: Mapa question_id -> resposta; questoes ausentes valem 0

        Returns:
            Tentativa concluida com respostas, score e completed_at

        Raises:
            AttemptNotFoundError: Tentativa inexistente
            AttemptAlreadyCompletedError: Tentativa ja submetida
            QuizNotFoundError: Quiz removido depois do inicio
            QuizHasNoQuestionsError: Quiz ficou sem questoes
            QuizChangedError: Total de pontos do quiz mudou desde o inicio
        """
        attempt = await self.attempts.get(attempt_id)
        if attempt is None:
            raise AttemptNotFoundError(
                f"Attempt {attempt_id} not found", details={"attempt_id": attempt_id}
            )
        if attempt.is_completed:
            logger.warning(f"Rejected resubmission of completed attempt {attempt_id}")
            raise AttemptAlreadyCompletedError(
                f"Attempt {attempt_id} was already submitted",
                details={"attempt_id": attempt_id, "score": attempt.score},
            )

        quiz = await self._load_scorable_quiz(attempt.quiz_id)
        if quiz.total_points != attempt.max_score:
            logger.warning(
                f"Quiz {quiz.id} changed since attempt {attempt_id} started "
                f"({attempt.max_score} -> {quiz.total_points} points)"
            )
            raise QuizChangedError(
                f"Quiz {quiz.id} changed since attempt {attempt_id} started",
                details={
                    "attempt_id": attempt_id,
                    "quiz_id": quiz.id,
                    "max_score": attempt.max_score,
                    "total_points": quiz.total_points,
                },
            )

        unknown = sorted(set(answers) - set(quiz.question_map()))
        if unknown:
            logger.debug(f"Ignoring answers for unknown questions: {unknown}")

        result = self.scoring.calculate_score(quiz.questions, answers)

        completed = attempt.model_copy(
            update={
                "answers": result.answers,
                "score": result.score,
                "max_score": attempt.max_score,
                "status": AttemptStatus.COMPLETED,
                "completed_at": self.clock(),
            }
        )
        # Revalida o registro final antes de gravar (score == soma dos pontos)
        completed = Attempt.model_validate(completed.model_dump())

        stored = await self.attempts.complete(completed)
        logger.info(
            f"Attempt submitted: {attempt_id} - {result.score}/{attempt.max_score} "
            f"({result.percentage}%)"
        )
        return stored

    async def get_state(self, quiz_id: str, student_id: str) -> AttemptState:
        """Estado do par (quiz, aluno) com base na tentativa mais recente."""
        latest = await self.attempts.get_latest(quiz_id, student_id)
        if latest is None:
            return AttemptState.NOT_STARTED
        if latest.is_completed:
            return AttemptState.COMPLETED
        return AttemptState.IN_PROGRESS

    async def get_canonical_attempt(self, quiz_id: str, student_id: str) -> Attempt | None:
        """Tentativa concluida mais recente do aluno (None se nao houver)."""
        attempts = await self.attempts.list_by_quiz(quiz_id)
        completed = [
            a for a in attempts if a.student_id == student_id and a.is_completed
        ]
        if not completed:
            return None
        return max(completed, key=lambda a: a.completed_at)

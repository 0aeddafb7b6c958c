"""Quiz Router - Endpoints FastAPI de quizzes, geracao e tentativas."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from .core.exceptions import (
    AttemptAlreadyCompletedError,
    AttemptNotFoundError,
    GenerationError,
    QuizChangedError,
    QuizError,
    QuizHasNoQuestionsError,
    QuizNotFoundError,
)
from .core.logger import get_logger
from .engine.attempt_lifecycle import AttemptLifecycle
from .engine.generation_orchestrator import GenerationOrchestrator
from .engine.statistics_engine import StatisticsEngine
from .models.schemas import (
    Attempt,
    AttemptStateResponse,
    GenerateQuizRequest,
    GenerateQuizResponse,
    Quiz,
    QuizCreate,
    QuizStatistics,
    StartAttemptRequest,
    SubmitAttemptRequest,
)
from .storage.repository import AttemptRepository, QuizRepository

logger = get_logger("router")

router = APIRouter(prefix="/api", tags=["Quiz"])

# Status HTTP por tipo de erro (primeiro match na ordem da lista)
ERROR_STATUS: list[tuple[type[QuizError], int]] = [
    (QuizNotFoundError, 404),
    (AttemptNotFoundError, 404),
    (AttemptAlreadyCompletedError, 400),
    (QuizHasNoQuestionsError, 400),
    (QuizChangedError, 409),
    (GenerationError, 500),
]


def to_http_error(error: QuizError) -> HTTPException:
    """Converte um QuizError em HTTPException com a mensagem legivel."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_quiz_repository(request: Request) -> QuizRepository:
    """Dependency para obter o repositorio de quizzes."""
    return request.app.state.quizzes


def get_attempt_repository(request: Request) -> AttemptRepository:
    """Dependency para obter o repositorio de tentativas."""
    return request.app.state.attempts


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    """Dependency para obter o GenerationOrchestrator."""
    return request.app.state.orchestrator


def get_lifecycle(request: Request) -> AttemptLifecycle:
    """Dependency para obter o AttemptLifecycle."""
    return request.app.state.lifecycle


def get_statistics_engine(request: Request) -> StatisticsEngine:
    """Dependency para obter o StatisticsEngine."""
    return request.app.state.statistics


# =============================================================================
# GERACAO
# =============================================================================


@router.post("/quizzes/generate", response_model=GenerateQuizResponse)
async def generate_quiz(
    request: GenerateQuizRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """Gera questoes a partir do material do curso.

    - Extrai topicos dos objetivos quando nenhum e informado
    - Pede N x 1.8 candidatas ao modelo e filtra por qualidade
    - Devolve no maximo N questoes, sinalizando resultado parcial

    O resultado nao e salvo: o professor revisa e usa POST /quizzes.
    """
    try:
        result = await orchestrator.generate(request)
    except GenerationError as e:
        logger.error(f"Quiz generation failed: {e.message}")
        raise to_http_error(e) from e

    return GenerateQuizResponse(**result.to_dict())


# =============================================================================
# QUIZZES
# =============================================================================


@router.get("/quizzes", response_model=list[Quiz])
async def list_quizzes(
    course_id: str | None = Query(default=None),
    teacher_id: str | None = Query(default=None),
    quizzes: QuizRepository = Depends(get_quiz_repository),
):
    """Lista quizzes (mais recentes primeiro), por curso e/ou por professor."""
    if course_id and teacher_id:
        return [q for q in await quizzes.list_by_course(course_id) if q.created_by == teacher_id]
    if course_id:
        return await quizzes.list_by_course(course_id)
    if teacher_id:
        return await quizzes.list_by_teacher(teacher_id)
    return await quizzes.list_all()


@router.post("/quizzes", response_model=Quiz, status_code=201)
async def create_quiz(
    data: QuizCreate,
    quizzes: QuizRepository = Depends(get_quiz_repository),
):
    """Salva um quiz; total de pontos e topicos sao calculados no servidor."""
    return await quizzes.add(data)


@router.get("/quizzes/{quiz_id}", response_model=Quiz)
async def get_quiz(
    quiz_id: str,
    quizzes: QuizRepository = Depends(get_quiz_repository),
):
    """Busca um quiz pelo ID."""
    quiz = await quizzes.get(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")
    return quiz


@router.put("/quizzes/{quiz_id}", response_model=Quiz)
async def replace_quiz(
    quiz_id: str,
    data: QuizCreate,
    quizzes: QuizRepository = Depends(get_quiz_repository),
):
    """Substitui o conteudo de um quiz (documento inteiro)."""
    quiz = await quizzes.replace(quiz_id, data)
    if quiz is None:
        raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")
    return quiz


@router.delete("/quizzes/{quiz_id}", status_code=204, response_class=Response)
async def delete_quiz(
    quiz_id: str,
    quizzes: QuizRepository = Depends(get_quiz_repository),
    attempts: AttemptRepository = Depends(get_attempt_repository),
):
    """Remove um quiz e todas as suas tentativas."""
    if not await quizzes.delete(quiz_id):
        raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")

    removed = await attempts.delete_by_quiz(quiz_id)
    logger.info(f"Quiz {quiz_id} deleted with {removed} attempts")
    return Response(status_code=204)


@router.get("/quizzes/{quiz_id}/statistics", response_model=QuizStatistics)
async def get_quiz_statistics(
    quiz_id: str,
    quizzes: QuizRepository = Depends(get_quiz_repository),
    attempts: AttemptRepository = Depends(get_attempt_repository),
    statistics: StatisticsEngine = Depends(get_statistics_engine),
):
    """Resumo de desempenho: medias, faixas e acertos por questao."""
    quiz = await quizzes.get(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")

    return statistics.summarize(quiz, await attempts.list_by_quiz(quiz_id))


@router.get("/quizzes/{quiz_id}/state", response_model=AttemptStateResponse)
async def get_attempt_state(
    quiz_id: str,
    student_id: str = Query(..., min_length=1),
    lifecycle: AttemptLifecycle = Depends(get_lifecycle),
):
    """Estado do aluno no quiz e sua tentativa canonica (se concluida)."""
    state = await lifecycle.get_state(quiz_id, student_id)
    return AttemptStateResponse(
        quiz_id=quiz_id,
        student_id=student_id,
        state=state.value,
        attempt=await lifecycle.get_canonical_attempt(quiz_id, student_id),
    )


# =============================================================================
# TENTATIVAS
# =============================================================================


@router.get("/attempts")
async def list_attempts(
    quiz_id: str | None = Query(default=None),
    student_id: str | None = Query(default=None),
    attempts: AttemptRepository = Depends(get_attempt_repository),
) -> list[Attempt] | Attempt | None:
    """Lista tentativas por quiz ou por aluno.

    Com os dois filtros devolve apenas a tentativa mais recente do par
    (ou null).
    """
    if quiz_id and student_id:
        return await attempts.get_latest(quiz_id, student_id)
    if quiz_id:
        return await attempts.list_by_quiz(quiz_id)
    if student_id:
        return await attempts.list_by_student(student_id)

    raise HTTPException(status_code=400, detail="quiz_id or student_id is required")


@router.post("/attempts", response_model=Attempt, status_code=201)
async def start_attempt(
    request: StartAttemptRequest,
    lifecycle: AttemptLifecycle = Depends(get_lifecycle),
):
    """Inicia uma tentativa em andamento."""
    try:
        return await lifecycle.start(request.quiz_id, request.student_id)
    except (QuizNotFoundError, QuizHasNoQuestionsError) as e:
        raise to_http_error(e) from e


@router.get("/attempts/{attempt_id}", response_model=Attempt)
async def get_attempt(
    attempt_id: str,
    attempts: AttemptRepository = Depends(get_attempt_repository),
):
    """Busca uma tentativa pelo ID."""
    attempt = await attempts.get(attempt_id)
    if attempt is None:
        raise HTTPException(status_code=404, detail=f"Attempt {attempt_id} not found")
    return attempt


@router.post("/attempts/{attempt_id}/submit", response_model=Attempt)
async def submit_attempt(
    attempt_id: str,
    request: SubmitAttemptRequest,
    lifecycle: AttemptLifecycle = Depends(get_lifecycle),
):
    """Submete as respostas finais; a pontuacao e calculada no servidor.

    Uma tentativa so pode ser submetida uma vez.
    """
    try:
        return await lifecycle.submit(attempt_id, request.answers)
    except QuizError as e:
        raise to_http_error(e) from e


@router.delete("/attempts/{attempt_id}", status_code=204, response_class=Response)
async def delete_attempt(
    attempt_id: str,
    attempts: AttemptRepository = Depends(get_attempt_repository),
):
    """Remove uma tentativa."""
    if not await attempts.delete(attempt_id):
        raise HTTPException(status_code=404, detail=f"Attempt {attempt_id} not found")
    return Response(status_code=204)

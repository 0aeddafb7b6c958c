"""
Course Quiz Server - Powered by Claude Agent SDK

FastAPI server with:
- AI quiz generation with a quality filter (Claude Agent SDK)
- Quiz and attempt persistence (in memory or AgentFS)
- Server-side scoring and quiz statistics
- CORS and structured logging
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursequiz.config import QuizConfig
from coursequiz.core.clock import Clock, utc_now
from coursequiz.core.logger import configure_logging, get_logger
from coursequiz.engine import AttemptLifecycle, GenerationOrchestrator, ScoringEngine, StatisticsEngine
from coursequiz.llm import ClaudeQuizAdapter, ModelPromptAdapter
from coursequiz.router import router as quiz_router
from coursequiz.storage import (
    AgentFSAttemptRepository,
    AgentFSQuizRepository,
    AttemptRepository,
    InMemoryAttemptRepository,
    InMemoryQuizRepository,
    QuizRepository,
)

logger = get_logger("server")

VERSION = "1.0.0"


# =============================================================================
# WIRING
# =============================================================================


def attach_repositories(
    app: FastAPI, quizzes: QuizRepository, attempts: AttemptRepository, clock: Clock
) -> None:
    """Publica repositorios e o ciclo de vida que depende deles em app.state."""
    app.state.quizzes = quizzes
    app.state.attempts = attempts
    app.state.lifecycle = AttemptLifecycle(
        quizzes=quizzes,
        attempts=attempts,
        scoring=app.state.scoring,
        clock=clock,
    )


def create_app(
    config: QuizConfig | None = None,
    adapter: ModelPromptAdapter | None = None,
    quizzes: QuizRepository | None = None,
    attempts: AttemptRepository | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Cria a aplicacao com todas as dependencias explicitas.

    Args:
        config: Configuracao (default: QuizConfig.from_env())
        adapter: Adapter do modelo (default: ClaudeQuizAdapter)
        quizzes: Repositorio de quizzes (default: conforme storage_backend)
        attempts: Repositorio de tentativas (default: conforme storage_backend)
        clock: Fonte de timestamps (default: utc_now)

    Returns:
        FastAPI configurado
    """
    config = config or QuizConfig.from_env()
    clock = clock or utc_now
    configure_logging(config.log_level, json_output=config.log_json)

    use_agentfs = config.storage_backend == "agentfs" and quizzes is None and attempts is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        logger.info(f"Starting Course Quiz (storage={config.storage_backend}, model={config.model})")
        agentfs = None
        if use_agentfs:
            from agentfs_sdk import AgentFS, AgentFSOptions

            agentfs = await AgentFS.open(AgentFSOptions(id=config.agentfs_id))
            attach_repositories(
                app,
                AgentFSQuizRepository(agentfs, clock=clock),
                AgentFSAttemptRepository(agentfs),
                clock,
            )
            logger.info(f"AgentFS opened: {config.agentfs_id}")
        yield
        if agentfs is not None:
            await agentfs.close()
            logger.info("AgentFS closed")

    app = FastAPI(
        title="Course Quiz",
        description="AI quiz generation and assessment engine",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.scoring = ScoringEngine()
    app.state.statistics = StatisticsEngine(scoring=app.state.scoring)
    app.state.orchestrator = GenerationOrchestrator(
        adapter=adapter or ClaudeQuizAdapter(model=config.model),
        inflation_factor=config.inflation_factor,
        timeout=config.generation_timeout,
    )

    if not use_agentfs:
        attach_repositories(
            app,
            quizzes or InMemoryQuizRepository(clock=clock),
            attempts or InMemoryAttemptRepository(),
            clock,
        )

    app.include_router(quiz_router)

    # =========================================================================
    # HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/")
    async def root():
        """Health check."""
        return {"status": "ok", "message": "Course Quiz API", "version": VERSION}

    @app.get("/health")
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "version": VERSION,
            "storage_backend": config.storage_backend,
            "model": config.model,
            "inflation_factor": config.inflation_factor,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)

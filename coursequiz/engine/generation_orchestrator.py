"""Generation Orchestrator - Pipeline de geracao de quiz com filtro de qualidade."""

from __future__ import annotations

import asyncio
import logging
import math

from ..core.exceptions import GenerationError, GenerationExhaustedError, ModelUnavailableError
from ..llm.adapter import ModelPromptAdapter
from ..models.results import GenerationResult, RejectedCandidate
from ..models.schemas import (
    CandidateQuestion,
    GenerateQuizRequest,
    ModelGenerationRequest,
    Question,
)
from .question_validator import QuestionValidator
from .topic_extractor import TopicExtractor

logger = logging.getLogger(__name__)

REASON_DUPLICATE_ID = "duplicate question id"


class GenerationOrchestrator:
    """Orquestra a geracao: topicos -> modelo -> filtro -> corte em N.

    Pede mais questoes que o necessario (N x fator de inflacao) para
    compensar as perdas no filtro de qualidade, depois corta o resultado
    nas N primeiras aprovadas, na ordem devolvida pelo modelo.

    Garantias:
        - Nunca devolve mais que N questoes
        - Nunca devolve zero: sem sobreviventes levanta GenerationExhaustedError
        - Menos de 50% de N e sinalizado em `GenerationResult.is_partial`

    Example:
        >>> orchestrator = GenerationOrchestrator(adapter=ClaudeQuizAdapter())
        >>> result = await orchestrator.generate(
        ...     GenerateQuizRequest(course_content="...", number_of_questions=5)
        ... )
        >>> result.accepted_count <= 5
        True
    """

    DEFAULT_INFLATION_FACTOR = 1.8
    DEFAULT_TIMEOUT = 120.0

    def __init__(
        self,
        adapter: ModelPromptAdapter,
        validator: QuestionValidator | None = None,
        topic_extractor: TopicExtractor | None = None,
        inflation_factor: float = DEFAULT_INFLATION_FACTOR,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        """Inicializa o orquestrador.

        Args:
            adapter: Adapter do modelo generativo
            validator: Filtro de qualidade (default: QuestionValidator())
            topic_extractor: Extrator de topicos (default: TopicExtractor())
            inflation_factor: Multiplicador aplicado a N (>= 1.0)
            timeout: Limite em segundos para a chamada ao modelo (None = sem limite)
        """
        if inflation_factor < 1.0:
            raise ValueError(f"inflation_factor must be >= 1.0, got {inflation_factor}")

        self.adapter = adapter
        self.validator = validator or QuestionValidator()
        self.topic_extractor = topic_extractor or TopicExtractor()
        self.inflation_factor = inflation_factor
        self.timeout = timeout

    def inflated_count(self, requested: int) -> int:
        """Numero de questoes a pedir ao modelo: ceil(N x fator)."""
        # round() absorve ruido de ponto flutuante (ex: 5 * 1.8 = 9.000000000000002)
        return math.ceil(round(requested * self.inflation_factor, 9))

    async def generate(self, request: GenerateQuizRequest) -> GenerationResult:
        """Gera questoes para o request.

        Args:
            request: Request do professor (N entre 1 e 50)

        Returns:
            GenerationResult com 1 a N questoes

        Raises:
            ModelUnavailableError: Falha ou timeout na chamada ao modelo
            ModelOutputError: Resposta do modelo fora do formato
            GenerationExhaustedError: Nenhuma candidata aprovada
        """
        requested = request.number_of_questions
        logger.info(
            f"Starting quiz generation: {requested} questions, "
            f"difficulty={request.difficulty.value}"
        )

        topics = request.topics
        if not topics:
            topics = self.topic_extractor.extract(
                request.course_content, request.learning_objectives
            )
            logger.info(f"Extracted topics: {', '.join(topics)}")

        model_request = ModelGenerationRequest(
            course_content=request.course_content,
            learning_objectives=request.learning_objectives,
            number_of_questions=self.inflated_count(requested),
            difficulty=request.difficulty,
            topics=topics,
        )
        logger.info(
            f"Requesting {model_request.number_of_questions} candidates "
            f"(inflation factor {self.inflation_factor})"
        )

        candidates = await self._invoke_adapter(model_request)
        logger.info(f"Model returned {len(candidates)} candidate questions")

        accepted: list[Question] = []
        rejected: list[RejectedCandidate] = []
        seen_ids: set[str] = set()

        for index, candidate in enumerate(candidates, start=1):
            verdict = self.validator.validate(candidate)
            reason = verdict.reason
            if verdict.is_valid and candidate.id in seen_ids:
                reason = REASON_DUPLICATE_ID
            elif verdict.is_valid:
                seen_ids.add(candidate.id)
                accepted.append(self.validator.to_question(candidate))
                continue

            logger.warning(f"Candidate {index} ({candidate.id}) rejected: {reason}")
            rejected.append(
                RejectedCandidate(index=index, candidate_id=candidate.id, reason=reason)
            )

        logger.info(f"{len(accepted)} of {len(candidates)} candidates passed validation")

        if not accepted:
            raise GenerationExhaustedError(
                "No questions passed validation. Please check the course content and try again.",
                details={
                    "requested": requested,
                    "candidate_count": len(candidates),
                    "rejected": len(rejected),
                },
            )

        result = GenerationResult(
            questions=accepted[:requested],
            requested=requested,
            candidate_count=len(candidates),
            topics=list(topics),
            rejected=rejected,
        )

        if result.is_partial:
            logger.warning(
                f"Partial generation: only {result.accepted_count} of {requested} "
                f"requested questions passed validation"
            )

        return result

    async def _invoke_adapter(
        self, model_request: ModelGenerationRequest
    ) -> list[CandidateQuestion]:
        """Chamada unica ao modelo, limitada por timeout e sem retry."""
        try:
            if self.timeout is None:
                return await self.adapter.generate(model_request)
            return await asyncio.wait_for(self.adapter.generate(model_request), self.timeout)
        except GenerationError:
            raise
        except asyncio.TimeoutError as e:
            raise ModelUnavailableError(
                f"Model did not respond within {self.timeout} seconds",
                details={"timeout": self.timeout},
            ) from e
        except Exception as e:
            raise ModelUnavailableError(
                f"Unable to generate quiz: {e}",
                details={"provider_error": str(e), "error_type": type(e).__name__},
            ) from e

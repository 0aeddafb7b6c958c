"""Quiz Results - Resultados de validacao, geracao e pontuacao."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .schemas import Answer, Question

# Abaixo desta fracao do pedido o resultado e marcado como parcial
PARTIAL_THRESHOLD = 0.5


@dataclass(frozen=True)
class ValidationResult:
    """Veredito do filtro de qualidade para uma candidata."""

    is_valid: bool
    reason: str

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(is_valid=True, reason="question meets all quality criteria")

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason)


@dataclass(frozen=True)
class RejectedCandidate:
    """Candidata descartada (posicao na resposta do modelo + motivo)."""

    index: int
    candidate_id: str | None
    reason: str


@dataclass
class GenerationResult:
    """Resultado de uma geracao ja filtrada e aparada.

    Attributes:
        questions: Questoes aceitas (no maximo `requested`)
        requested: Numero de questoes pedido pelo chamador (N)
        candidate_count: Candidatas devolvidas pelo modelo
        topics: Topicos enviados ao modelo
        rejected: Candidatas descartadas e seus motivos
    """

    questions: list[Question]
    requested: int
    candidate_count: int
    topics: list[str] = field(default_factory=list)
    rejected: list[RejectedCandidate] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.questions)

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - self.accepted_count)

    @property
    def is_partial(self) -> bool:
        """True quando menos de 50% do pedido sobreviveu ao filtro."""
        return self.accepted_count < self.requested * PARTIAL_THRESHOLD

    def rejection_reasons(self) -> dict[str, int]:
        """Contagem de descartes por motivo."""
        return dict(Counter(r.reason for r in self.rejected))

    def to_dict(self) -> dict[str, Any]:
        """Converte para o formato da resposta HTTP."""
        return {
            "questions": self.questions,
            "requested": self.requested,
            "accepted_count": self.accepted_count,
            "candidate_count": self.candidate_count,
            "rejected_count": len(self.rejected),
            "rejection_reasons": self.rejection_reasons(),
            "shortfall": self.shortfall,
            "is_partial": self.is_partial,
            "topics": self.topics,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Pontuacao completa de um conjunto de respostas."""

    answers: list[Answer]
    score: int
    max_score: int

    @property
    def total_questions(self) -> int:
        return len(self.answers)

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)

    @property
    def percentage(self) -> float:
        return round(self.score / self.max_score * 100, 1) if self.max_score else 0.0

"""Question Validator - Filtro de qualidade estrutural das questoes candidatas."""

from pydantic import ValidationError

from ..models.enums import QuestionType
from ..models.results import ValidationResult
from ..models.schemas import CandidateQuestion, Question

# Motivos de rejeicao (agregados em log/contagem, nunca exibidos individualmente)
REASON_TEXT_TOO_SHORT = "question text too short"
REASON_INSUFFICIENT_OPTIONS = "insufficient options"
REASON_MISSING_EXPLANATION = "missing/insufficient explanation"
REASON_MISSING_ANSWER = "missing correct answer"
REASON_MALFORMED = "malformed question"


class QuestionValidator:
    """Filtro de qualidade puro e sem estado.

    Verifica apenas forma/estrutura, nunca a correcao factual. As checagens
    rodam nesta ordem e a primeira falha decide o motivo:

        1. Enunciado com menos de 10 caracteres (sem contar espacos nas pontas)
        2. Multipla escolha com menos de 2 alternativas
        3. Explicacao ausente ou com menos de 10 caracteres
        4. Resposta correta ausente (ou texto vazio apos strip)

    Uma candidata aprovada ainda precisa caber no schema `Question`
    (tipo conhecido, pontos positivos, topico); se nao couber, e rejeitada
    como malformada.

    Example:
        >>> validator = QuestionValidator()
        >>> result = validator.validate(CandidateQuestion(question_text="Why?"))
        >>> result.reason
        'question text too short'
    """

    MIN_TEXT_LENGTH = 10
    MIN_EXPLANATION_LENGTH = 10
    MIN_OPTIONS = 2

    def validate(self, candidate: CandidateQuestion) -> ValidationResult:
        """Aplica o filtro de qualidade a uma candidata.

        Args:
            candidate: Questao crua devolvida pelo modelo

        Returns:
            ValidationResult com veredito e motivo
        """
        # Comprimentos medidos apos strip: espacos nas pontas nao contam
        # para o minimo (mais estrito que medir o texto cru)
        text = (candidate.question_text or "").strip()
        if len(text) < self.MIN_TEXT_LENGTH:
            return ValidationResult.reject(REASON_TEXT_TOO_SHORT)

        if (
            candidate.question_type == QuestionType.MULTIPLE_CHOICE.value
            and len(candidate.options or []) < self.MIN_OPTIONS
        ):
            return ValidationResult.reject(REASON_INSUFFICIENT_OPTIONS)

        explanation = (candidate.explanation or "").strip()
        if len(explanation) < self.MIN_EXPLANATION_LENGTH:
            return ValidationResult.reject(REASON_MISSING_EXPLANATION)

        if not self._has_correct_answer(candidate.correct_answer):
            return ValidationResult.reject(REASON_MISSING_ANSWER)

        try:
            self.to_question(candidate)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "question"
            return ValidationResult.reject(f"{REASON_MALFORMED}: {field}: {first.get('msg')}")

        return ValidationResult.accept()

    def to_question(self, candidate: CandidateQuestion) -> Question:
        """Converte uma candidata em `Question`.

        Alternativas enviadas para tipos que nao sao multipla escolha sao
        descartadas em vez de reprovar a questao.

        Raises:
            pydantic.ValidationError: Se a candidata nao cabe no schema
        """
        options = candidate.options
        if candidate.question_type != QuestionType.MULTIPLE_CHOICE.value:
            options = None

        return Question.model_validate(
            {
                "id": candidate.id,
                "question_text": (candidate.question_text or "").strip(),
                "question_type": candidate.question_type,
                "options": options,
                "correct_answer": candidate.correct_answer,
                "explanation": (candidate.explanation or "").strip(),
                "points": candidate.points,
                "topic": candidate.topic,
            }
        )

    @staticmethod
    def _has_correct_answer(correct_answer: str | list[str] | None) -> bool:
        if correct_answer is None:
            return False
        if isinstance(correct_answer, str):
            return bool(correct_answer.strip())
        return any(value.strip() for value in correct_answer)

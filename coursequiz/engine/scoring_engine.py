"""Scoring Engine - Motor de pontuacao deterministica das respostas."""

from collections.abc import Mapping

from ..core.exceptions import QuizHasNoQuestionsError
from ..models.enums import PerformanceBand
from ..models.results import ScoreResult
from ..models.schemas import Answer, Question

StudentAnswer = str | list[str]

# Separador usado para juntar respostas com multiplos valores
MULTI_VALUE_SEPARATOR = ", "


class ScoringEngine:
    """Motor de pontuacao para quizzes.

    Funcao pura: sem I/O, sem efeitos colaterais, deterministica.

    Regras:
        - Resposta do aluno e resposta correta sao normalizadas
          (strip + casefold) antes da comparacao
        - Resposta correta em lista vira um unico texto com ", "
          (["A", "B"] -> "a, b"); a ordem importa
        - Acerto vale os pontos cheios da questao; erro vale 0
        - Questao sem resposta conta como errada

    Faixas de desempenho:
        - >= 80%: STRONG
        - 60-79%: FAIR
        - < 60%: NEEDS_REVIEW

    Example:
        >>> engine = ScoringEngine()
        >>> result = engine.calculate_score(quiz.questions, {"q1": " hello "})
        >>> result.score
        2
    """

    # Faixas de desempenho (threshold, band)
    BAND_THRESHOLDS = [
        (80, PerformanceBand.STRONG),
        (60, PerformanceBand.FAIR),
        (0, PerformanceBand.NEEDS_REVIEW),
    ]

    @staticmethod
    def normalize(value: StudentAnswer | None) -> str:
        """Normaliza uma resposta para comparacao.

        Args:
            value: Texto, lista de textos ou None

        Returns:
            Texto com strip e casefold; listas sao juntadas com ", "
        """
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            value = MULTI_VALUE_SEPARATOR.join(value)
        return value.strip().casefold()

    def evaluate_answer(self, question: Question, submitted: StudentAnswer | None) -> Answer:
        """Avalia uma resposta individual.

        Args:
            question: Questao respondida
            submitted: Resposta do aluno (ausente = "")

        Returns:
            Answer com is_correct e points_earned
        """
        student_answer = submitted if submitted is not None else ""
        expected = self.normalize(question.correct_answer)
        given = self.normalize(student_answer)

        # Resposta vazia nunca pontua, mesmo contra gabarito vazio
        is_correct = bool(given) and given == expected

        return Answer(
            question_id=question.id,
            student_answer=student_answer,
            is_correct=is_correct,
            points_earned=question.points if is_correct else 0,
        )

    def calculate_score(
        self, questions: list[Question], answers: Mapping[str, StudentAnswer]
    ) -> ScoreResult:
        """Calcula a pontuacao completa de um quiz.

        Args:
            questions: Questoes do quiz, na ordem de apresentacao
            answers: Mapa question_id -> resposta do aluno

        Returns:
            ScoreResult com as respostas na ordem das questoes

        Raises:
            QuizHasNoQuestionsError: Se `questions` estiver vazia
        """
        if not questions:
            raise QuizHasNoQuestionsError("Quiz has no questions to score")

        scored = [self.evaluate_answer(q, answers.get(q.id)) for q in questions]

        return ScoreResult(
            answers=scored,
            score=sum(a.points_earned for a in scored),
            max_score=sum(q.points for q in questions),
        )

    def calculate_band(self, percentage: float) -> PerformanceBand:
        """Retorna a faixa de desempenho para um percentual (0-100)."""
        for threshold, band in self.BAND_THRESHOLDS:
            if percentage >= threshold:
                return band

        return self.BAND_THRESHOLDS[-1][1]

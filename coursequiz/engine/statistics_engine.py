"""Statistics Engine - Resumo de desempenho de um quiz."""

from ..models.schemas import Attempt, QuestionStatistics, Quiz, QuizStatistics
from .scoring_engine import ScoringEngine


def _percentage(part: float, whole: float) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


class StatisticsEngine:
    """Agrega tentativas de um quiz em um `QuizStatistics`.

    Apenas tentativas concluidas entram nos numeros de pontuacao;
    tentativas em andamento contam somente para a taxa de conclusao.

    Example:
        >>> stats = StatisticsEngine().summarize(quiz, attempts)
        >>> stats.completion_rate
        50.0
    """

    def __init__(self, scoring: ScoringEngine | None = None):
        self.scoring = scoring or ScoringEngine()

    def summarize(self, quiz: Quiz, attempts: list[Attempt]) -> QuizStatistics:
        """Calcula o resumo.

        Args:
            quiz: Quiz avaliado
            attempts: Tentativas do quiz (outras sao ignoradas)

        Returns:
            QuizStatistics com totais, medias e desempenho por questao
        """
        attempts = [a for a in attempts if a.quiz_id == quiz.id]
        completed = [a for a in attempts if a.is_completed]

        percentages = [_percentage(a.score, a.max_score) for a in completed]

        if completed:
            average_score = round(sum(a.score for a in completed) / len(completed), 2)
            average_percentage = round(sum(percentages) / len(percentages), 1)
            average_band = self.scoring.calculate_band(average_percentage)
        else:
            average_score = 0.0
            average_percentage = 0.0
            average_band = None

        return QuizStatistics(
            quiz_id=quiz.id,
            total_attempts=len(attempts),
            completed_attempts=len(completed),
            completion_rate=_percentage(len(completed), len(attempts)),
            average_score=average_score,
            average_percentage=average_percentage,
            highest_percentage=max(percentages, default=0.0),
            lowest_percentage=min(percentages, default=0.0),
            average_band=average_band,
            question_stats=self._question_stats(quiz, completed),
        )

    def _question_stats(self, quiz: Quiz, completed: list[Attempt]) -> list[QuestionStatistics]:
        """Acertos/erros por questao, na ordem do quiz."""
        stats = []
        for question in quiz.questions:
            answers = [
                answer
                for attempt in completed
                for answer in attempt.answers
                if answer.question_id == question.id
            ]
            correct = sum(1 for a in answers if a.is_correct)
            stats.append(
                QuestionStatistics(
                    question_id=question.id,
                    correct_count=correct,
                    incorrect_count=len(answers) - correct,
                    correct_percentage=_percentage(correct, len(answers)),
                    average_points=(
                        round(sum(a.points_earned for a in answers) / len(answers), 2)
                        if answers
                        else 0.0
                    ),
                )
            )
        return stats

"""Quiz Enums - Tipos de questao, dificuldade e estados de tentativa."""

from enum import Enum


class QuestionType(str, Enum):
    """Tipos de questao suportados."""

    MULTIPLE_CHOICE = "multiple-choice"  # ~60% das questoes geradas
    TRUE_FALSE = "true-false"  # ~20%
    SHORT_ANSWER = "short-answer"  # ~20%


class QuizDifficulty(str, Enum):
    """Niveis de dificuldade do quiz."""

    EASY = "easy"  # Definicoes e conceitos basicos (1-2 pontos)
    MEDIUM = "medium"  # Compreensao e aplicacao (3-4 pontos)
    HARD = "hard"  # Analise e sintese (5-6 pontos)


class AttemptStatus(str, Enum):
    """Status persistido de uma tentativa."""

    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class AttemptState(str, Enum):
    """Estado de um par (aluno, quiz); NOT_STARTED nao tem registro."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class PerformanceBand(str, Enum):
    """Faixas de desempenho exibidas nos resultados."""

    STRONG = "strong"  # >= 80%
    FAIR = "fair"  # 60-79%
    NEEDS_REVIEW = "needs-review"  # < 60%

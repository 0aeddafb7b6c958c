"""Quiz Schemas - Modelos Pydantic do dominio e das requisicoes/respostas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import AttemptStatus, PerformanceBand, QuestionType, QuizDifficulty

# =============================================================================
# DOMINIO
# =============================================================================


class Question(BaseModel):
    """Questao aceita pelo filtro de qualidade (imutavel)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="ID unico dentro do quiz (q1..qN)")
    question_text: str = Field(..., description="Enunciado da questao")
    question_type: QuestionType = Field(..., description="Tipo da questao")
    options: list[str] | None = Field(
        default=None, description="Alternativas (somente multipla escolha, >= 2)"
    )
    correct_answer: str | list[str] = Field(
        ..., description="Resposta correta (texto unico ou lista ordenada)"
    )
    explanation: str = Field(..., description="Explicacao referenciando o material do curso")
    points: int = Field(..., gt=0, description="Pontos atribuidos a resposta correta")
    topic: str = Field(..., description="Topico do material coberto pela questao")

    @model_validator(mode="after")
    def _check_options(self) -> Question:
        if self.question_type == QuestionType.MULTIPLE_CHOICE:
            if not self.options or len(self.options) < 2:
                raise ValueError("multiple-choice questions need at least 2 options")
        elif self.options is not None:
            raise ValueError(f"{self.question_type.value} questions cannot carry options")
        return self


def unique_topics(questions: list[Question]) -> list[str]:
    """Topicos distintos das questoes, na ordem em que aparecem."""
    return list(dict.fromkeys(q.topic for q in questions))


class QuizCreate(BaseModel):
    """Payload de criacao/substituicao de quiz (acao 'salvar' do professor)."""

    course_id: str = Field(..., min_length=1, description="ID do curso dono do quiz")
    title: str = Field(..., min_length=1, description="Titulo do quiz")
    description: str = Field(default="", description="Descricao do quiz")
    questions: list[Question] = Field(
        default_factory=list, description="Questoes na ordem de apresentacao"
    )
    created_by: str = Field(..., min_length=1, description="ID do professor dono")
    difficulty: QuizDifficulty = Field(..., description="Dificuldade do quiz")

    @model_validator(mode="after")
    def _check_unique_ids(self) -> QuizCreate:
        ids = [q.id for q in self.questions]
        duplicated = sorted({qid for qid in ids if ids.count(qid) > 1})
        if duplicated:
            raise ValueError(f"question ids must be unique within a quiz: {duplicated}")
        return self


class Quiz(QuizCreate):
    """Quiz persistido; total_points e topics sao derivados das questoes."""

    id: str = Field(..., description="ID atribuido pelo repositorio")
    created_at: datetime = Field(..., description="Timestamp de criacao (servidor)")
    total_points: int = Field(..., ge=0, description="Soma dos pontos das questoes")
    topics: list[str] = Field(default_factory=list, description="Topicos distintos das questoes")

    @model_validator(mode="after")
    def _check_derived_fields(self) -> Quiz:
        expected_points = sum(q.points for q in self.questions)
        if self.total_points != expected_points:
            raise ValueError(
                f"total_points ({self.total_points}) must equal the sum of question points "
                f"({expected_points})"
            )
        if len(set(self.topics)) != len(self.topics) or set(self.topics) != {
            q.topic for q in self.questions
        }:
            raise ValueError("topics must be the distinct set of question topics")
        return self

    @classmethod
    def from_create(cls, data: QuizCreate, quiz_id: str, created_at: datetime) -> Quiz:
        """Monta o quiz completo derivando pontos totais e topicos."""
        return cls(
            **data.model_dump(include=set(QuizCreate.model_fields)),
            id=quiz_id,
            created_at=created_at,
            total_points=sum(q.points for q in data.questions),
            topics=unique_topics(data.questions),
        )

    def question_map(self) -> dict[str, Question]:
        """Indexa questoes por ID."""
        return {q.id: q for q in self.questions}


class Answer(BaseModel):
    """Resposta pontuada; produzida apenas pelo ScoringEngine."""

    model_config = ConfigDict(frozen=True)

    question_id: str = Field(..., description="ID da questao respondida")
    student_answer: str | list[str] = Field(..., description="Resposta enviada pelo aluno")
    is_correct: bool = Field(..., description="Se a resposta esta correta")
    points_earned: int = Field(..., ge=0, description="Pontos ganhos (0 se errado)")


class AttemptCreate(BaseModel):
    """Dados de uma nova tentativa; o repositorio atribui o ID."""

    quiz_id: str
    student_id: str
    course_id: str
    max_score: int = Field(..., ge=0)
    started_at: datetime


class Attempt(BaseModel):
    """Registro de uma passagem do aluno por um quiz."""

    id: str = Field(..., description="ID da tentativa")
    quiz_id: str = Field(..., description="ID do quiz")
    student_id: str = Field(..., description="ID do aluno")
    course_id: str = Field(..., description="ID do curso (copiado do quiz)")
    answers: list[Answer] = Field(default_factory=list, description="Respostas na ordem do quiz")
    score: int = Field(default=0, ge=0, description="Soma de points_earned")
    max_score: int = Field(..., ge=0, description="Pontos totais do quiz no inicio")
    status: AttemptStatus = Field(default=AttemptStatus.IN_PROGRESS)
    started_at: datetime = Field(..., description="Inicio da tentativa")
    completed_at: datetime | None = Field(default=None, description="Conclusao (se completa)")

    @model_validator(mode="after")
    def _check_consistency(self) -> Attempt:
        if (self.status == AttemptStatus.COMPLETED) != (self.completed_at is not None):
            raise ValueError("completed_at must be set if and only if the attempt is completed")
        earned = sum(a.points_earned for a in self.answers)
        if self.score != earned:
            raise ValueError(f"score ({self.score}) must equal the sum of points earned ({earned})")
        return self

    @property
    def is_completed(self) -> bool:
        return self.status == AttemptStatus.COMPLETED


# =============================================================================
# CONTRATO DE GERACAO
# =============================================================================


class GenerateQuizRequest(BaseModel):
    """Request de geracao feito pelo professor."""

    course_content: str = Field(..., min_length=1, description="Material do curso")
    learning_objectives: str = Field(default="", description="Objetivos de aprendizagem")
    number_of_questions: int = Field(default=10, ge=1, le=50, description="Questoes desejadas (1-50)")
    difficulty: QuizDifficulty = Field(default=QuizDifficulty.MEDIUM)
    topics: list[str] | None = Field(
        default=None, description="Topicos de foco (vazio = extrair dos objetivos)"
    )

    @field_validator("topics")
    @classmethod
    def _clean_topics(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        cleaned = [t.strip() for t in value if t and t.strip()]
        return cleaned or None


class ModelGenerationRequest(BaseModel):
    """Request enviado ao adapter do modelo (ja com a contagem inflada)."""

    course_content: str
    learning_objectives: str
    number_of_questions: int = Field(..., ge=1)
    difficulty: QuizDifficulty
    topics: list[str] = Field(default_factory=list)


class CandidateQuestion(BaseModel):
    """Questao crua devolvida pelo modelo, antes do filtro de qualidade.

    Todos os campos sao opcionais: candidatos malformados chegam ao
    QuestionValidator e sao rejeitados la, sem derrubar a resposta inteira.
    Aceita chaves snake_case e camelCase.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    question_text: str | None = Field(
        default=None, validation_alias=AliasChoices("question_text", "questionText")
    )
    question_type: str | None = Field(
        default=None, validation_alias=AliasChoices("question_type", "questionType")
    )
    options: list[str] | None = None
    correct_answer: str | list[str] | None = Field(
        default=None, validation_alias=AliasChoices("correct_answer", "correctAnswer")
    )
    explanation: str | None = None
    points: int | None = None
    topic: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class GenerateQuizResponse(BaseModel):
    """Response da geracao; o professor decide se salva ou regenera."""

    questions: list[Question]
    requested: int = Field(..., description="Numero de questoes pedido")
    accepted_count: int = Field(..., description="Questoes devolvidas")
    candidate_count: int = Field(..., description="Candidatas recebidas do modelo")
    rejected_count: int = Field(..., description="Candidatas descartadas no filtro")
    rejection_reasons: dict[str, int] = Field(default_factory=dict)
    shortfall: int = Field(..., description="Questoes faltantes em relacao ao pedido")
    is_partial: bool = Field(..., description="Menos de 50% do pedido sobreviveu")
    topics: list[str] = Field(default_factory=list, description="Topicos usados no prompt")


# =============================================================================
# TENTATIVAS
# =============================================================================


class StartAttemptRequest(BaseModel):
    """Request para iniciar uma tentativa."""

    quiz_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)


class SubmitAttemptRequest(BaseModel):
    """Respostas finais (question_id -> resposta)."""

    answers: dict[str, str | list[str]] = Field(default_factory=dict)


class AttemptStateResponse(BaseModel):
    """Estado de um par (quiz, aluno)."""

    quiz_id: str
    student_id: str
    state: str
    attempt: Attempt | None = None


# =============================================================================
# ESTATISTICAS
# =============================================================================


class QuestionStatistics(BaseModel):
    """Desempenho agregado de uma questao."""

    question_id: str
    correct_count: int
    incorrect_count: int
    correct_percentage: float
    average_points: float


class QuizStatistics(BaseModel):
    """Resumo de desempenho de um quiz."""

    quiz_id: str
    total_attempts: int
    completed_attempts: int
    completion_rate: float = Field(..., description="Concluidas / total (0-100)")
    average_score: float
    average_percentage: float
    highest_percentage: float
    lowest_percentage: float
    average_band: PerformanceBand | None = None
    question_stats: list[QuestionStatistics] = Field(default_factory=list)

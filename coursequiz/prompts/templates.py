"""Quiz Templates - Prompts e constantes para geracao de questoes."""

from ..models.enums import QuestionType, QuizDifficulty
from ..models.schemas import ModelGenerationRequest

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

QUIZ_SYSTEM_PROMPT = """You are a quiz question generator. Reply ONLY with valid JSON, no additional text."""

# =============================================================================
# MIX DE TIPOS E PONTUACAO
# =============================================================================

# Fracao aproximada de cada tipo no lote gerado
QUESTION_TYPE_MIX: dict[QuestionType, float] = {
    QuestionType.MULTIPLE_CHOICE: 0.6,
    QuestionType.TRUE_FALSE: 0.2,
    QuestionType.SHORT_ANSWER: 0.2,
}

# Faixa de pontos (min, max) por dificuldade
POINTS_BY_DIFFICULTY: dict[QuizDifficulty, tuple[int, int]] = {
    QuizDifficulty.EASY: (1, 2),
    QuizDifficulty.MEDIUM: (3, 4),
    QuizDifficulty.HARD: (5, 6),
}

DIFFICULTY_GUIDANCE: dict[QuizDifficulty, str] = {
    QuizDifficulty.EASY: "Focus on definitions, basic concepts, and recall",
    QuizDifficulty.MEDIUM: "Require understanding and application of concepts",
    QuizDifficulty.HARD: "Require analysis, synthesis, and critical thinking",
}

# =============================================================================
# TOPICOS GENERICOS
# =============================================================================

# Usados quando os objetivos de aprendizagem nao rendem topicos suficientes
FALLBACK_TOPICS: tuple[str, ...] = ("Core Concepts", "Key Principles", "Practical Application")

# =============================================================================
# PROMPT TEMPLATE
# =============================================================================

QUIZ_GENERATION_PROMPT = """You are an expert educational assessment creator specializing in generating high-quality quiz questions from course materials.

Generate {num_questions} quiz questions at {difficulty} difficulty level based EXCLUSIVELY on the course content and learning objectives below.

COURSE CONTENT:
{course_content}

LEARNING OBJECTIVES:
{learning_objectives}

FOCUS TOPICS:
{topics}

REQUIREMENTS:
1. Questions MUST be directly based on the course content - do not add information that is not present in the material
2. Mix of question types:
   - multiple-choice (4 options each): {mc_count} questions
   - true-false: {tf_count} questions
   - short-answer: {sa_count} questions
3. Difficulty "{difficulty}": {difficulty_guidance}
4. Each question must include:
   - Clear, unambiguous question text
   - For multiple-choice: 4 plausible options with exactly one correct answer
   - For true-false: a statement that is definitively "True" or "False"
   - For short-answer: a question with a specific, verifiable answer
   - A detailed explanation that references the course material
   - Point value between {min_points} and {max_points}
   - The topic from the course material it covers
5. Avoid ambiguous or trick questions

OUTPUT FORMAT (JSON):
```json
{{
  "questions": [
    {{
      "id": "q1",
      "question_text": "The question text",
      "question_type": "multiple-choice",
      "options": ["option 1", "option 2", "option 3", "option 4"],
      "correct_answer": "option 2",
      "explanation": "Detailed explanation referencing the course material",
      "points": {min_points},
      "topic": "The specific topic"
    }}
  ]
}}
```

Rules for the JSON:
- "id" values are unique: "q1", "q2", ... "q{num_questions}"
- "options" only for multiple-choice questions; omit it otherwise
- "correct_answer" is a string, or a list of strings when several values are required

Generate the complete JSON now:"""


def question_type_counts(total: int) -> dict[QuestionType, int]:
    """Distribui `total` questoes entre os tipos (~60/20/20).

    Arredonda true-false e short-answer para baixo; o restante vai para
    multipla escolha, entao a soma sempre fecha em `total`.
    """
    tf_count = int(total * QUESTION_TYPE_MIX[QuestionType.TRUE_FALSE])
    sa_count = int(total * QUESTION_TYPE_MIX[QuestionType.SHORT_ANSWER])
    return {
        QuestionType.MULTIPLE_CHOICE: total - tf_count - sa_count,
        QuestionType.TRUE_FALSE: tf_count,
        QuestionType.SHORT_ANSWER: sa_count,
    }


def build_generation_prompt(request: ModelGenerationRequest) -> str:
    """Renderiza o prompt de geracao para um request do adapter.

    Args:
        request: Request ja com a contagem inflada e os topicos resolvidos

    Returns:
        Prompt pronto para envio ao modelo
    """
    counts = question_type_counts(request.number_of_questions)
    min_points, max_points = POINTS_BY_DIFFICULTY[request.difficulty]
    topics = "\n".join(f"- {t}" for t in request.topics) if request.topics else "- All content"

    return QUIZ_GENERATION_PROMPT.format(
        num_questions=request.number_of_questions,
        difficulty=request.difficulty.value,
        difficulty_guidance=DIFFICULTY_GUIDANCE[request.difficulty],
        course_content=request.course_content,
        learning_objectives=request.learning_objectives or "(none provided)",
        topics=topics,
        mc_count=counts[QuestionType.MULTIPLE_CHOICE],
        tf_count=counts[QuestionType.TRUE_FALSE],
        sa_count=counts[QuestionType.SHORT_ANSWER],
        min_points=min_points,
        max_points=max_points,
    )

"""Quiz Exceptions - Hierarquia de erros do gerador e do motor de avaliacao."""

from typing import Any


class QuizError(Exception):
    """Erro base do nucleo de geracao e avaliacao.

    Attributes:
        message: Descricao legivel, segura para exibir ao usuario final
        details: Contexto estruturado extra (ids, detalhe do provider, contagens)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serializa o erro para respostas JSON."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(QuizError):
    """Valor de configuracao invalido."""


# =============================================================================
# GERACAO
# =============================================================================


class GenerationError(QuizError):
    """Base para falhas de uma requisicao de geracao."""


class ModelUnavailableError(GenerationError):
    """Falha de transporte/provider ao chamar o modelo generativo.

    O texto original do provider fica em ``details["provider_error"]``.
    """


class ModelOutputError(GenerationError):
    """O modelo respondeu, mas nao com um documento ``{"questions": [...]}``."""


class GenerationExhaustedError(GenerationError):
    """Nenhuma questao candidata sobreviveu ao filtro de qualidade."""


# =============================================================================
# AVALIACAO
# =============================================================================


class QuizNotFoundError(QuizError):
    """Quiz inexistente no repositorio."""


class QuizHasNoQuestionsError(QuizError):
    """Quiz sem questoes nao pode ser iniciado nem pontuado."""


class AttemptNotFoundError(QuizError):
    """Tentativa inexistente no repositorio."""


class AttemptAlreadyCompletedError(QuizError):
    """Tentativa ja submetida; tentativas concluidas nunca sao reescritas."""


class QuizChangedError(QuizError):
    """Quiz mudou depois do inicio; a tentativa nao e pontuada contra o novo conteudo."""

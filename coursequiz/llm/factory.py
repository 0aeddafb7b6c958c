"""LLM Client Factory - Abstracao para criacao de opcoes do Claude Agent SDK."""

from claude_agent_sdk import ClaudeAgentOptions

from ..prompts import QUIZ_SYSTEM_PROMPT


class LLMClientFactory:
    """Factory para criar `ClaudeAgentOptions` da geracao de quiz.

    Centraliza a configuracao das chamadas ao modelo:
    - System prompt de JSON puro
    - Selecao de modelo (HAIKU para velocidade, OPUS para qualidade)
    - Sem ferramentas e com um unico turno (chamada unica, sem agente)

    Example:
        >>> factory = LLMClientFactory()
        >>> options = factory.create_options(model="haiku")
        >>> async for message in query(prompt=prompt, options=options): ...
    """

    DEFAULT_MODEL = "haiku"  # Rapido e economico
    QUALITY_MODEL = "opus"  # Melhor qualidade

    def __init__(self, system_prompt: str | None = None):
        self.system_prompt = system_prompt or QUIZ_SYSTEM_PROMPT

    def create_options(self, model: str = DEFAULT_MODEL) -> ClaudeAgentOptions:
        """Cria opcoes para uma chamada de geracao.

        Args:
            model: Modelo Claude (haiku, sonnet, opus ou ID completo)

        Returns:
            ClaudeAgentOptions configurado
        """
        return ClaudeAgentOptions(
            model=model,
            system_prompt=self.system_prompt,
            allowed_tools=[],
            max_turns=1,
        )

    def create_quality_options(self) -> ClaudeAgentOptions:
        """Opcoes com OPUS, para quando qualidade importa mais que velocidade."""
        return self.create_options(model=self.QUALITY_MODEL)

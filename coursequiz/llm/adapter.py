"""Model Prompt Adapter - Ponte entre o orquestrador e o modelo generativo."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from ..core.exceptions import ModelOutputError, ModelUnavailableError
from ..models.schemas import CandidateQuestion, ModelGenerationRequest
from ..prompts import build_generation_prompt
from .factory import LLMClientFactory

logger = logging.getLogger(__name__)

_FENCED_JSON_REGEX = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


@runtime_checkable
class ModelPromptAdapter(Protocol):
    """Contrato do adapter: request inflado -> candidatas cruas.

    Implementacoes fazem uma unica chamada, sem retry, e levantam
    ModelUnavailableError (transporte) ou ModelOutputError (formato).
    """

    async def generate(self, request: ModelGenerationRequest) -> list[CandidateQuestion]: ...


# =============================================================================
# PARSING DA RESPOSTA
# =============================================================================


def extract_json(text: str) -> Any:
    """Extrai o documento JSON da resposta do modelo.

    Aceita JSON puro, bloco ```json ... ``` ou JSON cercado de texto.

    Raises:
        ModelOutputError: Resposta sem JSON valido
    """
    content = (text or "").strip()
    if not content:
        raise ModelOutputError("Model returned an empty response")

    fenced = _FENCED_JSON_REGEX.search(content)
    if fenced:
        content = fenced.group(1).strip()

    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        raise ModelOutputError(
            "Model response does not contain a JSON object",
            details={"response_preview": content[:200]},
        )

    try:
        return json.loads(content[start : end + 1])
    except json.JSONDecodeError as e:
        raise ModelOutputError(
            f"Model response is not valid JSON: {e.msg}",
            details={"response_preview": content[:200]},
        ) from e


def parse_candidates(text: str) -> list[CandidateQuestion]:
    """Converte a resposta do modelo em candidatas.

    O documento precisa ser `{"questions": [...]}`. Itens com tipos
    errados viram candidatas vazias (o filtro de qualidade as rejeita);
    candidatas sem id recebem `q{posicao}`.

    Raises:
        ModelOutputError: Documento fora do formato esperado
    """
    document = extract_json(text)
    if not isinstance(document, dict) or not isinstance(document.get("questions"), list):
        raise ModelOutputError(
            "Model response must be an object with a 'questions' list",
            details={"keys": sorted(document) if isinstance(document, dict) else []},
        )

    candidates = []
    for index, item in enumerate(document["questions"], start=1):
        try:
            candidate = CandidateQuestion.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Candidate {index} has an invalid shape: {e.error_count()} errors")
            candidate = CandidateQuestion()

        if not candidate.id:
            candidate = candidate.model_copy(update={"id": f"q{index}"})
        candidates.append(candidate)

    return candidates


# =============================================================================
# CLAUDE
# =============================================================================


class ClaudeQuizAdapter:
    """Adapter que gera questoes com o Claude Agent SDK (`query`).

    Example:
        >>> adapter = ClaudeQuizAdapter(model="haiku")
        >>> candidates = await adapter.generate(model_request)
    """

    def __init__(self, factory: LLMClientFactory | None = None, model: str = "haiku"):
        """Inicializa o adapter.

        Args:
            factory: Fabrica de opcoes do SDK (default: LLMClientFactory())
            model: Modelo Claude (haiku, sonnet, opus ou ID completo)
        """
        self.factory = factory or LLMClientFactory()
        self.model = model

    async def generate(self, request: ModelGenerationRequest) -> list[CandidateQuestion]:
        """Faz uma chamada ao modelo e devolve as candidatas.

        Raises:
            ModelUnavailableError: Falha de transporte/provedor
            ModelOutputError: Resposta fora do formato
        """
        from claude_agent_sdk import query as sdk_query

        prompt = build_generation_prompt(request)
        options = self.factory.create_options(model=self.model)

        response = ""
        try:
            async for message in sdk_query(prompt=prompt, options=options):
                if hasattr(message, "content") and isinstance(message.content, list):
                    for block in message.content:
                        if hasattr(block, "text"):
                            response += block.text
        except Exception as e:
            logger.error(f"Claude query failed: {e}")
            raise ModelUnavailableError(
                f"Unable to generate quiz: {e}",
                details={"provider_error": str(e), "error_type": type(e).__name__},
            ) from e

        logger.debug(f"Claude response received ({len(response)} chars)")
        return parse_candidates(response)

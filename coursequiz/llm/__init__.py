"""Quiz LLM - Adapter do modelo generativo e factory de opcoes."""

from .adapter import ClaudeQuizAdapter, ModelPromptAdapter, extract_json, parse_candidates
from .factory import LLMClientFactory

__all__ = [
    "ModelPromptAdapter",
    "ClaudeQuizAdapter",
    "LLMClientFactory",
    "extract_json",
    "parse_candidates",
]

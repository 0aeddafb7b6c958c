"""Topic Extractor - Deriva rotulos de topico dos objetivos de aprendizagem."""

import logging
import re

from ..prompts import FALLBACK_TOPICS

logger = logging.getLogger(__name__)

_FRAGMENT_SPLIT_REGEX = re.compile(r"[.!?\r\n]+")


class TopicExtractor:
    """Extrai ate 5 topicos curtos dos objetivos de aprendizagem.

    Fragmentos com 2 a 5 palavras (formato de sintagma nominal) viram
    topicos; frases longas sao descartadas. Se sobrarem menos de 3,
    completa com rotulos genericos. Nunca retorna lista vazia.

    Example:
        >>> extractor = TopicExtractor()
        >>> extractor.extract("", "Variables and types. Control flow statements.")
        ['Variables and types', 'Control flow statements', 'Core Concepts']
    """

    MIN_WORDS = 2
    MAX_WORDS = 5
    MIN_TOPICS = 3
    MAX_TOPICS = 5
    FALLBACK_TOPICS = FALLBACK_TOPICS

    def extract(self, course_content: str, learning_objectives: str) -> list[str]:
        """Extrai topicos dos objetivos.

        Args:
            course_content: Material do curso (ainda nao usado na extracao)
            learning_objectives: Texto dos objetivos de aprendizagem

        Returns:
            Lista ordenada com 1 a 5 topicos
        """
        topics = self._candidate_fragments(learning_objectives or "")

        for fallback in self.FALLBACK_TOPICS:
            if len(topics) >= self.MIN_TOPICS:
                break
            topics.append(fallback)

        if len(topics) > self.MAX_TOPICS:
            topics = topics[: self.MAX_TOPICS]

        logger.debug(f"Extracted topics: {topics}")
        return topics

    def _candidate_fragments(self, text: str) -> list[str]:
        """Fragmentos de 2-5 palavras, na ordem do texto."""
        fragments = []
        for raw in _FRAGMENT_SPLIT_REGEX.split(text):
            fragment = " ".join(raw.split())
            if self.MIN_WORDS <= len(fragment.split()) <= self.MAX_WORDS:
                fragments.append(fragment)
        return fragments

# =============================================================================
# TESTES - Topic Extractor
# =============================================================================
# Testes unitarios para extracao de topicos dos objetivos
# =============================================================================


class TestTopicExtractorFragments:
    """Testes para selecao de fragmentos."""

    def test_keeps_short_noun_phrases(self):
        """Verifica que fragmentos de 2-5 palavras viram topicos."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        topics = extractor.extract(
            "", "Variables and types. Control flow statements. Reusable functions."
        )

        assert topics == ["Variables and types", "Control flow statements", "Reusable functions"]

    def test_drops_single_words_and_long_sentences(self):
        """Verifica que palavras soltas e frases longas sao descartadas."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        topics = extractor.extract(
            "",
            "Recursion. Students will be able to explain how memory is managed. "
            "Data structures. Sorting algorithms. Big O notation.",
        )

        assert "Recursion" not in topics
        assert all("Students" not in t for t in topics)
        assert topics == ["Data structures", "Sorting algorithms", "Big O notation"]

    def test_splits_on_question_marks_exclamations_and_newlines(self):
        """Verifica os separadores de fragmento."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        topics = extractor.extract("", "Cell biology!\nGenetic inheritance?\r\nProtein synthesis")

        assert topics == ["Cell biology", "Genetic inheritance", "Protein synthesis"]

    def test_collapses_internal_whitespace(self):
        """Verifica normalizacao de espacos."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        topics = extractor.extract("", "  Linear    algebra  . Matrix operations. Vector spaces")

        assert topics[0] == "Linear algebra"


class TestTopicExtractorBounds:
    """Testes para limites de quantidade."""

    def test_caps_at_five_topics(self):
        """Verifica que no maximo 5 topicos sao retornados, na ordem."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        objectives = ". ".join(f"Topic number {i}" for i in range(1, 9))
        topics = extractor.extract("", objectives)

        assert len(topics) == 5
        assert topics == [f"Topic number {i}" for i in range(1, 6)]

    def test_pads_with_fallback_topics(self):
        """Verifica complemento com rotulos genericos quando ha menos de 3."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        topics = extractor.extract("", "Photosynthesis basics.")

        assert topics == ["Photosynthesis basics", "Core Concepts", "Key Principles"]

    def test_empty_objectives_yield_fallbacks(self):
        """Verifica que objetivos vazios nunca geram lista vazia."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        assert extractor.extract("Some content", "") == [
            "Core Concepts",
            "Key Principles",
            "Practical Application",
        ]

    def test_result_size_always_between_one_and_five(self):
        """Verifica o intervalo de tamanho para varias entradas."""
        from coursequiz.engine.topic_extractor import TopicExtractor

        extractor = TopicExtractor()

        for objectives in ["", "x", "One two", "A b. C d. E f. G h. I j. K l.", "\n\n\n"]:
            topics = extractor.extract("", objectives)
            assert 1 <= len(topics) <= 5

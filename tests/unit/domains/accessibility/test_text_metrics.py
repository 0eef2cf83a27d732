"""Tests for readability metrics."""

from __future__ import annotations

from cogniweave.domains.accessibility.domain_logic.profile_models import TransformConfig
from cogniweave.domains.accessibility.domain_logic.text_metrics import (
    TextStats,
    analyze_essay_structure,
    compare_texts,
    count_sentences,
    estimate_reading_level,
    reading_minutes,
)


class TestCounts:
    def test_sentences(self):
        assert count_sentences("One. Two?! Three") == 3
        assert count_sentences("...") == 0

    def test_reading_minutes_round_up(self):
        assert reading_minutes(0) == 0
        assert reading_minutes(1) == 1
        assert reading_minutes(201) == 2

    def test_reading_levels(self):
        assert estimate_reading_level("basic") == "6th-8th grade"
        assert estimate_reading_level("none") == "Original level"
        assert estimate_reading_level(None) == "Unknown"

    def test_stats(self):
        stats = TextStats.of("One two three. Four five.")
        assert stats.word_count == 5
        assert stats.sentence_count == 2
        assert stats.average_words_per_sentence == 2
        assert TextStats.of("").average_words_per_sentence == 0


class TestCompareTexts:
    def test_improvements(self):
        config = TransformConfig(vocabulary_level="basic", max_sentences=3, use_analogies=True)
        result = compare_texts("One two three four. Five six.", "One two. Three.", config)
        improvements = result["improvements"]
        assert improvements["wordCountReduction"] == 3
        assert improvements["wordCountReductionPercent"] == 50
        assert improvements["sentenceCountChange"] == 0
        assert improvements["analogiesUsed"] is True
        assert result["accessibility"]["targetReadingLevel"] == "6th-8th grade"
        assert result["accessibility"]["focusImprovements"] == "Paragraphs limited to 3 sentences"
        assert result["original"]["estimatedReadingTime"] == "1 minutes"

    def test_no_chunking(self):
        config = TransformConfig(chunking_enabled=False, max_sentences=None)
        result = compare_texts("", "", config)
        assert result["improvements"]["wordCountReductionPercent"] == 0
        assert result["accessibility"]["focusImprovements"] == "No chunking applied"


class TestEssayStructure:
    def test_multi_paragraph(self):
        essay = "Intro one. Intro two.\n\nBody.\n\n  \n\nConclusion one. Two."
        structure = analyze_essay_structure(essay)
        assert structure["paragraphCount"] == 3
        assert structure["averageSentencesPerParagraph"] == 2
        assert structure["structure"] == "Multi-paragraph essay"

    def test_short_form(self):
        assert analyze_essay_structure("Just one.")["structure"] == "Short form essay"

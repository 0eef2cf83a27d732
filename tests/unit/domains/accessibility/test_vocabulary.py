"""Tests for vocabulary simplification."""

from __future__ import annotations

from cogniweave.domains.accessibility.domain_logic.lexicon import substitution_table
from cogniweave.domains.accessibility.domain_logic.vocabulary import simplify_vocabulary


class TestTiers:
    def test_none_level_is_identity(self):
        text = "The ubiquitous proliferation of paradigms."
        result = simplify_vocabulary(text, "none")
        assert result.content == text
        assert result.replacements == []

    def test_advanced_has_no_table(self):
        text = "The ubiquitous proliferation of paradigms."
        result = simplify_vocabulary(text, "advanced")
        assert result.content == text
        assert result.replacements == []

    def test_unknown_tier_is_noop(self):
        assert substitution_table("expert") == {}
        assert simplify_vocabulary("ubiquitous", "expert").content == "ubiquitous"

    def test_basic_and_intermediate_differ(self):
        assert simplify_vocabulary("ubiquitous", "basic").content == "everywhere"
        assert simplify_vocabulary("ubiquitous", "intermediate").content == "widespread"


class TestReplacement:
    def test_basic_sentence(self):
        result = simplify_vocabulary("The ubiquitous proliferation of digital media.", "basic")
        assert result.content == "The everywhere spread of digital media."
        assert result.replacements == [
            '"proliferation" → "spread"',
            '"ubiquitous" → "everywhere"',
        ]

    def test_whole_words_only(self):
        result = simplify_vocabulary("ubiquitously", "basic")
        assert result.content == "ubiquitously"
        assert result.replacements == []

    def test_case_insensitive_with_capital_preserved(self):
        result = simplify_vocabulary("Fundamental ideas are fundamental.", "basic")
        assert result.content == "Basic ideas are basic."

    def test_uppercase_word_capitalizes_first_letter_only(self):
        result = simplify_vocabulary("UNPRECEDENTED growth", "basic")
        assert result.content == "Never seen before growth"

    def test_one_log_entry_per_distinct_term(self):
        result = simplify_vocabulary("cognitive and cognitive and Cognitive", "basic")
        assert result.content == "thinking and thinking and Thinking"
        assert result.replacements == ['"cognitive" → "thinking"']

    def test_log_sorted_by_term(self):
        result = simplify_vocabulary("typically intricate antiquity", "basic")
        assert result.replacements == [
            '"antiquity" → "ancient times"',
            '"intricate" → "complex"',
            '"typically" → "usually"',
        ]

    def test_replacement_output_is_not_rescanned(self):
        # "cognitive frameworks" -> "thinking structures"; neither output word is re-matched
        result = simplify_vocabulary("cognitive frameworks", "basic")
        assert result.content == "thinking structures"
        assert len(result.replacements) == 2

    def test_punctuation_adjacent_terms(self):
        result = simplify_vocabulary("(leverage), emergent; ecosystems.", "basic")
        assert result.content == "(use), new; systems."

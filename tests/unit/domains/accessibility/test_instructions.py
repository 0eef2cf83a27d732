"""Tests for generative model instruction builders."""

from __future__ import annotations

from cogniweave.domains.accessibility.domain_logic.profile_models import TransformConfig
from cogniweave.domains.accessibility.prompts.instructions import (
    essay_instructions,
    profile_generation_message,
    simplification_instructions,
    simplification_message,
)


class TestSimplificationInstructions:
    def test_deterministic(self):
        config = TransformConfig(vocabulary_level="basic", max_sentences=3)
        assert simplification_instructions(config) == simplification_instructions(config)

    def test_reflects_profile(self):
        config = TransformConfig(vocabulary_level="basic", max_sentences=3, use_analogies=True)
        text = simplification_instructions(config, "news article")
        assert "Maximum 3 sentences per paragraph" in text
        assert "Content type: news article" in text
        assert "6th-8th grade" in text
        assert "real-world analogies" in text

    def test_no_vocabulary_change_uses_advanced_guidance(self):
        config = TransformConfig(vocabulary_level="none", chunking_enabled=False, max_sentences=None)
        text = simplification_instructions(config)
        assert "Maintain technical accuracy" in text
        assert "Do not add analogies" in text
        assert "Keep paragraphs to 4 sentences maximum" in text

    def test_essay_adds_requirements(self):
        text = essay_instructions(TransformConfig())
        assert "## Essay Requirements" in text
        assert "Content type: essay" in text


class TestMessages:
    def test_specific_instructions_optional(self):
        assert "Additional Instructions" not in simplification_message("x")
        assert "Keep it short" in simplification_message("x", specific_instructions="Keep it short")

    def test_answers_serialized(self):
        message = profile_generation_message({"q1_reading_style": "short"})
        assert '"q1_reading_style": "short"' in message

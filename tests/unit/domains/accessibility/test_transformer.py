"""Tests for the text and visual transformation orchestrator."""

from __future__ import annotations

from cogniweave.domains.accessibility.domain_logic.lexicon import CONCEPT_ANALOGIES
from cogniweave.domains.accessibility.domain_logic.profile_models import resolve_profile
from cogniweave.domains.accessibility.domain_logic.transformer import (
    analyze_visuals,
    apply_text_stages,
    transform_text,
)

QUANTUM = (
    "Quantum mechanics describes the behavior of subatomic particles. "
    "It is fundamental to modern physics. Particles can exist in many states. "
    "Measurement changes the outcome. Scientists typically use probability."
)


class TestTransformText:
    def test_full_pipeline_order(self, profile_dict):
        result = transform_text(QUANTUM, profile_dict)
        assert result.ok
        assert result.transformation_log == [
            '"fundamental" → "basic"',
            '"subatomic" → "very tiny"',
            '"typically" → "usually"',
            "Chunked 1 paragraphs",
            'Added analogy for "quantum mechanics"',
        ]
        content = result.transformed_content
        assert content.startswith("Quantum mechanics [💡 " + CONCEPT_ANALOGIES["quantum mechanics"] + "]")
        assert "very tiny particles" in content
        assert content.count("\n\n") == 1

    def test_plain_profile_is_identity(self, plain_profile):
        result = transform_text(QUANTUM, plain_profile)
        assert result.ok
        assert result.transformed_content == QUANTUM
        assert result.transformation_log == []

    def test_chunking_log_present_even_when_nothing_split(self, profile_factory):
        profile = profile_factory(vocabulary="none", analogies=False, max_length=10)
        result = transform_text("Short. Text.", profile)
        assert result.transformation_log == ["Chunked 0 paragraphs"]
        assert result.transformed_content == "Short. Text."

    def test_metadata(self, profile_dict):
        result = transform_text(QUANTUM, profile_dict)
        meta = result.metadata
        assert meta["originalLength"] == len(QUANTUM)
        assert meta["transformedLength"] == len(result.transformed_content)
        assert meta["processingTime"].endswith("ms")
        assert meta["transformations"] == result.transformation_log
        assert meta["profile"] == {
            "chunkingMaxLength": 3,
            "vocabularyLevel": "basic",
            "analogiesEnabled": True,
            "distractionFilter": {"enabled": True, "sensitivity": "high"},
        }
        assert meta["annotations"][0]["concept"] == "quantum mechanics"

    def test_accepts_resolved_config(self, profile_dict):
        config = resolve_profile(profile_dict)
        assert transform_text(QUANTUM, config).transformed_content == (
            transform_text(QUANTUM, profile_dict).transformed_content
        )

    def test_invalid_profile_returns_original(self):
        bad = {"text": {"chunking": {"strategy": "sentence_limit", "maxLength": 0}}}
        result = transform_text(QUANTUM, bad)
        assert not result.ok
        assert result.transformed_content == QUANTUM
        assert result.error_type == "invalid_configuration"
        data = result.to_dict()
        assert data["status"] == "error"
        assert "transformationLog" not in data

    def test_omitted_blocks_take_defaults(self):
        result = transform_text("The ubiquitous idea.", {})
        assert result.ok
        assert result.transformed_content == "The widespread idea."
        assert result.metadata["profile"]["chunkingMaxLength"] == 4

    def test_does_not_mutate_profile(self, profile_dict):
        snapshot = repr(profile_dict)
        transform_text(QUANTUM, profile_dict)
        assert repr(profile_dict) == snapshot

    def test_apply_text_stages_returns_annotations(self, profile_dict):
        config = resolve_profile(profile_dict)
        content, log, annotations = apply_text_stages("Photosynthesis.", config)
        assert "[💡 " in content
        assert annotations[0]["concept"] == "photosynthesis"


class TestAnalyzeVisuals:
    ELEMENTS = [
        {"id": "ad", "type": "advertisement", "semanticContext": "sidebar_advertisement"},
        {"id": "stock", "type": "image", "semanticContext": "decorative_stock_photo"},
        {"id": "video", "type": "video", "semanticContext": "educational_content"},
    ]

    def test_counts(self, profile_dict):
        result = analyze_visuals(self.ELEMENTS, profile_dict)
        assert result.ok
        meta = result.metadata
        assert meta["filterEnabled"] is True
        assert meta["sensitivity"] == "high"
        assert meta["elementsProcessed"] == 3
        assert (meta["actionsHide"], meta["actionsFade"], meta["actionsKeep"]) == (1, 1, 1)

    def test_disabled_filter_metadata(self, plain_profile):
        result = analyze_visuals(self.ELEMENTS, plain_profile)
        assert result.metadata["filterEnabled"] is False
        assert "elementsProcessed" not in result.metadata
        assert all(a["action"] == "keep_visible" for a in result.to_dict()["visualActions"])

    def test_bad_element_is_error_result(self, profile_dict):
        result = analyze_visuals([{"id": "x"}], profile_dict)
        assert not result.ok
        assert result.error_type == "invalid_configuration"
        assert result.to_dict()["visualActions"] == []

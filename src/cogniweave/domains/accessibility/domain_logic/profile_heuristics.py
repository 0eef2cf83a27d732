"""Keyword heuristics: onboarding answers -> cognitive profile.

Used whenever the generative model is unavailable or returns something
unusable. Rules are case-insensitive substring tests applied in a fixed
order; each rule writes exactly one field of the default profile.

The function never fails on odd input. Missing, empty or non-string
answers simply leave the defaults in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from cogniweave.domains.accessibility.domain_logic.profile_models import (
    DEFAULT_MAX_SENTENCES,
    DEFAULT_SENSITIVITY,
    DEFAULT_SUMMARY_LENGTH,
    DEFAULT_VOCABULARY_LEVEL,
    CognitiveProfile,
)

FALLBACK_GENERATOR = "heuristic-fallback"
FALLBACK_VERSION = "1.0"

ONBOARDING_KEYS = (
    "q1_reading_style",
    "q2_distractions",
    "q3_complex_topics",
    "q4_learning_pace",
    "q5_visual_preferences",
)

SHORT_CHUNK_SENTENCES = 3

_SHORTER_READING = ("shorter", "2-3 sentences")
_SIMPLE_VOCABULARY = ("simple", "basic")
_WANTS_ANALOGIES = ("analog", "example")
_STRONG_DISTRACTION = ("very distracted", "completely derail")
_SOME_DISTRACTION = ("distract",)


def _answer(answers: Mapping[str, Any], key: str) -> str:
    value = answers.get(key)
    return value.lower() if isinstance(value, str) else ""


def _mentions(answer: str, needles: tuple[str, ...]) -> bool:
    return any(needle in answer for needle in needles)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def derive_profile(answers: Mapping[str, Any] | None) -> CognitiveProfile:
    """Build a complete profile from onboarding answers.

    Args:
        answers: Mapping of question keys (``q1_reading_style`` ...) to
            free-text answers. Anything else is tolerated.

    Returns:
        A schema-valid profile stamped with ``generatedBy =
        "heuristic-fallback"`` and version ``1.0``.
    """
    if not isinstance(answers, Mapping):
        answers = {}

    reading = _answer(answers, "q1_reading_style")
    distractions = _answer(answers, "q2_distractions")
    complex_topics = _answer(answers, "q3_complex_topics")

    max_length = DEFAULT_MAX_SENTENCES
    vocabulary = DEFAULT_VOCABULARY_LEVEL
    use_analogies = False
    filter_enabled = False
    sensitivity = DEFAULT_SENSITIVITY

    if _mentions(reading, _SHORTER_READING):
        max_length = SHORT_CHUNK_SENTENCES
    if _mentions(complex_topics, _SIMPLE_VOCABULARY):
        vocabulary = "basic"
    if _mentions(complex_topics, _WANTS_ANALOGIES):
        use_analogies = True
    if _mentions(distractions, _STRONG_DISTRACTION):
        filter_enabled, sensitivity = True, "high"
    elif _mentions(distractions, _SOME_DISTRACTION):
        filter_enabled, sensitivity = True, "medium"

    now = _timestamp()
    return CognitiveProfile.model_validate({
        "text": {
            "chunking": {"strategy": "sentence_limit", "maxLength": max_length},
            "vocabulary": {"simplificationLevel": vocabulary},
        },
        "simplification": {
            "useAnalogies": use_analogies,
            "summarization": {
                "defaultState": "expanded",
                "summaryLength": DEFAULT_SUMMARY_LENGTH,
            },
        },
        "visuals": {
            "distractionFilter": {"enabled": filter_enabled, "sensitivity": sensitivity},
        },
        "metadata": {
            "createdAt": now,
            "updatedAt": now,
            "version": FALLBACK_VERSION,
            "generatedBy": FALLBACK_GENERATOR,
        },
        "preferences": {"fontSize": 16, "lineHeight": 1.5, "colorScheme": "default"},
    })

"""Readability metrics for comparing original and simplified text."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from cogniweave.domains.accessibility.domain_logic.profile_models import TransformConfig

WORDS_PER_MINUTE = 200

READING_LEVELS = {
    "basic": "6th-8th grade",
    "intermediate": "9th-11th grade",
    "advanced": "12th grade+",
    "none": "Original level",
}

_TERMINATORS_RE = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


def estimate_reading_level(vocabulary_level: str | None) -> str:
    return READING_LEVELS.get(vocabulary_level or "", "Unknown")


def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    return sum(1 for s in _TERMINATORS_RE.split(text) if s.strip())


def reading_minutes(word_count: int) -> int:
    return math.ceil(word_count / WORDS_PER_MINUTE)


@dataclass(frozen=True)
class TextStats:
    word_count: int
    sentence_count: int
    average_words_per_sentence: int
    reading_minutes: int

    @classmethod
    def of(cls, text: str) -> TextStats:
        words = count_words(text)
        sentences = count_sentences(text)
        return cls(
            word_count=words,
            sentence_count=sentences,
            average_words_per_sentence=round(words / sentences) if sentences else 0,
            reading_minutes=reading_minutes(words),
        )

    def to_dict(self, text: str) -> dict[str, Any]:
        return {
            "text": text,
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "averageWordsPerSentence": self.average_words_per_sentence,
            "estimatedReadingTime": f"{self.reading_minutes} minutes",
        }


def compare_texts(original: str, simplified: str, config: TransformConfig) -> dict[str, Any]:
    """Side-by-side metrics for an original text and its simplification."""
    before = TextStats.of(original)
    after = TextStats.of(simplified)
    reduction = before.word_count - after.word_count

    if config.chunking_enabled:
        focus = f"Paragraphs limited to {config.max_sentences} sentences"
    else:
        focus = "No chunking applied"

    return {
        "original": before.to_dict(original),
        "simplified": after.to_dict(simplified),
        "improvements": {
            "wordCountReduction": reduction,
            "wordCountReductionPercent": (
                round(reduction / before.word_count * 100) if before.word_count else 0
            ),
            "sentenceCountChange": after.sentence_count - before.sentence_count,
            "readingTimeImprovement": before.reading_minutes - after.reading_minutes,
            "vocabularyLevel": config.vocabulary_level,
            "analogiesUsed": config.use_analogies,
        },
        "accessibility": {
            "targetReadingLevel": estimate_reading_level(config.vocabulary_level),
            "cognitiveLoadReduction": "Reduced complex vocabulary and sentence structure",
            "focusImprovements": focus,
        },
    }


def analyze_essay_structure(essay: str) -> dict[str, Any]:
    """Paragraph and sentence shape of an essay."""
    paragraphs = [p for p in _PARAGRAPH_BREAK_RE.split(essay) if p.strip()]
    sentences = count_sentences(essay)
    return {
        "paragraphCount": len(paragraphs),
        "averageSentencesPerParagraph": round(sentences / len(paragraphs)) if paragraphs else 0,
        "estimatedReadingTime": f"{reading_minutes(count_words(essay))} minutes",
        "structure": "Multi-paragraph essay" if len(paragraphs) >= 3 else "Short form essay",
    }

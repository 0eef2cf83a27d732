"""Analogy annotation for known concepts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from cogniweave.domains.accessibility.domain_logic.lexicon import CONCEPT_ANALOGIES

ANALOGY_MARKER = " [💡 {analogy}]"


@dataclass(frozen=True)
class Annotation:
    """A concept found in the text and the analogy attached to it."""

    concept: str
    analogy: str
    start: int  # offset of the matched concept in the annotated input
    end: int

    def to_dict(self) -> dict:
        return {"concept": self.concept, "analogy": self.analogy, "offset": self.start}


@dataclass
class AnalogyResult:
    content: str
    analogies: list[str] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)


def _concept_pattern(concept: str) -> re.Pattern[str]:
    words = (re.escape(w) for w in concept.split())
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


_PATTERNS: dict[str, re.Pattern[str]] = {c: _concept_pattern(c) for c in CONCEPT_ANALOGIES}


def _first_occurrences(content: str, table: Mapping[str, str]) -> list[Annotation]:
    found: list[Annotation] = []
    for concept, analogy in table.items():
        pattern = _PATTERNS.get(concept) or _concept_pattern(concept)
        match = pattern.search(content)
        if match:
            found.append(Annotation(concept, analogy, match.start(), match.end()))

    # Overlapping matches: the longest phrase wins, ties go to the earliest
    found.sort(key=lambda a: (-(a.end - a.start), a.start))
    kept: list[Annotation] = []
    for candidate in found:
        if all(candidate.end <= k.start or candidate.start >= k.end for k in kept):
            kept.append(candidate)
    return sorted(kept, key=lambda a: a.start)


def annotate_analogies(
    content: str,
    table: Mapping[str, str] = CONCEPT_ANALOGIES,
) -> AnalogyResult:
    """Attach an analogy marker after the first occurrence of each concept.

    The concept text itself is left as written; the marker follows it.
    """
    annotations = _first_occurrences(content, table)
    if not annotations:
        return AnalogyResult(content=content)

    pieces: list[str] = []
    cursor = 0
    for annotation in annotations:
        pieces.append(content[cursor:annotation.end])
        pieces.append(ANALOGY_MARKER.format(analogy=annotation.analogy))
        cursor = annotation.end
    pieces.append(content[cursor:])

    return AnalogyResult(
        content="".join(pieces),
        analogies=[f'Added analogy for "{a.concept}"' for a in annotations],
        annotations=annotations,
    )

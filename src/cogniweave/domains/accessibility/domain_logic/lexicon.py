"""Static lexical tables: vocabulary substitutions and concept analogies.

Keys are lowercase; matching is case-insensitive and whole-word.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# ---------------------------------------------------------------------------
# Vocabulary substitution tiers
# ---------------------------------------------------------------------------

_BASIC: dict[str, str] = {
    "ubiquitous": "everywhere",
    "proliferation": "spread",
    "pedagogical": "teaching",
    "paradigms": "methods",
    "necessitating": "requiring",
    "methodologies": "ways",
    "accommodate": "fit",
    "cognitive": "thinking",
    "frameworks": "structures",
    "leverage": "use",
    "emergent": "new",
    "ecosystems": "systems",
    "fundamental": "basic",
    "subatomic": "very tiny",
    "unprecedented": "never seen before",
    "epoch": "time period",
    "encapsulates": "shows",
    "antiquity": "ancient times",
    "epitomized": "showed perfectly",
    "intricate": "complex",
    "whereby": "where",
    "biochemical": "chemical in living things",
    "typically": "usually",
    "photophosphorylation": "light-powered chemical process",
}

_INTERMEDIATE: dict[str, str] = {
    "ubiquitous": "widespread",
    "proliferation": "growth",
    "pedagogical": "educational",
    "paradigms": "approaches",
    "methodologies": "techniques",
    "cognitive": "mental",
    "leverage": "utilize",
    "emergent": "emerging",
    "fundamental": "essential",
    "unprecedented": "extraordinary",
    "encapsulates": "represents",
    "epitomized": "represented",
    "intricate": "detailed",
    "biochemical": "biological chemical",
}

# "advanced" readers keep the original vocabulary: no table, so a no-op.
VOCABULARY_TIERS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "basic": MappingProxyType(_BASIC),
    "intermediate": MappingProxyType(_INTERMEDIATE),
})

_EMPTY: Mapping[str, str] = MappingProxyType({})


def substitution_table(level: str) -> Mapping[str, str]:
    """Return the substitution table for a tier; unknown tiers are empty."""
    return VOCABULARY_TIERS.get(level, _EMPTY)


# ---------------------------------------------------------------------------
# Concept analogies
# ---------------------------------------------------------------------------

CONCEPT_ANALOGIES: Mapping[str, str] = MappingProxyType({
    "quantum mechanics": (
        "Think of quantum mechanics like a coin that spins in the air - until it "
        "lands, it's both heads and tails at the same time."
    ),
    "photosynthesis": (
        "Photosynthesis is like a plant's kitchen where sunlight is the energy "
        "source to cook sugar from air and water."
    ),
    "renaissance": (
        "The Renaissance was like Europe waking up from a long sleep and "
        "rediscovering the wisdom of ancient Greece and Rome."
    ),
    "biochemical process": (
        "A biochemical process is like a recipe that living things follow to make "
        "the chemicals they need."
    ),
    "cognitive frameworks": (
        "Cognitive frameworks are like different colored glasses - each person sees "
        "and understands the world through their own unique lens."
    ),
})

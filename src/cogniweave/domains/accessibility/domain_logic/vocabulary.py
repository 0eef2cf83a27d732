"""Vocabulary simplification by lexical substitution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping

from cogniweave.domains.accessibility.domain_logic.lexicon import substitution_table


@dataclass
class VocabularyResult:
    content: str
    replacements: list[str] = field(default_factory=list)


def format_replacement(complex_term: str, simple_term: str) -> str:
    return f'"{complex_term}" → "{simple_term}"'


@lru_cache(maxsize=16)
def _compile_tier(level: str) -> re.Pattern[str] | None:
    table = substitution_table(level)
    if not table:
        return None
    # Longest first so a multi-word term is preferred over a prefix of it
    terms = sorted(table, key=lambda t: (-len(t), t))
    alternation = "|".join(re.escape(t) for t in terms)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _match_case(matched: str, replacement: str) -> str:
    if matched[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def simplify_vocabulary(text: str, level: str) -> VocabularyResult:
    """Replace tier terms in ``text`` with their simpler equivalents.

    Single pass over the text: replacement output is never re-matched, so
    a replacement that happens to equal another term is left alone. Log
    entries are one per distinct term, ordered by term.
    """
    if level == "none":
        return VocabularyResult(content=text)

    pattern = _compile_tier(level)
    if pattern is None:
        return VocabularyResult(content=text)

    table: Mapping[str, str] = substitution_table(level)
    used: set[str] = set()

    def _substitute(match: re.Match[str]) -> str:
        term = match.group(0).lower()
        used.add(term)
        return _match_case(match.group(0), table[term])

    content = pattern.sub(_substitute, text)
    replacements = [format_replacement(term, table[term]) for term in sorted(used)]
    return VocabularyResult(content=content, replacements=replacements)

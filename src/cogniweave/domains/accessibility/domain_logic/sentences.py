"""Sentence and paragraph splitting on terminal punctuation."""

from __future__ import annotations

import re

# A run of non-terminators closed by one or more terminators, or a trailing
# run with no terminator at all.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+|[^.!?]+$")

# Paragraphs are separated by blank lines. The group keeps separators so
# untouched paragraphs can be rejoined verbatim.
PARAGRAPH_SEPARATOR_RE = re.compile(r"(\n[ \t]*\n\s*)")


def split_into_sentences(text: str) -> list[str]:
    """Split ``text`` into trimmed sentences, in order.

    Text without any terminator is returned as a single sentence.
    """
    sentences = [s.strip() for s in _SENTENCE_RE.findall(text)]
    sentences = [s for s in sentences if s]
    return sentences or [text.strip()]


def split_paragraphs(content: str) -> tuple[list[str], list[str]]:
    """Split content into paragraphs and the separators between them.

    ``len(separators) == len(paragraphs) - 1``; interleaving them reproduces
    ``content`` exactly.
    """
    parts = PARAGRAPH_SEPARATOR_RE.split(content)
    return parts[0::2], parts[1::2]


def join_paragraphs(paragraphs: list[str], separators: list[str]) -> str:
    """Inverse of ``split_paragraphs``."""
    out: list[str] = []
    for i, paragraph in enumerate(paragraphs):
        if i:
            out.append(separators[i - 1])
        out.append(paragraph)
    return "".join(out)

"""Paragraph chunking by sentence count."""

from __future__ import annotations

from dataclasses import dataclass

from cogniweave.domains.accessibility.domain_logic.profile_models import InvalidConfiguration
from cogniweave.domains.accessibility.domain_logic.sentences import (
    join_paragraphs,
    split_into_sentences,
    split_paragraphs,
)

CHUNK_SEPARATOR = "\n\n"


@dataclass
class ChunkingResult:
    content: str
    chunks_created: int = 0


def chunk_sentences(sentences: list[str], max_sentences: int) -> list[str]:
    """Group sentences into paragraphs of at most ``max_sentences`` each."""
    return [
        " ".join(sentences[i:i + max_sentences])
        for i in range(0, len(sentences), max_sentences)
    ]


def chunk_paragraph(paragraph: str, max_sentences: int) -> list[str] | None:
    """Split one paragraph, or return None when it is within the limit."""
    sentences = split_into_sentences(paragraph)
    if len(sentences) <= max_sentences:
        return None
    return chunk_sentences(sentences, max_sentences)


def chunk_paragraphs(content: str, max_sentences: int) -> ChunkingResult:
    """Re-split every paragraph of ``content`` with too many sentences.

    ``chunks_created`` counts paragraphs that were split, not the chunks
    they were split into.

    Raises:
        InvalidConfiguration: If ``max_sentences`` is not a positive integer.
    """
    if isinstance(max_sentences, bool) or not isinstance(max_sentences, int) or max_sentences <= 0:
        raise InvalidConfiguration(
            f"max_sentences must be a positive integer, got {max_sentences!r}"
        )

    paragraphs, separators = split_paragraphs(content)
    chunks_created = 0
    out: list[str] = []
    for paragraph in paragraphs:
        chunks = chunk_paragraph(paragraph, max_sentences)
        if chunks is None:
            out.append(paragraph)
            continue
        out.append(CHUNK_SEPARATOR.join(chunks))
        chunks_created += 1

    return ChunkingResult(content=join_paragraphs(out, separators), chunks_created=chunks_created)

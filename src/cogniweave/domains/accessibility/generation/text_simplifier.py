"""Model-backed text simplification with the local engine as fallback.

``simplify_text`` and ``simplify_essay`` ask the generative model for a
rewrite under the reader's profile. When the model is unavailable the
deterministic transformation engine produces the result instead and the
metadata is marked ``fallback: true``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

from cogniweave.core.llm.client import GenerationResult, GenerativeClient
from cogniweave.core.llm.provider import ExternalServiceFailure
from cogniweave.domains.accessibility.domain_logic.profile_models import (
    InvalidConfiguration,
    TransformConfig,
    resolve_profile,
)
from cogniweave.domains.accessibility.domain_logic.text_metrics import (
    analyze_essay_structure,
    count_words,
)
from cogniweave.domains.accessibility.domain_logic.transformer import (
    ERROR_INVALID_CONFIGURATION,
    ProfileInput,
    elapsed,
    transform_text,
)
from cogniweave.domains.accessibility.prompts.instructions import (
    essay_instructions,
    essay_message,
    simplification_instructions,
    simplification_message,
)

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "local-fallback"

TEXT_MAX_TOKENS = 4000
TEXT_TEMPERATURE = 0.3
ESSAY_MAX_TOKENS = 6000
ESSAY_TEMPERATURE = 0.2


@dataclass
class SimplificationResult:
    status: Literal["success", "error"]
    original_text: str
    simplified_text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def fallback(self) -> bool:
        return bool(self.metadata.get("fallback"))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status, "originalText": self.original_text}
        if self.ok:
            data["simplifiedText"] = self.simplified_text
            data["metadata"] = self.metadata
        else:
            data["error"] = self.error
            data["errorType"] = self.error_type
        return data


@dataclass
class BatchSimplificationResult:
    results: list[dict[str, Any]]
    metadata: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"status": "success", "results": self.results, "batchMetadata": self.metadata}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _profile_used(config: TransformConfig) -> dict[str, Any]:
    return {
        "vocabularyLevel": config.vocabulary_level,
        "useAnalogies": config.use_analogies,
        "chunkingMaxLength": config.max_sentences if config.chunking_enabled else None,
    }


def _text_stats(original: str, simplified: str) -> dict[str, Any]:
    reduction = (len(original) - len(simplified)) / len(original) * 100 if original else 0.0
    return {
        "originalLength": len(original),
        "simplifiedLength": len(simplified),
        "originalWordCount": count_words(original),
        "simplifiedWordCount": count_words(simplified),
        "reductionRatio": f"{reduction:.1f}%",
    }


def _invalid(text: str, exc: InvalidConfiguration) -> SimplificationResult:
    return SimplificationResult(
        status="error",
        original_text=text,
        error=str(exc),
        error_type=ERROR_INVALID_CONFIGURATION,
    )


def _model_result(
    text: str, generated: GenerationResult, config: TransformConfig, start: float
) -> SimplificationResult:
    metadata: dict[str, Any] = {
        "model": generated.model,
        "fallback": False,
        "profileUsed": _profile_used(config),
        "textStats": _text_stats(text, generated.content),
        "processingTime": elapsed(start),
        "timestamp": _timestamp(),
    }
    if generated.truncated:
        metadata["truncated"] = True
    return SimplificationResult(
        status="success",
        original_text=text,
        simplified_text=generated.content,
        metadata=metadata,
    )


class TextSimplifier:
    """Simplifies text for a reader's profile.

    Args:
        client: Generative client used for model rewrites.
        batch_size: Segments simplified concurrently per group in a batch.
        batch_delay_s: Pause between batch groups.
        sleep: Awaitable used for the pause (replaced in tests).
    """

    def __init__(
        self,
        client: GenerativeClient,
        batch_size: int = 3,
        batch_delay_s: float = 0.5,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._batch_size = max(1, batch_size)
        self._batch_delay_s = batch_delay_s
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    def _fallback(
        self, text: str, config: TransformConfig, start: float, reason: str
    ) -> SimplificationResult:
        local = transform_text(text, config)
        if not local.ok:
            return SimplificationResult(
                status="error",
                original_text=text,
                error=local.error,
                error_type=local.error_type,
            )
        simplified = local.transformed_content
        return SimplificationResult(
            status="success",
            original_text=text,
            simplified_text=simplified,
            metadata={
                "model": FALLBACK_MODEL,
                "fallback": True,
                "fallbackReason": reason,
                "note": "Local transformation engine used; vocabulary, chunking and analogies only",
                "transformations": local.transformation_log,
                "profileUsed": _profile_used(config),
                "textStats": _text_stats(text, simplified),
                "processingTime": elapsed(start),
                "timestamp": _timestamp(),
            },
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def simplify_text(
        self,
        text: str,
        profile: ProfileInput,
        text_type: str = "academic content",
        specific_instructions: str = "",
    ) -> SimplificationResult:
        start = time.perf_counter()
        try:
            config = resolve_profile(profile)
        except InvalidConfiguration as exc:
            return _invalid(text, exc)

        try:
            generated = await self._client.complete_text(
                simplification_instructions(config, text_type),
                simplification_message(text, text_type, specific_instructions),
                max_tokens=TEXT_MAX_TOKENS,
                temperature=TEXT_TEMPERATURE,
            )
        except ExternalServiceFailure as exc:
            logger.warning("Simplification falling back to local engine: %s", exc)
            return self._fallback(text, config, start, str(exc))

        return _model_result(text, generated, config, start)

    async def simplify_essay(
        self,
        essay: str,
        profile: ProfileInput,
        essay_type: str = "academic essay",
        subject: str = "general topic",
    ) -> SimplificationResult:
        """Simplify a multi-paragraph essay, keeping its argument structure."""
        start = time.perf_counter()
        try:
            config = resolve_profile(profile)
        except InvalidConfiguration as exc:
            return _invalid(essay, exc)

        try:
            generated = await self._client.complete_text(
                essay_instructions(config),
                essay_message(essay, essay_type, subject),
                max_tokens=ESSAY_MAX_TOKENS,
                temperature=ESSAY_TEMPERATURE,
            )
        except ExternalServiceFailure as exc:
            logger.warning("Essay simplification falling back to local engine: %s", exc)
            result = self._fallback(essay, config, start, str(exc))
        else:
            result = _model_result(essay, generated, config, start)

        if result.ok:
            result.metadata["essayStructure"] = analyze_essay_structure(result.simplified_text)
        return result

    async def simplify_batch(
        self,
        segments: Sequence[Mapping[str, Any] | str],
        profile: ProfileInput,
        text_type: str = "academic content",
    ) -> BatchSimplificationResult:
        """Simplify segments in fixed-size concurrent groups.

        Segments are ``{"id", "text", "type"}`` mappings or plain strings.
        Results keep input order.
        """
        start = time.perf_counter()
        normalized = [
            {"id": f"segment_{i}", "text": s} if isinstance(s, str)
            else {"id": s.get("id") or f"segment_{i}", "text": s.get("text", ""), "type": s.get("type")}
            for i, s in enumerate(segments)
        ]

        results: list[dict[str, Any]] = []
        groups = [
            normalized[i:i + self._batch_size]
            for i in range(0, len(normalized), self._batch_size)
        ]
        for index, group in enumerate(groups):
            outcomes = await asyncio.gather(*(
                self.simplify_text(seg["text"], profile, text_type=seg.get("type") or text_type)
                for seg in group
            ))
            for seg, outcome in zip(group, outcomes):
                results.append({"segmentId": seg["id"], **outcome.to_dict()})
            if index < len(groups) - 1:
                await self._sleep(self._batch_delay_s)

        total_ms = (time.perf_counter() - start) * 1000
        succeeded = [r for r in results if r["status"] == "success"]
        metadata = {
            "totalSegments": len(results),
            "batchSize": self._batch_size,
            "batches": len(groups),
            "successfulTransformations": len(succeeded),
            "failedTransformations": len(results) - len(succeeded),
            "fallbackTransformations": sum(1 for r in succeeded if r["metadata"].get("fallback")),
            "totalProcessingTime": f"{round(total_ms)}ms",
            "averageProcessingTime": (
                f"{round(total_ms / len(results))}ms per segment" if results else "0ms per segment"
            ),
            "timestamp": _timestamp(),
        }
        logger.info(
            "Batch simplification: %d segments in %d groups", len(results), len(groups)
        )
        return BatchSimplificationResult(results=results, metadata=metadata)

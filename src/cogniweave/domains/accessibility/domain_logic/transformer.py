"""Transformation orchestrator for text and visual elements.

Text runs through three stages in a fixed order:

    vocabulary -> chunking -> analogies

Each stage is gated by the resolved ``TransformConfig`` and appends to a
single transformation log in that order. Every top-level call returns a
tagged result; failures never raise and always carry the original
content back to the caller.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from cogniweave.domains.accessibility.domain_logic.analogies import annotate_analogies
from cogniweave.domains.accessibility.domain_logic.chunking import chunk_paragraphs
from cogniweave.domains.accessibility.domain_logic.profile_models import (
    CognitiveProfile,
    InvalidConfiguration,
    TransformConfig,
    resolve_profile,
)
from cogniweave.domains.accessibility.domain_logic.visual_policy import (
    HIDE,
    KEEP,
    VisualAction,
    VisualElement,
    classify_visuals,
)
from cogniweave.domains.accessibility.domain_logic.vocabulary import simplify_vocabulary

logger = logging.getLogger(__name__)

ResultStatus = Literal["success", "error"]
ProfileInput = CognitiveProfile | TransformConfig | Mapping[str, Any]

ERROR_INVALID_CONFIGURATION = "invalid_configuration"
ERROR_INTERNAL = "internal_error"


def elapsed(start: float) -> str:
    return f"{round((time.perf_counter() - start) * 1000)}ms"


def error_type_for(exc: Exception) -> str:
    return ERROR_INVALID_CONFIGURATION if isinstance(exc, InvalidConfiguration) else ERROR_INTERNAL


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class TransformationResult:
    status: ResultStatus
    transformed_content: str
    transformation_log: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status,
            "transformedContent": self.transformed_content,
        }
        if self.ok:
            data["transformationLog"] = list(self.transformation_log)
            data["metadata"] = self.metadata
        else:
            data["error"] = self.error
            data["errorType"] = self.error_type
        return data


@dataclass
class VisualAnalysisResult:
    status: ResultStatus
    visual_actions: list[VisualAction] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def count(self, kind: str) -> int:
        """Count actions of one kind: ``hide``, ``fade`` or ``keep``."""
        if kind == "fade":
            return sum(1 for a in self.visual_actions if a.action.startswith("fade"))
        target = HIDE if kind == "hide" else KEEP
        return sum(1 for a in self.visual_actions if a.action == target)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status,
            "visualActions": [a.to_dict() for a in self.visual_actions],
        }
        if self.ok:
            data["metadata"] = self.metadata
        else:
            data["error"] = self.error
            data["errorType"] = self.error_type
        return data


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def apply_text_stages(content: str, config: TransformConfig) -> tuple[str, list[str], list[dict]]:
    """Run the gated text stages and return (content, log, annotations).

    Raises:
        InvalidConfiguration: If the chunking limit is not positive.
    """
    log: list[str] = []
    annotations: list[dict] = []
    transformed = content

    if config.vocabulary_level != "none":
        vocabulary = simplify_vocabulary(transformed, config.vocabulary_level)
        transformed = vocabulary.content
        log.extend(vocabulary.replacements)

    if config.chunking_enabled:
        chunked = chunk_paragraphs(transformed, config.max_sentences)
        transformed = chunked.content
        log.append(f"Chunked {chunked.chunks_created} paragraphs")

    if config.use_analogies:
        annotated = annotate_analogies(transformed)
        transformed = annotated.content
        log.extend(annotated.analogies)
        annotations = [a.to_dict() for a in annotated.annotations]

    return transformed, log, annotations


def transform_text(content: str, profile: ProfileInput) -> TransformationResult:
    """Apply a cognitive profile to plain text.

    Returns:
        A ``success`` result with the rewritten text, or an ``error``
        result carrying ``content`` unchanged.
    """
    start = time.perf_counter()
    try:
        config = resolve_profile(profile)
        transformed, log, annotations = apply_text_stages(content, config)
    except Exception as exc:
        if isinstance(exc, InvalidConfiguration):
            logger.warning("Text transformation rejected: %s", exc)
        else:
            logger.exception("Text transformation failed")
        return TransformationResult(
            status="error",
            transformed_content=content,
            error=str(exc),
            error_type=error_type_for(exc),
        )

    return TransformationResult(
        status="success",
        transformed_content=transformed,
        transformation_log=log,
        metadata={
            "originalLength": len(content),
            "transformedLength": len(transformed),
            "processingTime": elapsed(start),
            "transformations": list(log),
            "profile": config.summary(),
            "annotations": annotations,
        },
    )


# ---------------------------------------------------------------------------
# Visuals
# ---------------------------------------------------------------------------

def analyze_visuals(
    elements: Iterable[VisualElement | Mapping[str, Any]],
    profile: ProfileInput,
) -> VisualAnalysisResult:
    """Classify visual elements into keep / fade / hide actions."""
    start = time.perf_counter()
    try:
        config = resolve_profile(profile)
        actions = classify_visuals(list(elements), config)
    except Exception as exc:
        if isinstance(exc, InvalidConfiguration):
            logger.warning("Visual analysis rejected: %s", exc)
        else:
            logger.exception("Visual analysis failed")
        return VisualAnalysisResult(
            status="error", error=str(exc), error_type=error_type_for(exc)
        )

    result = VisualAnalysisResult(status="success", visual_actions=actions)
    metadata: dict[str, Any] = {
        "processingTime": elapsed(start),
        "filterEnabled": config.filter_enabled,
    }
    if config.filter_enabled:
        metadata.update({
            "sensitivity": config.sensitivity,
            "elementsProcessed": len(actions),
            "actionsHide": result.count("hide"),
            "actionsFade": result.count("fade"),
            "actionsKeep": result.count("keep"),
        })
    result.metadata = metadata
    return result

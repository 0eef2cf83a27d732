"""Demo sample loader: reads the YAML sample pack from disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

SAMPLES_PATH = Path(__file__).resolve().parent.parent / "samples" / "demo_samples.yaml"


@dataclass(frozen=True)
class DemoSamples:
    questionnaire: dict[str, str] = field(default_factory=dict)
    onboarding_responses: dict[str, dict[str, str]] = field(default_factory=dict)
    profiles: dict[str, dict[str, Any]] = field(default_factory=dict)
    content: dict[str, dict[str, Any]] = field(default_factory=dict)
    visual_elements: list[dict[str, Any]] = field(default_factory=list)

    def content_text(self, sample_id: str) -> str | None:
        entry = self.content.get(sample_id)
        return entry.get("original") if entry else None


def load_samples_file(path: Path) -> DemoSamples:
    """Parse a YAML sample pack into ``DemoSamples``."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    samples = DemoSamples(
        questionnaire=data.get("questionnaire", {}),
        onboarding_responses=data.get("onboarding_responses", {}),
        profiles=data.get("profiles", {}),
        content=data.get("content", {}),
        visual_elements=data.get("visual_elements", []),
    )
    logger.info(
        "Loaded demo samples: %d answer sets, %d profiles, %d content items",
        len(samples.onboarding_responses),
        len(samples.profiles),
        len(samples.content),
    )
    return samples


@lru_cache(maxsize=1)
def load_samples() -> DemoSamples:
    return load_samples_file(SAMPLES_PATH)

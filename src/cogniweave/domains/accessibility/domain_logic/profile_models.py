"""Cognitive profile schema, domain constants and the profile resolver.

The JSON contract uses camelCase keys (``maxLength``,
``simplificationLevel``); Python code uses the snake_case attribute names.
Profiles are frozen: no transformation ever mutates one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

ChunkingStrategy = Literal["sentence_limit", "none"]
SimplificationLevel = Literal["none", "basic", "intermediate", "advanced"]
Sensitivity = Literal["low", "medium", "high"]
SummaryState = Literal["collapsed", "expanded"]

# ---------------------------------------------------------------------------
# Defaults (shared by the resolver and the heuristic profile fallback)
# ---------------------------------------------------------------------------

DEFAULT_MAX_SENTENCES = 4
DEFAULT_VOCABULARY_LEVEL: SimplificationLevel = "intermediate"
DEFAULT_SUMMARY_LENGTH = 25
DEFAULT_SENSITIVITY: Sensitivity = "medium"

MAX_SENTENCES_CEILING = 10


class InvalidConfiguration(ValueError):
    """Raised for malformed profile fields or invalid engine parameters."""


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class _ProfileModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ChunkingSettings(_ProfileModel):
    strategy: ChunkingStrategy
    max_length: int | None = Field(default=None, ge=1, le=MAX_SENTENCES_CEILING)

    @model_validator(mode="after")
    def _require_max_length(self) -> ChunkingSettings:
        if self.strategy == "sentence_limit" and self.max_length is None:
            raise ValueError("maxLength is required when strategy is 'sentence_limit'")
        return self


class VocabularySettings(_ProfileModel):
    simplification_level: SimplificationLevel


class TextSettings(_ProfileModel):
    chunking: ChunkingSettings = Field(
        default_factory=lambda: ChunkingSettings(
            strategy="sentence_limit", max_length=DEFAULT_MAX_SENTENCES
        )
    )
    vocabulary: VocabularySettings = Field(
        default_factory=lambda: VocabularySettings(
            simplification_level=DEFAULT_VOCABULARY_LEVEL
        )
    )


class SummarizationSettings(_ProfileModel):
    default_state: SummaryState
    summary_length: int = Field(ge=5, le=75)


class SimplificationSettings(_ProfileModel):
    use_analogies: bool = False
    summarization: SummarizationSettings = Field(
        default_factory=lambda: SummarizationSettings(
            default_state="expanded", summary_length=DEFAULT_SUMMARY_LENGTH
        )
    )


class DistractionFilterSettings(_ProfileModel):
    enabled: bool
    sensitivity: Sensitivity


class VisualSettings(_ProfileModel):
    distraction_filter: DistractionFilterSettings = Field(
        default_factory=lambda: DistractionFilterSettings(
            enabled=False, sensitivity=DEFAULT_SENSITIVITY
        )
    )


class ProfileMetadata(_ProfileModel):
    """Provenance only; never read by transformation logic."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow"
    )

    created_at: str | None = None
    updated_at: str | None = None
    version: str | None = None
    generated_by: str | None = None


class DisplayPreferences(_ProfileModel):
    font_size: int = 16
    line_height: float = 1.5
    color_scheme: str = "default"


class CognitiveProfile(_ProfileModel):
    """A reader's accessibility preferences for text and visuals."""

    text: TextSettings = Field(default_factory=TextSettings)
    simplification: SimplificationSettings = Field(default_factory=SimplificationSettings)
    visuals: VisualSettings = Field(default_factory=VisualSettings)
    metadata: ProfileMetadata | None = None
    preferences: DisplayPreferences | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON contract."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TransformConfig:
    """Fully resolved settings consumed by every transformation stage."""

    vocabulary_level: SimplificationLevel = DEFAULT_VOCABULARY_LEVEL
    chunking_enabled: bool = True
    max_sentences: int | None = DEFAULT_MAX_SENTENCES
    use_analogies: bool = False
    filter_enabled: bool = False
    sensitivity: Sensitivity = DEFAULT_SENSITIVITY

    def summary(self) -> dict[str, Any]:
        return {
            "chunkingMaxLength": self.max_sentences if self.chunking_enabled else None,
            "vocabularyLevel": self.vocabulary_level,
            "analogiesEnabled": self.use_analogies,
            "distractionFilter": {
                "enabled": self.filter_enabled,
                "sensitivity": self.sensitivity,
            },
        }


def parse_profile(data: CognitiveProfile | Mapping[str, Any]) -> CognitiveProfile:
    """Validate raw profile data into a ``CognitiveProfile``.

    Raises:
        InvalidConfiguration: If any field violates the schema.
    """
    if isinstance(data, CognitiveProfile):
        return data
    if not isinstance(data, Mapping):
        raise InvalidConfiguration(
            f"Profile must be a mapping, got {type(data).__name__}"
        )
    try:
        return CognitiveProfile.model_validate(dict(data))
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'profile'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidConfiguration(f"Invalid cognitive profile: {details}") from exc


def resolve_profile(
    profile: CognitiveProfile | TransformConfig | Mapping[str, Any],
) -> TransformConfig:
    """Resolve a profile (or raw profile JSON) into a ``TransformConfig``.

    This is the only place profile defaults are applied. ``maxLength`` is
    read only when the chunking strategy is ``sentence_limit``.
    """
    if isinstance(profile, TransformConfig):
        return profile

    parsed = parse_profile(profile)
    chunking = parsed.text.chunking
    chunking_enabled = chunking.strategy == "sentence_limit"
    distraction = parsed.visuals.distraction_filter

    return TransformConfig(
        vocabulary_level=parsed.text.vocabulary.simplification_level,
        chunking_enabled=chunking_enabled,
        max_sentences=chunking.max_length if chunking_enabled else None,
        use_analogies=parsed.simplification.use_analogies,
        filter_enabled=distraction.enabled,
        sensitivity=distraction.sensitivity,
    )

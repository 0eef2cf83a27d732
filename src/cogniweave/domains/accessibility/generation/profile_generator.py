"""Profile synthesis from onboarding answers.

The generative model is asked for a profile JSON object. Anything that
goes wrong on that path (provider failure, malformed JSON, a profile that
fails the schema) falls back to the keyword heuristics, so generation
always yields a valid profile.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from cogniweave.core.llm.client import GenerativeClient
from cogniweave.core.llm.provider import ExternalServiceFailure
from cogniweave.domains.accessibility.domain_logic.profile_heuristics import derive_profile
from cogniweave.domains.accessibility.domain_logic.profile_models import (
    CognitiveProfile,
    InvalidConfiguration,
    parse_profile,
)
from cogniweave.domains.accessibility.prompts.instructions import (
    profile_generation_instructions,
    profile_generation_message,
)

logger = logging.getLogger(__name__)

GENERATED_PROFILE_VERSION = "2.0"
DEFAULT_PREFERENCES = {"fontSize": 16, "lineHeight": 1.5, "colorScheme": "default"}

# Model output must spell out every setting; schema defaults do not apply to it
REQUIRED_FIELDS = (
    "text.chunking.strategy",
    "text.vocabulary.simplificationLevel",
    "simplification.useAnalogies",
    "simplification.summarization",
    "visuals.distractionFilter.enabled",
    "visuals.distractionFilter.sensitivity",
)


def _has_path(data: Mapping[str, Any], path: str) -> bool:
    node: Any = data
    for key in path.split("."):
        if not isinstance(node, Mapping) or key not in node:
            return False
        node = node[key]
    return True


def _require_blocks(data: Mapping[str, Any]) -> None:
    missing = [path for path in REQUIRED_FIELDS if not _has_path(data, path)]
    if missing:
        raise InvalidConfiguration(
            f"Model profile is missing required fields: {', '.join(missing)}"
        )


@dataclass
class ProfileGenerationResult:
    profile: CognitiveProfile
    fallback: bool = False
    fallback_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": "success",
            "profile": self.profile.to_dict(),
            "fallback": self.fallback,
        }
        if self.fallback_reason:
            data["fallbackReason"] = self.fallback_reason
        return data


class ProfileGenerator:
    """Builds cognitive profiles with the model, or heuristics as fallback."""

    def __init__(self, client: GenerativeClient) -> None:
        self._client = client

    def _stamp(self, data: dict[str, Any], model: str) -> dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        stamped = {k: v for k, v in data.items() if k not in ("metadata", "preferences")}
        stamped["metadata"] = {
            "createdAt": now,
            "updatedAt": now,
            "version": GENERATED_PROFILE_VERSION,
            "generatedBy": f"{self._client.provider_name}:{model}",
        }
        stamped["preferences"] = dict(DEFAULT_PREFERENCES)
        return stamped

    async def generate(self, answers: Mapping[str, Any] | None) -> ProfileGenerationResult:
        """Generate a profile; never raises for model or schema problems."""
        answers = answers if isinstance(answers, Mapping) else {}
        try:
            result = await self._client.complete_json(
                profile_generation_instructions(),
                profile_generation_message(answers),
                max_tokens=1024,
                temperature=0.3,
            )
            _require_blocks(result.data)
            profile = parse_profile(self._stamp(result.data, result.model))
        except (ExternalServiceFailure, InvalidConfiguration) as exc:
            logger.warning("Profile generation falling back to heuristics: %s", exc)
            return ProfileGenerationResult(
                profile=derive_profile(answers),
                fallback=True,
                fallback_reason=str(exc),
            )

        logger.info("Generated profile via %s", profile.metadata.generated_by)
        return ProfileGenerationResult(profile=profile)

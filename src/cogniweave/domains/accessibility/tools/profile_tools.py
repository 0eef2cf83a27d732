"""MCP tools for cognitive profiles: storage and generation."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from cogniweave.domains.accessibility.tools.common import (
    ERROR_NOT_FOUND,
    EXPECTED_ERRORS,
    envelope_for,
    error_envelope,
)

if TYPE_CHECKING:
    from cogniweave.core.storage.repository import ProfileRepository
    from cogniweave.domains.accessibility.generation.profile_generator import (
        ProfileGenerationResult,
        ProfileGenerator,
    )
    from cogniweave.domains.accessibility.resources.loader import DemoSamples

logger = logging.getLogger(__name__)


def register_profile_tools(
    mcp: FastMCP,
    repository: ProfileRepository,
    generator: ProfileGenerator,
    samples: DemoSamples,
) -> None:
    """Register profile storage and generation tools on the MCP server."""

    def _save(user_id: str, result: ProfileGenerationResult) -> dict[str, Any]:
        document = result.profile.to_dict()
        if repository.get_profile(user_id) is None:
            stored = repository.create_profile(user_id, document)
        else:
            stored = repository.update_profile(user_id, document)
        logger.info(
            "Stored profile for %s generated by %s",
            user_id, result.profile.metadata.generated_by,
        )
        return stored.to_dict()

    async def _generate(answers: dict[str, Any], user_id: str) -> str:
        result = await generator.generate(answers)
        payload = result.to_dict()
        payload["questionsAnswered"] = len(answers)
        if user_id:
            try:
                payload["stored"] = _save(user_id, result)
            except EXPECTED_ERRORS as exc:
                return envelope_for(exc)
        return json.dumps(payload)

    @mcp.tool
    async def get_profile(ctx: Context, user_id: str) -> str:
        """Return the stored cognitive profile for a user.

        Args:
            user_id: Identifier the profile was stored under.
        """
        stored = repository.get_profile(user_id)
        if stored is None:
            return error_envelope(ERROR_NOT_FOUND, f"No cognitive profile found for user {user_id}")
        return json.dumps({"status": "success", **stored.to_dict()})

    @mcp.tool
    async def create_profile(ctx: Context, user_id: str, profile: dict[str, Any]) -> str:
        """Store a new cognitive profile for a user.

        Args:
            user_id: Identifier to store the profile under.
            profile: Profile JSON (camelCase keys). Omitted blocks take defaults.
        """
        try:
            stored = repository.create_profile(user_id, profile)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        return json.dumps({"status": "created", **stored.to_dict()})

    @mcp.tool
    async def update_profile(ctx: Context, user_id: str, updates: dict[str, Any]) -> str:
        """Deep-merge partial settings onto a user's stored profile.

        Args:
            user_id: Identifier of the stored profile.
            updates: Partial profile JSON, e.g.
                ``{"visuals": {"distractionFilter": {"sensitivity": "high"}}}``.
        """
        try:
            stored = repository.update_profile(user_id, updates)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        return json.dumps({"status": "updated", **stored.to_dict()})

    @mcp.tool
    async def generate_profile(
        ctx: Context,
        answers: dict[str, Any],
        user_id: str = "",
    ) -> str:
        """Generate a cognitive profile from onboarding questionnaire answers.

        Uses the generative model when available and keyword heuristics
        otherwise; the result says which via ``fallback``.

        Args:
            answers: Answers keyed q1_reading_style, q2_distractions,
                q3_complex_topics, q4_learning_pace, q5_visual_preferences.
            user_id: When given, the generated profile is stored for this user.
        """
        return await _generate(answers, user_id)

    @mcp.tool
    async def generate_demo_profile(
        ctx: Context,
        demo_id: str = "alex-chen-adhd-dyslexia",
        user_id: str = "",
    ) -> str:
        """Generate a profile from one of the sample onboarding answer sets.

        Args:
            demo_id: Sample answer set id (see the samples://onboarding resource).
            user_id: When given, the generated profile is stored for this user.
        """
        answers = samples.onboarding_responses.get(demo_id)
        if answers is None:
            return error_envelope(
                ERROR_NOT_FOUND,
                f"Unknown demo profile {demo_id!r}",
                available=sorted(samples.onboarding_responses),
            )
        return await _generate(dict(answers), user_id)

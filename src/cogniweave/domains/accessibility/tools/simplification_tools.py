"""MCP tools for model-backed text simplification and comparison."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from cogniweave.domains.accessibility.domain_logic.profile_models import resolve_profile
from cogniweave.domains.accessibility.domain_logic.text_metrics import compare_texts as measure
from cogniweave.domains.accessibility.tools.common import (
    DEFAULT_SAMPLE_PROFILE,
    ERROR_INVALID_INPUT,
    EXPECTED_ERRORS,
    envelope_for,
    error_envelope,
    lookup_profile,
    lookup_sample,
)

if TYPE_CHECKING:
    from cogniweave.core.storage.repository import ProfileRepository
    from cogniweave.domains.accessibility.generation.text_simplifier import TextSimplifier
    from cogniweave.domains.accessibility.resources.loader import DemoSamples

logger = logging.getLogger(__name__)


def register_simplification_tools(
    mcp: FastMCP,
    repository: ProfileRepository,
    simplifier: TextSimplifier,
    samples: DemoSamples,
) -> None:
    """Register simplification tools on the MCP server."""

    @mcp.tool
    async def simplify_text(
        ctx: Context,
        text: str,
        profile: dict[str, Any] | None = None,
        user_id: str = "",
        text_type: str = "academic content",
        specific_instructions: str = "",
    ) -> str:
        """Rewrite text in plain language for a reader's profile.

        Falls back to the local transformation engine when the model is
        unavailable (``metadata.fallback`` is then true).

        Args:
            text: Text to simplify.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
            text_type: What the text is, e.g. "news article".
            specific_instructions: Extra guidance passed to the model.
        """
        if not text.strip():
            return error_envelope(ERROR_INVALID_INPUT, "text must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        result = await simplifier.simplify_text(
            text, resolved, text_type=text_type, specific_instructions=specific_instructions
        )
        return json.dumps(result.to_dict(), ensure_ascii=False)

    @mcp.tool
    async def simplify_sample(
        ctx: Context,
        sample_id: str = "quantumMechanics",
        profile_id: str = DEFAULT_SAMPLE_PROFILE,
        user_id: str = "",
    ) -> str:
        """Simplify one of the sample passages with a sample or stored profile.

        Args:
            sample_id: quantumMechanics, historyArticle or biologyConcept.
            profile_id: Sample profile to apply (see samples://profiles).
            user_id: Use this user's stored profile instead of a sample one.
        """
        try:
            content, resolved = lookup_sample(samples, repository, sample_id, profile_id, user_id)
        except EXPECTED_ERRORS as exc:
            logger.info("Sample simplification rejected: %s", exc)
            return envelope_for(exc)

        result = await simplifier.simplify_text(
            content, resolved, text_type="educational content"
        )
        payload = result.to_dict()
        payload["sample"] = {"id": sample_id, "originalContent": content}
        return json.dumps(payload, ensure_ascii=False)

    @mcp.tool
    async def simplify_essay(
        ctx: Context,
        essay: str,
        profile: dict[str, Any] | None = None,
        user_id: str = "",
        essay_type: str = "academic essay",
        subject: str = "general topic",
    ) -> str:
        """Simplify an essay while keeping its argument structure.

        Args:
            essay: Essay text; paragraphs separated by blank lines.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
            essay_type: e.g. "persuasive essay".
            subject: Topic of the essay.
        """
        if not essay.strip():
            return error_envelope(ERROR_INVALID_INPUT, "essay must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        result = await simplifier.simplify_essay(
            essay, resolved, essay_type=essay_type, subject=subject
        )
        return json.dumps(result.to_dict(), ensure_ascii=False)

    @mcp.tool
    async def simplify_batch(
        ctx: Context,
        segments: list[dict[str, Any] | str],
        profile: dict[str, Any] | None = None,
        user_id: str = "",
        text_type: str = "academic content",
    ) -> str:
        """Simplify several text segments, a few at a time.

        Args:
            segments: Plain strings or objects with text, optional id and type.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
            text_type: Default content type for segments without one.
        """
        if not segments:
            return error_envelope(ERROR_INVALID_INPUT, "segments must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
            resolve_profile(resolved)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        result = await simplifier.simplify_batch(segments, resolved, text_type=text_type)
        return json.dumps(result.to_dict(), ensure_ascii=False)

    @mcp.tool
    async def compare_texts(
        ctx: Context,
        text: str,
        profile: dict[str, Any] | None = None,
        user_id: str = "",
        text_type: str = "academic content",
    ) -> str:
        """Simplify text and compare readability before and after.

        Args:
            text: Text to simplify and compare.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
            text_type: What the text is, e.g. "textbook chapter".
        """
        if not text.strip():
            return error_envelope(ERROR_INVALID_INPUT, "text must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
            config = resolve_profile(resolved)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)

        result = await simplifier.simplify_text(text, config, text_type=text_type)
        if not result.ok:
            return json.dumps(result.to_dict())
        return json.dumps(
            {
                "status": "success",
                "comparison": measure(text, result.simplified_text, config),
                "processingMetadata": result.metadata,
            },
            ensure_ascii=False,
        )

"""MCP tools for the deterministic transformation engine."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from cogniweave.domains.accessibility.domain_logic.page_transformer import (
    transform_page as run_page_transform,
)
from cogniweave.domains.accessibility.domain_logic.transformer import (
    analyze_visuals as run_visual_analysis,
    transform_text as run_text_transform,
)
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
    from cogniweave.domains.accessibility.resources.loader import DemoSamples

logger = logging.getLogger(__name__)


def register_transformation_tools(
    mcp: FastMCP,
    repository: ProfileRepository,
    samples: DemoSamples,
) -> None:
    """Register text, visual and page transformation tools on the MCP server."""

    @mcp.tool
    async def transform_text(
        ctx: Context,
        content: str,
        profile: dict[str, Any] | None = None,
        user_id: str = "",
    ) -> str:
        """Rewrite text for a reader: vocabulary, chunking and analogies.

        Args:
            content: Plain text; paragraphs separated by blank lines.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
        """
        if not content.strip():
            return error_envelope(ERROR_INVALID_INPUT, "content must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        return json.dumps(run_text_transform(content, resolved).to_dict(), ensure_ascii=False)

    @mcp.tool
    async def analyze_visuals(
        ctx: Context,
        elements: list[dict[str, Any]],
        profile: dict[str, Any] | None = None,
        user_id: str = "",
    ) -> str:
        """Decide keep / fade / hide for classified page elements.

        Args:
            elements: Items with id, type, semanticContext, optional position
                and size.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
        """
        try:
            resolved = lookup_profile(repository, profile, user_id)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        return json.dumps(run_visual_analysis(elements, resolved).to_dict())

    @mcp.tool
    async def transform_page(
        ctx: Context,
        html: str,
        profile: dict[str, Any] | None = None,
        user_id: str = "",
    ) -> str:
        """Transform a whole HTML page: text blocks and visual elements.

        Args:
            html: Page markup.
            profile: Cognitive profile JSON. Takes precedence over user_id.
            user_id: Use this user's stored profile when no profile is given.
        """
        if not html.strip():
            return error_envelope(ERROR_INVALID_INPUT, "html must not be empty")
        try:
            resolved = lookup_profile(repository, profile, user_id)
        except EXPECTED_ERRORS as exc:
            return envelope_for(exc)
        return json.dumps(run_page_transform(html, resolved).to_dict(), ensure_ascii=False)

    @mcp.tool
    async def transform_sample(
        ctx: Context,
        sample_id: str = "quantumMechanics",
        profile_id: str = DEFAULT_SAMPLE_PROFILE,
        user_id: str = "",
    ) -> str:
        """Transform one of the sample passages with a sample or stored profile.

        Args:
            sample_id: quantumMechanics, historyArticle or biologyConcept.
            profile_id: Sample profile to apply (see samples://profiles).
            user_id: Use this user's stored profile instead of a sample one.
        """
        try:
            content, resolved = lookup_sample(samples, repository, sample_id, profile_id, user_id)
        except EXPECTED_ERRORS as exc:
            logger.info("Sample transform rejected: %s", exc)
            return envelope_for(exc)

        result = run_text_transform(content, resolved).to_dict()
        result["sample"] = {"id": sample_id, "originalContent": content}
        return json.dumps(result, ensure_ascii=False)

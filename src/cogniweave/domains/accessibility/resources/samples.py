"""MCP Resources for demo sample discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from cogniweave.domains.accessibility.resources.loader import DemoSamples


def register_sample_resources(mcp: FastMCP, samples: DemoSamples) -> None:
    """Register demo sample resources on the MCP server."""

    @mcp.resource("samples://onboarding")
    def onboarding_samples_resource() -> str:
        """Sample onboarding answers and the questionnaire they answer."""
        return json.dumps(
            {
                "questionnaire": samples.questionnaire,
                "sampleResponses": samples.onboarding_responses,
                "usage": "Pass any answer set to generate_profile to build a profile",
            },
            indent=2,
        )

    @mcp.resource("samples://profiles")
    def profile_samples_resource() -> str:
        """Ready-made cognitive profiles for demos."""
        return json.dumps({"profiles": samples.profiles}, indent=2)

    @mcp.resource("samples://content")
    def content_samples_resource() -> str:
        """Complex reading passages to transform or simplify."""
        return json.dumps(
            {
                "content": {
                    sample_id: {
                        **entry,
                        "wordCount": len(entry.get("original", "").split()),
                    }
                    for sample_id, entry in samples.content.items()
                }
            },
            indent=2,
            ensure_ascii=False,
        )

    @mcp.resource("samples://visual-elements")
    def visual_element_samples_resource() -> str:
        """Classified page elements for distraction-filter demos."""
        return json.dumps({"visualElements": samples.visual_elements}, indent=2)

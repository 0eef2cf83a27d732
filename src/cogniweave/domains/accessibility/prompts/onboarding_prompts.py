"""MCP Prompts: onboarding and reading-support interaction templates."""

from __future__ import annotations

from fastmcp import FastMCP

from cogniweave.domains.accessibility.resources.loader import DemoSamples


def register_onboarding_prompts(mcp: FastMCP, samples: DemoSamples) -> None:
    """Register accessibility MCP prompts."""

    @mcp.prompt()
    def onboarding_questionnaire_prompt() -> str:
        """Walk a new reader through the onboarding questionnaire."""
        questions = "\n".join(
            f"{i}. {text} (answer key: {key})"
            for i, (key, text) in enumerate(samples.questionnaire.items(), start=1)
        )
        return f"""I'd like to set up my reading profile. Please ask me these questions one at a time:

{questions}

When I've answered all of them, call generate_profile with my answers keyed \
as shown, and explain in plain words what the resulting profile will change \
about the text I read."""

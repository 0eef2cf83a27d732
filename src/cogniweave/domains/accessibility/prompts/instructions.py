"""Instruction builders: profile settings -> generative model prompts.

System instructions are a pure function of the resolved profile, so the
same profile always produces the same instruction prefix.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from cogniweave.domains.accessibility.domain_logic.profile_models import (
    DEFAULT_MAX_SENTENCES,
    TransformConfig,
)
from cogniweave.domains.accessibility.domain_logic.text_metrics import estimate_reading_level

PROFILE_SCHEMA = """\
{
  "text": {
    "chunking": {
      "strategy": "sentence_limit | none",
      "maxLength": "integer 1-10 (sentences per paragraph)"
    },
    "vocabulary": {
      "simplificationLevel": "none | basic | intermediate | advanced"
    }
  },
  "simplification": {
    "useAnalogies": "boolean",
    "summarization": {
      "defaultState": "collapsed | expanded",
      "summaryLength": "integer 5-75 (percent of the original)"
    }
  },
  "visuals": {
    "distractionFilter": {
      "enabled": "boolean",
      "sensitivity": "low | medium | high"
    }
  }
}"""

_VOCABULARY_GUIDANCE = {
    "basic": [
        "Replace complex academic terms with everyday language",
        "Use common words that most people know",
        "Explain any technical terms that must remain",
    ],
    "intermediate": [
        "Use moderately complex vocabulary but avoid jargon",
        "Explain technical terms when first introduced",
        "Balance accessibility with precision",
    ],
    "advanced": [
        "Maintain technical accuracy while improving clarity",
        "Define complex terms in context",
        "Use precise language appropriate for the subject",
    ],
}

_ESSAY_REQUIREMENTS = [
    "Preserve the essay's argument structure and flow",
    "Maintain a clear introduction, body paragraphs and conclusion",
    "Keep the thesis statement clear and prominent",
    "Preserve logical transitions between paragraphs",
    "Keep supporting evidence and examples",
    "Simplify the text around quotes or citations, not the quotes themselves",
]


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def profile_generation_instructions() -> str:
    """Instructions for synthesizing a profile from onboarding answers."""
    return (
        "## Task\n"
        "Analyze the reader's answers to a short onboarding questionnaire and "
        "produce their cognitive profile as a single JSON object. The "
        "parameters must be specific and actionable: text structure, "
        "simplification and visual distraction management.\n\n"
        f"## JSON Schema\n```json\n{PROFILE_SCHEMA}\n```\n\n"
        "## Output Format\n"
        "Return ONLY the JSON object. No commentary, no Markdown."
    )


def profile_generation_message(answers: Mapping[str, Any]) -> str:
    return f"## Questionnaire Answers\n```json\n{json.dumps(dict(answers), indent=2, default=str)}\n```"


def simplification_instructions(config: TransformConfig, text_type: str = "general") -> str:
    """System instructions for rewriting text under a resolved profile."""
    level = config.vocabulary_level if config.vocabulary_level != "none" else "advanced"
    max_sentences = config.max_sentences or DEFAULT_MAX_SENTENCES
    parts: list[str] = []

    parts.append(
        "## Cognitive Profile\n"
        + _bullets([
            f"Vocabulary level: {config.vocabulary_level}",
            f"Maximum {max_sentences} sentences per paragraph",
            "Use analogies: " + ("yes" if config.use_analogies else "no"),
            f"Content type: {text_type}",
        ])
    )

    guidance = _VOCABULARY_GUIDANCE[level] + [
        f"Aim for a {estimate_reading_level(level)} reading level"
    ]
    parts.append(f"## Vocabulary\n{_bullets(guidance)}")

    parts.append(
        "## Sentence and Paragraph Structure\n"
        + _bullets([
            f"Keep paragraphs to {max_sentences} sentences maximum",
            "Break long, complex sentences into shorter ones",
            "Use transition words to keep the flow between ideas",
            "Separate paragraphs with a blank line",
        ])
    )

    if config.use_analogies:
        parts.append(
            "## Analogies and Examples\n"
            + _bullets([
                "Explain abstract concepts with familiar, real-world analogies",
                "Keep analogies accurate; do not oversimplify",
            ])
        )
    else:
        parts.append("## Analogies and Examples\nDo not add analogies; explain directly.")

    parts.append(
        "## Output Format\nReturn ONLY the simplified text, with no commentary or explanation."
    )
    return "\n\n".join(parts)


def essay_instructions(config: TransformConfig) -> str:
    return (
        simplification_instructions(config, text_type="essay")
        + f"\n\n## Essay Requirements\n{_bullets(_ESSAY_REQUIREMENTS)}"
    )


def simplification_message(
    text: str,
    text_type: str = "academic content",
    specific_instructions: str = "",
) -> str:
    parts = [
        f"Transform the following {text_type} into accessible, easy-to-understand "
        "text while preserving all important information and concepts.",
        f"## Original Text\n{text}",
    ]
    if specific_instructions:
        parts.append(f"## Additional Instructions\n{specific_instructions}")
    return "\n\n".join(parts)


def essay_message(essay: str, essay_type: str = "academic essay", subject: str = "general topic") -> str:
    return (
        f"Transform the following {essay_type} about {subject} into clear, accessible "
        "prose while keeping its argumentative structure and all key points.\n\n"
        f"## Original Essay\n{essay}"
    )

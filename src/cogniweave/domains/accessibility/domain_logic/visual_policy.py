"""Distraction filtering: visual element model and the action policy table.

The policy is data. A decision is looked up in this order:

1. Protected contexts (essential content) are always kept visible.
2. ``CONTEXT_POLICY`` keyed by semantic context, then sensitivity.
3. ``POSITION_POLICY`` keyed by layout position, then sensitivity.
4. Everything else is kept visible.

Adding a semantic context or a sensitivity tier is a table edit.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cogniweave.domains.accessibility.domain_logic.profile_models import (
    CognitiveProfile,
    InvalidConfiguration,
    Sensitivity,
    TransformConfig,
    resolve_profile,
)

ElementType = Literal["image", "video", "iframe", "aside", "advertisement"]
Position = Literal["header", "sidebar", "footer", "main", "inline"]

KEEP = "keep_visible"
HIDE = "hide"
FADE_20 = "fade_to_20_percent_opacity"
FADE_30 = "fade_to_30_percent_opacity"
FADE_40 = "fade_to_40_percent_opacity"
FADE_50 = "fade_to_50_percent_opacity"

VisualActionName = Literal[
    "keep_visible",
    "hide",
    "fade_to_20_percent_opacity",
    "fade_to_30_percent_opacity",
    "fade_to_40_percent_opacity",
    "fade_to_50_percent_opacity",
]

# Opacity applied by each fade action
FADE_OPACITY: Mapping[str, float] = {
    FADE_20: 0.2,
    FADE_30: 0.3,
    FADE_40: 0.4,
    FADE_50: 0.5,
}

# ---------------------------------------------------------------------------
# Policy tables
# ---------------------------------------------------------------------------

# Essential content is never hidden or faded, whatever the sensitivity.
PROTECTED_CONTEXTS = frozenset({"main_article_figure", "educational_content"})

_PROMOTIONAL = {"high": HIDE, "medium": FADE_30, "low": FADE_30}

CONTEXT_POLICY: Mapping[str, Mapping[str, str]] = {
    "sidebar_advertisement": _PROMOTIONAL,
    "popup_advertisement": _PROMOTIONAL,
    "newsletter_signup": _PROMOTIONAL,
    "decorative_stock_photo": {"high": FADE_20, "medium": FADE_50, "low": KEEP},
}

POSITION_POLICY: Mapping[str, Mapping[str, str]] = {
    "sidebar": {"high": FADE_40, "medium": KEEP, "low": KEEP},
}

_REASONING: Mapping[str, str] = {
    "protected": "Kept visible - essential {context}",
    KEEP: "Kept visible - {context} is not a distraction at {sensitivity} sensitivity",
    HIDE: "Hidden due to {sensitivity} sensitivity to {context}",
    FADE_20: "Faded to reduce visual distraction from {context}",
    FADE_30: "Moderately faded - {context} with {sensitivity} sensitivity",
    FADE_40: "Lightly faded - {position} content with {sensitivity} sensitivity",
    FADE_50: "Reduced opacity - decorative content with {sensitivity} sensitivity",
}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ElementSize(BaseModel):
    width: float | None = None
    height: float | None = None


class VisualElement(BaseModel):
    """One visual entity on a page, as classified by upstream extraction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    type: ElementType
    semantic_context: str = Field(min_length=1)
    position: Position | None = None
    size: ElementSize | None = None


@dataclass(frozen=True)
class VisualAction:
    id: str
    action: str
    reasoning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "action": self.action}
        if self.reasoning is not None:
            data["reasoning"] = self.reasoning
        return data


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------

def decide_action(
    semantic_context: str,
    sensitivity: Sensitivity,
    position: str | None = None,
) -> str:
    """Map (context, sensitivity, position) to an action name."""
    if semantic_context in PROTECTED_CONTEXTS:
        return KEEP
    by_context = CONTEXT_POLICY.get(semantic_context)
    if by_context is not None:
        return by_context.get(sensitivity, KEEP)
    by_position = POSITION_POLICY.get(position or "")
    if by_position is not None:
        return by_position.get(sensitivity, KEEP)
    return KEEP


def action_reasoning(
    element: VisualElement, action: str, sensitivity: Sensitivity
) -> str:
    key = "protected" if element.semantic_context in PROTECTED_CONTEXTS else action
    template = _REASONING.get(key, "{action} applied to {context}")
    return template.format(
        action=action,
        context=element.semantic_context,
        position=element.position or "inline",
        sensitivity=sensitivity,
    )


def parse_elements(elements: Iterable[VisualElement | Mapping[str, Any]]) -> list[VisualElement]:
    """Validate raw element dicts (``semanticContext`` or ``semantic_context``).

    Raises:
        InvalidConfiguration: If an element is malformed.
    """
    parsed: list[VisualElement] = []
    for index, element in enumerate(elements):
        if isinstance(element, VisualElement):
            parsed.append(element)
            continue
        try:
            parsed.append(VisualElement.model_validate(element))
        except ValueError as exc:
            raise InvalidConfiguration(f"Invalid visual element at index {index}: {exc}") from exc
    return parsed


def classify_visuals(
    elements: Iterable[VisualElement | Mapping[str, Any]],
    profile: CognitiveProfile | TransformConfig | Mapping[str, Any],
) -> list[VisualAction]:
    """Return one action per element, in input order.

    With the filter disabled every element is kept and no reasoning is
    computed.
    """
    config = resolve_profile(profile)
    sensitivity = config.sensitivity
    parsed = parse_elements(elements)
    if not config.filter_enabled:
        return [VisualAction(id=e.id, action=KEEP) for e in parsed]

    actions: list[VisualAction] = []
    for element in parsed:
        action = decide_action(element.semantic_context, sensitivity, element.position)
        actions.append(
            VisualAction(
                id=element.id,
                action=action,
                reasoning=action_reasoning(element, action, sensitivity),
            )
        )
    return actions

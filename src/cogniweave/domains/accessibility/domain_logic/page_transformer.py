"""Whole-page transformation: text blocks plus visual distraction filtering.

Text-bearing blocks (paragraphs, headings, list items ...) are rewritten
with the text stages. Blocks holding inline markup have each text run
rewritten in place and are never chunked. A plain-text paragraph that
gets chunked is replaced by one ``<p class="chunked-paragraph">`` per
chunk; other blocks are never chunked. Visual elements (images, iframes,
video, asides) are classified from their markup and the resulting
actions are applied as inline styles.

Untouched nodes are left byte-for-byte as they were parsed.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Literal

from cogniweave.core.markup.tree import RAW_TEXT_ELEMENTS, Element, Text, parse_html
from cogniweave.domains.accessibility.domain_logic.analogies import annotate_analogies
from cogniweave.domains.accessibility.domain_logic.lexicon import CONCEPT_ANALOGIES
from cogniweave.domains.accessibility.domain_logic.profile_models import (
    TransformConfig,
    resolve_profile,
)
from cogniweave.domains.accessibility.domain_logic.sentences import split_paragraphs
from cogniweave.domains.accessibility.domain_logic.transformer import (
    ProfileInput,
    apply_text_stages,
    elapsed,
    error_type_for,
)
from cogniweave.domains.accessibility.domain_logic.visual_policy import (
    FADE_OPACITY,
    HIDE,
    KEEP,
    VisualAction,
    classify_visuals,
)

logger = logging.getLogger(__name__)

TEXT_BLOCK_TAGS = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "figcaption", "dd")
CHUNKED_PARAGRAPH_CLASS = "chunked-paragraph"
ELEMENT_ID_ATTR = "data-element-id"

_VISUAL_TYPES = {"img": "image", "iframe": "iframe", "video": "video", "aside": "aside"}

# Whole-token match so "header", "load" or "shadow" never look like ads
_AD_TOKEN_RE = re.compile(
    r"(?:^|[^a-z0-9])(?:ad|ads|advert|advertisement|adserver|banner|sponsor|sponsored|promo)"
    r"(?:[^a-z0-9]|$)"
)
_AD_NETWORKS = ("doubleclick", "googlesyndication", "adservice")
_VIDEO_HOSTS = ("youtube", "vimeo")
_NEWSLETTER_HINTS = ("newsletter", "subscribe", "signup", "sign-up")


@dataclass
class PageTransformationResult:
    status: Literal["success", "error"]
    transformed_html: str
    visual_actions: list[VisualAction] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status, "transformedHtml": self.transformed_html}
        if self.ok:
            data["visualActions"] = [a.to_dict() for a in self.visual_actions]
            data["metadata"] = self.metadata
        else:
            data["error"] = self.error
            data["errorType"] = self.error_type
        return data


# ---------------------------------------------------------------------------
# Semantic context heuristics
# ---------------------------------------------------------------------------

def _hints(element: Element, *attrs: str) -> str:
    return " ".join((element.get(a) or "") for a in attrs).lower()


def _looks_like_ad(text: str) -> bool:
    return bool(_AD_TOKEN_RE.search(text)) or any(n in text for n in _AD_NETWORKS)


def element_position(element: Element) -> str:
    if element.closest("aside, .sidebar"):
        return "sidebar"
    if element.closest("header"):
        return "header"
    if element.closest("footer"):
        return "footer"
    if element.closest("article, main"):
        return "main"
    return "inline"


def classify_image(element: Element) -> str:
    if _looks_like_ad(_hints(element, "src", "class", "id")):
        return "sidebar_advertisement"
    alt = (element.get("alt") or "").lower()
    if "stock" in _hints(element, "src") or "decorative" in alt or "decorative" in _hints(element, "class"):
        return "decorative_stock_photo"
    if element.closest("article, figure") or "figure" in alt:
        return "main_article_figure"
    return "general_image"


def classify_iframe(element: Element) -> str:
    src = _hints(element, "src")
    if any(host in src for host in _VIDEO_HOSTS):
        return "educational_content"
    if _looks_like_ad(src):
        return "sidebar_advertisement"
    return "embedded_content"


def classify_video(element: Element) -> str:
    if element.closest("article, main, figure"):
        return "educational_content"
    return "embedded_content"


def classify_aside(element: Element) -> str:
    hints = _hints(element, "class", "id")
    if any(h in hints for h in _NEWSLETTER_HINTS):
        return "newsletter_signup"
    if _looks_like_ad(hints):
        return "sidebar_advertisement"
    return "sidebar_content"


_CLASSIFIERS = {
    "image": classify_image,
    "iframe": classify_iframe,
    "video": classify_video,
    "aside": classify_aside,
}


def _dimension(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value.strip().removesuffix("px"))
    except ValueError:
        return None


def extract_visual_elements(root: Element) -> list[tuple[Element, dict[str, Any]]]:
    """Pair each visual node with its element description, in document order."""
    counters: dict[str, int] = {}
    found: list[tuple[Element, dict[str, Any]]] = []
    for node in root.find_all(*_VISUAL_TYPES):
        kind = _VISUAL_TYPES[node.tag]
        index = counters.get(kind, 0)
        counters[kind] = index + 1
        description: dict[str, Any] = {
            "id": node.get("id") or node.get(ELEMENT_ID_ATTR) or f"{kind}-{index}",
            "type": kind,
            "semanticContext": _CLASSIFIERS[kind](node),
            "position": element_position(node),
        }
        width, height = _dimension(node.get("width")), _dimension(node.get("height"))
        if width is not None or height is not None:
            description["size"] = {"width": width, "height": height}
        found.append((node, description))
    return found


def apply_visual_action(element: Element, action: VisualAction) -> bool:
    """Apply one action as inline style. Returns False for ``keep_visible``."""
    if action.action == KEEP:
        return False
    if not element.get("id") and element.get(ELEMENT_ID_ATTR) is None:
        element.set(ELEMENT_ID_ATTR, action.id)
    if action.action == HIDE:
        element.set_style("display", "none")
    elif action.action in FADE_OPACITY:
        element.set_style("opacity", str(FADE_OPACITY[action.action]))
    return True


# ---------------------------------------------------------------------------
# Text blocks
# ---------------------------------------------------------------------------

# Nested blocks are rewritten on their own; script and style are never text
_RUN_BOUNDARIES = frozenset(TEXT_BLOCK_TAGS) | RAW_TEXT_ELEMENTS


def _text_runs(block: Element) -> list[Text]:
    return [node for node in block.text_nodes(skip=_RUN_BOUNDARIES) if node.text.strip()]


def _chunked_paragraphs(source: Element, chunks: list[str]) -> list[Element]:
    replacements = []
    for index, chunk in enumerate(chunks):
        paragraph = Element("p", source.attrs)
        if index:
            paragraph.attrs.pop("id", None)
        classes = [c for c in paragraph.classes if c != CHUNKED_PARAGRAPH_CLASS]
        paragraph.set("class", " ".join([*classes, CHUNKED_PARAGRAPH_CLASS]))
        paragraph.set_text(chunk)
        replacements.append(paragraph)
    return replacements


def _rewrite_runs(runs: list[Text], config: TransformConfig) -> bool:
    """Rewrite the text runs of a block that contains inline markup.

    Runs are never chunked. Each concept gets one analogy per block, on
    the first run that mentions it.
    """
    run_config = dataclasses.replace(
        config, chunking_enabled=False, max_sentences=None, use_analogies=False
    )
    pending = dict(CONCEPT_ANALOGIES) if config.use_analogies else {}
    changed = False
    for node in runs:
        original = node.text
        rewritten, _, _ = apply_text_stages(original, run_config)
        if pending:
            annotated = annotate_analogies(rewritten, pending)
            for annotation in annotated.annotations:
                pending.pop(annotation.concept, None)
            rewritten = annotated.content
        if rewritten != original:
            node.set_text(rewritten)
            changed = True
    return changed


def _rewrite_leaf(block: Element, config: TransformConfig) -> tuple[bool, bool]:
    """Rewrite a block holding only text. Returns (changed, chunked)."""
    # Source line breaks are not paragraph breaks in HTML
    text = " ".join(block.text_content().split())
    transformed, _, _ = apply_text_stages(text, config)
    if transformed == text:
        return False, False

    chunks = [c.strip() for c in split_paragraphs(transformed)[0] if c.strip()]
    if block.tag == "p" and len(chunks) > 1:
        block.replace_with(*_chunked_paragraphs(block, chunks))
        return True, True
    block.set_text(transformed)
    return True, False


def _transform_blocks(root: Element, config: TransformConfig) -> dict[str, int]:
    unchunked = dataclasses.replace(config, chunking_enabled=False, max_sentences=None)
    stats = {"textBlocks": 0, "textTransformations": 0, "chunkedParagraphs": 0}

    for block in root.find_all(*TEXT_BLOCK_TAGS):
        if block.has_element_children():
            runs = _text_runs(block)
            if not runs:
                continue
            stats["textBlocks"] += 1
            stats["textTransformations"] += _rewrite_runs(runs, config)
            continue

        if not block.text_content().strip():
            continue
        stats["textBlocks"] += 1
        changed, chunked = _rewrite_leaf(block, config if block.tag == "p" else unchunked)
        stats["textTransformations"] += changed
        stats["chunkedParagraphs"] += chunked
    return stats


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def transform_page(html_content: str, profile: ProfileInput) -> PageTransformationResult:
    """Apply a profile to an HTML page.

    Returns:
        A ``success`` result with the rewritten page and the visual
        actions taken, or an ``error`` result carrying the page unchanged.
    """
    start = time.perf_counter()
    try:
        config = resolve_profile(profile)
        document = parse_html(html_content)
        text_stats = _transform_blocks(document, config)

        visuals = extract_visual_elements(document)
        actions = classify_visuals([desc for _, desc in visuals], config)
        applied = sum(
            apply_visual_action(node, action)
            for (node, _), action in zip(visuals, actions)
        )
        transformed_html = document.serialize()
    except Exception as exc:
        logger.warning("Page transformation failed: %s", exc, exc_info=True)
        return PageTransformationResult(
            status="error",
            transformed_html=html_content,
            error=str(exc),
            error_type=error_type_for(exc),
        )

    return PageTransformationResult(
        status="success",
        transformed_html=transformed_html,
        visual_actions=actions,
        metadata={
            "processingTime": elapsed(start),
            **text_stats,
            "visualElements": len(actions),
            "visualTransformations": applied,
            "actionsHide": sum(1 for a in actions if a.action == HIDE),
            "actionsFade": sum(1 for a in actions if a.action in FADE_OPACITY),
            "actionsKeep": sum(1 for a in actions if a.action == KEEP),
            "profile": config.summary(),
        },
    )

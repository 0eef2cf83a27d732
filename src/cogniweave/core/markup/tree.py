"""Minimal mutable HTML tree on top of the standard-library tokenizer.

Parsing is lenient: unknown or unbalanced end tags are tolerated and
unclosed elements are closed at end of input. Untouched nodes serialize
back to their source text (start tags, entities and comments are kept
verbatim), so a document that is parsed and serialized without edits
round-trips unchanged. Edited elements are re-rendered from their
attributes.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Collection, Iterator
from html.parser import HTMLParser

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

_STYLE_DECL_RE = re.compile(r"\s*([^:;]+?)\s*:\s*([^;]*?)\s*(?:;|$)")


class MarkupError(Exception):
    """Raised when a tree edit is not possible."""


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class Node:
    parent: Element | None = None

    def serialize(self) -> str:
        raise NotImplementedError

    def replace_with(self, *nodes: Node) -> None:
        """Replace this node in its parent with ``nodes`` (in order)."""
        if self.parent is None:
            raise MarkupError("Cannot replace a detached node")
        parent = self.parent
        index = parent.children.index(self)
        for node in nodes:
            node.parent = parent
        parent.children[index:index + 1] = list(nodes)
        self.parent = None


class Text(Node):
    """Character data, stored in source (escaped) form."""

    def __init__(self, raw: str, parent: Element | None = None) -> None:
        self.raw = raw
        self.parent = parent

    @classmethod
    def from_plain(cls, text: str) -> Text:
        return cls(html.escape(text, quote=False))

    @property
    def text(self) -> str:
        if self.parent is not None and self.parent.tag in RAW_TEXT_ELEMENTS:
            return self.raw
        return html.unescape(self.raw)

    def set_text(self, text: str) -> None:
        self.raw = html.escape(text, quote=False)

    def serialize(self) -> str:
        return self.raw


class Markup(Node):
    """Comments, doctypes and processing instructions, kept verbatim."""

    def __init__(self, raw: str, parent: Element | None = None) -> None:
        self.raw = raw
        self.parent = parent

    def serialize(self) -> str:
        return self.raw


class Element(Node):
    def __init__(
        self,
        tag: str,
        attrs: dict[str, str | None] | None = None,
        parent: Element | None = None,
    ) -> None:
        self.tag = tag
        self.attrs: dict[str, str | None] = dict(attrs or {})
        self.children: list[Node] = []
        self.parent = parent
        self.source_start: str | None = None  # verbatim start tag while unedited
        self.self_closing = False
        self.closed = True

    def __repr__(self) -> str:
        return f"<Element {self.tag} attrs={self.attrs!r}>"

    # --- attributes -------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        value = self.attrs.get(name, default)
        return default if value is None else value

    def set(self, name: str, value: str | None) -> None:
        self.attrs[name] = value
        self.source_start = None

    @property
    def classes(self) -> list[str]:
        return (self.get("class") or "").split()

    def style(self) -> dict[str, str]:
        """Parse the inline ``style`` attribute into an ordered dict."""
        return {
            prop.lower(): value
            for prop, value in _STYLE_DECL_RE.findall(self.get("style") or "")
            if prop.strip()
        }

    def set_style(self, prop: str, value: str) -> None:
        declarations = self.style()
        declarations[prop.lower()] = value
        self.set("style", "; ".join(f"{k}: {v}" for k, v in declarations.items()))

    # --- children ---------------------------------------------------------

    def append(self, node: Node) -> None:
        node.parent = self
        self.children.append(node)

    def has_element_children(self) -> bool:
        return any(isinstance(child, Element) for child in self.children)

    def iter(self) -> Iterator[Element]:
        """Descendant elements in document order (excluding self)."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter()

    def text_nodes(self, skip: Collection[str] = ()) -> Iterator[Text]:
        """Descendant text nodes in document order, not entering ``skip`` tags."""
        for child in self.children:
            if isinstance(child, Text):
                yield child
            elif isinstance(child, Element) and child.tag not in skip:
                yield from child.text_nodes(skip)

    def find_all(
        self,
        *tags: str,
        predicate: Callable[[Element], bool] | None = None,
    ) -> list[Element]:
        wanted = {t.lower() for t in tags}
        return [
            el for el in self.iter()
            if (not wanted or el.tag in wanted) and (predicate is None or predicate(el))
        ]

    def find_by_id(self, element_id: str) -> Element | None:
        for el in self.iter():
            if el.get("id") == element_id:
                return el
        return None

    def matches(self, selector: str) -> bool:
        """Match a comma list of simple selectors: ``tag``, ``.cls``, ``tag.cls``."""
        for part in selector.split(","):
            tag, _, cls = part.strip().partition(".")
            if tag and tag.lower() != self.tag:
                continue
            if cls and cls not in self.classes:
                continue
            if tag or cls:
                return True
        return False

    def closest(self, selector: str) -> Element | None:
        """Nearest element, starting with self, that matches ``selector``."""
        node: Element | None = self
        while node is not None and not isinstance(node, Document):
            if node.matches(selector):
                return node
            node = node.parent
        return None

    # --- text -------------------------------------------------------------

    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.text)
            elif isinstance(child, Element):
                parts.append(child.text_content())
        return "".join(parts)

    def set_text(self, text: str) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        self.append(Text.from_plain(text))

    # --- output -----------------------------------------------------------

    def start_tag(self) -> str:
        if self.source_start is not None:
            return self.source_start
        parts = [self.tag]
        for name, value in self.attrs.items():
            if value is None:
                parts.append(name)
            else:
                parts.append(f'{name}="{html.escape(value, quote=True)}"')
        return "<" + " ".join(parts) + (" />" if self.self_closing else ">")

    def serialize(self) -> str:
        out = [self.start_tag()]
        if self.self_closing or self.tag in VOID_ELEMENTS:
            return out[0]
        out.extend(child.serialize() for child in self.children)
        if self.closed:
            out.append(f"</{self.tag}>")
        return "".join(out)


class Document(Element):
    """Root container; serializes as its children only."""

    def __init__(self) -> None:
        super().__init__("#document")

    def serialize(self) -> str:
        return "".join(child.serialize() for child in self.children)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.document = Document()
        self._stack: list[Element] = [self.document]

    @property
    def _current(self) -> Element:
        return self._stack[-1]

    def _add_text(self, raw: str) -> None:
        children = self._current.children
        if children and isinstance(children[-1], Text):
            children[-1].raw += raw
        else:
            self._current.append(Text(raw))

    def _open(self, tag: str, attrs: list[tuple[str, str | None]], self_closing: bool) -> None:
        element = Element(tag, dict(attrs))
        element.source_start = self.get_starttag_text()
        element.self_closing = self_closing
        self._current.append(element)
        if not self_closing and tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_starttag(self, tag, attrs):
        self._open(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag, attrs):
        self._open(tag, attrs, self_closing=True)

    def handle_endtag(self, tag):
        if tag in VOID_ELEMENTS:
            return
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                # Elements opened inside the matched one were never closed
                for unclosed in self._stack[depth + 1:]:
                    unclosed.closed = False
                del self._stack[depth:]
                return
        # Stray end tag with no open element: dropped

    def handle_data(self, data):
        self._add_text(data)

    def handle_entityref(self, name):
        self._add_text(f"&{name};")

    def handle_charref(self, name):
        self._add_text(f"&#{name};")

    def handle_comment(self, data):
        self._current.append(Markup(f"<!--{data}-->"))

    def handle_decl(self, decl):
        self._current.append(Markup(f"<!{decl}>"))

    def handle_pi(self, data):
        self._current.append(Markup(f"<?{data}>"))

    def unknown_decl(self, data):
        self._current.append(Markup(f"<![{data}]>"))

    def finish(self) -> Document:
        self.close()
        for unclosed in self._stack[1:]:
            unclosed.closed = False
        self._stack = [self.document]
        return self.document


def parse_html(markup: str) -> Document:
    """Parse an HTML document or fragment into a mutable tree."""
    builder = _TreeBuilder()
    builder.feed(markup)
    return builder.finish()


def serialize(node: Node) -> str:
    return node.serialize()

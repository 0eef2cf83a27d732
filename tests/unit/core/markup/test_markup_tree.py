"""Tests for the mutable HTML tree."""

from __future__ import annotations

import pytest

from cogniweave.core.markup.tree import Element, MarkupError, Text, parse_html


class TestRoundTrip:
    @pytest.mark.parametrize(
        "html",
        [
            "<p>Hello <b>world</b></p>",
            """<div class='a'  id=b><img src="x.png"/><br></div>""",
            "<p>Fish &amp; chips &#169; &#x263A;</p>",
            "<!DOCTYPE html><!-- comment --><p>x</p>",
            "<script>if (a < b && c) {}</script>",
            "plain text only",
        ],
    )
    def test_unedited_documents_serialize_verbatim(self, html):
        assert parse_html(html).serialize() == html

    def test_unclosed_elements_stay_unclosed(self):
        html = "<ul><li>one<li>two</ul>"
        assert parse_html(html).serialize() == html

    def test_stray_end_tag_dropped(self):
        assert parse_html("<p>x</p></span>").serialize() == "<p>x</p>"


class TestQueries:
    def test_find_all_and_predicate(self):
        doc = parse_html("<p>a</p><div><p><b>b</b></p></div>")
        assert len(doc.find_all("p")) == 2
        leaves = doc.find_all("p", predicate=lambda el: not el.has_element_children())
        assert [p.text_content() for p in leaves] == ["a"]

    def test_text_content_unescapes(self):
        doc = parse_html("<p>Fish &amp; <i>chips</i></p>")
        assert doc.find_all("p")[0].text_content() == "Fish & chips"

    def test_closest_and_matches(self):
        doc = parse_html('<div class="sidebar box"><span id="s">x</span></div>')
        span = doc.find_by_id("s")
        assert span.closest("aside, .sidebar").tag == "div"
        assert span.closest("span") is span
        assert span.closest("article") is None
        assert span.parent.matches("div.box")
        assert not span.parent.matches("div.missing")


class TestEdits:
    def test_set_attribute_rerenders_start_tag(self):
        doc = parse_html("<img src='a.png'>")
        img = doc.find_all("img")[0]
        img.set("alt", 'say "hi"')
        assert doc.serialize() == '<img src="a.png" alt="say &quot;hi&quot;">'

    def test_set_style_merges_declarations(self):
        doc = parse_html('<div style="color: red; opacity: 1">x</div>')
        div = doc.find_all("div")[0]
        div.set_style("opacity", "0.3")
        div.set_style("display", "none")
        assert div.get("style") == "color: red; opacity: 0.3; display: none"

    def test_set_text_escapes(self):
        doc = parse_html("<p><b>old</b></p>")
        doc.find_all("p")[0].set_text("a < b")
        assert doc.serialize() == "<p>a &lt; b</p>"

    def test_text_node_edit_keeps_siblings(self):
        doc = parse_html("<p>a &amp; <em>b</em> c<script>d</script></p>")
        runs = list(doc.find_all("p")[0].text_nodes(skip={"script"}))
        assert [r.text for r in runs] == ["a & ", "b", " c"]
        runs[2].set_text(" c < d")
        assert doc.serialize() == "<p>a &amp; <em>b</em> c &lt; d<script>d</script></p>"

    def test_replace_with_many(self):
        doc = parse_html("<div><p>x</p></div>")
        p = doc.find_all("p")[0]
        first, second = Element("p"), Element("p")
        first.append(Text.from_plain("1"))
        second.append(Text.from_plain("2"))
        p.replace_with(first, second)
        assert doc.serialize() == "<div><p>1</p><p>2</p></div>"
        assert first.parent.tag == "div"
        assert p.parent is None

    def test_replace_detached_node_fails(self):
        with pytest.raises(MarkupError):
            Element("p").replace_with(Element("p"))

"""Tests for whole-page transformation."""

from __future__ import annotations

from cogniweave.core.markup.tree import parse_html
from cogniweave.domains.accessibility.domain_logic.page_transformer import (
    classify_aside,
    classify_iframe,
    classify_image,
    element_position,
    extract_visual_elements,
    transform_page,
)

PAGE = (
    "<html><body><article>"
    '<p id="intro">One. Two. Three. Four.</p>'
    '<img src="/ads/banner.png">'
    "</article>"
    '<aside class="newsletter">Join us</aside>'
    "</body></html>"
)


def _first(html: str, tag: str):
    return parse_html(html).find_all(tag)[0]


class TestClassifiers:
    def test_ad_image(self):
        assert classify_image(_first('<img src="/ads/x.png">', "img")) == "sidebar_advertisement"

    def test_ad_tokens_are_whole_words(self):
        img = _first('<header><img src="/img/header-load.png"></header>', "img")
        assert classify_image(img) == "general_image"

    def test_stock_image(self):
        img = _first('<img src="/images/stock-office.jpg">', "img")
        assert classify_image(img) == "decorative_stock_photo"

    def test_article_figure(self):
        img = _first('<article><img src="/chart.png"></article>', "img")
        assert classify_image(img) == "main_article_figure"

    def test_iframes(self):
        assert classify_iframe(_first('<iframe src="https://www.youtube.com/embed/x">', "iframe")) == (
            "educational_content"
        )
        assert classify_iframe(_first('<iframe src="https://doubleclick.net/x">', "iframe")) == (
            "sidebar_advertisement"
        )
        assert classify_iframe(_first('<iframe src="https://maps.example">', "iframe")) == (
            "embedded_content"
        )

    def test_asides(self):
        assert classify_aside(_first('<aside id="subscribe-box"></aside>', "aside")) == "newsletter_signup"
        assert classify_aside(_first('<aside class="sponsored"></aside>', "aside")) == (
            "sidebar_advertisement"
        )
        assert classify_aside(_first("<aside></aside>", "aside")) == "sidebar_content"

    def test_positions(self):
        doc = parse_html(
            '<header><img id="a"></header><div class="sidebar"><img id="b"></div>'
            '<main><img id="c"></main><footer><img id="d"></footer><img id="e">'
        )
        positions = [element_position(doc.find_by_id(i)) for i in "abcde"]
        assert positions == ["header", "sidebar", "main", "footer", "inline"]


class TestExtractVisualElements:
    def test_generated_ids_and_sizes(self):
        doc = parse_html('<img width="300px" height="200"><img id="hero"><video></video>')
        descriptions = [d for _, d in extract_visual_elements(doc)]
        assert [d["id"] for d in descriptions] == ["image-0", "hero", "video-0"]
        assert descriptions[0]["size"] == {"width": 300.0, "height": 200.0}
        assert "size" not in descriptions[1]


class TestTransformPage:
    def test_untouched_page_round_trips(self, plain_profile):
        html = (
            '<!DOCTYPE html><html><head><meta charset="utf-8"></head>'
            "<body><p class=x>Hi &copy; there<br>line</p><!-- note --></body></html>"
        )
        result = transform_page(html, plain_profile)
        assert result.ok
        assert result.transformed_html == html

    def test_chunks_long_paragraph(self, profile_dict):
        result = transform_page(PAGE, profile_dict)
        assert result.ok
        assert (
            '<p id="intro" class="chunked-paragraph">One. Two. Three.</p>'
            '<p class="chunked-paragraph">Four.</p>'
        ) in result.transformed_html
        assert result.metadata["chunkedParagraphs"] == 1

    def test_hides_ads_and_newsletter(self, profile_dict):
        result = transform_page(PAGE, profile_dict)
        html = result.transformed_html
        assert '<img src="/ads/banner.png" data-element-id="image-0" style="display: none">' in html
        assert (
            '<aside class="newsletter" data-element-id="aside-0" style="display: none">Join us</aside>'
        ) in html
        assert [a.to_dict()["action"] for a in result.visual_actions] == ["hide", "hide"]
        assert result.metadata["actionsHide"] == 2
        assert result.metadata["visualTransformations"] == 2

    def test_fade_keeps_existing_style_and_id(self, profile_dict):
        html = '<img id="hero" style="border: 1px" src="/stock/team.jpg">'
        result = transform_page(html, profile_dict)
        assert result.transformed_html == (
            '<img id="hero" style="border: 1px; opacity: 0.2" src="/stock/team.jpg">'
        )
        assert result.visual_actions[0].id == "hero"

    def test_kept_elements_untouched(self, profile_dict):
        html = '<iframe src="https://www.youtube.com/embed/abc"></iframe>'
        result = transform_page(html, profile_dict)
        assert result.transformed_html == html
        assert result.metadata["actionsKeep"] == 1

    def test_headings_simplified_not_chunked(self, profile_dict):
        html = "<h2>The ubiquitous web. One. Two. Three.</h2>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == "<h2>The everywhere web. One. Two. Three.</h2>"

    def test_text_is_escaped_on_rewrite(self, profile_dict):
        html = "<p>Fundamental &lt;rules&gt;</p>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == "<p>Basic &lt;rules&gt;</p>"

    def test_invalid_profile_returns_page(self):
        bad = {"visuals": {"distractionFilter": {"enabled": True, "sensitivity": "max"}}}
        result = transform_page(PAGE, bad)
        assert not result.ok
        assert result.transformed_html == PAGE
        assert result.to_dict()["errorType"] == "invalid_configuration"

    def test_inline_markup_paragraph_rewrites_text_runs(self, profile_dict):
        html = "<p>The <em>big</em> ubiquitous proliferation of digital media.</p>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == "<p>The <em>big</em> everywhere spread of digital media.</p>"
        assert result.metadata["textBlocks"] == 1
        assert result.metadata["textTransformations"] == 1
        assert result.metadata["chunkedParagraphs"] == 0

    def test_inline_markup_paragraph_is_not_chunked(self, profile_dict):
        html = "<p>One. Two. <a href=/x>Three.</a> Four. Five.</p>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == html
        assert result.metadata["chunkedParagraphs"] == 0

    def test_analogy_added_once_per_mixed_block(self, profile_dict):
        html = "<p>Photosynthesis <b>matters</b> and photosynthesis feeds us.</p>"
        result = transform_page(html, profile_dict)
        paragraph = parse_html(result.transformed_html).find_all("p")[0]
        assert paragraph.text_content().count("plant's kitchen") == 1
        assert "<b>matters</b>" in result.transformed_html

    def test_nested_blocks_rewritten_once(self, profile_dict):
        html = "<blockquote>Ubiquitous <p>Fundamental <i>ideas</i></p></blockquote>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == (
            "<blockquote>Everywhere <p>Basic <i>ideas</i></p></blockquote>"
        )

    def test_source_line_breaks_do_not_chunk(self, profile_dict):
        html = "<p>Ubiquitous words.\n\nMore words.</p>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == "<p>Everywhere words. More words.</p>"
        assert result.metadata["chunkedParagraphs"] == 0

    def test_script_text_left_alone(self, profile_dict):
        html = "<li>Ubiquitous <script>var ubiquitous = 1;</script></li>"
        result = transform_page(html, profile_dict)
        assert result.transformed_html == "<li>Everywhere <script>var ubiquitous = 1;</script></li>"

"""
CardKit Renderer -- HTML Serialization Tests

render_html(node) turns an element tree into an HTML string.
Text and attribute values are escaped; None attributes and children are
skipped; void elements have no closing tag. Output is deterministic.
"""

import pytest

from cardkit.kernel.renderer import HtmlHost, escape, render_html
from cardkit.kernel.types import Element


class TestElements:
    def test_simple_element(self):
        assert render_html(Element("p", {}, ["hello"])) == "<p>hello</p>"

    def test_attributes_in_order(self):
        html = render_html(Element("a", {"href": "/x", "id": "y"}, ["go"]))
        assert html == '<a href="/x" id="y">go</a>'

    def test_nested(self):
        tree = Element("div", {"role": "article"}, [Element("h2", {}, [Element("a", {"href": "/a"}, ["T"])])])
        assert render_html(tree) == '<div role="article"><h2><a href="/a">T</a></h2></div>'

    def test_void_element(self):
        assert render_html(Element("img", {"src": "/a.png", "alt": ""})) == '<img src="/a.png" alt="">'

    def test_none_attribute_skipped(self):
        assert render_html(Element("p", {"id": None}, ["x"])) == "<p>x</p>"

    def test_boolean_attribute(self):
        assert render_html(Element("div", {"aria-hidden": True})) == '<div aria-hidden="true"></div>'

    def test_invalid_tag_rejected(self):
        with pytest.raises(ValueError):
            render_html(Element("not a tag"))

    def test_invalid_attribute_name_skipped(self):
        assert render_html(Element("p", {'bad"name': "x", "id": "ok"})) == '<p id="ok"></p>'


class TestEscaping:
    def test_text_escaped(self):
        assert render_html(Element("p", {}, ["<b>hi</b> & bye"])) == "<p>&lt;b&gt;hi&lt;/b&gt; &amp; bye</p>"

    def test_attribute_escaped(self):
        html = render_html(Element("p", {"title": 'a "b" & c'}))
        assert html == '<p title="a &quot;b&quot; &amp; c"></p>'

    def test_bare_text(self):
        assert render_html("a < b") == "a &lt; b"

    def test_escape_helper(self):
        assert escape('"x"') == "&quot;x&quot;"


class TestNodes:
    def test_none(self):
        assert render_html(None) == ""

    def test_list(self):
        assert render_html([Element("br"), "x", None]) == "<br>x"

    def test_number(self):
        assert render_html(Element("span", {}, [3])) == "<span>3</span>"


class TestDeterminism:
    def test_same_tree_same_html(self):
        tree = Element(
            "div",
            {"role": "article", "aria-labelledby": "a-title"},
            [Element("h2", {"id": "a-title"}, ["Title & more"])],
        )
        first = render_html(tree)
        for _ in range(100):
            assert render_html(tree) == first


class TestHtmlHost:
    def test_mount_by_name(self, host):
        card = host.mount("article_card", explicit_id="card1")
        assert card.identity.instance_id == "card1"

    def test_unknown_archetype(self, host):
        with pytest.raises(ValueError):
            host.mount("gallery")

    def test_suppressed_renders_empty_string(self, host):
        card = host.mount("article_card")
        assert host.render_to_string(card, None) == ""

    def test_unmount_releases_identity(self, host):
        card = host.mount("article_base")
        assert card in host.registry

        host.unmount(card)
        assert card not in host.registry

    def test_render_to_string(self, host, full_record):
        card = host.mount("article_card", explicit_id="card1")
        html = host.render_to_string(card, full_record)

        assert html.startswith(
            '<div role="article" aria-labelledby="card1-title" aria-describedby="card1-description">'
        )
        assert html.endswith("</div>")

    def test_locale_binds_labels(self, registry, full_record):
        host = HtmlHost(registry, locale="en")
        card = host.mount("article_card", explicit_id="card1")
        assert 'aria-label="Read article: Test Article Title"' in host.render_to_string(card, full_record)

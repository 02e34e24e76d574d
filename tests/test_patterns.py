"""Tests for readlater.extractors.patterns."""

from __future__ import annotations

import pytest

from readlater.extractors.patterns import (
    CONTENT_PATTERNS,
    NOISE_PATTERNS,
    NodePattern,
    parse_patterns,
)
from readlater.tree import find_first, parse_document


def _node(markup: str, tag: str):
    return find_first(parse_document(markup, parser="html.parser"), tag)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParse:
    def test_tag(self):
        assert NodePattern.parse("Article") == NodePattern(tag="article")

    def test_class(self):
        assert NodePattern.parse(".post-content") == NodePattern(class_name="post-content")

    def test_id(self):
        assert NodePattern.parse("#content") == NodePattern(element_id="content")

    def test_attribute_unquoted(self):
        assert NodePattern.parse("[role=main]") == NodePattern(attr_name="role", attr_value="main")

    def test_attribute_quoted(self):
        pattern = NodePattern.parse('[itemprop="articleBody"]')
        assert pattern.attr_name == "itemprop"
        assert pattern.attr_value == "articleBody"

    def test_tag_with_class(self):
        assert NodePattern.parse("div.content") == NodePattern(tag="div", class_name="content")

    @pytest.mark.parametrize("selector", ["", "   ", "div > p", ".a.b", "p:first-child", "[role]"])
    def test_unsupported_syntax_rejected(self, selector):
        with pytest.raises(ValueError, match="Unsupported node pattern"):
            NodePattern.parse(selector)

    @pytest.mark.parametrize("selector", ["nav", ".ads", "#sidebar", "div.content", '[role="main"]'])
    def test_str_parses_back(self, selector):
        pattern = NodePattern.parse(selector)
        assert NodePattern.parse(str(pattern)) == pattern

    def test_parse_patterns_keeps_order(self):
        patterns = parse_patterns(["main", ".a", "#b"])
        assert [str(p) for p in patterns] == ["main", ".a", "#b"]


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestMatches:
    def test_tag_match(self):
        assert NodePattern.parse("nav").matches(_node("<nav>x</nav>", "nav"))

    def test_tag_mismatch(self):
        assert not NodePattern.parse("nav").matches(_node("<div>x</div>", "div"))

    def test_class_is_token_match(self):
        pattern = NodePattern.parse(".ads")
        assert pattern.matches(_node("<div class='top ads'>x</div>", "div"))
        assert not pattern.matches(_node("<div class='badsomething'>x</div>", "div"))
        assert not pattern.matches(_node("<div class='ads-top'>x</div>", "div"))

    def test_id_exact_match(self):
        pattern = NodePattern.parse("#content")
        assert pattern.matches(_node("<div id='content'>x</div>", "div"))
        assert not pattern.matches(_node("<div id='content-2'>x</div>", "div"))

    def test_attribute_match(self):
        pattern = NodePattern.parse("[role=main]")
        assert pattern.matches(_node("<div role='main'>x</div>", "div"))
        assert not pattern.matches(_node("<div role='banner'>x</div>", "div"))
        assert not pattern.matches(_node("<div>x</div>", "div"))

    def test_tag_and_class_both_required(self):
        pattern = NodePattern.parse("div.content")
        assert pattern.matches(_node("<div class='content'>x</div>", "div"))
        assert not pattern.matches(_node("<section class='content'>x</section>", "section"))


# ---------------------------------------------------------------------------
# Built-in sets
# ---------------------------------------------------------------------------

class TestBuiltins:
    def test_role_main_has_top_priority(self):
        assert str(CONTENT_PATTERNS[0]) == '[role="main"]'

    def test_semantic_containers_precede_generic_content_class(self):
        order = [str(p) for p in CONTENT_PATTERNS]
        assert order.index("article") < order.index(".content")
        assert order.index("main") < order.index("#content")

    @pytest.mark.parametrize(
        "selector",
        ["script", "style", "nav", "header", "footer", ".advertisement", ".ads",
         ".social-share", ".comments", ".sidebar", ".menu", ".navigation"],
    )
    def test_noise_set_covers(self, selector):
        assert NodePattern.parse(selector) in NOISE_PATTERNS

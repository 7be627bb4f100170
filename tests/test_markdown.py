"""Tests for the individual markdown engine stages.

Trees are either parsed from small HTML snippets or built directly from
:class:`Element`/:class:`Text` when a test needs exact control over depth.
Deep chains are built in a loop; never compare them with ``==`` (dataclass
equality recurses).
"""

from __future__ import annotations

import pytest

from newsdigest.markdown.extractor import categorize, extract
from newsdigest.markdown.models import (
    DEFAULT_BUDGET,
    MAX_DEPTH_LIMIT,
    Element,
    ExtractionBudget,
    TagCategory,
    Text,
)
from newsdigest.markdown.noise import is_noise, strip_noise
from newsdigest.markdown.normalizer import normalize
from newsdigest.markdown.parser import (
    HtmlParseError,
    find_body,
    iter_elements,
    parse_html,
    text_content,
)


# ---------------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------------

def _body(html: str) -> Element:
    return find_body(parse_html(html))


def _render(html: str, budget: ExtractionBudget = DEFAULT_BUDGET) -> str:
    """Run the filter, extractor and normalizer over *html*'s body."""
    return normalize(extract(strip_noise(_body(html)), budget), budget)


def _chain(depth: int, leaf: Text, tag: str = "div") -> Element:
    """*depth* nested *tag* elements with *leaf* at the bottom."""
    node = Element(tag, children=(leaf,))
    for _ in range(depth - 1):
        node = Element(tag, children=(node,))
    return node


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestExtractionBudget:
    def test_defaults(self) -> None:
        budget = ExtractionBudget()
        assert budget.max_depth == 50
        assert budget.max_text_node_length == 10_000
        assert budget.max_code_block_length == 50_000
        assert budget.max_output_line_length == 50_000

    @pytest.mark.parametrize("value", [0, -1, True, "10", 2.5])
    def test_rejects_non_positive_or_non_int(self, value) -> None:
        with pytest.raises(ValueError):
            ExtractionBudget(max_text_node_length=value)

    def test_rejects_depth_over_limit(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            ExtractionBudget(max_depth=MAX_DEPTH_LIMIT + 1)

    def test_accepts_depth_at_limit(self) -> None:
        assert ExtractionBudget(max_depth=MAX_DEPTH_LIMIT).max_depth == MAX_DEPTH_LIMIT

    def test_with_overrides_ignores_none(self) -> None:
        budget = DEFAULT_BUDGET.with_overrides(max_depth=7, max_code_block_length=None)
        assert budget.max_depth == 7
        assert budget.max_code_block_length == DEFAULT_BUDGET.max_code_block_length
        assert DEFAULT_BUDGET.max_depth == 50

    def test_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_BUDGET.max_depth = 3  # type: ignore[misc]


class TestElement:
    def test_tag_is_lower_cased(self) -> None:
        assert Element("DIV").tag == "div"

    def test_attributes_are_read_only(self) -> None:
        element = Element("a", {"href": "https://x.com"})
        with pytest.raises(TypeError):
            element.attributes["href"] = "https://evil.com"  # type: ignore[index]

    def test_classes_and_get(self) -> None:
        element = Element("div", {"class": "post  featured", "id": "main"})
        assert element.classes == ["post", "featured"]
        assert element.get("id") == "main"
        assert element.get("missing") is None

    def test_children_coerced_to_tuple(self) -> None:
        element = Element("p", children=[Text("a")])  # type: ignore[arg-type]
        assert element.children == (Text("a"),)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TestParseHtml:
    def test_root_is_document(self) -> None:
        assert parse_html("<p>hi</p>").tag == "[document]"

    def test_find_body(self) -> None:
        body = _body("<html><head><title>T</title></head><body><p>x</p></body></html>")
        assert body.tag == "body"
        assert text_content(body) == "x"

    def test_find_body_falls_back_to_root(self) -> None:
        root = parse_html("<p>fragment</p>")
        assert find_body(root) is root

    def test_comments_and_doctype_are_not_text(self) -> None:
        root = parse_html("<!DOCTYPE html><p>a<!-- hidden -->b</p>")
        assert text_content(root) == "ab"

    def test_multi_valued_attributes_joined(self) -> None:
        root = parse_html('<div class="a b" ID="X">x</div>')
        div = next(el for el in iter_elements(root) if el.tag == "div")
        assert div.classes == ["a", "b"]
        assert div.get("id") == "X"

    def test_accepts_bytes(self) -> None:
        assert text_content(parse_html(b"<p>bytes</p>")) == "bytes"

    @pytest.mark.parametrize("bad", [None, 42, ["<p>x</p>"]])
    def test_rejects_non_markup(self, bad) -> None:
        with pytest.raises(HtmlParseError):
            parse_html(bad)

    def test_parse_error_is_value_error(self) -> None:
        assert issubclass(HtmlParseError, ValueError)

    def test_deep_nesting_does_not_recurse(self) -> None:
        depth = 3000
        root = parse_html("<div>" * depth + "bottom" + "</div>" * depth)
        assert sum(1 for el in iter_elements(root) if el.tag == "div") == depth
        assert text_content(root) == "bottom"

    def test_text_content_preserves_order(self) -> None:
        assert text_content(parse_html("<p>a<b>b</b>c</p>")) == "abc"


# ---------------------------------------------------------------------------
# Noise filter
# ---------------------------------------------------------------------------

class TestNoiseFilter:
    @pytest.mark.parametrize(
        "tag", ["script", "style", "noscript", "nav", "header", "footer", "aside"]
    )
    def test_noise_tags(self, tag: str) -> None:
        assert is_noise(Element(tag)) is True

    @pytest.mark.parametrize(
        "attrs",
        [
            {"class": "comments"},
            {"class": "post comment"},
            {"class": "Breadcrumb"},
            {"class": "navigation"},
            {"id": "comments"},
        ],
    )
    def test_noise_markers(self, attrs: dict) -> None:
        assert is_noise(Element("div", attrs)) is True

    def test_content_elements_are_not_noise(self) -> None:
        assert is_noise(Element("div", {"class": "commentary-free article"})) is False
        assert is_noise(Element("p")) is False

    def test_script_text_never_leaks(self) -> None:
        html = "<article><div><p>Keep <span><script>evil()</script></span> me</p></div></article>"
        output = _render(html)
        assert "evil" not in output
        assert output == "Keep me"

    def test_nested_nav_removed(self) -> None:
        html = '<main><p>Story</p><div><nav><a href="/x">Menu</a></nav></div></main>'
        assert _render(html) == "Story"

    def test_comment_section_removed(self) -> None:
        html = '<div><p>Article</p><section id="comments"><p>First!</p></section></div>'
        assert _render(html) == "Article"

    def test_returns_same_object_without_noise(self) -> None:
        root = parse_html("<div><p>clean</p></div>")
        assert strip_noise(root) is root

    def test_does_not_mutate_input(self) -> None:
        root = parse_html("<div><script>x()</script><p>y</p></div>")
        filtered = strip_noise(root)
        assert "x()" in text_content(root)
        assert "x()" not in text_content(filtered)

    def test_root_is_never_removed(self) -> None:
        root = Element("nav", children=(Text("kept"),))
        assert text_content(strip_noise(root)) == "kept"

    def test_shares_untouched_siblings(self) -> None:
        clean = Element("p", children=(Text("clean"),))
        root = Element("div", children=(clean, Element("script", children=(Text("x"),))))
        filtered = strip_noise(root)
        assert filtered.children == (clean,)
        assert filtered.children[0] is clean

    def test_deep_noise_is_removed_iteratively(self) -> None:
        bottom = Element("script", children=(Text("evil"),))
        node = Element("div", children=(bottom,))
        for _ in range(5000):
            node = Element("div", children=(node,))
        root = Element("body", children=(Text("ok"), node))
        assert text_content(strip_noise(root)) == "ok"


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------

class TestCategorize:
    @pytest.mark.parametrize(
        "element, expected",
        [
            (Element("h3"), TagCategory.HEADING),
            (Element("p"), TagCategory.PARAGRAPH),
            (Element("li"), TagCategory.LIST_ITEM),
            (Element("blockquote"), TagCategory.CONTAINER),
            (Element("a", {"href": "https://x.com"}), TagCategory.LINK),
            (Element("a"), TagCategory.OTHER),
            (Element("a", {"href": ""}), TagCategory.OTHER),
            (Element("code"), TagCategory.INLINE_CODE),
            (Element("pre"), TagCategory.CODE_BLOCK),
            (Element("table"), TagCategory.OTHER),
        ],
    )
    def test_categories(self, element: Element, expected: TagCategory) -> None:
        assert categorize(element) is expected


class TestExtract:
    def test_heading_levels(self) -> None:
        for level in range(1, 7):
            assert extract(_body(f"<h{level}>Title</h{level}>")) == (
                "\n" + "#" * level + " Title\n\n"
            )

    def test_heading_followed_by_blank_line(self) -> None:
        assert _render("<h2>Title</h2><p>Body</p>") == "## Title\n\nBody"

    def test_paragraph(self) -> None:
        assert extract(_body("<p>  Hello   </p>")) == "Hello\n\n"

    def test_empty_paragraph_contributes_nothing(self) -> None:
        assert extract(_body("<p>   </p>")) == ""

    def test_list_items_stay_adjacent(self) -> None:
        assert _render("<ul><li>A</li><li>B</li></ul>") == "- A\n- B"

    def test_containers_add_no_markup(self) -> None:
        assert extract(_body("<div><span>foo</span><em>bar</em></div>")) == "foo bar "

    def test_unknown_tags_are_transparent(self) -> None:
        assert _render("<table><tr><td>Cell</td><td>Two</td></tr></table>") == "Cell Two"

    def test_text_nodes_are_space_joined(self) -> None:
        assert _render("<p>Hello<b>world</b></p>") == "Hello world"

    def test_external_link(self) -> None:
        assert extract(_body('<a href="https://x.com">X</a>')) == "[X](https://x.com) "

    def test_link_with_fragment_in_path_is_kept(self) -> None:
        html = '<a href="https://x.com/page#section">Docs</a>'
        assert _render(html) == "[Docs](https://x.com/page#section)"

    @pytest.mark.parametrize(
        "href", ["javascript:void(0)", " JavaScript:alert(1)", "#top", "#"]
    )
    def test_unusable_links_degrade_to_text(self, href: str) -> None:
        assert _render(f'<a href="{href}">Click</a>') == "Click"

    def test_link_without_href_is_plain_text(self) -> None:
        assert _render('<a name="anchor">Anchor</a>') == "Anchor"

    def test_link_without_text_keeps_target(self) -> None:
        assert extract(_body('<a href="https://x.com"><img src="a.png"></a>')) == (
            "[](https://x.com) "
        )
        html = '<p>see <a href="https://x.com"><img src="a.png"></a> here</p>'
        assert _render(html) == "see [](https://x.com) here"

    def test_unusable_link_without_text_is_blank(self) -> None:
        assert extract(_body('<a href="#top"><img src="a.png"></a>')) == " "

    def test_inline_code_keeps_inner_whitespace(self) -> None:
        assert extract(_body("<code> a  b </code>")) == "` a  b ` "

    def test_inline_code_in_paragraph(self) -> None:
        assert _render("<p>Use <code>x = 1</code> here</p>") == "Use `x = 1` here"

    def test_code_block_prefers_nested_code(self) -> None:
        html = "<pre><span>$ </span><code>print(1)</code></pre>"
        assert extract(_body(html)) == "```\nprint(1)\n```\n\n"

    def test_code_block_without_code_uses_pre_text(self) -> None:
        assert extract(_body("<pre>  raw text  </pre>")) == "```\nraw text\n```\n\n"

    def test_oversized_code_block_dropped(self) -> None:
        budget = ExtractionBudget(max_code_block_length=10)
        assert extract(_body("<pre>" + "x" * 10 + "</pre>"), budget) == ""
        assert extract(_body("<pre>" + "x" * 9 + "</pre>"), budget) == (
            "```\n" + "x" * 9 + "\n```\n\n"
        )

    def test_empty_code_block_is_bare_fence(self) -> None:
        assert extract(_body("<pre><code>   </code></pre>")) == "```\n```\n\n"
        assert _render("<p>a</p><pre>   </pre>") == "a\n\n```\n```"

    def test_oversized_text_node_dropped_not_truncated(self) -> None:
        budget = ExtractionBudget(max_text_node_length=5)
        assert extract(Text("abcdef"), budget) == ""
        assert extract(Text("  abcde  "), budget) == "abcde "

    def test_does_not_mutate_tree(self) -> None:
        root = _body("<div><h1>T</h1><p>x</p></div>")
        before = repr(root)
        extract(root)
        assert repr(root) == before


class TestDepthBound:
    def test_text_under_element_at_max_depth_is_kept(self) -> None:
        # Six divs put the innermost one at depth 5.
        budget = ExtractionBudget(max_depth=5)
        assert extract(_chain(6, Text("leaf")), budget) == "leaf "

    def test_element_past_max_depth_is_dropped(self) -> None:
        budget = ExtractionBudget(max_depth=5)
        assert extract(_chain(7, Text("leaf")), budget) == ""

    def test_far_past_max_depth_terminates(self) -> None:
        chain = _chain(DEFAULT_BUDGET.max_depth + 1000, Text("leaf"))
        assert extract(chain) == ""

    def test_output_bounded_by_depth(self) -> None:
        node = Element("div", children=(Text("x"),))
        for _ in range(DEFAULT_BUDGET.max_depth + 1000):
            node = Element("div", children=(Text("x"), node))
        # Only the divs at depth 0..max_depth contribute their text.
        assert extract(node) == "x " * (DEFAULT_BUDGET.max_depth + 1)

    def test_extract_past_bound_returns_empty(self) -> None:
        assert extract(Text("x"), DEFAULT_BUDGET, DEFAULT_BUDGET.max_depth + 1) == ""


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_trims_lines_and_document(self) -> None:
        assert normalize("  \n  a  \n  b  \n\n") == "a\nb"

    def test_collapses_blank_runs(self) -> None:
        assert normalize("a\n\n\n\n\nb") == "a\n\nb"

    def test_whitespace_only_lines_are_blank(self) -> None:
        assert normalize("a\n   \n \t \n\nb") == "a\n\nb"

    def test_keeps_single_blank_line(self) -> None:
        assert normalize("# Hi\n\nText") == "# Hi\n\nText"

    def test_oversized_line_dropped(self) -> None:
        budget = ExtractionBudget(max_output_line_length=10)
        raw = "before\n" + "x" * 11 + "\nafter"
        assert normalize(raw, budget) == "before\nafter"

    def test_line_at_limit_kept(self) -> None:
        budget = ExtractionBudget(max_output_line_length=10)
        assert normalize("x" * 10, budget) == "x" * 10

    def test_handles_crlf(self) -> None:
        assert normalize("a\r\nb\r\n") == "a\nb"

    def test_all_discarded_is_empty(self) -> None:
        assert normalize("\n  \n\t\n") == ""

    @pytest.mark.parametrize(
        "document",
        [
            "# Title\n\nPara one\n- a\n- b\n\n```\ncode\n```",
            "single line",
            "",
            "a\n\nb\n\nc",
        ],
    )
    def test_idempotent(self, document: str) -> None:
        assert normalize(document) == document
        assert normalize(normalize("  \n" + document + "\n\n\n")) == document

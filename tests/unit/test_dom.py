"""Unit tests for the document tree model and its helpers."""

import pytest

from html2adoc.dom import (
    FRAGMENT_TAG,
    ElementNode,
    TextNode,
    child_elements,
    find_all_by_class,
    find_first,
    find_first_by_class,
    iter_elements,
    parse_fragment,
    text_content,
)
from html2adoc.exceptions import DependencyError


@pytest.mark.unit
class TestParseFragment:
    """Test building the document tree from HTML."""

    def test_root_is_fragment(self):
        """The parsed nodes hang off a synthetic fragment root."""
        root = parse_fragment("<p>a</p>b")
        assert root.tag == FRAGMENT_TAG
        assert isinstance(root.children[0], ElementNode)
        assert root.children[1] == TextNode("b")

    def test_tag_and_attribute_names_are_lowercase(self):
        """Tag and attribute names are normalized to lowercase."""
        root = parse_fragment('<DIV Data-Lang="go">x</DIV>')
        div = root.children[0]
        assert div.tag == "div"
        assert div.get("data-lang") == "go"
        assert div.get("DATA-LANG") == "go"

    def test_classes(self):
        """Class tokens are exposed as a set, the attribute as a joined string."""
        div = parse_fragment('<div class="admonitionblock  warning">x</div>').children[0]
        assert div.classes == frozenset({"admonitionblock", "warning"})
        assert div.has_class("warning")
        assert div.has_any_class(["tip", "warning"])
        assert not div.has_any_class(["tip"])
        assert div.get("class") == "admonitionblock warning"

    def test_missing_attribute_defaults_to_empty(self):
        """Absent attributes read as the empty string."""
        a = parse_fragment("<a>x</a>").children[0]
        assert a.get("href") == ""
        assert a.get("href", "none") == "none"

    def test_comments_and_doctype_are_dropped(self):
        """Only elements and character data are kept."""
        root = parse_fragment("<!DOCTYPE html><!-- c --><p>x</p>")
        assert [child.tag for child in root.children] == ["p"]

    def test_unknown_parser_raises_dependency_error(self):
        """A parser name BeautifulSoup does not know is reported as a missing dependency."""
        with pytest.raises(DependencyError):
            parse_fragment("<p>x</p>", parser="no-such-parser")

    def test_deep_input_builds_iteratively(self):
        """Deep nesting does not exhaust the interpreter stack while building or walking."""
        depth = 2000
        root = parse_fragment("<span>" * depth + "x" + "</span>" * depth)
        assert text_content(root) == "x"
        assert sum(1 for _ in iter_elements(root)) == depth


@pytest.mark.unit
class TestTreeHelpers:
    """Test the tree query helpers."""

    @pytest.fixture
    def tree(self):
        return parse_fragment(
            '<div class="outer"><p>one <b>two</b></p>'
            '<ul><li>a</li><li class="x">b<ul><li>c</li></ul></li></ul>'
            '<table><tr><td class="x">cell</td></tr></table></div>'
        )

    def test_text_content(self, tree):
        """Text is concatenated in document order, markup ignored."""
        assert text_content(tree) == "one twoabccell"
        assert text_content(None) == ""
        assert text_content(TextNode("t")) == "t"

    def test_iter_elements_order(self, tree):
        """Elements are yielded in document order."""
        tags = [element.tag for element in iter_elements(tree)]
        assert tags[:5] == ["div", "p", "b", "ul", "li"]

    def test_iter_elements_skip_subtrees(self, tree):
        """Skipped subtrees are yielded but not entered."""
        tags = [element.tag for element in iter_elements(tree, skip_subtrees=("ul", "table"))]
        assert tags == ["div", "p", "b", "ul", "table"]

    def test_find_first(self, tree):
        """The first matching descendant is returned."""
        assert text_content(find_first(tree, "li")) == "a"
        assert find_first(tree, "pre") is None

    def test_find_by_class(self, tree):
        """Class lookups search all descendants."""
        assert text_content(find_first_by_class(tree, "x")) == "bc"
        assert [text_content(e) for e in find_all_by_class(tree, "x")] == ["bc", "cell"]
        assert find_first_by_class(tree, "missing") is None

    def test_child_elements(self, tree):
        """Only direct children are returned, optionally filtered by tag."""
        ul = find_first(tree, "ul")
        assert [text_content(li) for li in child_elements(ul, "li")] == ["a", "bc"]
        assert [child.tag for child in child_elements(find_first(tree, "div"))] == ["p", "ul", "table"]
        assert child_elements(TextNode("t")) == []

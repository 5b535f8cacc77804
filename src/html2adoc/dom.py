#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/dom.py
"""Document tree model for HTML fragments.

BeautifulSoup does the parsing; its result is copied into a small, read-only
tree of :class:`TextNode` and :class:`ElementNode` objects so that the
converter only deals with the handful of shapes it needs: lowercase tag names,
attributes that default to the empty string, and class-token sets.

The tree helpers in this module are iterative, so arbitrarily deep input never
hits the interpreter recursion limit while being searched or flattened.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Union

from html2adoc.constants import DEFAULT_HTML_PARSER, HTML_PARSER_PACKAGES
from html2adoc.exceptions import DependencyError, ParsingError

FRAGMENT_TAG = "#document-fragment"


@dataclass
class TextNode:
    """Raw character data, entities already decoded by the parser.

    Parameters
    ----------
    text : str
        Text content, possibly whitespace only

    """

    text: str


@dataclass
class ElementNode:
    """HTML element with a lowercase tag name, attributes and ordered children.

    Parameters
    ----------
    tag : str
        Lowercase tag name
    attributes : dict[str, str]
        Attribute values; multi-valued attributes are space-joined
    children : list of Node
        Child nodes in document order
    classes : frozenset of str
        Class tokens from the ``class`` attribute

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    classes: frozenset[str] = frozenset()

    def get(self, name: str, default: str = "") -> str:
        """Return an attribute value, ``default`` when absent."""
        return self.attributes.get(name.lower(), default)

    def has_class(self, token: str) -> bool:
        """Return True when ``token`` is one of the element's classes."""
        return token in self.classes

    def has_any_class(self, tokens: Iterable[str]) -> bool:
        """Return True when any of ``tokens`` is one of the element's classes."""
        return any(token in self.classes for token in tokens)


Node = Union[TextNode, ElementNode]


def parse_fragment(html: str, parser: str = DEFAULT_HTML_PARSER) -> ElementNode:
    """Parse an HTML fragment into a document tree.

    Parameters
    ----------
    html : str
        HTML markup; ``<html>``/``<body>`` wrappers are optional
    parser : str, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    ElementNode
        Synthetic root (tag ``#document-fragment``) holding the parsed nodes

    Raises
    ------
    DependencyError
        If the requested tree builder is not installed

    Examples
    --------
    >>> root = parse_fragment('<p class="lead">Hi <b>there</b></p>')
    >>> root.children[0].tag, sorted(root.children[0].classes)
    ('p', ['lead'])

    """
    return build_tree(make_soup(html, parser))


def make_soup(html: str, parser: str = DEFAULT_HTML_PARSER) -> Any:
    """Parse markup with BeautifulSoup.

    Raises
    ------
    DependencyError
        If the requested tree builder is not installed
    ParsingError
        If the tree builder rejects the markup

    """
    from bs4 import BeautifulSoup
    from bs4.exceptions import FeatureNotFound, ParserRejectedMarkup

    try:
        return BeautifulSoup(html, parser)
    except ParserRejectedMarkup as e:
        raise ParsingError(
            f"The '{parser}' parser rejected the markup: {e}", parsing_stage="html", original_error=e
        ) from e
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(parser)
        raise DependencyError(
            f"The '{parser}' HTML parser",
            missing_packages=[(package, "")] if package else [],
            original_error=e,
        ) from e


def build_tree(source: object) -> ElementNode:
    """Copy a BeautifulSoup object (or tag) into a document tree.

    The children of ``source`` become the children of a synthetic fragment
    root. Comments, doctypes, declarations and processing instructions are
    dropped; every other string becomes a :class:`TextNode`.

    """
    from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

    skipped_strings = (Comment, Declaration, Doctype, ProcessingInstruction)

    root = ElementNode(tag=FRAGMENT_TAG)
    pending: list[tuple[Tag, ElementNode]] = [(source, root)]  # type: ignore[list-item]

    while pending:
        source_tag, target = pending.pop()
        for child in source_tag.children:
            if isinstance(child, Tag):
                element = _element_from_tag(child)
                target.children.append(element)
                pending.append((child, element))
            elif isinstance(child, NavigableString) and not isinstance(child, skipped_strings):
                target.children.append(TextNode(text=str(child)))

    return root


def _element_from_tag(tag: object) -> ElementNode:
    """Create an ElementNode (without children) from a BeautifulSoup tag."""
    attributes: dict[str, str] = {}
    for name, value in tag.attrs.items():  # type: ignore[attr-defined]
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attributes[str(name).lower()] = "" if value is None else str(value)

    classes = frozenset(attributes.get("class", "").split())
    return ElementNode(tag=str(tag.name).lower(), attributes=attributes, classes=classes)  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def iter_elements(node: Node, skip_subtrees: Iterable[str] = ()) -> Iterator[ElementNode]:
    """Yield descendant elements of ``node`` in document order.

    Parameters
    ----------
    node : Node
        Start node (not yielded itself)
    skip_subtrees : iterable of str
        Tags whose elements are yielded but not descended into

    """
    if not isinstance(node, ElementNode):
        return

    skip = frozenset(skip_subtrees)
    stack: list[Node] = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if not isinstance(current, ElementNode):
            continue
        yield current
        if current.tag not in skip:
            stack.extend(reversed(current.children))


def text_content(node: Optional[Node]) -> str:
    """Concatenate the text of all descendant text nodes in document order.

    Markup is ignored entirely: ``<b>a<i>b</i></b>`` yields ``"ab"``.
    """
    if node is None:
        return ""
    if isinstance(node, TextNode):
        return node.text

    parts: list[str] = []
    stack: list[Node] = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if isinstance(current, TextNode):
            parts.append(current.text)
        else:
            stack.extend(reversed(current.children))
    return "".join(parts)


def find_first(node: Node, tag: str) -> Optional[ElementNode]:
    """Return the first descendant element with the given tag."""
    for element in iter_elements(node):
        if element.tag == tag:
            return element
    return None


def find_first_by_class(node: Node, token: str) -> Optional[ElementNode]:
    """Return the first descendant element carrying the given class token."""
    for element in iter_elements(node):
        if element.has_class(token):
            return element
    return None


def find_all_by_class(node: Node, token: str) -> Iterator[ElementNode]:
    """Yield every descendant element carrying the given class token."""
    return (element for element in iter_elements(node) if element.has_class(token))


def child_elements(node: Node, *tags: str) -> list[ElementNode]:
    """Return direct element children, restricted to ``tags`` when given."""
    if not isinstance(node, ElementNode):
        return []
    return [
        child for child in node.children if isinstance(child, ElementNode) and (not tags or child.tag in tags)
    ]

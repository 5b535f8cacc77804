#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/converter.py
"""HTML to AsciiDoc converter.

This module turns the content region of an Asciidoctor/Antora page back into
AsciiDoc source. It understands the element vocabulary such pages are made of
(headings, paragraphs, emphasis, code, lists, tables, quotes, admonitions,
rules, images, line breaks and links) and renders every other element by
rendering its children.

Text is emitted verbatim. AsciiDoc markup characters that appear in the
source text are not escaped, so a literal ``*`` in a paragraph reaches the
output unchanged.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from html2adoc.constants import (
    ADMONITION_ICON_CLASS,
    CONTENT_CLASS,
    HEADING_TAGS,
    LIST_MARKERS,
)
from html2adoc.dom import (
    ElementNode,
    Node,
    TextNode,
    child_elements,
    find_all_by_class,
    find_first,
    find_first_by_class,
    iter_elements,
    parse_fragment,
    text_content,
)
from html2adoc.options.converter import ConverterOptions

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_PATTERN = re.compile(r"language-(\w+)")

# Formatting that survives inside strong/emphasis text
_INLINE_FORMATTING_TAGS = frozenset({"strong", "b", "em", "i", "code"})


@dataclass
class RenderContext:
    """Traversal state for a single conversion.

    Parameters
    ----------
    list_depth : int, default 0
        Number of ``ul``/``ol`` elements currently being rendered
    depth : int, default 0
        Element nesting depth of the node being rendered

    """

    list_depth: int = 0
    depth: int = 0


class HtmlToAsciiDocConverter:
    """Convert HTML fragments to AsciiDoc text.

    The converter keeps no state between calls: every call to :meth:`convert`
    or :meth:`render` uses its own :class:`RenderContext`, so one instance can
    be shared freely.

    Parameters
    ----------
    options : ConverterOptions or None, default = None
        Conversion options

    Examples
    --------
    >>> converter = HtmlToAsciiDocConverter()
    >>> converter.convert("<ul><li>A</li><li>B</li></ul>")
    '* A\\n* B\\n\\n'
    >>> converter.convert('<a href="install.html">Install</a>')
    'install.html[Install]'

    """

    _ELEMENT_HANDLERS = {
        **{tag: "_render_heading" for tag in HEADING_TAGS},
        "p": "_render_paragraph",
        "strong": "_render_strong",
        "b": "_render_strong",
        "em": "_render_emphasis",
        "i": "_render_emphasis",
        "code": "_render_code",
        "pre": "_render_code_block",
        "a": "_render_link",
        "ul": "_render_list",
        "ol": "_render_list",
        "li": "_render_list_item",
        "table": "_render_table",
        "blockquote": "_render_blockquote",
        "div": "_render_div",
        "br": "_render_line_break",
        "hr": "_render_thematic_break",
        "img": "_render_image",
    }

    def __init__(self, options: ConverterOptions | None = None):
        """Initialize the converter with options."""
        self.options: ConverterOptions = options or ConverterOptions()

    def convert(self, html: str) -> str:
        """Convert an HTML fragment to AsciiDoc.

        Parameters
        ----------
        html : str
            HTML fragment, typically the inner markup of a page's content region

        Returns
        -------
        str
            AsciiDoc text

        Raises
        ------
        DependencyError
            If the configured HTML parser is not installed
        ParsingError
            If the HTML parser rejects the markup

        """
        root = parse_fragment(html, self.options.html_parser)
        return self.render(root)

    def render(self, node: Optional[Node], context: RenderContext | None = None) -> str:
        """Render an already-parsed document tree.

        Parameters
        ----------
        node : Node or None
            Root of the (sub)tree to render
        context : RenderContext or None, default None
            Traversal state; a fresh one is created when omitted

        """
        return self._render_node(node, context if context is not None else RenderContext())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _render_node(self, node: Optional[Node], ctx: RenderContext) -> str:
        if node is None:
            return ""
        if isinstance(node, TextNode):
            return node.text
        if not isinstance(node, ElementNode):
            return ""

        if ctx.depth >= self.options.max_nesting_depth:
            logger.debug(f"Nesting depth {ctx.depth} reached at <{node.tag}>, flattening subtree to text")
            return text_content(node)

        ctx.depth += 1
        try:
            handler_name = self._ELEMENT_HANDLERS.get(node.tag)
            if handler_name:
                return getattr(self, handler_name)(node, ctx)
            return self._render_children(node, ctx)
        finally:
            ctx.depth -= 1

    def _render_children(self, node: ElementNode, ctx: RenderContext) -> str:
        parts = []
        for child in node.children:
            parts.append(self._render_node(child, ctx))
        return "".join(parts)

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def _render_heading(self, node: ElementNode, ctx: RenderContext) -> str:
        level = int(node.tag[1])
        return f"{'=' * level} {text_content(node)}\n\n"

    def _render_paragraph(self, node: ElementNode, ctx: RenderContext) -> str:
        content = self._render_children(node, ctx)
        return f"{content}\n\n" if content else ""

    def _render_code_block(self, node: ElementNode, ctx: RenderContext) -> str:
        """Render ``pre`` as a fenced block, a source block when it wraps ``code``."""
        code = find_first(node, "code")
        if code is not None:
            language = self._extract_language(code)
            return f"[source,{language}]\n----\n{text_content(code)}\n----\n\n"
        return f"----\n{text_content(node)}\n----\n\n"

    def _render_list(self, node: ElementNode, ctx: RenderContext) -> str:
        """Render ``ul``/``ol`` items, one line per direct ``li``.

        The marker is repeated once per enclosing list, so items of a list
        nested in an item come out as ``**`` (or ``..``) lines directly after
        the parent item's text.

        """
        marker = LIST_MARKERS[node.tag]
        lines = []

        ctx.list_depth += 1
        try:
            prefix = marker * ctx.list_depth
            for item in child_elements(node, "li"):
                content = self._render_node(item, ctx).strip()
                lines.append(f"{prefix} {content}\n")
        finally:
            ctx.list_depth -= 1

        return "".join(lines) + "\n"

    def _render_list_item(self, node: ElementNode, ctx: RenderContext) -> str:
        output = ""
        for child in node.children:
            rendered = self._render_node(child, ctx)
            # A nested list always starts on its own line, wrapped or not
            if output.strip() and not output.endswith("\n") and self._starts_nested_list(rendered, ctx):
                output = output.rstrip() + "\n"
            output += rendered
        return output

    @staticmethod
    def _starts_nested_list(rendered: str, ctx: RenderContext) -> bool:
        """Check whether ``rendered`` opens with an item one list level deeper."""
        markers = re.escape("".join(LIST_MARKERS.values()))
        return re.match(rf"[{markers}]{{{ctx.list_depth + 1}}} ", rendered) is not None

    def _render_table(self, node: ElementNode, ctx: RenderContext) -> str:
        """Render a table, one line per cell.

        Header cells are prefixed with ``|*``, data cells with ``|``. Rows of
        tables nested inside a cell belong to that inner table and only
        contribute to the cell's text.

        """
        rows = [element for element in iter_elements(node, skip_subtrees=("table",)) if element.tag == "tr"]
        if not rows:
            return ""

        lines = ['[cols="*"]\n', "|===\n"]
        for row in rows:
            for cell in child_elements(row, "th", "td"):
                prefix = "|*" if cell.tag == "th" else "|"
                lines.append(f"{prefix}{text_content(cell).strip()}\n")
        lines.append("|===\n\n")
        return "".join(lines)

    def _render_blockquote(self, node: ElementNode, ctx: RenderContext) -> str:
        content = self._render_children(node, ctx)
        lines = [line for line in content.split("\n") if line.strip()]
        return "[quote]\n____\n" + "\n".join(lines) + "\n____\n\n"

    def _render_div(self, node: ElementNode, ctx: RenderContext) -> str:
        if node.has_any_class(self.options.admonition_classes):
            return self._render_admonition(node, ctx)

        if node.has_any_class(self.options.literal_block_classes):
            source = find_first_by_class(node, CONTENT_CLASS) or node
            return f"----\n{text_content(source)}\n----\n\n"

        return self._render_children(node, ctx)

    def _render_admonition(self, node: ElementNode, ctx: RenderContext) -> str:
        """Render an admonition wrapper as a delimited ``[LABEL]`` example block.

        Asciidoctor emits::

            <div class="admonitionblock warning">
              <table><tr>
                <td class="icon"><i class="fa icon-warning" title="Warning"></i></td>
                <td class="content">Text</td>
              </tr></table>
            </div>

        The label comes from the icon's ``title``; a wrapper without a
        ``content`` element produces no output at all.

        """
        label = self._admonition_label(node)

        content_node = find_first_by_class(node, CONTENT_CLASS)
        if content_node is None:
            logger.debug(f"Dropping {label} admonition without a '{CONTENT_CLASS}' element")
            return ""

        content = self._render_node(content_node, ctx).strip()
        return f"[{label}]\n====\n{content}\n====\n\n"

    def _admonition_label(self, node: ElementNode) -> str:
        for icon in find_all_by_class(node, ADMONITION_ICON_CLASS):
            icon_glyph = find_first(icon, "i")
            if icon_glyph is not None:
                return icon_glyph.get("title").upper() or self.options.default_admonition_label
        return self.options.default_admonition_label

    def _render_thematic_break(self, node: ElementNode, ctx: RenderContext) -> str:
        return "'''\n\n"

    def _render_image(self, node: ElementNode, ctx: RenderContext) -> str:
        return f"image::{node.get('src')}[{node.get('alt')}]\n\n"

    # ------------------------------------------------------------------
    # Inline elements
    # ------------------------------------------------------------------

    def _render_strong(self, node: ElementNode, ctx: RenderContext) -> str:
        return f"*{self._inline_text(node, ctx)}*"

    def _render_emphasis(self, node: ElementNode, ctx: RenderContext) -> str:
        return f"_{self._inline_text(node, ctx)}_"

    def _render_code(self, node: ElementNode, ctx: RenderContext) -> str:
        return f"`{text_content(node)}`"

    def _render_link(self, node: ElementNode, ctx: RenderContext) -> str:
        href = node.get("href")
        text = text_content(node)
        if href == text or not text:
            return href
        return f"{href}[{text}]"

    def _render_line_break(self, node: ElementNode, ctx: RenderContext) -> str:
        return " +\n"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _inline_text(self, node: ElementNode, ctx: RenderContext) -> str:
        """Return the text of ``node`` keeping nested emphasis and code markers.

        ``<strong><em>x</em></strong>`` therefore becomes ``*_x_*``. Any other
        markup (links, spans, ...) is flattened to its text.

        """
        if ctx.depth >= self.options.max_nesting_depth:
            return text_content(node)

        parts = []
        ctx.depth += 1
        try:
            for child in node.children:
                if isinstance(child, ElementNode) and child.tag not in _INLINE_FORMATTING_TAGS:
                    parts.append(self._inline_text(child, ctx))
                else:
                    parts.append(self._render_node(child, ctx))
        finally:
            ctx.depth -= 1
        return "".join(parts)

    def _extract_language(self, code: ElementNode) -> str:
        """Extract the source language of a ``code`` element.

        Checks, in order:
        - a ``language-xxx`` class token (Prism.js, highlight.js, Asciidoctor)
        - a non-empty ``data-lang`` attribute (Asciidoctor)

        Parameters
        ----------
        code : ElementNode
            The ``code`` element inside a ``pre``

        Returns
        -------
        str
            Language identifier, ``options.default_code_language`` when none is found

        """
        for token in code.get("class").split():
            match = _LANGUAGE_CLASS_PATTERN.match(token)
            if match:
                return match.group(1)

        data_lang = code.get("data-lang")
        if data_lang:
            return data_lang

        return self.options.default_code_language


def convert(html: str, options: ConverterOptions | None = None) -> str:
    """Convert an HTML fragment to AsciiDoc.

    Parameters
    ----------
    html : str
        HTML fragment
    options : ConverterOptions or None, default None
        Conversion options

    Returns
    -------
    str
        AsciiDoc text

    Examples
    --------
    >>> convert('<pre><code class="language-go">x</code></pre>')
    '[source,go]\\n----\\nx\\n----\\n\\n'

    """
    return HtmlToAsciiDocConverter(options).convert(html)

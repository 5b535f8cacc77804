#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/postprocess.py
"""Text fixups applied to converted pages before they are written.

The converter output for a page is a faithful rendering of its HTML. These
functions turn it into a standalone document: a single ``= Title`` header,
at most one blank line between blocks, and cross-references that point at
the generated ``.adoc`` files instead of the rendered ``.html`` pages.
"""

from __future__ import annotations

import re

_BLANK_LINE_RUN = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    """Replace every run of three or more newlines with exactly two.

    >>> collapse_blank_lines("a\\n\\n\\n\\nb")
    'a\\n\\nb'
    """
    return _BLANK_LINE_RUN.sub("\n\n", text)


def rewrite_html_links(text: str) -> str:
    """Point ``.html`` link targets at ``.adoc`` files.

    Only targets followed by a link label (``page.html[``) or a fragment
    (``page.html#``) are rewritten; bare URLs are left alone.

    >>> rewrite_html_links("install.html[Install] and setup.html#prereqs[Prereqs]")
    'install.adoc[Install] and setup.adoc#prereqs[Prereqs]'
    """
    return text.replace(".html[", ".adoc[").replace(".html#", ".adoc#")


def apply_document_title(text: str, title: str) -> str:
    """Make ``= title`` the first line of the document.

    Leading whitespace is dropped first, so the markup indentation before an
    ``h1`` does not hide it. A first line produced from an ``h1`` (starting
    with ``= ``) is replaced; otherwise the title line is prepended. An empty
    title leaves the text untouched.

    >>> apply_document_title("\\n= Intro\\n\\nBody\\n", "Intro")
    '= Intro\\n\\nBody\\n'

    """
    if not title:
        return text

    text = text.lstrip()
    lines = text.split("\n")
    if lines[0].startswith("= "):
        text = "\n".join(lines[1:])
    return f"= {title}\n{text}"


def finalize_document(text: str, title: str = "", rewrite_links: bool = True, collapse: bool = True) -> str:
    """Apply the page-level fixups in pipeline order.

    Parameters
    ----------
    text : str
        Converter output for the page's content region
    title : str, default ""
        Page title; empty when the page has none
    rewrite_links : bool, default True
        Rewrite ``.html`` link targets to ``.adoc``
    collapse : bool, default True
        Collapse runs of blank lines

    Returns
    -------
    str
        Document text ready to be written

    """
    text = apply_document_title(text, title)
    if collapse:
        text = collapse_blank_lines(text)
    if rewrite_links:
        text = rewrite_html_links(text)
    return text

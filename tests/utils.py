"""Test utilities for the html2adoc test suite.

This module provides sample rendered pages and helpers for building
documentation trees on disk.
"""

from pathlib import Path

ANTORA_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Getting Started :: Docs</title></head>
<body class="article">
<header class="header"><nav class="navbar">Product Docs</nav></header>
<div class="body">
<nav class="nav"><ul><li><a href="index.html">Home</a></li></ul></nav>
<main class="article">
<div class="toolbar"><a href="#">Edit this page</a></div>
<article class="doc">
<h1 class="page"><a class="anchor" href="#getting-started"></a>Getting Started</h1>
<div class="paragraph">
<p>Read the <a href="install.html#requirements">requirements</a> first.</p>
</div>
<div class="admonitionblock tip">
<table><tr>
<td class="icon"><i class="fa icon-tip" title="Tip"></i></td>
<td class="content">Use the <code>--help</code> flag.</td>
</tr></table>
</div>
</article>
</main>
</div>
<footer class="footer">Copyright</footer>
</body>
</html>
"""

# Expected document for ANTORA_PAGE with default pipeline options
ANTORA_PAGE_ADOC = (
    "= Getting Started\n"
    "\n"
    "Read the install.adoc#requirements[requirements] first.\n"
    "\n"
    "[TIP]\n"
    "====\n"
    "Use the `--help` flag.\n"
    "====\n"
    "\n"
)

NO_CONTENT_PAGE = "<html><body><div>Redirecting...</div></body></html>"


def write_page(root: Path, relative: str, html: str = ANTORA_PAGE) -> Path:
    """Write an HTML page below ``root``, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path

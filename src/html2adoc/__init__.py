"""html2adoc - Recover AsciiDoc sources from rendered Antora/Asciidoctor HTML.

html2adoc reads the HTML that Antora publishes for a documentation site and
writes an ``.adoc`` file for every page, with includes, attributes and
cross-references already resolved. The result is a flat, self-contained
AsciiDoc corpus suitable for indexing, diffing or feeding to other tools.

Key Features
------------
- Headings, paragraphs, emphasis, inline code, links, images and breaks
- Nested ordered/unordered lists with depth-encoded markers
- Tables, block quotes, source listings and admonition blocks
- Page-level content isolation with navigation and anchor stripping
- ``.html`` cross-references rewritten to ``.adoc``
- Batched, optionally parallel conversion of whole documentation trees

Examples
--------
Convert an HTML fragment:

    >>> from html2adoc import convert
    >>> convert("<h2>Install</h2><p>Run <code>make</code>.</p>")
    '== Install\\n\\nRun `make`.\\n\\n'

Generate AsciiDoc for every page of a site:

    >>> from html2adoc import generate_asciidoc
    >>> summary = generate_asciidoc("build/site/documentation")
    >>> summary.exit_code
    0

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "html2adoc requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from html2adoc.converter import HtmlToAsciiDocConverter, RenderContext, convert
from html2adoc.exceptions import (
    DependencyError,
    FileAccessError,
    FileError,
    Html2AdocError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from html2adoc.options import ConverterOptions, PipelineOptions
from html2adoc.pipeline import AsciiDocGenerator, DocumentResult, GenerationSummary, generate_asciidoc
from html2adoc.postprocess import finalize_document
from html2adoc.progress import ProgressCallback, ProgressEvent

__all__ = [
    "__version__",
    "convert",
    "generate_asciidoc",
    "finalize_document",
    "HtmlToAsciiDocConverter",
    "RenderContext",
    "AsciiDocGenerator",
    "DocumentResult",
    "GenerationSummary",
    "ConverterOptions",
    "PipelineOptions",
    "ProgressCallback",
    "ProgressEvent",
    "Html2AdocError",
    "ValidationError",
    "FileError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "DependencyError",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2adoc.

This module centralizes the marker classes, selectors, limits and other
defaults used across the converter and the generation pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Converter Defaults - HTML to AsciiDoc rendering settings
3. Pipeline Defaults - Discovery, content isolation and batching
4. CLI Defaults - Configuration discovery and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
DocumentStatus = Literal["converted", "skipped", "failed"]

HTML_PARSERS: tuple[str, ...] = ("html.parser", "html5lib", "lxml")

# Distribution names for the optional BeautifulSoup tree builders
HTML_PARSER_PACKAGES: dict[str, str] = {
    "html5lib": "html5lib",
    "lxml": "lxml",
}

# =============================================================================
# Converter Defaults
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

# Asciidoctor wraps callouts in <div class="admonitionblock note">
DEFAULT_ADMONITION_CLASSES: tuple[str, ...] = ("admonitionblock",)
DEFAULT_LITERAL_BLOCK_CLASSES: tuple[str, ...] = ("listingblock", "literalblock")

DEFAULT_ADMONITION_LABEL = "NOTE"
DEFAULT_CODE_LANGUAGE = "text"

# Class tokens used to locate admonition parts
ADMONITION_ICON_CLASS = "icon"
CONTENT_CLASS = "content"

# Each rendered element level costs at most three interpreter frames
DEFAULT_MAX_NESTING_DEPTH = 200

LIST_MARKERS: dict[str, str] = {
    "ul": "*",
    "ol": ".",
}

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")

# =============================================================================
# Pipeline Defaults
# =============================================================================

DEFAULT_INCLUDE_PATTERN = "**/*.html"
# Error pages and UI bundle resources
DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = ("404.html", "**/_/**")

# Tried in order, first match wins
DEFAULT_CONTENT_SELECTORS: tuple[str, ...] = ("article.doc", "main", ".article", "article")
DEFAULT_STRIP_SELECTORS: tuple[str, ...] = ("nav", "header", "footer", ".nav", ".navbar", ".toolbar")
DEFAULT_ANCHOR_SELECTOR = "a.anchor"

DEFAULT_OUTPUT_EXTENSION = ".adoc"
DEFAULT_ENCODING = "utf-8"
DEFAULT_BATCH_SIZE = 500
DEFAULT_PROGRESS_INTERVAL = 100
DEFAULT_MAX_WORKERS = 1

# =============================================================================
# CLI Defaults
# =============================================================================

CONFIG_ENV_VAR = "HTML2ADOC_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".html2adoc.toml", ".html2adoc.yaml", ".html2adoc.yml", ".html2adoc.json")
PYPROJECT_TOOL_SECTION = "html2adoc"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

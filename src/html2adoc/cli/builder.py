#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction for the html2adoc CLI."""

from __future__ import annotations

import argparse

from html2adoc.constants import CONFIG_ENV_VAR, HTML_PARSERS


def get_version() -> str:
    """Get the installed version of html2adoc."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("html2adoc")
    except PackageNotFoundError:
        from html2adoc import __version__

        return __version__


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _add_global_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to configuration file (TOML, YAML or JSON). If not specified, searches for "
        ".html2adoc.toml/.yaml/.yml/.json or [tool.html2adoc] in pyproject.toml from the current "
        "directory upwards, then in the home directory.",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help=f"Disable loading of configuration files. Ignores auto-discovered configs, "
        f"the {CONFIG_ENV_VAR} environment variable, and any --config flag.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names in every log line",
    )


def _add_parser_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--html-parser",
        choices=list(HTML_PARSERS),
        dest="html_parser",
        help="BeautifulSoup parser: 'html.parser' (built-in), 'lxml' (fast, C library), 'html5lib' (browser-like)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with ``generate`` and ``convert`` sub-commands.

    Pipeline flags default to ``None`` so that values from a configuration
    file are only overridden when a flag is actually given.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="html2adoc",
        description="Convert rendered Antora/Asciidoctor HTML back into AsciiDoc source files.",
        epilog="""
Examples:
  html2adoc generate build/site/documentation
  html2adoc generate build/site --output-dir adoc --exclude "search.html" --jobs 4 --progress
  html2adoc convert page.html --out page.adoc
  echo '<p>Hello <strong>world</strong></p>' | html2adoc convert --fragment
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=f"html2adoc {get_version()}")
    _add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    generate = subparsers.add_parser(
        "generate",
        help="Convert every page below a documentation root to a sibling .adoc file",
        description="Convert every page below a documentation root to a sibling .adoc file.",
    )
    generate.add_argument("root", help="Root directory of the rendered documentation")
    generate.add_argument(
        "--output-dir",
        dest="output_dir",
        metavar="DIR",
        help="Mirror the documentation tree under DIR instead of writing next to the HTML files",
    )
    generate.add_argument(
        "--include",
        dest="include_pattern",
        metavar="GLOB",
        help="Glob selecting pages relative to the root (default: **/*.html)",
    )
    generate.add_argument(
        "--exclude",
        action="append",
        dest="exclude_patterns",
        metavar="GLOB",
        help="Exclude pages matching GLOB; may be repeated. Replaces the default exclusions.",
    )
    generate.add_argument(
        "--batch-size",
        type=_positive_int,
        dest="batch_size",
        metavar="N",
        help="Number of pages handed to the workers at once (default: 500)",
    )
    generate.add_argument(
        "--progress-interval",
        type=_positive_int,
        dest="progress_interval",
        metavar="N",
        help="Log a progress line every N pages (default: 100)",
    )
    generate.add_argument(
        "--jobs",
        "-j",
        type=_positive_int,
        dest="max_workers",
        metavar="N",
        help="Number of worker processes (default: 1)",
    )
    generate.add_argument(
        "--no-link-rewrite",
        action="store_false",
        dest="rewrite_links",
        default=None,
        help="Keep .html link targets instead of rewriting them to .adoc",
    )
    _add_parser_argument(generate)
    generate.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar and a summary table (rich or tqdm when installed)",
    )
    generate.add_argument(
        "--fail-fast",
        action="store_true",
        dest="fail_fast",
        help="Stop at the first page that fails to convert",
    )

    convert = subparsers.add_parser(
        "convert",
        help="Convert a single page or HTML fragment and print the AsciiDoc",
        description="Convert a single page or HTML fragment and print the AsciiDoc.",
    )
    convert.add_argument("input", nargs="?", default="-", help="HTML file to convert, '-' for stdin (default)")
    convert.add_argument("--out", "-o", metavar="PATH", help="Write the result to PATH instead of stdout")
    convert.add_argument(
        "--fragment",
        action="store_true",
        help="Treat the input as a bare fragment: no content isolation, title or link fixups",
    )
    _add_parser_argument(convert)

    return parser


__all__ = ["create_parser", "get_version"]

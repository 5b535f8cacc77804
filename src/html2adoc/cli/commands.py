#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Handlers for the ``generate`` and ``convert`` sub-commands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from html2adoc.cli.config import load_config_with_priority, merge_configs
from html2adoc.cli.progress import ProgressContext, SummaryRenderer, create_progress_callback
from html2adoc.constants import (
    CONFIG_ENV_VAR,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from html2adoc.exceptions import DependencyError, FileError, Html2AdocError, ValidationError
from html2adoc.logging_utils import console_logging_to
from html2adoc.options import PipelineOptions
from html2adoc.pipeline import AsciiDocGenerator

logger = logging.getLogger(__name__)

# Namespace attributes that map onto PipelineOptions fields
_PIPELINE_ARGUMENTS = (
    "output_dir",
    "include_pattern",
    "exclude_patterns",
    "batch_size",
    "progress_interval",
    "max_workers",
    "rewrite_links",
)


def build_options(parsed_args: argparse.Namespace) -> PipelineOptions:
    """Combine the configuration file with command-line flags.

    Flags that were given override the configuration file, which in turn
    overrides the built-in defaults.

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration file cannot be loaded
    ValidationError
        If the combined settings are invalid

    """
    config: dict[str, Any] = {}
    if not parsed_args.no_config:
        config = load_config_with_priority(
            explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR)
        )
        if config:
            logger.debug(f"Loaded configuration: {config}")

    overrides: dict[str, Any] = {}
    for name in _PIPELINE_ARGUMENTS:
        value = getattr(parsed_args, name, None)
        if value is not None:
            overrides[name] = value
    if getattr(parsed_args, "html_parser", None):
        overrides["converter"] = {"html_parser": parsed_args.html_parser}

    return PipelineOptions.from_dict(merge_configs(config, overrides))


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(error, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(error, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def handle_generate_command(parsed_args: argparse.Namespace) -> int:
    """Run the generation pipeline over a documentation root."""
    try:
        options = build_options(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    root = Path(parsed_args.root)
    if not root.is_dir():
        print(f"Error: Documentation root is not a directory: {root}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        if parsed_args.progress:
            with ProgressContext(use_rich=True, use_progress=True, total=0, description="Generating AsciiDoc") as bar:
                with console_logging_to(bar):
                    generator = AsciiDocGenerator(options, progress_callback=create_progress_callback(bar))
                    summary = generator.run(root, fail_fast=parsed_args.fail_fast)
            SummaryRenderer(use_rich=True).render_generation_summary(summary)
        else:
            summary = AsciiDocGenerator(options).run(root, fail_fast=parsed_args.fail_fast)
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR

    return summary.exit_code


def handle_convert_command(parsed_args: argparse.Namespace) -> int:
    """Convert a single page or fragment and print or write the result."""
    try:
        options = build_options(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        html = _read_input(parsed_args.input, options.encoding)
        generator = AsciiDocGenerator(options)
        if parsed_args.fragment:
            asciidoc = generator.converter.convert(html)
        else:
            page = generator.convert_html(html)
            if page is None:
                print(f"Error: No main content found in {parsed_args.input}", file=sys.stderr)
                return EXIT_ERROR
            asciidoc = page
        _write_output(asciidoc, parsed_args.out, options.encoding)
    except Html2AdocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return _exit_code_for(e)

    return EXIT_SUCCESS


def _read_input(source: str, encoding: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Cannot read file: {source} ({e})", file_path=source, original_error=e) from e


def _write_output(text: str, destination: str | None, encoding: str) -> None:
    if not destination:
        sys.stdout.write(text)
        return
    try:
        Path(destination).write_text(text, encoding=encoding)
    except OSError as e:
        raise FileError(f"Cannot write file: {destination} ({e})", file_path=destination, original_error=e) from e
    logger.info(f"Wrote {destination}")


COMMAND_HANDLERS = {
    "generate": handle_generate_command,
    "convert": handle_convert_command,
}

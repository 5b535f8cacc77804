#  Copyright (c) 2025 Tom Villani, Ph.D.

# html2adoc/options/pipeline.py
"""Configuration options for the AsciiDoc generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from html2adoc.constants import (
    DEFAULT_ANCHOR_SELECTOR,
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONTENT_SELECTORS,
    DEFAULT_ENCODING,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERN,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_STRIP_SELECTORS,
)
from html2adoc.exceptions import ValidationError
from html2adoc.options.base import CloneFrozenMixin
from html2adoc.options.converter import ConverterOptions


@dataclass(frozen=True)
class PipelineOptions(CloneFrozenMixin):
    """Configuration options for walking a documentation tree.

    Parameters
    ----------
    converter : ConverterOptions
        Options forwarded to the HTML to AsciiDoc converter.
    include_pattern : str, default "**/*.html"
        Glob, relative to the root, selecting candidate pages.
    exclude_patterns : tuple of str
        Globs matched against the relative path (and file name) of each page;
        matching pages are ignored.
    content_selectors : tuple of str
        CSS selectors tried in order to locate the main content region.
    strip_selectors : tuple of str
        CSS selectors removed from the content region before conversion.
    anchor_selector : str, default "a.anchor"
        CSS selector for heading anchor links, removed before conversion.
    output_dir : Path or None, default None
        When set, outputs mirror the input tree under this directory instead of
        being written next to the HTML files.
    output_extension : str, default ".adoc"
        Suffix of generated files.
    rewrite_links : bool, default True
        Rewrite ``.html[`` / ``.html#`` link targets to ``.adoc``.
    collapse_blank_lines : bool, default True
        Collapse runs of three or more newlines to a single blank line.
    batch_size : int, default 500
        Number of pages handed to the worker pool at once.
    progress_interval : int, default 100
        Log a progress line every this many pages.
    max_workers : int, default 1
        Worker processes; 1 converts sequentially in-process.
    encoding : str, default "utf-8"
        Encoding used to read pages and write outputs.

    """

    converter: ConverterOptions = field(default_factory=ConverterOptions)
    include_pattern: str = DEFAULT_INCLUDE_PATTERN
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    content_selectors: tuple[str, ...] = DEFAULT_CONTENT_SELECTORS
    strip_selectors: tuple[str, ...] = DEFAULT_STRIP_SELECTORS
    anchor_selector: str = DEFAULT_ANCHOR_SELECTOR
    output_dir: Path | None = None
    output_extension: str = DEFAULT_OUTPUT_EXTENSION
    rewrite_links: bool = True
    collapse_blank_lines: bool = True
    batch_size: int = DEFAULT_BATCH_SIZE
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    max_workers: int = DEFAULT_MAX_WORKERS
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        """Validate numeric ranges and normalize sequence fields.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}")
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if not self.output_extension.startswith("."):
            raise ValueError(f"output_extension must start with '.', got {self.output_extension!r}")
        if not self.content_selectors:
            raise ValueError("content_selectors must not be empty")

        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))
        object.__setattr__(self, "content_selectors", tuple(self.content_selectors))
        object.__setattr__(self, "strip_selectors", tuple(self.strip_selectors))
        if self.output_dir is not None and not isinstance(self.output_dir, Path):
            object.__setattr__(self, "output_dir", Path(self.output_dir))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineOptions:
        """Build options from a configuration mapping.

        A nested ``converter`` table is turned into :class:`ConverterOptions`.

        Examples
        --------
        >>> options = PipelineOptions.from_dict({"batch_size": 50, "converter": {"html_parser": "lxml"}})
        >>> options.converter.html_parser
        'lxml'

        Raises
        ------
        ValidationError
            If the mapping contains unknown keys or invalid values.

        """
        data = dict(data)
        cls._check_unknown_keys(data, "pipeline")

        converter_data = data.pop("converter", None)
        if converter_data is not None:
            if isinstance(converter_data, ConverterOptions):
                data["converter"] = converter_data
            elif isinstance(converter_data, dict):
                data["converter"] = ConverterOptions.from_dict(converter_data)
            else:
                raise ValidationError(
                    "The 'converter' option must be a table",
                    parameter_name="converter",
                    parameter_value=converter_data,
                )

        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid pipeline options: {e}", parameter_name="pipeline", original_error=e) from e

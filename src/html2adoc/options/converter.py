#  Copyright (c) 2025 Tom Villani, Ph.D.

# html2adoc/options/converter.py
"""Configuration options for the HTML to AsciiDoc converter.

The defaults reproduce the markup emitted by Asciidoctor/Antora. The marker
classes are exposed so that pages produced by a customized UI bundle can still
be recognized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from html2adoc.constants import (
    DEFAULT_ADMONITION_CLASSES,
    DEFAULT_ADMONITION_LABEL,
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_HTML_PARSER,
    DEFAULT_LITERAL_BLOCK_CLASSES,
    DEFAULT_MAX_NESTING_DEPTH,
    HTML_PARSERS,
    HtmlParser,
)
from html2adoc.exceptions import ValidationError
from html2adoc.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConverterOptions(CloneFrozenMixin):
    """Configuration options for HTML fragment to AsciiDoc conversion.

    Parameters
    ----------
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used to parse fragments.
    admonition_classes : tuple of str
        Class tokens that mark a ``div`` as an admonition block.
    literal_block_classes : tuple of str
        Class tokens that mark a ``div`` as a listing/literal block.
    default_admonition_label : str, default "NOTE"
        Label used when an admonition carries no icon title.
    default_code_language : str, default "text"
        Language used for ``[source,...]`` when none can be detected.
    max_nesting_depth : int, default 200
        Element depth beyond which subtrees are flattened to plain text.

    """

    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser: 'html.parser' (built-in), 'lxml' (fast, C library), 'html5lib' (browser-like)",
            "choices": list(HTML_PARSERS),
        },
    )
    admonition_classes: tuple[str, ...] = field(
        default=DEFAULT_ADMONITION_CLASSES,
        metadata={"help": "Class tokens identifying admonition wrappers"},
    )
    literal_block_classes: tuple[str, ...] = field(
        default=DEFAULT_LITERAL_BLOCK_CLASSES,
        metadata={"help": "Class tokens identifying listing/literal block wrappers"},
    )
    default_admonition_label: str = field(
        default=DEFAULT_ADMONITION_LABEL,
        metadata={"help": "Admonition label used when no icon title is present"},
    )
    default_code_language: str = field(
        default=DEFAULT_CODE_LANGUAGE,
        metadata={"help": "Source block language used when none is detected"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum element depth rendered structurally", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.html_parser not in HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}")
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if not self.default_admonition_label:
            raise ValueError("default_admonition_label must not be empty")
        if not self.default_code_language:
            raise ValueError("default_code_language must not be empty")
        # Config files deliver lists; normalize so instances stay hashable
        object.__setattr__(self, "admonition_classes", tuple(self.admonition_classes))
        object.__setattr__(self, "literal_block_classes", tuple(self.literal_block_classes))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConverterOptions:
        """Build options from a configuration mapping.

        Raises
        ------
        ValidationError
            If the mapping contains unknown keys or invalid values.

        """
        cls._check_unknown_keys(data, "converter")
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid converter options: {e}", parameter_name="converter", original_error=e) from e

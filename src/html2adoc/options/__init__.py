"""Options dataclasses for html2adoc.

Examples
--------
    >>> from html2adoc.options import ConverterOptions, PipelineOptions
    >>> options = PipelineOptions(converter=ConverterOptions(html_parser="lxml"), max_workers=4)

"""

from html2adoc.options.base import CloneFrozenMixin
from html2adoc.options.converter import ConverterOptions
from html2adoc.options.pipeline import PipelineOptions

__all__ = [
    "CloneFrozenMixin",
    "ConverterOptions",
    "PipelineOptions",
]

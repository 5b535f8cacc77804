"""Command-line interface for html2adoc.

Generate AsciiDoc sources for a whole rendered documentation site::

    $ html2adoc generate build/site/documentation

Mirror the output into a separate directory using four worker processes::

    $ html2adoc generate build/site --output-dir adoc --jobs 4 --progress

Convert a single page, or a bare fragment from stdin::

    $ html2adoc convert page.html --out page.adoc
    $ echo '<ul><li>one</li></ul>' | html2adoc convert --fragment

Configuration
-------------
Settings are read from ``--config``, the ``HTML2ADOC_CONFIG`` environment
variable, or the first ``.html2adoc.toml``/``.yaml``/``.yml``/``.json`` (or
``[tool.html2adoc]`` in ``pyproject.toml``) found from the current directory
upwards. Command-line flags always win.

"""

import argparse
import logging
import sys

from html2adoc.cli.builder import create_parser
from html2adoc.cli.commands import COMMAND_HANDLERS
from html2adoc.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    handler = COMMAND_HANDLERS[parsed_args.command]
    return handler(parsed_args)


if __name__ == "__main__":
    sys.exit(main())

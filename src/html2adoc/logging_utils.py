#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/logging_utils.py
"""Logging setup for the html2adoc command line.

Pipeline messages ("Found N HTML files...", "Error processing ...") go to
stderr. While a progress bar is on screen they are written through the bar
instead, so log lines appear above it rather than breaking it apart.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

CONSOLE_HANDLER_NAME = "html2adoc.console"

_LEVEL_STYLES = {
    logging.ERROR: "error",
    logging.WARNING: "warning",
}


class MessageSink(Protocol):
    """Anything that can print a styled line, such as a progress display."""

    def log(self, message: str, level: str = "info") -> None: ...


class ProgressLogHandler(logging.Handler):
    """Send log records to a progress display's ``log`` method."""

    def __init__(self, sink: MessageSink, level: int = logging.NOTSET):
        super().__init__(level)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            style = "info"
            for threshold, name in _LEVEL_STYLES.items():
                if record.levelno >= threshold:
                    style = name
                    break
            self.sink.log(message, level=style)
        except Exception:
            self.handleError(record)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger


@contextmanager
def console_logging_to(sink: MessageSink) -> Iterator[None]:
    """Route console log output through ``sink`` for the duration of the block.

    The stderr handler installed by :func:`configure_logging` is swapped for a
    :class:`ProgressLogHandler` with the same level and format. File handlers
    are left alone. Without a console handler the block runs unchanged.

    """
    root_logger = logging.getLogger()
    console = next((h for h in root_logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME), None)
    if console is None:
        yield
        return

    handler = ProgressLogHandler(sink, console.level)
    handler.setFormatter(console.formatter)
    index = root_logger.handlers.index(console)
    root_logger.handlers[index] = handler
    try:
        yield
    finally:
        if handler in root_logger.handlers:
            root_logger.handlers[root_logger.handlers.index(handler)] = console

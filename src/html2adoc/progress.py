#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/progress.py
"""Progress callback system for AsciiDoc generation runs.

The generation pipeline reports its progress through plain callables so that
embedders (the CLI progress bar, a build tool, a test) can observe a run
without parsing log output.

Examples
--------
    >>> from html2adoc.pipeline import AsciiDocGenerator
    >>> from html2adoc.progress import ProgressEvent
    >>>
    >>> def on_progress(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> summary = AsciiDocGenerator(progress_callback=on_progress).run("documentation")

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted by the generation pipeline.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": discovery finished, ``total`` holds the number of pages
        - "item_done": a page was processed; ``metadata["status"]`` holds its outcome
        - "error": a page failed; ``metadata["error"]`` holds the message
        - "finished": the run completed

    message : str
        Human-readable description of the event
    current : int, default 0
        Number of pages processed so far
    total : int, default 0
        Total pages in the run. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise exceptions; a failing callback is logged and ignored.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Progress bars and summary rendering for the CLI.

Output goes through rich when it is installed, tqdm otherwise, and plain
text on stderr when neither is available.
"""

from __future__ import annotations

import sys
from typing import Any

from html2adoc.pipeline import GenerationSummary
from html2adoc.progress import ProgressCallback, ProgressEvent


class ProgressContext:
    """Progress bar for a generation run.

    The total is usually unknown until discovery has finished, so it may be
    set later with :meth:`set_total`.

    Parameters
    ----------
    use_rich : bool
        Whether to use the rich library
    use_progress : bool
        Whether to show a progress bar at all
    total : int
        Total number of items, 0 when not yet known
    description : str
        Description for the progress bar

    Examples
    --------
    >>> with ProgressContext(use_rich=True, use_progress=True, total=0, description="Generating") as progress:
    ...     summary = generate_asciidoc("documentation", progress_callback=create_progress_callback(progress))

    """

    def __init__(self, use_rich: bool, use_progress: bool, total: int, description: str):
        """Initialize progress context."""
        self.use_rich = use_rich
        self.use_progress = use_progress
        self.total = total
        self.description = description

        self._progress_obj: Any = None
        self._task_id: Any = None
        self._console: Any = None
        self._current = 0

    def __enter__(self) -> ProgressContext:
        """Enter context manager and initialize progress tracking."""
        if self.use_rich and self.use_progress:
            try:
                from rich.console import Console
                from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

                self._console = Console(stderr=True)
                self._progress_obj = Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    TaskProgressColumn(),
                    console=self._console,
                )
                self._progress_obj.__enter__()
                self._task_id = self._progress_obj.add_task(
                    f"[cyan]{self.description}...", total=self.total or None
                )
            except ImportError:
                self.use_rich = False
                return self.__enter__()

        elif self.use_progress:
            try:
                from tqdm import tqdm

                self._progress_obj = tqdm(total=self.total or None, desc=self.description, unit="page", file=sys.stderr)
            except ImportError:
                self.use_progress = False
                print(f"{self.description}...", file=sys.stderr)

        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager and cleanup progress tracking."""
        if self._progress_obj is not None:
            if self.use_rich:
                self._progress_obj.__exit__(exc_type, exc_val, exc_tb)
            else:
                self._progress_obj.close()

    def set_total(self, total: int) -> None:
        """Set the total once it is known."""
        self.total = total
        if self._progress_obj is None:
            if self.use_progress is False:
                print(f"{self.description} ({total} pages)...", file=sys.stderr)
            return
        if self.use_rich:
            self._progress_obj.update(self._task_id, total=total)
        else:
            self._progress_obj.total = total
            self._progress_obj.refresh()

    def update(self, advance: int = 1) -> None:
        """Advance the progress bar."""
        self._current += advance
        if self._progress_obj is not None:
            if self.use_rich:
                self._progress_obj.update(self._task_id, advance=advance)
            else:
                self._progress_obj.update(advance)

    def log(self, message: str, level: str = "info") -> None:
        """Print a message above the bar (colored with rich).

        Parameters
        ----------
        message : str
            Message to print
        level : str, default='info'
            One of 'info', 'success', 'warning', 'error'

        """
        if self.use_rich and self._console:
            from rich.markup import escape

            message = escape(message)
            colors = {"success": "green", "error": "red", "warning": "yellow"}
            color = colors.get(level)
            self._console.print(f"[{color}]{message}[/{color}]" if color else message)
        elif self._progress_obj is not None and hasattr(self._progress_obj, "write"):
            self._progress_obj.write(message, file=sys.stderr)
        else:
            print(message, file=sys.stderr)


class SummaryRenderer:
    """Render the end-of-run summary in rich or plain text.

    Parameters
    ----------
    use_rich : bool
        Whether to use the rich library for the table

    """

    def __init__(self, use_rich: bool):
        """Initialize summary renderer."""
        self.use_rich = use_rich
        self._console: Any = None

        if self.use_rich:
            try:
                from rich.console import Console

                self._console = Console(stderr=True)
            except ImportError:
                self.use_rich = False

    def render_generation_summary(self, summary: GenerationSummary, title: str = "AsciiDoc Generation") -> None:
        """Render converted/skipped/failed counts for a run."""
        rows = [
            ("Converted", summary.converted),
            ("Skipped", summary.skipped),
            ("Failed", summary.failed),
            ("Total", summary.total),
        ]

        if self.use_rich and self._console:
            from rich.table import Table

            table = Table(title=title)
            table.add_column("Status", style="cyan", no_wrap=True)
            table.add_column("Count", style="magenta")
            for label, count in rows:
                table.add_row(label, str(count))
            self._console.print(table)
        else:
            print(f"\n{title}", file=sys.stderr)
            print("=" * 40, file=sys.stderr)
            for label, count in rows:
                print(f"  {label + ':':11} {count}", file=sys.stderr)


def create_progress_callback(progress: ProgressContext) -> ProgressCallback:
    """Create a callback that feeds pipeline events into a ProgressContext.

    Parameters
    ----------
    progress : ProgressContext
        The progress context to feed events into

    Returns
    -------
    ProgressCallback
        Callback for :class:`~html2adoc.pipeline.AsciiDocGenerator`

    """

    def callback(event: ProgressEvent) -> None:
        if event.event_type == "started":
            progress.set_total(event.total)
        elif event.event_type == "item_done":
            progress.update()
        elif event.event_type == "error":
            error = event.metadata.get("error", "Unknown error")
            progress.log(f"{event.message}: {error}", level="error")

    return callback


__all__ = ["ProgressContext", "SummaryRenderer", "create_progress_callback"]

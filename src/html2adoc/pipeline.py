#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2adoc/pipeline.py
"""Generate AsciiDoc files from a tree of rendered documentation pages.

Antora resolves includes, cross-references and attributes while rendering a
site. This module walks the rendered HTML, isolates the article body of each
page, converts it with :class:`~html2adoc.converter.HtmlToAsciiDocConverter`
and writes a standalone ``.adoc`` file for every page.

A page that cannot be read, parsed or written is logged and recorded as a
failure; the run carries on with the next page.

Examples
--------
    >>> from html2adoc.pipeline import AsciiDocGenerator
    >>> summary = AsciiDocGenerator().run("documentation")
    >>> print(f"{summary.converted} converted, {summary.failed} failed")

"""

from __future__ import annotations

import fnmatch
import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Iterator, Optional, Union

from html2adoc.constants import EXIT_ERROR, EXIT_SUCCESS, DocumentStatus
from html2adoc.converter import HtmlToAsciiDocConverter
from html2adoc.dom import make_soup
from html2adoc.exceptions import DependencyError, FileAccessError, OutputWriteError
from html2adoc.options.pipeline import PipelineOptions
from html2adoc.postprocess import finalize_document
from html2adoc.progress import ProgressCallback, ProgressEvent

logger = logging.getLogger(__name__)


@dataclass
class MainContent:
    """Isolated content region of a page.

    Parameters
    ----------
    html : str
        Inner markup of the content region, boilerplate removed
    title : str
        Stripped text of the first ``h1``, empty when there is none

    """

    html: str
    title: str = ""


@dataclass
class DocumentResult:
    """Outcome of processing one page."""

    source: Path
    status: DocumentStatus
    output: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class GenerationSummary:
    """Outcome of a generation run.

    Parameters
    ----------
    root : Path
        Documentation root that was processed
    results : list of DocumentResult
        One entry per discovered page, in discovery order

    """

    root: Path
    results: list[DocumentResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def converted(self) -> int:
        return self._count("converted")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def failures(self) -> list[DocumentResult]:
        return [result for result in self.results if result.status == "failed"]

    @property
    def exit_code(self) -> int:
        return EXIT_ERROR if self.failed else EXIT_SUCCESS

    def _count(self, status: str) -> int:
        return sum(1 for result in self.results if result.status == status)


class AsciiDocGenerator:
    """Convert every page of a rendered documentation tree to AsciiDoc.

    Parameters
    ----------
    options : PipelineOptions or None, default = None
        Pipeline options
    progress_callback : ProgressCallback or None, default = None
        Receives a :class:`~html2adoc.progress.ProgressEvent` when the run
        starts, after every page, for every failure and when the run finishes

    """

    def __init__(self, options: PipelineOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        """Initialize the generator with options and progress callback."""
        self.options: PipelineOptions = options or PipelineOptions()
        self.progress_callback = progress_callback
        self.converter = HtmlToAsciiDocConverter(self.options.converter)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self, root: Union[str, Path]) -> list[Path]:
        """Find the pages to convert below ``root``.

        Parameters
        ----------
        root : str or Path
            Documentation root directory

        Returns
        -------
        list of Path
            Matching pages not excluded by ``exclude_patterns``, sorted

        """
        root = Path(root)
        pages = []
        for path in root.glob(self.options.include_pattern):
            if not path.is_file():
                continue
            relative = PurePosixPath(path.relative_to(root).as_posix())
            if self._is_excluded(relative):
                logger.debug(f"Excluding {relative}")
                continue
            pages.append(path)
        return sorted(pages)

    def _is_excluded(self, relative: PurePosixPath) -> bool:
        # "/" prefix lets "**/_/**" match directories directly below the root
        candidates = (str(relative), f"/{relative}", relative.name)
        return any(
            fnmatch.fnmatch(candidate, pattern) for pattern in self.options.exclude_patterns for candidate in candidates
        )

    # ------------------------------------------------------------------
    # Single page
    # ------------------------------------------------------------------

    def extract_main_content(self, html: str) -> MainContent | None:
        """Locate and clean the content region of a rendered page.

        The first element matching one of ``content_selectors`` is taken as
        the article. Navigation chrome (``strip_selectors``) and heading
        anchor links are removed from it before its inner markup is returned.

        Returns
        -------
        MainContent or None
            ``None`` when no selector matches

        """
        soup = make_soup(html, self.options.converter.html_parser)

        main = None
        for selector in self.options.content_selectors:
            main = soup.select_one(selector)
            if main is not None:
                break
        if main is None:
            return None

        removable = list(self.options.strip_selectors)
        if self.options.anchor_selector:
            removable.append(self.options.anchor_selector)
        if removable:
            for element in main.select(", ".join(removable)):
                if not element.decomposed:
                    element.decompose()

        heading = main.find("h1")
        title = heading.get_text().strip() if heading is not None else ""

        return MainContent(html=main.decode_contents(), title=title)

    def convert_html(self, html: str) -> str | None:
        """Convert a full rendered page to a standalone AsciiDoc document.

        Returns
        -------
        str or None
            Document text, ``None`` when the page has no content region

        """
        content = self.extract_main_content(html)
        if content is None:
            return None

        asciidoc = self.converter.convert(content.html)
        return finalize_document(
            asciidoc,
            title=content.title,
            rewrite_links=self.options.rewrite_links,
            collapse=self.options.collapse_blank_lines,
        )

    def output_path_for(self, source: Path, root: Union[str, Path]) -> Path:
        """Return where the AsciiDoc file for ``source`` is written."""
        target = source.with_suffix(self.options.output_extension)
        if self.options.output_dir is None:
            return target
        return self.options.output_dir / target.relative_to(Path(root))

    def convert_file(self, source: Path, root: Union[str, Path]) -> DocumentResult:
        """Convert one page and write its AsciiDoc file.

        Failures are logged and reported in the returned result rather than
        raised, except for a missing HTML parser which affects every page.

        Raises
        ------
        DependencyError
            If the configured HTML parser is not installed

        """
        try:
            try:
                html = source.read_text(encoding=self.options.encoding)
            except (OSError, UnicodeDecodeError) as e:
                raise FileAccessError(str(source), original_error=e) from e

            asciidoc = self.convert_html(html)
            if asciidoc is None:
                logger.debug(f"Skipping {source}: no main content found")
                return DocumentResult(source=source, status="skipped")

            output = self.output_path_for(source, root)
            try:
                output.parent.mkdir(parents=True, exist_ok=True)
                output.write_text(asciidoc, encoding=self.options.encoding)
            except OSError as e:
                raise OutputWriteError(str(output), original_error=e) from e

        except DependencyError:
            raise
        except Exception as e:
            logger.error(f"Error processing {source}: {e}")
            return DocumentResult(source=source, status="failed", error=str(e))

        logger.debug(f"Wrote {output}")
        return DocumentResult(source=source, status="converted", output=output)

    # ------------------------------------------------------------------
    # Whole tree
    # ------------------------------------------------------------------

    def run(self, root: Union[str, Path], fail_fast: bool = False) -> GenerationSummary:
        """Convert every page below ``root``.

        Pages are handed out in batches of ``batch_size``; with
        ``max_workers > 1`` the pages of a batch are converted in worker
        processes.

        Parameters
        ----------
        root : str or Path
            Documentation root directory
        fail_fast : bool, default False
            Stop after the first failed page

        Returns
        -------
        GenerationSummary
            Per-page results in discovery order

        """
        root = Path(root)
        pages = self.discover(root)
        total = len(pages)
        summary = GenerationSummary(root=root)

        logger.info(f"Found {total} HTML files to convert to AsciiDoc")
        self._emit_progress("started", f"Converting {total} pages", current=0, total=total)

        for start in range(0, total, self.options.batch_size):
            batch = pages[start : start + self.options.batch_size]
            for result in self._process_batch(batch, root, fail_fast):
                summary.results.append(result)
                self._record_progress(result, len(summary.results), total)
            if fail_fast and summary.failed:
                logger.error("Stopping after first failure")
                return summary

        logger.info(f"Successfully generated {summary.converted} AsciiDoc files")
        if summary.skipped:
            logger.info(f"Skipped {summary.skipped} pages without main content")
        if summary.failed:
            logger.warning(f"{summary.failed} pages failed to convert")

        self._emit_progress(
            "finished",
            "AsciiDoc generation completed",
            current=total,
            total=total,
            converted=summary.converted,
            skipped=summary.skipped,
            failed=summary.failed,
        )
        return summary

    def _process_batch(self, batch: list[Path], root: Path, fail_fast: bool = False) -> Iterator[DocumentResult]:
        """Yield the results of one batch in discovery order.

        With ``fail_fast`` no page is started after the first failure. In
        worker processes the pages already running are allowed to finish and
        are reported, so the results match what was written.

        """
        if self.options.max_workers == 1 or len(batch) == 1:
            for source in batch:
                result = self.convert_file(source, root)
                yield result
                if fail_fast and result.status == "failed":
                    return
            return

        executor = ProcessPoolExecutor(max_workers=self.options.max_workers)
        try:
            futures = [executor.submit(_convert_in_worker, self.options, source, root) for source in batch]
            for future in as_completed(futures):
                if fail_fast and future.result().status == "failed":
                    break
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        for future in futures:
            if not future.cancelled():
                yield future.result()

    def _record_progress(self, result: DocumentResult, processed: int, total: int) -> None:
        if result.status == "failed":
            self._emit_progress(
                "error", f"Failed to convert {result.source}", current=processed, total=total, error=result.error
            )

        self._emit_progress(
            "item_done",
            str(result.source),
            current=processed,
            total=total,
            item_type="page",
            status=result.status,
        )

        if processed % self.options.progress_interval == 0:
            logger.info(f"  Processed {processed}/{total} files...")

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Emit a progress event to the callback if registered.

        If the callback raises an exception, it is logged and the run continues.

        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)


def _convert_in_worker(options: PipelineOptions, source: Path, root: Path) -> DocumentResult:
    """Process-pool entry point; builds its own generator from picklable options."""
    return AsciiDocGenerator(options).convert_file(source, root)


def generate_asciidoc(
    root: Union[str, Path],
    options: PipelineOptions | None = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> GenerationSummary:
    """Convert every page below ``root``; see :meth:`AsciiDocGenerator.run`."""
    return AsciiDocGenerator(options, progress_callback).run(root)

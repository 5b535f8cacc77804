"""Unit tests for CLI logging features.

Tests for --log-file, --trace flags and logging configuration.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from utils import write_page

from html2adoc.cli import main
from html2adoc.logging_utils import CONSOLE_HANDLER_NAME, ProgressLogHandler, configure_logging, console_logging_to


@pytest.mark.unit
@pytest.mark.cli
class TestLoggingConfiguration:
    """Test logging configuration functions."""

    def test_configure_logging_basic(self):
        """The root logger gets the level and a console handler."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.INFO)

            mock_logger.setLevel.assert_called_once_with(logging.INFO)
            assert mock_logger.addHandler.call_count == 1

    def test_configure_logging_string_level(self):
        """Level names are resolved case-insensitively."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging("debug")

            mock_logger.setLevel.assert_called_once_with(logging.DEBUG)

    def test_configure_logging_with_file(self, tmp_path):
        """A log file adds a second handler."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.DEBUG, log_file=str(tmp_path / "run.log"))

            assert mock_logger.addHandler.call_count == 2

    def test_configure_logging_trace_mode(self):
        """Trace mode includes timestamps and logger names."""
        with patch("logging.getLogger") as mock_get_logger, patch("logging.Formatter") as mock_formatter:
            mock_get_logger.return_value = MagicMock()

            configure_logging(logging.DEBUG, trace_mode=True)

            format_str = mock_formatter.call_args[0][0]
            assert "%(asctime)s" in format_str
            assert "%(name)s" in format_str


@pytest.mark.unit
@pytest.mark.cli
class TestLoggingFlags:
    """Test the logging flags end to end."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_log_file_receives_pipeline_messages(self, tmp_path):
        """--log-file with --log-level INFO records the run."""
        root = tmp_path / "site"
        write_page(root, "index.html")
        log_file = tmp_path / "run.log"

        exit_code = main(["--no-config", "--log-level", "INFO", "--log-file", str(log_file), "generate", str(root)])

        assert exit_code == 0
        content = log_file.read_text(encoding="utf-8")
        assert "Found 1 HTML files to convert to AsciiDoc" in content
        assert "Successfully generated 1 AsciiDoc files" in content

    def test_verbose_enables_debug(self, tmp_path):
        """--verbose lowers the level to DEBUG."""
        root = tmp_path / "site"
        root.mkdir()

        main(["--no-config", "--verbose", "generate", str(root)])

        assert logging.getLogger().level == logging.DEBUG


class RecordingSink:
    """Collect the lines a progress display would print."""

    def __init__(self):
        self.lines: list[tuple[str, str]] = []

    def log(self, message: str, level: str = "info") -> None:
        self.lines.append((message, level))


@pytest.mark.unit
@pytest.mark.cli
class TestProgressLogging:
    """Test routing log output through a progress display."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_handler_maps_levels_to_styles(self):
        """Warnings and errors keep their severity on the progress display."""
        sink = RecordingSink()
        logger = logging.getLogger("html2adoc.test.progress")
        logger.propagate = False
        handler = ProgressLogHandler(sink)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            logger.info("found")
            logger.warning("careful")
            logger.error("broken")
        finally:
            logger.removeHandler(handler)

        assert sink.lines == [("INFO: found", "info"), ("WARNING: careful", "warning"), ("ERROR: broken", "error")]

    def test_console_handler_is_swapped_and_restored(self, tmp_path):
        """The stderr handler is replaced inside the block and the file handler kept."""
        root = configure_logging(logging.INFO, log_file=str(tmp_path / "run.log"))
        console = next(h for h in root.handlers if h.get_name() == CONSOLE_HANDLER_NAME)
        sink = RecordingSink()

        with console_logging_to(sink):
            assert console not in root.handlers
            assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
            logging.getLogger("html2adoc.pipeline").info("Processed 1/1 files...")

        assert sink.lines == [("INFO: Processed 1/1 files...", "info")]
        assert console in root.handlers
        assert not any(isinstance(h, ProgressLogHandler) for h in root.handlers)
        assert "Processed 1/1 files..." in (tmp_path / "run.log").read_text(encoding="utf-8")

    def test_without_console_handler_nothing_changes(self):
        """Loggers configured elsewhere are left untouched."""
        root = logging.getLogger()
        root.handlers[:] = []

        with console_logging_to(RecordingSink()):
            assert root.handlers == []

    def test_progress_run_logs_through_display(self, tmp_path, capsys):
        """With --progress pipeline messages still reach stderr."""
        root = tmp_path / "site"
        root.mkdir()
        (root / "broken.html").write_bytes(b"\xff\xfe")

        exit_code = main(["--no-config", "generate", str(root), "--progress"])

        assert exit_code == 1
        assert "Error processing" in capsys.readouterr().err
        assert not any(isinstance(h, ProgressLogHandler) for h in logging.getLogger().handlers)

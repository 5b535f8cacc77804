"""Tests for the html2adoc command-line interface and its exit codes."""

import io
import sys

import pytest
from utils import ANTORA_PAGE, ANTORA_PAGE_ADOC, write_page

from html2adoc.cli import main
from html2adoc.cli.builder import create_parser
from html2adoc.cli.commands import build_options
from html2adoc.constants import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)


@pytest.mark.unit
@pytest.mark.cli
class TestParser:
    """Test argument parsing and option building."""

    def test_command_is_required(self):
        """Running without a sub-command is a usage error."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_version(self, capsys):
        """--version prints the program name."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "html2adoc" in capsys.readouterr().out

    def test_jobs_must_be_positive(self):
        """Numeric flags reject non-positive values."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["generate", "docs", "--jobs", "0"])

    def test_flags_override_config(self, tmp_path):
        """Given flags win over the configuration file, others keep config values."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('batch_size = 10\nmax_workers = 2\n\n[converter]\ndefault_code_language = "sh"\n')
        args = create_parser().parse_args(
            ["--config", str(config_file), "generate", "docs", "--jobs", "3", "--html-parser", "html.parser"]
        )

        options = build_options(args)

        assert options.batch_size == 10
        assert options.max_workers == 3
        assert options.converter.default_code_language == "sh"
        assert options.converter.html_parser == "html.parser"

    def test_no_config_ignores_config(self, tmp_path):
        """--no-config skips every configuration source."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("batch_size = 10\n")
        args = create_parser().parse_args(["--no-config", "--config", str(config_file), "generate", "docs"])

        assert build_options(args).batch_size == 500

    def test_exclude_and_link_flags(self):
        """Repeated --exclude values and --no-link-rewrite reach the options."""
        args = create_parser().parse_args(
            ["--no-config", "generate", "docs", "--exclude", "a.html", "--exclude", "b/**", "--no-link-rewrite"]
        )
        options = build_options(args)

        assert options.exclude_patterns == ("a.html", "b/**")
        assert options.rewrite_links is False


@pytest.mark.unit
@pytest.mark.cli
class TestGenerateCommand:
    """Test the generate sub-command."""

    def test_generate_success(self, tmp_path):
        """Pages are converted and the exit code is 0."""
        write_page(tmp_path, "index.html")

        assert main(["--no-config", "generate", str(tmp_path)]) == EXIT_SUCCESS
        assert (tmp_path / "index.adoc").read_text(encoding="utf-8") == ANTORA_PAGE_ADOC

    def test_generate_output_dir(self, tmp_path):
        """--output-dir mirrors the tree."""
        root = tmp_path / "site"
        write_page(root, "guide/index.html")
        out = tmp_path / "out"

        assert main(["--no-config", "generate", str(root), "--output-dir", str(out)]) == EXIT_SUCCESS
        assert (out / "guide" / "index.adoc").is_file()

    def test_generate_with_failure(self, tmp_path):
        """A failed page makes the run exit with 1."""
        write_page(tmp_path, "index.html")
        (tmp_path / "broken.html").write_bytes(b"\xff\xfe")

        assert main(["--no-config", "generate", str(tmp_path)]) == EXIT_ERROR
        assert (tmp_path / "index.adoc").is_file()

    def test_generate_missing_root(self, tmp_path, capsys):
        """A missing documentation root is a file error."""
        assert main(["--no-config", "generate", str(tmp_path / "missing")]) == EXIT_FILE_ERROR
        assert "Error" in capsys.readouterr().err

    def test_generate_invalid_config(self, tmp_path, capsys):
        """An unreadable configuration file is a validation error."""
        config_file = tmp_path / "bad.json"
        config_file.write_text("{ invalid json }")

        assert main(["--config", str(config_file), "generate", str(tmp_path)]) == EXIT_VALIDATION_ERROR
        assert "Invalid JSON" in capsys.readouterr().err

    def test_generate_unknown_config_key(self, tmp_path, capsys):
        """Unknown configuration keys are a validation error."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("jobs = 4\n")

        assert main(["--config", str(config_file), "generate", str(tmp_path)]) == EXIT_VALIDATION_ERROR
        assert "jobs" in capsys.readouterr().err

    def test_generate_env_config(self, tmp_path, monkeypatch):
        """HTML2ADOC_CONFIG points at a configuration file."""
        config_file = tmp_path / "config.json"
        config_file.write_text('{"output_extension": ".asciidoc"}')
        root = tmp_path / "site"
        write_page(root, "index.html")
        monkeypatch.setenv("HTML2ADOC_CONFIG", str(config_file))

        assert main(["generate", str(root)]) == EXIT_SUCCESS
        assert (root / "index.asciidoc").is_file()

    def test_generate_with_progress(self, tmp_path):
        """The progress display does not change the outcome."""
        write_page(tmp_path, "index.html")

        assert main(["--no-config", "generate", str(tmp_path), "--progress"]) == EXIT_SUCCESS
        assert (tmp_path / "index.adoc").is_file()


@pytest.mark.unit
@pytest.mark.cli
class TestConvertCommand:
    """Test the convert sub-command."""

    def test_convert_page_to_stdout(self, tmp_path, capsys):
        """A full page is isolated, converted and printed."""
        page = write_page(tmp_path, "page.html", ANTORA_PAGE)

        assert main(["--no-config", "convert", str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ANTORA_PAGE_ADOC

    def test_convert_fragment_from_stdin(self, monkeypatch, capsys):
        """--fragment converts stdin without page fixups."""
        monkeypatch.setattr(sys, "stdin", io.StringIO('<p>See <a href="a.html#x">A</a></p>'))

        assert main(["--no-config", "convert", "--fragment"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "See a.html#x[A]\n\n"

    def test_convert_to_file(self, tmp_path):
        """--out writes the result to a file."""
        page = write_page(tmp_path, "page.html", "<ul><li>A</li></ul>")
        out = tmp_path / "page.adoc"

        assert main(["--no-config", "convert", "--fragment", str(page), "--out", str(out)]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "* A\n\n"

    def test_convert_page_without_content(self, tmp_path, capsys):
        """A page without a content region is an error."""
        page = write_page(tmp_path, "page.html", "<html><body><div>x</div></body></html>")

        assert main(["--no-config", "convert", str(page)]) == EXIT_ERROR
        assert "No main content" in capsys.readouterr().err

    def test_convert_missing_file(self, tmp_path, capsys):
        """A missing input file is a file error."""
        assert main(["--no-config", "convert", str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert "Error" in capsys.readouterr().err

"""Pytest configuration and shared fixtures for the html2adoc test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import ANTORA_PAGE

from html2adoc.converter import HtmlToAsciiDocConverter

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture
def converter() -> HtmlToAsciiDocConverter:
    """Provide a converter with default options."""
    return HtmlToAsciiDocConverter()


@pytest.fixture
def antora_page() -> str:
    """Provide a rendered Antora page with navigation chrome around the article."""
    return ANTORA_PAGE


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep user configuration files and HTML2ADOC_CONFIG out of the tests.

    Discovery starts in an empty working directory and the home directory
    fallback points at another empty directory.
    """
    monkeypatch.delenv("HTML2ADOC_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))

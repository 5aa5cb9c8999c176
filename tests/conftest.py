"""
Shared fixtures for linecap tests.

This module provides reusable pytest fixtures: paths to the sample files,
project-tree builders, configuration objects, and progress displays that
either do nothing or record their calls.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.config import Config, Rules
from ui.i18n import Translator
from ui.progress_display import NoOpProgressDisplay
import utils

TESTDATA_DIR = Path(__file__).resolve().parent / "testdata"


@pytest.fixture
def testdata_dir():
    """Directory holding the sample source files."""
    return TESTDATA_DIR


@pytest.fixture
def make_tree(tmp_path):
    """
    Factory that writes a tree of files under tmp_path.

    Takes a mapping of relative path -> content and returns the root.
    """

    def _factory(files: dict[str, str], root: Path | None = None) -> Path:
        base = root if root is not None else tmp_path / "project"
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return base

    return _factory


@pytest.fixture
def lines():
    """Factory producing file content with exactly n lines."""

    def _factory(n: int) -> str:
        return "".join(f"line {i}\n" for i in range(n))

    return _factory


@pytest.fixture
def config():
    """Default configuration with small limits for readable tests."""
    return Config(
        rules=Rules(max_lines_per_file=10, max_lines_per_directory=20, warning_threshold=10)
    )


@pytest.fixture
def en_translator():
    return Translator("en")


@pytest.fixture
def ja_translator():
    return Translator("ja")


@pytest.fixture
def progress_display():
    """Progress display for testing."""
    return NoOpProgressDisplay()


@pytest.fixture
def tracking_progress_display():
    """Progress display that tracks calls for testing."""
    mock = MagicMock()
    mock.__enter__ = MagicMock(return_value=mock)
    mock.__exit__ = MagicMock(return_value=None)
    return mock


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep tests independent of the caller's environment and verbosity."""
    monkeypatch.delenv("LINECAP_CONFIG", raising=False)
    monkeypatch.delenv("LINECAP_LANG", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    utils.set_verbose(False)
    yield
    utils.set_verbose(False)

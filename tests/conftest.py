"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dirstat.shared import configure_logging
from tests.fakes import TREE_FILES, RecordingErrorReporter, build_tree


@pytest.fixture(autouse=True, scope="session")
def _logging() -> None:
    configure_logging(level=logging.DEBUG)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Five files of 10..50 bytes spread over three nested directories."""

    return build_tree(tmp_path / "tree", TREE_FILES)


@pytest.fixture
def error_reporter() -> RecordingErrorReporter:
    return RecordingErrorReporter()

# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator
from pathlib import Path

import pytest

import autogypi.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL before and after each test.

    The app logger is a module-level singleton, and the CLI changes its
    level from flags, so every test starts from the same level.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Symlink-free temporary directory, so resolved and joined paths agree."""
    return tmp_path.resolve()

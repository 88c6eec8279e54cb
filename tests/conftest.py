"""
Pytest configuration for the freezed-go-style test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Isolated configuration (no user/global config files leak into tests)
- Helpers for writing Dart sources into temp directories
"""

import os
import shutil
from pathlib import Path

import pytest

from freezed_go_style.logging_config import setup_logging


TEST_FILES_DIR = Path(__file__).parent / "test_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    os.environ.setdefault("FREEZED_GO_STYLE_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the developer's ~/.freezed_go_style and env overrides out of tests."""
    monkeypatch.delenv("FREEZED_GO_STYLE_MARKER", raising=False)
    monkeypatch.setattr(
        "freezed_go_style.paths.ToolPaths.GLOBAL_DIR", tmp_path / "global_config_home"
    )


# ============================================================================
# FILE FIXTURES
# ============================================================================

@pytest.fixture
def dart_project(tmp_path):
    """A temp directory holding copies of the Dart test files."""
    project = tmp_path / "project"
    project.mkdir()
    for source in TEST_FILES_DIR.glob("*.dart"):
        shutil.copy(source, project / source.name)
    return project


@pytest.fixture
def formatter(tmp_path):
    from freezed_go_style.formatter import DartFormatter
    from freezed_go_style.user_config import UserConfig

    return DartFormatter(UserConfig(project_root=tmp_path))



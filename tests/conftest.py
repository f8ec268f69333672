"""Shared fixtures."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from autorelease.config.models import AutoreleaseConfig
from autorelease.github.client import GitHubClient
from autorelease.vcs.git import GitRepository

SAMPLE_CHANGELOG = """\
# Changelog

## 1.4.0

Adds X

### Fixes

- Fixes Z

## 1.3.0

Adds Y
"""

SAMPLE_PYPROJECT = """\
[project]
name = "test-project"
version = "1.3.0"
dependencies = ["httpx"]

[tool.autorelease]
changelog_path = "CHANGELOG.md"
"""


@pytest.fixture
def console() -> Console:
    """A console that writes to memory."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """A project directory with pyproject.toml, a changelog and a .git dir."""
    (tmp_path / ".git").mkdir()
    (tmp_path / "pyproject.toml").write_text(SAMPLE_PYPROJECT)
    (tmp_path / "CHANGELOG.md").write_text(SAMPLE_CHANGELOG)
    return tmp_path


@pytest.fixture
def config() -> AutoreleaseConfig:
    return AutoreleaseConfig()


@pytest.fixture
def mock_repo(temp_project: Path) -> MagicMock:
    """A GitRepository double rooted at the temp project."""
    repo = MagicMock(spec=GitRepository)
    repo.path = temp_project
    repo.head_author.return_value = "Jane Developer"
    repo.show_file.return_value = '[project]\nname = "test-project"\nversion = "1.3.0"\n'
    return repo


@pytest.fixture
def mock_github() -> MagicMock:
    github = MagicMock(spec=GitHubClient)
    github.list_pull_requests.return_value = []
    return github

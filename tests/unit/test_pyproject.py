"""Tests for pyproject.toml version handling."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autorelease.exceptions import GitError, ProjectError, VersionNotFoundError
from autorelease.project.pyproject import (
    get_pyproject_version,
    get_version_at_ref,
    get_version_from_content,
    update_pyproject_version,
)
from autorelease.vcs.git import GitRepository

PEP621 = """\
[build-system]
requires = ["hatchling"]

[project]
name = "demo"
dependencies = ["httpx"]
version = "1.2.3"  # keep me

[tool.other]
version = "9.9.9"
"""

POETRY = """\
[tool.poetry]
name = "demo"
version = '0.4.0'
"""


class TestGetVersionFromContent:
    def test_pep621(self):
        assert get_version_from_content(PEP621) == "1.2.3"

    def test_poetry(self):
        assert get_version_from_content(POETRY) == "0.4.0"

    def test_version_in_other_table_is_ignored(self):
        with pytest.raises(VersionNotFoundError):
            get_version_from_content('[project]\nname = "x"\n\n[tool.other]\nversion = "1.0"\n')


class TestGetPyprojectVersion:
    def test_reads_file(self, temp_project: Path):
        assert get_pyproject_version(temp_project / "pyproject.toml") == "1.3.0"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ProjectError):
            get_pyproject_version(tmp_path / "pyproject.toml")


class TestGetVersionAtRef:
    def test_reads_ref(self):
        repo = MagicMock(spec=GitRepository)
        repo.show_file.return_value = PEP621

        assert get_version_at_ref(repo, "origin/dev", "pyproject.toml") == "1.2.3"
        repo.show_file.assert_called_once_with("origin/dev", "pyproject.toml")

    def test_missing_file_at_ref(self):
        repo = MagicMock(spec=GitRepository)
        repo.show_file.side_effect = GitError("git show failed", stderr="fatal: path does not exist")

        assert get_version_at_ref(repo, "origin/dev", "pyproject.toml") is None

    def test_no_version_at_ref(self):
        repo = MagicMock(spec=GitRepository)
        repo.show_file.return_value = '[project]\nname = "x"\n'

        assert get_version_at_ref(repo, "HEAD^1", "pyproject.toml") is None


class TestUpdatePyprojectVersion:
    def test_update_pep621_preserves_formatting(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(PEP621)

        update_pyproject_version(path, "1.3.0")
        content = path.read_text()

        assert 'version = "1.3.0"  # keep me' in content
        assert 'version = "9.9.9"' in content
        assert 'requires = ["hatchling"]' in content

    def test_update_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(POETRY)

        update_pyproject_version(path, "0.5.0")

        assert get_version_from_content(path.read_text()) == "0.5.0"

    def test_same_version_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(PEP621)

        with pytest.raises(ProjectError, match="already be 1.2.3"):
            update_pyproject_version(path, "1.2.3")

    def test_no_version_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')

        with pytest.raises(VersionNotFoundError):
            update_pyproject_version(path, "1.0.0")

"""pyproject.toml version manipulation.

This module reads the version from pyproject.toml content, from a file on
disk, or from the file as it exists at a git ref, and updates it in place.

Updates preserve formatting and comments by using regex-based replacement
rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from autorelease.exceptions import GitError, ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from autorelease.vcs.git import GitRepository

logger = logging.getLogger(__name__)

# [project] for PEP 621, [tool.poetry] for Poetry
_SECTIONS = (r"\[project\]", r"\[tool\.poetry\]")
_VERSION_LINE = r'^(version\s*=\s*)["\'][^"\']+["\']'
_VERSION_VALUE = r'^version\s*=\s*["\']([^"\']+)["\']'


def _section_pattern(section: str) -> str:
    """Match a whole table up to the next table header or EOF."""
    return rf"^{section}.*?(?=^\[|\Z)"


def get_version_from_content(content: str, source: str = "pyproject.toml") -> str:
    """Get the version declared in pyproject.toml content.

    Raises:
        VersionNotFoundError: If neither section declares a version
    """
    for section in _SECTIONS:
        section_match = re.search(_section_pattern(section), content, re.MULTILINE | re.DOTALL)
        if section_match is None:
            continue
        match = re.search(_VERSION_VALUE, section_match.group(0), re.MULTILINE)
        if match:
            return match.group(1)

    raise VersionNotFoundError(
        f"Could not find version in {source}. Expected [project].version or [tool.poetry].version."
    )


def get_pyproject_version(path: Path) -> str:
    """Get the version from a pyproject.toml file.

    Raises:
        ProjectError: If the file cannot be read
        VersionNotFoundError: If version cannot be found
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Cannot read {path}: {e}") from e
    return get_version_from_content(content, str(path))


def get_version_at_ref(repo: GitRepository, ref: str, path: str) -> str | None:
    """Get the manifest version as it exists at ``ref``.

    Returns ``None`` when the file is missing at that ref or declares no
    version; callers treat that as ``0.0.0``.
    """
    try:
        content = repo.show_file(ref, path)
        return get_version_from_content(content, f"{ref}:{path}")
    except (GitError, VersionNotFoundError) as e:
        logger.warning("No version at %s:%s (%s), treating as 0.0.0", ref, path, e)
        return None


def update_pyproject_version(path: Path, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Only the first ``version = "..."`` inside ``[project]`` (or, failing that,
    ``[tool.poetry]``) is rewritten.

    Returns:
        Path to the updated pyproject.toml

    Raises:
        VersionNotFoundError: If version cannot be found
        ProjectError: If the file cannot be read or the version is unchanged
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Cannot read {path}: {e}") from e

    def replace_version(match: re.Match[str]) -> str:
        return re.sub(
            _VERSION_LINE,
            rf'\g<1>"{new_version}"',
            match.group(0),
            count=1,
            flags=re.MULTILINE,
        )

    for section in _SECTIONS:
        section_pattern = _section_pattern(section)
        section_match = re.search(section_pattern, content, re.MULTILINE | re.DOTALL)
        if section_match is None or not re.search(_VERSION_LINE, section_match.group(0), re.MULTILINE):
            continue

        new_content = re.sub(
            section_pattern,
            replace_version,
            content,
            count=1,
            flags=re.MULTILINE | re.DOTALL,
        )
        if new_content == content:
            raise ProjectError(f"Version in {path} was not updated. It may already be {new_version}.")
        path.write_text(new_content, encoding="utf-8")
        return path

    raise VersionNotFoundError(
        f"Could not find version to update in {path}. Expected [project].version or [tool.poetry].version."
    )

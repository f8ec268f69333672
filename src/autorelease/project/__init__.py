"""Project manifest handling."""

from __future__ import annotations

from autorelease.project.pyproject import (
    get_pyproject_version,
    get_version_at_ref,
    get_version_from_content,
    update_pyproject_version,
)

__all__ = [
    "get_pyproject_version",
    "get_version_at_ref",
    "get_version_from_content",
    "update_pyproject_version",
]

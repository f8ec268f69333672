"""Exception hierarchy for autorelease.

Every error raised on purpose derives from :class:`AutoreleaseError` so the
CLI can report it and exit with a non-zero status.
"""

from __future__ import annotations


class AutoreleaseError(Exception):
    """Base class for all autorelease errors."""


# Configuration


class ConfigError(AutoreleaseError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Project manifest


class ProjectError(AutoreleaseError):
    """The project manifest could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """The manifest does not declare a version."""


# External commands


class CommandError(AutoreleaseError):
    """An external command exited with a non-zero status."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        self.stderr = stderr
        detail = f"{message}\n{stderr.strip()}" if stderr and stderr.strip() else message
        super().__init__(detail)


class GitError(CommandError):
    """A git command failed."""


class NothingToCommitError(GitError):
    """``git commit`` found nothing to commit."""


class HookError(CommandError):
    """A configured build hook failed."""


# GitHub


class GitHubError(AutoreleaseError):
    """The GitHub API returned an error or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ForbiddenBaseBranchError(AutoreleaseError):
    """An open pull request from the current branch targets the stable branch."""

    def __init__(self, branch: str, stable: str, url: str) -> None:
        self.branch = branch
        self.stable = stable
        self.url = url
        super().__init__(
            f"There is an open pull request from '{branch}' into '{stable}'. "
            f"Change the base of that pull request and restart the build: {url}"
        )

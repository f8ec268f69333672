"""Git operations via the git command line.

Every command runs as a subprocess in the repository directory. A non-zero
exit raises :class:`GitError` carrying the captured stderr.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from autorelease.exceptions import GitError, NothingToCommitError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

_NOTHING_TO_COMMIT = ("nothing to commit", "nothing added to commit", "no changes added to commit")


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()
        if not (self.path / ".git").exists():
            # Possibly a subdirectory of a work tree; let git decide.
            self._run("rev-parse", "--git-dir")

    def _run(self, *args: str) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitError: If git is missing or the command fails
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Install git and make sure it is on PATH") from e
        except subprocess.CalledProcessError as e:
            output = f"{e.stdout or ''}\n{e.stderr or ''}"
            if args and args[0] == "commit" and any(m in output.lower() for m in _NOTHING_TO_COMMIT):
                raise NothingToCommitError("Nothing to commit", stderr=e.stdout) from e
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def configure(self, values: Mapping[str, str]) -> None:
        """Set local git config values."""
        for key, value in values.items():
            self._run("config", key, value)

    def fetch(self, remote: str = "origin") -> None:
        self._run("fetch", remote)

    def checkout(self, branch: str) -> None:
        self._run("checkout", branch)

    def current_branch(self) -> str:
        return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def show_file(self, ref: str, path: str) -> str:
        """Return the content of ``path`` as it exists at ``ref``."""
        return self._run("show", f"{ref}:{path}")

    def head_author(self) -> str:
        """Name of the author of the most recent commit."""
        return self._run("log", "-n", "1", "--pretty=format:%an").strip()

    def is_dirty(self) -> bool:
        return bool(self._run("status", "--porcelain").strip())

    def add(self, paths: Sequence[str], *, force: bool = False) -> None:
        if not paths:
            return
        args = ["add"]
        if force:
            args.append("--force")
        self._run(*args, "--", *paths)

    def commit(self, message: str, *, all_files: bool = True) -> str:
        """Create a commit.

        Raises:
            NothingToCommitError: If there were no changes to commit
            GitError: For any other failure
        """
        args = ["commit"]
        if all_files:
            args.append("--all")
        return self._run(*args, "--message", message)

    def push(self, refspec: str, *, remote: str = "origin", force: bool = False) -> None:
        args = ["push", "--verbose"]
        if force:
            args.append("--force")
        self._run(*args, remote, refspec)

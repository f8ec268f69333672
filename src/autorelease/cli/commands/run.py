"""Implementation of the 'run' command.

The run command executes the release flow for the branch that triggered the
CI job: pre-release on release branches, release on the stable branch.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from autorelease.config import load_config
from autorelease.exceptions import AutoreleaseError, ForbiddenBaseBranchError
from autorelease.github import GitHubClient
from autorelease.runner import ReleaseRunner
from autorelease.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_release(
    path: str | None,
    branch: str,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release flow for ``branch``.

    Args:
        path: Optional path to project directory
        branch: Branch that triggered the run
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        repo = GitRepository(project_path)
        github = GitHubClient.from_config(config.github)
    except AutoreleaseError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"Release run for branch [cyan]{branch}[/]")

    with github:
        runner = ReleaseRunner(config, repo, console, github)
        try:
            runner.run(branch)
        except ForbiddenBaseBranchError as e:
            err_console.print(f"[red]Invalid base branch in open pull request:[/] {escape(str(e))}")
            raise SystemExit(1) from e
        except AutoreleaseError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

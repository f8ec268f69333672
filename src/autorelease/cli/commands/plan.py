"""Implementation of the 'plan' command.

Shows what a run on a branch would do, without touching git or GitHub.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from autorelease.config import load_config
from autorelease.core.version import DEFAULT_VERSION
from autorelease.exceptions import AutoreleaseError
from autorelease.runner import ReleaseRunner
from autorelease.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def _yes_no(value: bool) -> str:
    return "[green]yes[/]" if value else "[dim]no[/]"


def run_plan(
    path: str | None,
    branch: str,
    console: Console,
    err_console: Console,
) -> None:
    """Print the release decision for ``branch``."""
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        runner = ReleaseRunner(config, GitRepository(project_path), console)
        decision = runner.plan(runner.branch_context(branch))
    except AutoreleaseError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    table = Table(title=f"Release plan for [cyan]{branch}[/]", show_header=False)
    table.add_row("Branch role", str(decision.branch.role))
    table.add_row("Published version", decision.published_version or DEFAULT_VERSION)
    table.add_row("Next version", decision.next_version or "[dim]none[/]")
    table.add_row("Release type", str(decision.release_type))
    table.add_row("Bump version", _yes_no(decision.should_bump_version))
    table.add_row("Cut pre-release", _yes_no(decision.should_cut_prerelease))
    table.add_row("Cut release", _yes_no(decision.should_cut_release))
    console.print(table)

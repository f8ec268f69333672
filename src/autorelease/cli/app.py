"""Typer application for autorelease."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from autorelease import __version__
from autorelease.cli.commands.notes import run_notes
from autorelease.cli.commands.plan import run_plan
from autorelease.cli.commands.run import run_release
from autorelease.exceptions import GitError
from autorelease.vcs import GitRepository

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Changelog-driven release automation for GitHub projects.",
)

PathOption = typer.Option(None, "--path", "-p", help="Project directory (default: current directory).")
BranchOption = typer.Option(
    None,
    "--branch",
    "-b",
    envvar=["AUTORELEASE_BRANCH", "GITHUB_REF_NAME"],
    help="Branch that triggered the run (default: the checked out branch).",
)


def _resolve_branch(branch: str | None, path: str | None) -> str:
    if branch:
        return branch
    try:
        return GitRepository(path).current_branch()
    except GitError as e:
        err_console.print(f"[red]Error:[/] cannot determine the current branch: {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def _main(
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    branch: str | None = BranchOption,
    path: str | None = PathOption,
) -> None:
    """Run the pre-release or release flow for the current branch."""
    run_release(path, _resolve_branch(branch, path), console, err_console)


@app.command()
def plan(
    branch: str | None = BranchOption,
    path: str | None = PathOption,
) -> None:
    """Show what a run would do, without side effects."""
    run_plan(path, _resolve_branch(branch, path), console, err_console)


@app.command()
def notes(
    path: str | None = PathOption,
    raw: bool = typer.Option(False, "--raw", help="Print the notes as plain text."),
) -> None:
    """Print the pending version and its release notes."""
    run_notes(path, raw, console, err_console)


def main() -> None:
    app()

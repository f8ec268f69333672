"""Implementation of the 'notes' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markdown import Markdown
from rich.markup import escape

from autorelease.config import load_config
from autorelease.core.changelog import read_changelog
from autorelease.exceptions import AutoreleaseError

if TYPE_CHECKING:
    from rich.console import Console


def run_notes(path: str | None, raw: bool, console: Console, err_console: Console) -> None:
    """Print the pending version and its release notes."""
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except AutoreleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    entry = read_changelog(project_path / config.changelog_path)
    if not entry.is_pending:
        console.print(f"[yellow]No version heading found in {config.changelog_path}.[/]")
        return

    if raw:
        console.print(entry.notes or "", markup=False, highlight=False)
        return

    console.print(f"[bold]Version {entry.version}[/]\n")
    console.print(Markdown(entry.notes or "_No notes._"))

"""Build hook execution.

Hooks are shell commands run after the version bump and before the release
commit. They may reference ``{version}``, ``{prev_version}`` and
``{release_type}``. Other braces, such as ``awk '{print $1}'`` or
``${VAR}``, are passed to the shell unchanged. A hook that produces files to
release must stage them itself with ``git add``.
"""

from __future__ import annotations

import re
import subprocess
from typing import TYPE_CHECKING

from rich.markup import escape

from autorelease.exceptions import HookError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from rich.console import Console

_PLACEHOLDER = re.compile(r"\{(version|prev_version|release_type)\}")


def run_hooks(
    hooks: Sequence[str],
    project_path: Path,
    *,
    version: str,
    prev_version: str,
    release_type: str,
    console: Console,
    hook_name: str = "post-bump",
) -> None:
    """Run hook commands with template variable substitution.

    Args:
        hooks: Shell commands to run in order
        project_path: Working directory for commands
        version: New version
        prev_version: Previously published version
        release_type: Classification of the release
        console: Console for output
        hook_name: Name of the hook phase (for output)

    Raises:
        HookError: If a command exits with a non-zero status
    """
    template_vars = {
        "version": version,
        "prev_version": prev_version,
        "release_type": release_type,
    }

    for cmd in hooks:
        expanded_cmd = _PLACEHOLDER.sub(lambda m: template_vars[m.group(1)], cmd)
        console.print(f"  [dim]Running {hook_name} hook:[/] {escape(expanded_cmd)}")

        try:
            result = subprocess.run(
                expanded_cmd,
                shell=True,
                cwd=project_path,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise HookError(
                f"{hook_name} hook failed with exit code {e.returncode}: {expanded_cmd}",
                stderr=e.stderr,
            ) from e

        if result.stdout:
            console.print(f"    [dim]{escape(result.stdout.strip())}[/]")

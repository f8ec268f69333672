"""Configuration loading from pyproject.toml and the environment."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from autorelease.config.models import AutoreleaseConfig
from autorelease.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_NAME = "autorelease"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_autorelease_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.autorelease]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_NAME, {}))


def apply_environment(data: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Overlay GitHub settings taken from CI environment variables."""
    env = os.environ if environ is None else environ
    github = dict(data.get("github", {}))

    repository = env.get("GITHUB_REPOSITORY", "")
    if "/" in repository:
        owner, _, repo = repository.partition("/")
        github.setdefault("owner", owner)
        github.setdefault("repo", repo)

    if env.get("GH_OWNER"):
        github["owner"] = env["GH_OWNER"]
    if env.get("GH_REPO"):
        github["repo"] = env["GH_REPO"]

    token = env.get("GH_TOKEN") or env.get("GITHUB_TOKEN")
    if token:
        github["token"] = token

    return {**data, "github": github}


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> AutoreleaseConfig:
    """Load configuration for the project at ``path``.

    Args:
        path: Project directory or pyproject.toml path (default: cwd)
        environ: Environment mapping (default: ``os.environ``)

    Raises:
        ConfigNotFoundError: If pyproject.toml cannot be found
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    data = apply_environment(
        extract_autorelease_config(load_pyproject_toml(pyproject_path)),
        environ,
    )
    try:
        return AutoreleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration: {e}") from e

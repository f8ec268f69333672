"""Configuration management for autorelease."""

from __future__ import annotations

from autorelease.config.loader import load_config
from autorelease.config.models import (
    AutoreleaseConfig,
    BranchesConfig,
    GitHubConfig,
    HooksConfig,
    IdentityConfig,
)

__all__ = [
    "AutoreleaseConfig",
    "BranchesConfig",
    "GitHubConfig",
    "HooksConfig",
    "IdentityConfig",
    "load_config",
]

"""Version control integration."""

from __future__ import annotations

from autorelease.vcs.git import GitRepository

__all__ = ["GitRepository"]

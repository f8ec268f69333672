"""GitHub integration."""

from __future__ import annotations

from autorelease.github.client import GitHubClient

__all__ = ["GitHubClient"]

"""Pydantic models for autorelease configuration.

Configuration lives under ``[tool.autorelease]`` in pyproject.toml. Every
field has a default, so an empty section (or no section at all) is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr

RELEASE_TYPE_SUFFIXES = ("patch", "minor", "major")


class BranchesConfig(BaseModel):
    """Names of the branches that drive the release process."""

    model_config = ConfigDict(extra="forbid")

    release: str = "release"
    prerelease: str = "pre-release"
    stable: str = "master"
    downstream: str = "dev"

    @property
    def release_branches(self) -> list[str]:
        """The release branch and its ``<release>/<type>`` variants."""
        return [self.release, *(f"{self.release}/{kind}" for kind in RELEASE_TYPE_SUFFIXES)]

    @property
    def guard_exempt(self) -> list[str]:
        """Branches allowed to have an open pull request into stable."""
        return [*self.release_branches, self.prerelease]


class IdentityConfig(BaseModel):
    """Git identity used for automation commits."""

    model_config = ConfigDict(extra="forbid")

    name: str = "Autorelease Script"
    email: str = "autorelease@users.noreply.github.com"


class HooksConfig(BaseModel):
    """Commands run during the pre-release flow."""

    model_config = ConfigDict(extra="forbid")

    post_bump: list[str] = Field(default_factory=list)
    dist_paths: list[str] = Field(default_factory=list)


class GitHubConfig(BaseModel):
    """GitHub repository and API settings."""

    model_config = ConfigDict(extra="forbid")

    owner: str | None = None
    repo: str | None = None
    token: SecretStr | None = None
    api_url: str = "https://api.github.com"

    @property
    def is_configured(self) -> bool:
        return bool(self.owner and self.repo and self.token)


class AutoreleaseConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    changelog_path: Path = Path("CHANGELOG.md")
    manifest_path: Path = Path("pyproject.toml")
    remote: str = "origin"
    release_base_ref: str = "HEAD^1"

    branches: BranchesConfig = Field(default_factory=BranchesConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    hooks: HooksConfig = Field(default_factory=HooksConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @property
    def published_ref(self) -> str:
        """Ref whose manifest holds the currently published version."""
        return f"{self.remote}/{self.branches.downstream}"

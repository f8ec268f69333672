"""Release decisions.

The branch that triggered the run is classified once into a
:class:`BranchRole`; everything downstream works on the role rather than on
branch name comparisons.

Roles and what they do:

* ``RELEASE`` (``release`` and ``release/<type>``) and ``PRERELEASE``
  (``pre-release``) run the pre-release flow: bump the manifest, build, commit,
  push and open pull requests into the downstream and stable branches.
* ``STABLE`` runs the release flow: cut a tagged GitHub release.
* ``OTHER`` does nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from autorelease.core.version import ReleaseType, classify, compare_versions

if TYPE_CHECKING:
    from autorelease.config.models import BranchesConfig
    from autorelease.core.changelog import ChangelogEntry

logger = logging.getLogger(__name__)


class BranchRole(StrEnum):
    RELEASE = "release"
    PRERELEASE = "pre-release"
    STABLE = "stable"
    OTHER = "other"


@dataclass(frozen=True)
class BranchContext:
    """The branch that triggered the run."""

    name: str
    role: BranchRole
    declared_type: ReleaseType | None = None
    guarded: bool = True

    @property
    def runs_prerelease(self) -> bool:
        return self.role in (BranchRole.RELEASE, BranchRole.PRERELEASE)


@dataclass(frozen=True)
class ReleaseDecision:
    """What a run should do. Computed fresh each run."""

    branch: BranchContext
    next_version: str | None
    release_type: ReleaseType
    published_version: str | None = None
    notes: str | None = None
    should_bump_version: bool = False
    should_cut_prerelease: bool = False
    should_cut_release: bool = False

    @property
    def is_noop(self) -> bool:
        return not (self.should_bump_version or self.should_cut_prerelease or self.should_cut_release)


def classify_branch(name: str, branches: BranchesConfig) -> BranchContext:
    """Map a branch name to its role."""
    guarded = name not in branches.guard_exempt

    if name in branches.release_branches:
        _, _, suffix = name.partition("/")
        declared = ReleaseType(suffix) if suffix else None
        return BranchContext(name, BranchRole.RELEASE, declared, guarded)
    if name == branches.prerelease:
        return BranchContext(name, BranchRole.PRERELEASE, guarded=guarded)
    if name == branches.stable:
        return BranchContext(name, BranchRole.STABLE, guarded=guarded)
    return BranchContext(name, BranchRole.OTHER, guarded=guarded)


def decide(
    branch: BranchContext,
    entry: ChangelogEntry,
    published_version: str | None,
    local_version: str | None = None,
) -> ReleaseDecision:
    """Decide what the run should do.

    Args:
        branch: Branch context of the run
        entry: Parsed changelog
        published_version: Version to release against. For the pre-release
            flow this is the downstream branch manifest; for the release flow
            it is the parent commit's manifest.
        local_version: Version in the working tree manifest. A bump is only
            needed when the changelog is ahead of it, which keeps repeated
            runs from bumping twice.
    """
    next_version = entry.version

    if branch.role is BranchRole.OTHER:
        return ReleaseDecision(branch, next_version, ReleaseType.NONE, notes=entry.notes)

    release_type = classify(next_version, published_version)

    if branch.role is BranchRole.STABLE:
        return ReleaseDecision(
            branch,
            next_version,
            release_type,
            published_version=published_version,
            notes=entry.notes,
            should_cut_release=release_type is not ReleaseType.NONE,
        )

    if branch.declared_type and release_type is not ReleaseType.NONE and branch.declared_type is not release_type:
        logger.warning(
            "Branch %s declares a %s release but the changelog describes a %s release",
            branch.name,
            branch.declared_type,
            release_type,
        )

    cut = release_type is not ReleaseType.NONE
    if cut and compare_versions(local_version, next_version) > 0:
        logger.warning(
            "Manifest version %s is ahead of the changelog version %s; releasing %s",
            local_version,
            next_version,
            next_version,
        )
    return ReleaseDecision(
        branch,
        next_version,
        release_type,
        published_version=published_version,
        notes=entry.notes,
        should_bump_version=cut and classify(next_version, local_version) is not ReleaseType.NONE,
        should_cut_prerelease=cut,
    )

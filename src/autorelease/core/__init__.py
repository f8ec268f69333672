"""Core release logic for autorelease.

This module contains the side-effect free building blocks:
- Changelog parsing
- Version classification
- Release decisions per branch
- Pull request reconciliation
"""

from __future__ import annotations

from autorelease.core.changelog import ChangelogEntry, parse_changelog, read_changelog
from autorelease.core.decision import (
    BranchContext,
    BranchRole,
    ReleaseDecision,
    classify_branch,
    decide,
)
from autorelease.core.pull_requests import (
    CreatePullRequest,
    DesiredPullRequest,
    NoOp,
    PullRequestRecord,
    UpdatePullRequest,
    desired_pull_request,
    forbid_pull_request_to_stable,
    reconcile,
)
from autorelease.core.version import ReleaseType, classify, compare_versions

__all__ = [
    # Decision
    "BranchContext",
    "BranchRole",
    # Changelog
    "ChangelogEntry",
    # Pull requests
    "CreatePullRequest",
    "DesiredPullRequest",
    "NoOp",
    "PullRequestRecord",
    "ReleaseDecision",
    # Version
    "ReleaseType",
    "UpdatePullRequest",
    "classify",
    "classify_branch",
    "compare_versions",
    "decide",
    "desired_pull_request",
    "forbid_pull_request_to_stable",
    "parse_changelog",
    "read_changelog",
    "reconcile",
]

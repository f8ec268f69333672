"""Pull request reconciliation.

Given the pull request we want and the open pull requests GitHub reports for
the same head and base, decide whether to create one, update the existing
one, or leave it alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from autorelease.exceptions import ForbiddenBaseBranchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True)
class PullRequestRecord:
    """An existing pull request as reported by GitHub."""

    number: int
    title: str
    head: str
    base: str
    body: str = ""
    state: str = "open"
    url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequestRecord:
        """Build a record from a GitHub ``pulls`` API object."""
        return cls(
            number=int(data["number"]),
            title=data.get("title") or "",
            body=data.get("body") or "",
            head=(data.get("head") or {}).get("ref", ""),
            base=(data.get("base") or {}).get("ref", ""),
            state=data.get("state") or "open",
            url=data.get("html_url") or data.get("url") or "",
        )


@dataclass(frozen=True)
class DesiredPullRequest:
    head: str
    base: str
    title: str
    body: str


@dataclass(frozen=True)
class CreatePullRequest:
    desired: DesiredPullRequest


@dataclass(frozen=True)
class UpdatePullRequest:
    number: int
    desired: DesiredPullRequest


@dataclass(frozen=True)
class NoOp:
    number: int


PullRequestAction = CreatePullRequest | UpdatePullRequest | NoOp


def release_title(version: str, base: str) -> str:
    return f"Release {version} ({base})"


def release_body(version: str) -> str:
    return f"Auto build of release {version}"


def desired_pull_request(head: str, base: str, version: str) -> DesiredPullRequest:
    """The release pull request from ``head`` into ``base``."""
    return DesiredPullRequest(
        head=head,
        base=base,
        title=release_title(version, base),
        body=release_body(version),
    )


def reconcile(
    desired: DesiredPullRequest,
    open_pull_requests: Sequence[PullRequestRecord],
) -> PullRequestAction:
    """Decide what to do with the release pull request.

    Only the first open pull request is considered. Its title is compared
    exactly; on mismatch both title and body are replaced.
    """
    if not open_pull_requests:
        return CreatePullRequest(desired)

    existing = open_pull_requests[0]
    if existing.title == desired.title:
        return NoOp(existing.number)
    return UpdatePullRequest(existing.number, desired)


def forbid_pull_request_to_stable(
    branch: str,
    stable: str,
    open_pull_requests: Sequence[PullRequestRecord],
    exempt: Iterable[str],
) -> None:
    """Fail when ``branch`` already has an open pull request into ``stable``.

    Raises:
        ForbiddenBaseBranchError: Naming the offending pull request
    """
    if branch in set(exempt):
        return
    offending = next((pr for pr in open_pull_requests if pr.base == stable), None)
    if offending is None:
        return
    raise ForbiddenBaseBranchError(branch, stable, offending.url or f"#{offending.number}")

"""Release orchestration.

:class:`ReleaseRunner` turns a :class:`ReleaseDecision` into side effects:
git commits and pushes, pull requests and GitHub releases. Steps run strictly
in sequence and the first failure aborts the run. Nothing already pushed or
created is rolled back; re-running is safe because commits of unchanged trees
are skipped and pull requests are reconciled rather than recreated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from autorelease.core.changelog import read_changelog
from autorelease.core.decision import BranchContext, BranchRole, ReleaseDecision, classify_branch, decide
from autorelease.core.pull_requests import (
    CreatePullRequest,
    NoOp,
    UpdatePullRequest,
    desired_pull_request,
    forbid_pull_request_to_stable,
    reconcile,
)
from autorelease.core.version import DEFAULT_VERSION
from autorelease.exceptions import GitHubError, NothingToCommitError, ProjectError
from autorelease.hooks import run_hooks
from autorelease.project.pyproject import get_pyproject_version, get_version_at_ref, update_pyproject_version

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from autorelease.config.models import AutoreleaseConfig
    from autorelease.github.client import GitHubClient
    from autorelease.vcs.git import GitRepository

logger = logging.getLogger(__name__)


def release_notes_body(notes: str | None) -> str:
    return f"## Changes\n\n{(notes or '').strip()}"


class ReleaseRunner:
    """Runs the release process for one branch."""

    def __init__(
        self,
        config: AutoreleaseConfig,
        repo: GitRepository,
        console: Console,
        github: GitHubClient | None = None,
    ) -> None:
        self.config = config
        self.repo = repo
        self.console = console
        self._github = github

    @property
    def project_path(self) -> Path:
        return self.repo.path

    @property
    def github(self) -> GitHubClient:
        if self._github is None:
            raise GitHubError("GitHub client is not configured")
        return self._github

    # Planning

    def branch_context(self, branch: str) -> BranchContext:
        return classify_branch(branch, self.config.branches)

    def plan(self, branch: BranchContext) -> ReleaseDecision:
        """Compute the decision for ``branch`` without side effects."""
        entry = read_changelog(self.project_path / self.config.changelog_path)
        manifest = self.config.manifest_path.as_posix()

        if branch.role is BranchRole.STABLE:
            published = get_version_at_ref(self.repo, self.config.release_base_ref, manifest)
            return decide(branch, entry, published)

        if branch.runs_prerelease:
            published = get_version_at_ref(self.repo, self.config.published_ref, manifest)
            return decide(branch, entry, published, self._local_version())

        return decide(branch, entry, None)

    def _local_version(self) -> str | None:
        try:
            return get_pyproject_version(self.project_path / self.config.manifest_path)
        except ProjectError as e:
            logger.warning("Could not read the local version: %s", e)
            return None

    # Execution

    def run(self, branch_name: str) -> ReleaseDecision | None:
        """Run the flow for ``branch_name``.

        Returns:
            The decision that was executed, or ``None`` when the run stopped
            early because HEAD was authored by the automation identity.

        Raises:
            ForbiddenBaseBranchError: If the branch has an open pull request
                into the stable branch
        """
        branch = self.branch_context(branch_name)
        self.check_stable_guard(branch)

        if branch.runs_prerelease:
            return self.pre_release(branch)
        if branch.role is BranchRole.STABLE:
            return self.release(branch)

        self.console.print(f"[dim]Branch [cyan]{branch.name}[/] has no release action.[/]")
        return decide(branch, read_changelog(self.project_path / self.config.changelog_path), None)

    def check_stable_guard(self, branch: BranchContext) -> None:
        stable = self.config.branches.stable
        if not branch.guarded or branch.name == stable:
            return
        open_pull_requests = self.github.list_pull_requests(branch.name, stable)
        forbid_pull_request_to_stable(branch.name, stable, open_pull_requests, self.config.branches.guard_exempt)

    def pre_release(self, branch: BranchContext) -> ReleaseDecision | None:
        """Bump, build, commit, push and open release pull requests."""
        config = self.config
        self.console.print("\n[bold]Running pre-release[/]")

        self.repo.configure({"user.name": config.identity.name, "user.email": config.identity.email})
        self.repo.fetch(config.remote)
        self.repo.checkout(branch.name)

        author = self.repo.head_author()
        if author == config.identity.name:
            self.console.print(f"[yellow]This commit was from {author}. Refusing to re-release.[/]")
            return None
        logger.debug("Valid author for autorelease: %s", author)

        decision = self.plan(branch)
        if not decision.should_cut_prerelease:
            self.console.print("[yellow]No change in release version. Not creating a pre-release.[/]")
            return decision

        version = str(decision.next_version)
        published = decision.published_version or DEFAULT_VERSION
        self.console.print(
            f"Preparing [cyan]{decision.release_type}[/] release from {published} to [green]{version}[/]"
        )

        if decision.should_bump_version:
            update_pyproject_version(self.project_path / config.manifest_path, version)
            self.console.print(f"  [green]✓[/] Updated version in {config.manifest_path}")
        else:
            self.console.print(f"  [dim]{config.manifest_path} is already at {version}[/]")

        # Build output must match the commit being pushed, bumped or not.
        if config.hooks.post_bump:
            run_hooks(
                config.hooks.post_bump,
                self.project_path,
                version=version,
                prev_version=published,
                release_type=str(decision.release_type),
                console=self.console,
            )

        self.repo.add(config.hooks.dist_paths, force=True)
        self.repo.add([config.manifest_path.as_posix()])
        try:
            self.repo.commit(f"Release {version}")
            self.console.print(f"  [green]✓[/] Committed release {version}")
        except NothingToCommitError:
            self.console.print("  [dim]Nothing to commit[/]")

        self.console.print(f"Pushing back to [cyan]{branch.name}[/]")
        self.repo.push(branch.name, remote=config.remote)
        self.repo.push(f"HEAD:{config.branches.prerelease}", remote=config.remote, force=True)

        for base in (config.branches.downstream, config.branches.stable):
            self.sync_pull_request(branch.name, base, version)

        return decision

    def sync_pull_request(self, head: str, base: str, version: str) -> None:
        """Create or refresh the release pull request from ``head`` into ``base``."""
        desired = desired_pull_request(head, base, version)
        action = reconcile(desired, self.github.list_pull_requests(head, base))

        match action:
            case CreatePullRequest():
                created = self.github.create_pull_request(desired)
                self.console.print(f"  [green]✓[/] Created pull request into {base}: {created.url}")
            case UpdatePullRequest(number=number):
                self.github.update_pull_request(number, desired)
                self.console.print(f"  [green]✓[/] Updated pull request #{number} into {base}")
            case NoOp(number=number):
                self.console.print(f"  [dim]Pull request #{number} into {base} is up to date[/]")

    def release(self, branch: BranchContext) -> ReleaseDecision:
        """Cut a tagged GitHub release from the stable branch."""
        self.console.print("\n[bold]Running release[/]")
        decision = self.plan(branch)

        if not decision.should_cut_release:
            self.console.print("[yellow]There is no change to the release. Not creating a release.[/]")
            return decision

        version = str(decision.next_version)
        self.console.print(
            f"Creating [cyan]{decision.release_type}[/] release from "
            f"{decision.published_version or DEFAULT_VERSION} to [green]{version}[/]"
        )
        self.github.create_release(
            tag=version,
            target=self.config.branches.stable,
            name=version,
            body=release_notes_body(decision.notes),
        )
        self.console.print(f"  [green]✓[/] Released {version}")
        return decision

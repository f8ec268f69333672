"""GitHub REST API client.

A thin synchronous wrapper over the v3 REST API covering what the release
flows need: listing, creating and updating pull requests, and creating
releases. Any non-2xx response or transport failure raises
:class:`GitHubError`; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from autorelease.core.pull_requests import PullRequestRecord
from autorelease.exceptions import GitHubError

if TYPE_CHECKING:
    from autorelease.config.models import GitHubConfig
    from autorelease.core.pull_requests import DesiredPullRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class GitHubClient:
    """Client bound to one repository."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        *,
        api_url: str = "https://api.github.com",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self._client = httpx.Client(
            base_url=f"{api_url.rstrip('/')}/repos/{owner}/{repo}/",
            headers={
                "Accept": "application/vnd.github.v3+json",
                "Authorization": f"token {token}",
            },
            timeout=DEFAULT_TIMEOUT,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: GitHubConfig, **kwargs: Any) -> GitHubClient:
        """Create a client from configuration.

        Raises:
            GitHubError: If owner, repo or token is missing
        """
        if not config.is_configured:
            raise GitHubError(
                "GitHub is not configured. Set GH_OWNER, GH_REPO and GH_TOKEN "
                "(or GITHUB_REPOSITORY and GITHUB_TOKEN)."
            )
        return cls(
            str(config.owner),
            str(config.repo),
            config.token.get_secret_value() if config.token else "",
            api_url=config.api_url,
            **kwargs,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub request {method} {url} failed: {e}") from e

        if not response.is_success:
            raise GitHubError(
                f"GitHub {method} {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        if "json" in response.headers.get("content-type", ""):
            return response.json()
        return None

    def list_pull_requests(self, head: str, base: str, state: str = "open") -> list[PullRequestRecord]:
        """Pull requests from ``head`` (a branch of this repository) into ``base``."""
        data = self._request(
            "GET",
            "pulls",
            params={"head": f"{self.owner}:{head}", "base": base, "state": state},
        )
        return [PullRequestRecord.from_api(item) for item in data or []]

    def create_pull_request(self, desired: DesiredPullRequest) -> PullRequestRecord:
        data = self._request(
            "POST",
            "pulls",
            json={
                "title": desired.title,
                "body": desired.body,
                "head": desired.head,
                "base": desired.base,
            },
        )
        return PullRequestRecord.from_api(data)

    def update_pull_request(self, number: int, desired: DesiredPullRequest) -> PullRequestRecord:
        data = self._request(
            "PATCH",
            f"pulls/{number}",
            json={
                "title": desired.title,
                "body": desired.body,
                "base": desired.base,
            },
        )
        return PullRequestRecord.from_api(data)

    def create_release(self, tag: str, target: str, name: str, body: str) -> dict[str, Any]:
        """Create a tagged release."""
        return self._request(
            "POST",
            "releases",
            json={
                "tag_name": tag,
                "target_commitish": target,
                "name": name,
                "body": body,
            },
        )

"""
Remote hosting collaborator.

Combines the GitHub and Bugzilla resource clients behind the HostingClient
interface used by the evaluator.
"""

import os
from typing import Any

from pullgate.clients import BugzillaClient, GitHubClient
from pullgate.exceptions import ConfigurationError
from pullgate.hosting import HostingClient
from pullgate.transport import HTTPTransport, RetryConfig
from pullgate.types import Milestone, PullRequest


class RemoteHostingClient(HostingClient):
    """
    HostingClient backed by the GitHub and Bugzilla REST APIs.

    Branches and milestones are fetched once and cached until refresh().

    Example:
        ```python
        from pullgate.connector import RemoteHostingClient

        # Create from explicit settings
        hosting = RemoteHostingClient(
            repository="jbossas/jboss-eap",
            github_token="ghp_...",
        )

        # Or from environment variables
        with RemoteHostingClient.from_env() as hosting:
            for pull_request in hosting.get_open_pull_requests():
                hosting.resolve_issues(pull_request)
                print(pull_request.number, [bug.bug_id for bug in pull_request.issues])
        ```
    """

    DEFAULT_GITHUB_URL = "https://api.github.com"
    DEFAULT_BUGZILLA_URL = "https://bugzilla.redhat.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        repository: str,
        github_token: str,
        github_url: str = DEFAULT_GITHUB_URL,
        bugzilla_url: str = DEFAULT_BUGZILLA_URL,
        bugzilla_api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the remote hosting client.

        Args:
            repository: Repository in "owner/name" form
            github_token: GitHub token with pull request write access
            github_url: GitHub API base URL (default: https://api.github.com)
            bugzilla_url: Bugzilla base URL (default: https://bugzilla.redhat.com)
            bugzilla_api_key: Bugzilla API key (optional)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)

        Raises:
            ConfigurationError: If the repository is not in "owner/name" form
        """
        owner, _, name = repository.partition("/")
        if not owner or not name or "/" in name:
            raise ConfigurationError(
                f"Invalid repository: {repository!r}. Must be 'owner/name'"
            )

        self.repository = repository

        self._github_transport = HTTPTransport(
            base_url=github_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {github_token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            retry_config=retry_config,
        )
        self._bugzilla_transport = HTTPTransport(
            base_url=bugzilla_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            retry_config=retry_config,
        )

        self.github = GitHubClient(self._github_transport, repository)
        self.bugzilla = BugzillaClient(self._bugzilla_transport, bugzilla_api_key)

        self._branches: list[str] | None = None
        self._milestones: list[Milestone] | None = None

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "RemoteHostingClient":
        """
        Create a client from environment variables.

        Environment variables:
            PULLGATE_REPOSITORY: Repository in "owner/name" form (required)
            PULLGATE_GITHUB_TOKEN: GitHub token (required)
            PULLGATE_GITHUB_URL: GitHub API base URL (optional)
            PULLGATE_BUGZILLA_URL: Bugzilla base URL (optional)
            PULLGATE_BUGZILLA_API_KEY: Bugzilla API key (optional)

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        repository = os.environ.get("PULLGATE_REPOSITORY")
        github_token = os.environ.get("PULLGATE_GITHUB_TOKEN")

        if not repository:
            raise ConfigurationError("PULLGATE_REPOSITORY environment variable not set")

        if not github_token:
            raise ConfigurationError("PULLGATE_GITHUB_TOKEN environment variable not set")

        return cls(
            repository=repository,
            github_token=github_token,
            github_url=os.environ.get("PULLGATE_GITHUB_URL", cls.DEFAULT_GITHUB_URL),
            bugzilla_url=os.environ.get("PULLGATE_BUGZILLA_URL", cls.DEFAULT_BUGZILLA_URL),
            bugzilla_api_key=os.environ.get("PULLGATE_BUGZILLA_API_KEY") or None,
            timeout=timeout,
            retry_config=retry_config,
        )

    def get_open_pull_requests(self) -> list[PullRequest]:
        """Open pull requests, oldest first. Bugs are resolved by resolve_issues()."""
        return [self._parse_pull_request(data) for data in self.github.list_open_pulls()]

    def resolve_issues(self, pull_request: PullRequest) -> None:
        pull_request.issues = self.bugzilla.get_bugs(pull_request.bug_ids)

    def get_branches(self) -> list[str]:
        if self._branches is None:
            self._branches = self.github.list_branches()
        return self._branches

    def get_milestones(self) -> list[Milestone]:
        if self._milestones is None:
            self._milestones = self.github.list_milestones()
        return self._milestones

    def set_milestone(self, pull_request: PullRequest, milestone: Milestone) -> None:
        self.github.set_milestone(pull_request.number, milestone.number)

    def post_comment(self, pull_request: PullRequest, text: str) -> None:
        self.github.create_comment(pull_request.number, text)

    def refresh(self) -> None:
        self._branches = None
        self._milestones = None

    def _parse_pull_request(self, data: dict[str, Any]) -> PullRequest:
        """Parse pull request data. Linked bugs are left for resolve_issues()."""
        description = data.get("body")
        milestone_data = data.get("milestone")
        milestone = (
            GitHubClient.parse_milestone(milestone_data) if milestone_data else None
        )

        return PullRequest(
            number=data["number"],
            repository=self.repository,
            target_branch=data["base"]["ref"],
            description=description,
            milestone=milestone,
            url=data.get("html_url"),
        )

    def close(self) -> None:
        """Close both transports and release resources."""
        self._github_transport.close()
        self._bugzilla_transport.close()

    def __enter__(self) -> "RemoteHostingClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

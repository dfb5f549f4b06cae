"""GitHub REST resource client.

Covers the pull request, branch, milestone and comment endpoints used by
the merge policy.
"""

from typing import TYPE_CHECKING, Any

from pullgate.types import Milestone

if TYPE_CHECKING:
    from pullgate.transport import HTTPTransport

PER_PAGE = 100


class GitHubClient:
    """Client for GitHub repository operations."""

    def __init__(self, transport: "HTTPTransport", repository: str) -> None:
        """
        Initialize the GitHub client.

        Args:
            transport: HTTP transport for making requests
            repository: Repository in "owner/name" form
        """
        self.transport = transport
        self.repository = repository

    def list_open_pulls(self) -> list[dict[str, Any]]:
        """
        List open pull requests, oldest first.

        Returns:
            Raw pull request payloads
        """
        return self._paginate(
            f"/repos/{self.repository}/pulls",
            {"state": "open", "sort": "created", "direction": "asc"},
        )

    def list_branches(self) -> list[str]:
        """List branch names."""
        branches = self._paginate(f"/repos/{self.repository}/branches")
        return [branch["name"] for branch in branches]

    def list_milestones(self) -> list[Milestone]:
        """List milestones in every state."""
        milestones = self._paginate(
            f"/repos/{self.repository}/milestones", {"state": "all"}
        )
        return [self.parse_milestone(data) for data in milestones]

    def set_milestone(self, number: int, milestone_number: int) -> None:
        """
        Assign a milestone to a pull request.

        Pull requests share the issue endpoint for milestones.

        Args:
            number: Pull request number
            milestone_number: Milestone number

        Raises:
            NotFoundError: If the pull request or milestone doesn't exist
            ValidationError: If GitHub rejects the milestone
        """
        self.transport.request(
            method="PATCH",
            path=f"/repos/{self.repository}/issues/{number}",
            body={"milestone": milestone_number},
        )

    def create_comment(self, number: int, body: str) -> None:
        """Post a comment on a pull request."""
        self.transport.request(
            method="POST",
            path=f"/repos/{self.repository}/issues/{number}/comments",
            body={"body": body},
        )

    @staticmethod
    def parse_milestone(data: dict[str, Any]) -> Milestone:
        """Parse milestone data from API response."""
        return Milestone(
            number=data["number"],
            title=data["title"],
            state=data.get("state", "open"),
        )

    def _paginate(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Collect every page of a list endpoint until a short page."""
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            page_params = dict(params or {})
            page_params.update({"per_page": PER_PAGE, "page": page})
            data = self.transport.request(method="GET", path=path, params=page_params)
            if not isinstance(data, list):
                break
            items.extend(data)
            if len(data) < PER_PAGE:
                break
            page += 1
        return items

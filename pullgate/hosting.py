"""
Collaborator interface consumed by the merge policy.

The evaluator never talks to the code-hosting system or the issue tracker
directly; it goes through a HostingClient. Errors raised by an
implementation propagate to the caller unchanged.
"""

from abc import ABC, abstractmethod

from pullgate.types import Milestone, PullRequest


class HostingClient(ABC):
    """Abstract base class for code-hosting collaborators."""

    @abstractmethod
    def get_open_pull_requests(self) -> list[PullRequest]:
        """
        Return open pull requests.

        Linked bugs may be left unresolved until resolve_issues() is
        called for the pull request.
        """
        pass

    def resolve_issues(self, pull_request: PullRequest) -> None:
        """
        Populate ``pull_request.issues`` from the issue tracker.

        Called once per evaluation, so a tracker failure only affects the
        pull request being evaluated. The default keeps the issues the pull
        request already carries.
        """
        pass

    @abstractmethod
    def get_branches(self) -> list[str]:
        """Return the names of the branches known to the hosting system."""
        pass

    @abstractmethod
    def get_milestones(self) -> list[Milestone]:
        """Return all milestones, open and closed."""
        pass

    @abstractmethod
    def set_milestone(self, pull_request: PullRequest, milestone: Milestone) -> None:
        """Assign a milestone to a pull request."""
        pass

    @abstractmethod
    def post_comment(self, pull_request: PullRequest, text: str) -> None:
        """Post a comment on a pull request."""
        pass

    def refresh(self) -> None:
        """Drop any cached snapshots before a new evaluation pass."""
        pass

"""Pull request and milestone data models."""

from dataclasses import dataclass, field

from pullgate import links
from pullgate.types.issues import Bug


@dataclass
class Milestone:
    """A release marker in the code-hosting system."""

    number: int
    title: str
    state: str  # "open", "closed"


@dataclass
class PullRequest:
    """Pull request snapshot with its resolved bug links."""

    number: int
    repository: str  # "owner/name"
    target_branch: str
    description: str | None
    milestone: Milestone | None = None
    issues: list[Bug] = field(default_factory=list)
    url: str | None = None

    @property
    def bug_ids(self) -> list[int]:
        """Bugzilla ids referenced in the description."""
        return links.bugzilla_ids(self.description)

    @property
    def has_bug_link(self) -> bool:
        return links.has_bug_link(self.description)

    @property
    def has_bugzilla_link(self) -> bool:
        return links.has_bugzilla_link(self.description)

    @property
    def has_related_pull_request(self) -> bool:
        return links.has_related_pull_request(self.description)

    @property
    def is_upstream_required(self) -> bool:
        return links.is_upstream_required(self.description)

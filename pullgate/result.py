"""
Merge verdict accumulator.

A ``Result`` is immutable: every operation returns a new value. Once a
result is not mergeable no operation makes it mergeable again, and
complaints are only ever appended.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Result:
    """Verdict for a single pull request."""

    mergeable: bool = True
    complaints: tuple[str, ...] = ()

    def add_complaint(self, complaint: str) -> "Result":
        """Record a complaint without changing the verdict."""
        return replace(self, complaints=(*self.complaints, complaint))

    def mark_not_mergeable(self, complaint: str | None = None) -> "Result":
        """
        Mark the pull request as not mergeable.

        Args:
            complaint: Optional complaint appended to the existing ones

        Returns:
            New Result with mergeable=False
        """
        result = replace(self, mergeable=False)
        if complaint is not None:
            result = result.add_complaint(complaint)
        return result

    @property
    def description(self) -> str:
        """Complaints joined one per line."""
        return "\n".join(self.complaints)


class ComplaintMessages:
    """Complaint texts posted on pull requests that fail the merge policy."""

    MISSING_BUG = "Missing bug reference: the description must link a Bugzilla bug."
    MISSING_UPSTREAM = (
        "Missing upstream reference: the description must link the related upstream "
        "pull request, or state that no upstream is required."
    )
    NO_MATCHING_BUG = "No linked bug matches this branch's release."

    @staticmethod
    def multiple_releases(bug_id: int) -> str:
        return f"Bug {bug_id} has multiple or no target releases."

    @staticmethod
    def milestone_not_set(bug_id: int) -> str:
        return f"Milestone not set on bug {bug_id}."

    @staticmethod
    def milestone_not_exist_or_closed(title: str) -> str:
        return f"Milestone '{title}' does not exist or is closed."

    @staticmethod
    def milestone_doesnt_match(current: str, expected: str) -> str:
        return f"Milestone '{current}' does not match expected milestone '{expected}'."


__all__ = ["Result", "ComplaintMessages"]

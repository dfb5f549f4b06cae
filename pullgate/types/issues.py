"""Issue tracker data models."""

from dataclasses import dataclass, field


@dataclass
class Bug:
    """Bugzilla record linked from a pull request description."""

    bug_id: int
    fix_versions: list[str] = field(default_factory=list)
    target_milestone: str = "---"
    summary: str | None = None
    status: str | None = None
    url: str | None = None

    @property
    def releases(self) -> list[str]:
        """Distinct fix versions, in their original order."""
        return list(dict.fromkeys(self.fix_versions))

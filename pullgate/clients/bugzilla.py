"""Bugzilla REST resource client."""

from typing import TYPE_CHECKING, Any

from pullgate.types import Bug

if TYPE_CHECKING:
    from pullgate.transport import HTTPTransport

_BUG_FIELDS = "id,summary,status,target_release,target_milestone"


class BugzillaClient:
    """Client for Bugzilla bug lookups."""

    def __init__(self, transport: "HTTPTransport", api_key: str | None = None) -> None:
        """
        Initialize the Bugzilla client.

        Args:
            transport: HTTP transport for making requests
            api_key: Optional API key for private bugs
        """
        self.transport = transport
        self.api_key = api_key

    def get_bugs(self, bug_ids: list[int]) -> list[Bug]:
        """
        Fetch bugs by id.

        Bugs the tracker does not return (missing or private) are omitted.

        Args:
            bug_ids: Bug ids to fetch

        Returns:
            Bugs in the order requested
        """
        if not bug_ids:
            return []

        params: dict[str, str] = {
            "id": ",".join(str(bug_id) for bug_id in bug_ids),
            "include_fields": _BUG_FIELDS,
        }
        if self.api_key:
            params["Bugzilla_api_key"] = self.api_key

        response = self.transport.request(method="GET", path="/rest/bug", params=params)

        data = response or {}
        bugs = {bug.bug_id: bug for bug in map(self._parse_bug, data.get("bugs", []))}
        return [bugs[bug_id] for bug_id in bug_ids if bug_id in bugs]

    def _parse_bug(self, data: dict[str, Any]) -> Bug:
        """Parse bug data from API response."""
        # target_release is a list on multi-valued trackers, a string otherwise
        target_release = data.get("target_release") or []
        if isinstance(target_release, str):
            target_release = [target_release]

        bug_id = int(data["id"])
        return Bug(
            bug_id=bug_id,
            fix_versions=[release for release in target_release if release != "---"],
            target_milestone=data.get("target_milestone") or "---",
            summary=data.get("summary"),
            status=data.get("status"),
            url=f"{self.transport.base_url}/show_bug.cgi?id={bug_id}",
        )

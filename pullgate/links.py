"""
Pull request description link parsing.

Recognizes the references a release-process pull request description
carries: Bugzilla and JIRA bug links, links to a related (upstream) pull
request, and the marker that waives the upstream requirement.
"""

import re

BUGZILLA_LINK = re.compile(
    r"https?://bugzilla\.redhat\.com/show_bug\.cgi\?id=(?P<bug_id>\d+)",
    re.IGNORECASE,
)

JIRA_LINK = re.compile(
    r"https?://issues\.(?:jboss|redhat)\.(?:org|com)/browse/(?P<key>[A-Z][A-Z0-9]+-\d+)",
    re.IGNORECASE,
)

RELATED_PULL_REQUEST = re.compile(
    r"https?://github\.com/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/pull/(?P<number>\d+)",
    re.IGNORECASE,
)

UPSTREAM_NOT_REQUIRED = re.compile(
    r"\bno\b.*\bupstream\b.*\brequired|\bupstream\s+(?:is\s+)?not\s+required",
    re.IGNORECASE | re.DOTALL,
)


def bugzilla_ids(description: str | None) -> list[int]:
    """
    Extract Bugzilla bug ids from a description, in order of appearance.

    Duplicate references are reported once.
    """
    if not description:
        return []
    ids: list[int] = []
    for match in BUGZILLA_LINK.finditer(description):
        bug_id = int(match.group("bug_id"))
        if bug_id not in ids:
            ids.append(bug_id)
    return ids


def jira_keys(description: str | None) -> list[str]:
    """Extract JIRA issue keys from a description."""
    if not description:
        return []
    keys: list[str] = []
    for match in JIRA_LINK.finditer(description):
        key = match.group("key").upper()
        if key not in keys:
            keys.append(key)
    return keys


def has_bugzilla_link(description: str | None) -> bool:
    return bool(description) and BUGZILLA_LINK.search(description) is not None


def has_bug_link(description: str | None) -> bool:
    """True when the description links any supported or unsupported tracker."""
    if not description:
        return False
    return BUGZILLA_LINK.search(description) is not None or JIRA_LINK.search(description) is not None


def has_related_pull_request(description: str | None) -> bool:
    return bool(description) and RELATED_PULL_REQUEST.search(description) is not None


def is_upstream_required(description: str | None) -> bool:
    """Upstream is required unless the description waives it explicitly."""
    if not description:
        return True
    return UPSTREAM_NOT_REQUIRED.search(description) is None


__all__ = [
    "BUGZILLA_LINK",
    "JIRA_LINK",
    "RELATED_PULL_REQUEST",
    "UPSTREAM_NOT_REQUIRED",
    "bugzilla_ids",
    "jira_keys",
    "has_bugzilla_link",
    "has_bug_link",
    "has_related_pull_request",
    "is_upstream_required",
]

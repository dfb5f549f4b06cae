"""Resource clients for the hosting system and the issue tracker."""

from pullgate.clients.bugzilla import BugzillaClient
from pullgate.clients.github import GitHubClient

__all__ = [
    "BugzillaClient",
    "GitHubClient",
]

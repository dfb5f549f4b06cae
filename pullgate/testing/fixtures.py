"""
Pytest fixtures for pullgate testing.

Provides factories and fixtures for testing code that uses the merge
policy evaluator.
"""

from typing import Any, Generator

import pytest

from pullgate.config import EvaluatorConfig
from pullgate.evaluator import Evaluator
from pullgate.testing.mock import MockHostingClient
from pullgate.types import Bug, Milestone, PullRequest

BUGZILLA_URL = "https://bugzilla.redhat.com/show_bug.cgi?id={}"
UPSTREAM_URL = "https://github.com/wildfly/wildfly/pull/{}"


# ============================================================================
# Factories
# ============================================================================


def create_mock_milestone(
    title: str = "1.3.GA",
    state: str = "open",
    number: int = 1,
) -> Milestone:
    """
    Create a Milestone with customizable fields.

    Args:
        title: Milestone title
        state: "open" or "closed"
        number: Milestone number

    Returns:
        Milestone object
    """
    return Milestone(number=number, title=title, state=state)


def create_mock_bug(
    bug_id: int = 1001,
    fix_versions: list[str] | None = None,
    target_milestone: str = "GA",
    **kwargs: Any,
) -> Bug:
    """
    Create a Bug with customizable fields.

    Args:
        bug_id: Bug id
        fix_versions: Fix versions (default: ["1.3"])
        target_milestone: Target milestone
        **kwargs: Additional fields to override

    Returns:
        Bug object
    """
    defaults: dict[str, Any] = {
        "summary": f"Sample bug {bug_id}",
        "status": "ASSIGNED",
        "url": BUGZILLA_URL.format(bug_id),
    }
    defaults.update(kwargs)
    return Bug(
        bug_id=bug_id,
        fix_versions=["1.3"] if fix_versions is None else fix_versions,
        target_milestone=target_milestone,
        **defaults,
    )


def create_mock_pull_request(
    number: int = 42,
    target_branch: str = "1.x",
    issues: list[Bug] | None = None,
    description: str | None = None,
    milestone: Milestone | None = None,
    **kwargs: Any,
) -> PullRequest:
    """
    Create a PullRequest with customizable fields.

    Unless a description is given, one is generated that links every
    issue on Bugzilla and states that no upstream is required.

    Args:
        number: Pull request number
        target_branch: Target branch title
        issues: Linked bugs (default: one create_mock_bug())
        description: Description text
        milestone: Current milestone
        **kwargs: Additional fields to override

    Returns:
        PullRequest object
    """
    if issues is None:
        issues = [create_mock_bug()]
    if description is None:
        lines = [f"Fixes {bug.url or BUGZILLA_URL.format(bug.bug_id)}" for bug in issues]
        lines.append("No upstream required.")
        description = "\n".join(lines)

    defaults: dict[str, Any] = {
        "repository": "jbossas/jboss-eap",
        "url": f"https://github.com/jbossas/jboss-eap/pull/{number}",
    }
    defaults.update(kwargs)
    return PullRequest(
        number=number,
        target_branch=target_branch,
        description=description,
        milestone=milestone,
        issues=issues,
        **defaults,
    )


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_hosting() -> Generator[MockHostingClient, None, None]:
    """
    Provide a MockHostingClient with two branches and an open 1.3.GA milestone.

    Example:
        ```python
        def test_my_policy(mock_hosting, sample_pull_request):
            Evaluator(mock_hosting).evaluate(sample_pull_request)
            assert mock_hosting.was_called("set_milestone")
        ```
    """
    client = MockHostingClient(
        branches=["main", "1.x"],
        milestones=[
            create_mock_milestone(title="1.3.GA", number=1),
            create_mock_milestone(title="1.2.GA", state="closed", number=2),
            create_mock_milestone(title="1.x", number=3),
        ],
    )
    yield client
    client.reset()


@pytest.fixture
def evaluator_config() -> EvaluatorConfig:
    """Provide the default evaluator configuration."""
    return EvaluatorConfig()


@pytest.fixture
def evaluator(mock_hosting: MockHostingClient, evaluator_config: EvaluatorConfig) -> Evaluator:
    """Provide an Evaluator bound to the mock hosting client."""
    return Evaluator(mock_hosting, evaluator_config)


# ============================================================================
# Type Fixtures
# ============================================================================


@pytest.fixture
def sample_bug() -> Bug:
    """Provide a Bug targeting release 1.3, milestone GA."""
    return create_mock_bug()


@pytest.fixture
def sample_milestone() -> Milestone:
    """Provide an open 1.3.GA milestone."""
    return create_mock_milestone()


@pytest.fixture
def sample_pull_request(sample_bug: Bug) -> PullRequest:
    """Provide a pull request on 1.x linking sample_bug, with no milestone."""
    return create_mock_pull_request(issues=[sample_bug])


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "mock_hosting",
    "evaluator_config",
    "evaluator",
    "sample_bug",
    "sample_milestone",
    "sample_pull_request",
    # Helper functions
    "create_mock_milestone",
    "create_mock_bug",
    "create_mock_pull_request",
]

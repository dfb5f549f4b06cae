"""pullgate testing utilities.

Provides a mock hosting client and fixtures for testing code that uses the
merge policy evaluator.
"""

from pullgate.testing.fixtures import (
    create_mock_bug,
    create_mock_milestone,
    create_mock_pull_request,
)
from pullgate.testing.mock import MockCall, MockHostingClient, MockResponse

__all__ = [
    # Mock client
    "MockHostingClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_bug",
    "create_mock_milestone",
    "create_mock_pull_request",
]

"""
Pytest plugin for pullgate testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["pullgate.testing.conftest"]

Or import the fixtures directly:

    from pullgate.testing.fixtures import mock_hosting, sample_pull_request
"""

# Re-export all fixtures for pytest auto-discovery
from pullgate.testing.fixtures import (
    evaluator,
    evaluator_config,
    mock_hosting,
    sample_bug,
    sample_milestone,
    sample_pull_request,
)

__all__ = [
    "mock_hosting",
    "evaluator_config",
    "evaluator",
    "sample_bug",
    "sample_milestone",
    "sample_pull_request",
]

"""pullgate type definitions.

This module exports the data model types shared by the evaluator and its
collaborators.
"""

from pullgate.types.issues import Bug
from pullgate.types.pulls import Milestone, PullRequest

__all__ = [
    # Hosting system
    "PullRequest",
    "Milestone",
    # Issue tracker
    "Bug",
]

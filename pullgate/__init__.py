"""pullgate - merge policy evaluator for release-process pull requests."""

from pullgate.branches import branch_regex, release_matches
from pullgate.config import EvaluatorConfig
from pullgate.connector import RemoteHostingClient
from pullgate.evaluator import BugEvaluation, Evaluator
from pullgate.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PullGateError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from pullgate.hosting import HostingClient
from pullgate.logging import configure_logging, get_logger
from pullgate.processor import ProcessOutcome, Processor
from pullgate.result import ComplaintMessages, Result
from pullgate.transport import HTTPTransport, RetryConfig
from pullgate.types import Bug, Milestone, PullRequest

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Policy
    "Evaluator",
    "EvaluatorConfig",
    "BugEvaluation",
    "Result",
    "ComplaintMessages",
    "branch_regex",
    "release_matches",
    # Processing
    "Processor",
    "ProcessOutcome",
    # Collaborators
    "HostingClient",
    "RemoteHostingClient",
    # Types
    "PullRequest",
    "Milestone",
    "Bug",
    # Exceptions
    "PullGateError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]

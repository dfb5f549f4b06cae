"""
Batch processing of open pull requests.

Evaluates every open pull request in the order the hosting system returns
them and posts the complaints of those that fail the merge policy.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from pullgate.evaluator import Evaluator
from pullgate.exceptions import PullGateError
from pullgate.hosting import HostingClient
from pullgate.logging import get_logger
from pullgate.result import Result
from pullgate.types import PullRequest

logger = get_logger("processor")

COMPLAINT_HEADER = "This pull request does not satisfy the merge policy:"


@dataclass
class ProcessOutcome:
    """Outcome of processing a single pull request."""

    pull_request: PullRequest
    result: Result | None
    error: PullGateError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def format_complaint(result: Result) -> str:
    """Render a verdict's complaints as a pull request comment."""
    lines = [COMPLAINT_HEADER, ""]
    lines.extend(f"- {complaint}" for complaint in result.complaints)
    return "\n".join(lines)


class Processor:
    """
    Runs the merge policy over all open pull requests.

    A collaborator failure while processing one pull request is logged and
    recorded in its outcome; the remaining pull requests are still
    processed.
    """

    def __init__(self, hosting: HostingClient, evaluator: Evaluator | None = None) -> None:
        self.hosting = hosting
        self.evaluator = evaluator or Evaluator(hosting)

    def run(self) -> list[ProcessOutcome]:
        """
        Process every open pull request.

        Returns:
            One outcome per pull request, in processing order

        Raises:
            PullGateError: If the open pull requests cannot be listed
        """
        logger.info("Starting at: %s", _now())
        outcomes: list[ProcessOutcome] = []
        try:
            self.hosting.refresh()
            for pull_request in self.hosting.get_open_pull_requests():
                outcomes.append(self.process(pull_request))
        finally:
            logger.info("Completed at: %s", _now())
        return outcomes

    def process(self, pull_request: PullRequest) -> ProcessOutcome:
        """Evaluate one pull request and complain if it is not mergeable."""
        try:
            result = self.evaluator.evaluate(pull_request)
            if not result.mergeable:
                self.complain(pull_request, result)
            else:
                logger.info("No complaints")
        except PullGateError as e:
            logger.exception(
                "Failed to process pull request %s#%s",
                pull_request.repository,
                pull_request.number,
            )
            return ProcessOutcome(pull_request=pull_request, result=None, error=e)
        return ProcessOutcome(pull_request=pull_request, result=result)

    def complain(self, pull_request: PullRequest, result: Result) -> None:
        self.hosting.post_comment(pull_request, format_complaint(result))


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

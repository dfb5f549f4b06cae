"""
Merge policy evaluator.

Decides whether a pull request is mergeable by cross-checking its target
branch, milestone and description links against the linked Bugzilla bugs
and the milestones known to the hosting system.

The bug checks run as a pipeline of stages. Each stage receives an
immutable ``BugEvaluation`` and returns a new one; a stage ends the
pipeline by returning an evaluation with ``halted=True``. Stages that
cannot adjudicate a pull request halt without touching the result.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, replace

from pullgate.branches import branch_regex, release_matches
from pullgate.config import EvaluatorConfig
from pullgate.hosting import HostingClient
from pullgate.logging import get_logger, log_verdict
from pullgate.result import ComplaintMessages, Result
from pullgate.types import Bug, Milestone, PullRequest

logger = get_logger("evaluator")


@dataclass(frozen=True)
class BugEvaluation:
    """State carried between bug pipeline stages."""

    pull_request: PullRequest
    result: Result
    bug: Bug | None = None
    release: str | None = None
    milestone_title: str | None = None
    milestone: Milestone | None = None
    halted: bool = False

    def halt(self, result: Result | None = None) -> "BugEvaluation":
        """End the pipeline, optionally with a new result."""
        return replace(self, result=self.result if result is None else result, halted=True)


Stage = Callable[[BugEvaluation], BugEvaluation]


class Evaluator:
    """
    Merge policy for release-process pull requests.

    Example:
        ```python
        from pullgate import Evaluator, EvaluatorConfig
        from pullgate.connector import RemoteHostingClient

        with RemoteHostingClient.from_env() as hosting:
            evaluator = Evaluator(hosting, EvaluatorConfig(dry_run=True))
            for pull_request in hosting.get_open_pull_requests():
                result = evaluator.evaluate(pull_request)
                print(pull_request.number, result.mergeable, result.complaints)
        ```
    """

    def __init__(
        self,
        hosting: HostingClient,
        config: EvaluatorConfig | None = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            hosting: Collaborator providing branches, milestones and mutations
            config: Tracker and hosting conventions (default: EvaluatorConfig())
        """
        self.hosting = hosting
        self.config = config or EvaluatorConfig()

    @property
    def bug_stages(self) -> list[Stage]:
        """Bug pipeline stages, in evaluation order."""
        return [
            self._require_bug_link,
            self._require_bugzilla_link,
            self._select_bug,
            self._require_single_release,
            self._derive_milestone_title,
            self._require_usable_milestone,
            self._reconcile_milestone,
        ]

    def evaluate(self, pull_request: PullRequest) -> Result:
        """
        Evaluate a pull request against the merge policy.

        Args:
            pull_request: Pull request; its linked bugs are resolved through
                the hosting collaborator after the on-hold check

        Returns:
            Result with the verdict and complaints, in the order recorded

        Raises:
            PullGateError: Propagated from the hosting collaborator
        """
        logger.info(
            "Evaluating pull request %s#%s", pull_request.repository, pull_request.number
        )

        milestone = pull_request.milestone
        if milestone is not None and milestone.title == self.config.hold_milestone:
            logger.info("Milestone '%s'. Skipping checks.", milestone.title)
            return Result()

        self.hosting.resolve_issues(pull_request)
        result = self.evaluate_bugs(pull_request, Result())

        if pull_request.is_upstream_required:
            if not pull_request.has_related_pull_request:
                result = result.mark_not_mergeable(ComplaintMessages.MISSING_UPSTREAM)
        else:
            logger.info("Upstream not required")

        log_verdict(pull_request.repository, pull_request.number, result)
        return result

    def evaluate_bugs(self, pull_request: PullRequest, result: Result) -> Result:
        """
        Run the bug pipeline.

        Args:
            pull_request: Pull request under evaluation
            result: Verdict accumulated so far

        Returns:
            The input result when the pull request cannot be adjudicated,
            otherwise the result extended with any complaints
        """
        evaluation = BugEvaluation(pull_request=pull_request, result=result)
        for stage in self.bug_stages:
            evaluation = stage(evaluation)
            if evaluation.halted:
                break
        return evaluation.result

    def branch_regex(self, pull_request: PullRequest) -> re.Pattern[str] | None:
        """Release pattern for the pull request's target branch."""
        return branch_regex(
            pull_request.target_branch,
            len(self.hosting.get_branches()),
            self.config.wildcard,
        )

    def valid_bugs(self, pull_request: PullRequest) -> list[Bug]:
        """Linked bugs with at least one fix version matching the target branch."""
        pattern = self.branch_regex(pull_request)
        if pattern is None:
            logger.info(
                "Branch matching pattern is unusable for branch '%s'",
                pull_request.target_branch,
            )
            return []

        return [
            bug
            for bug in pull_request.issues
            if any(release_matches(pattern, release) for release in bug.fix_versions)
        ]

    def is_bug_milestone_set(self, bug: Bug) -> bool:
        return bug.target_milestone not in self.config.unset_milestone_sentinels

    def find_milestone(self, title: str) -> Milestone | None:
        """Find a hosting milestone by exact title. Returns None if it doesn't exist."""
        for milestone in self.hosting.get_milestones():
            if milestone.title == title:
                return milestone
        return None

    def is_milestone_usable(self, milestone: Milestone | None) -> bool:
        return milestone is not None and milestone.state != self.config.closed_state

    def set_milestone(self, pull_request: PullRequest, milestone: Milestone) -> None:
        """
        Assign a milestone and report the change on the pull request.

        In dry run the assignment is skipped and only the report is posted.
        """
        if self.config.dry_run:
            logger.info(
                "Dry run: would change milestone of %s#%s to '%s'",
                pull_request.repository,
                pull_request.number,
                milestone.title,
            )
            self.hosting.post_comment(
                pull_request, f"Milestone would be changed to '{milestone.title}' (dry run)"
            )
            return

        self.hosting.set_milestone(pull_request, milestone)
        logger.info(
            "Changed milestone of %s#%s to '%s'",
            pull_request.repository,
            pull_request.number,
            milestone.title,
        )
        self.hosting.post_comment(pull_request, f"Milestone changed to '{milestone.title}'")

    # ------------------------------------------------------------------
    # Bug pipeline stages
    # ------------------------------------------------------------------

    def _require_bug_link(self, evaluation: BugEvaluation) -> BugEvaluation:
        if not evaluation.pull_request.has_bug_link:
            return evaluation.halt(
                evaluation.result.mark_not_mergeable(ComplaintMessages.MISSING_BUG)
            )
        return evaluation

    def _require_bugzilla_link(self, evaluation: BugEvaluation) -> BugEvaluation:
        # JIRA references cannot be validated yet.
        if not evaluation.pull_request.has_bugzilla_link:
            logger.info("JIRA link in description. Currently unable to handle.")
            return evaluation.halt()
        return evaluation

    def _select_bug(self, evaluation: BugEvaluation) -> BugEvaluation:
        matches = self.valid_bugs(evaluation.pull_request)
        if not matches:
            return evaluation.halt(
                evaluation.result.mark_not_mergeable(ComplaintMessages.NO_MATCHING_BUG)
            )
        if len(matches) > 1:
            logger.info(
                "Bugs %s all match branch '%s'. Unable to choose one.",
                ", ".join(str(bug.bug_id) for bug in matches),
                evaluation.pull_request.target_branch,
            )
            return evaluation.halt()

        bug = matches[0]
        logger.info("Using bug id '%s' as matching bug.", bug.bug_id)
        return replace(evaluation, bug=bug)

    def _require_single_release(self, evaluation: BugEvaluation) -> BugEvaluation:
        bug = evaluation.bug
        if bug is None:
            return evaluation.halt()
        releases = bug.releases
        if len(releases) != 1:
            return evaluation.halt(
                evaluation.result.mark_not_mergeable(
                    ComplaintMessages.multiple_releases(bug.bug_id)
                )
            )
        return replace(evaluation, release=releases[0])

    def _derive_milestone_title(self, evaluation: BugEvaluation) -> BugEvaluation:
        bug = evaluation.bug
        if bug is None:
            return evaluation.halt()
        if self.is_bug_milestone_set(bug):
            return replace(
                evaluation, milestone_title=f"{evaluation.release}.{bug.target_milestone}"
            )

        return replace(
            evaluation,
            result=evaluation.result.mark_not_mergeable(
                ComplaintMessages.milestone_not_set(bug.bug_id)
            ),
            milestone_title=evaluation.pull_request.target_branch,
        )

    def _require_usable_milestone(self, evaluation: BugEvaluation) -> BugEvaluation:
        title = evaluation.milestone_title
        if title is None:
            return evaluation.halt()
        milestone = self.find_milestone(title)
        if not self.is_milestone_usable(milestone):
            return evaluation.halt(
                evaluation.result.mark_not_mergeable(
                    ComplaintMessages.milestone_not_exist_or_closed(title)
                )
            )
        return replace(evaluation, milestone=milestone)

    def _reconcile_milestone(self, evaluation: BugEvaluation) -> BugEvaluation:
        pull_request = evaluation.pull_request
        milestone = evaluation.milestone
        if milestone is None:
            return evaluation.halt()
        current = pull_request.milestone
        wildcard = self.config.wildcard

        if current is None:
            self.set_milestone(pull_request, milestone)
        elif wildcard in current.title and wildcard not in milestone.title:
            self.set_milestone(pull_request, milestone)
        elif current.title != milestone.title:
            return evaluation.halt(
                evaluation.result.mark_not_mergeable(
                    ComplaintMessages.milestone_doesnt_match(current.title, milestone.title)
                )
            )
        else:
            logger.info("Milestone already matches bug milestone.")
        return evaluation

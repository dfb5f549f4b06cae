"""
Tests for batch processing of open pull requests.

Feature: pullgate
"""

import logging

import pytest

from pullgate.evaluator import Evaluator
from pullgate.exceptions import NotFoundError, ServerError
from pullgate.processor import COMPLAINT_HEADER, Processor, format_complaint
from pullgate.result import ComplaintMessages, Result
from pullgate.testing import MockHostingClient, create_mock_bug, create_mock_pull_request


def test_format_complaint() -> None:
    result = Result().mark_not_mergeable("first").mark_not_mergeable("second")

    assert format_complaint(result) == f"{COMPLAINT_HEADER}\n\n- first\n- second"


class TestProcessor:
    """Tests for Processor.run()."""

    def test_complains_only_on_unmergeable(self, mock_hosting: MockHostingClient) -> None:
        good = create_mock_pull_request(number=1)
        bad = create_mock_pull_request(number=2, description="Typo fix", issues=[])
        mock_hosting.pull_requests = [good, bad]

        outcomes = Processor(mock_hosting).run()

        assert [outcome.pull_request.number for outcome in outcomes] == [1, 2]
        assert outcomes[0].result == Result()
        assert outcomes[1].result is not None
        assert not outcomes[1].result.mergeable
        complaints = [text for number, text in mock_hosting.comments if number == 2]
        assert len(complaints) == 1
        assert ComplaintMessages.MISSING_BUG in complaints[0]
        assert all(
            text.startswith("Milestone changed")
            for number, text in mock_hosting.comments
            if number == 1
        )

    def test_refreshes_before_listing(self, mock_hosting: MockHostingClient) -> None:
        Processor(mock_hosting).run()

        methods = [call.method for call in mock_hosting.get_calls()]
        assert methods[:2] == ["refresh", "get_open_pull_requests"]

    def test_failure_is_isolated_per_pull_request(
        self, mock_hosting: MockHostingClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        failing = create_mock_pull_request(number=1)
        skipped = create_mock_pull_request(number=2, description="Typo fix", issues=[])
        mock_hosting.pull_requests = [failing, skipped]
        mock_hosting.configure_set_milestone(error=ServerError("HTTP_502", "Bad gateway"))

        with caplog.at_level(logging.ERROR, logger="pullgate"):
            outcomes = Processor(mock_hosting).run()

        assert outcomes[0].failed
        assert isinstance(outcomes[0].error, ServerError)
        assert outcomes[0].result is None
        assert not outcomes[1].failed
        assert mock_hosting.comments[-1][0] == 2
        assert "Failed to process pull request jbossas/jboss-eap#1" in caplog.text

    def test_bug_lookup_failure_is_isolated(self, mock_hosting: MockHostingClient) -> None:
        first = create_mock_pull_request(number=1)
        second = create_mock_pull_request(number=2)
        mock_hosting.pull_requests = [first, second]
        mock_hosting.configure_resolve_issues(
            error=NotFoundError("101", "Bug #999999999 does not exist.")
        )

        outcomes = Processor(mock_hosting).run()

        assert mock_hosting.call_count("resolve_issues") == 2
        assert all(outcome.failed for outcome in outcomes)
        assert [outcome.pull_request.number for outcome in outcomes] == [1, 2]

    def test_listing_failure_propagates(self, mock_hosting: MockHostingClient) -> None:
        mock_hosting.configure_pull_requests(error=NotFoundError("HTTP_404", "Not Found"))

        with pytest.raises(NotFoundError):
            Processor(mock_hosting).run()

    def test_logs_start_and_completion(
        self, mock_hosting: MockHostingClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="pullgate"):
            Processor(mock_hosting).run()

        assert "Starting at:" in caplog.text
        assert "Completed at:" in caplog.text

    def test_uses_given_evaluator(self, mock_hosting: MockHostingClient) -> None:
        evaluator = Evaluator(mock_hosting)
        processor = Processor(mock_hosting, evaluator)

        assert processor.evaluator is evaluator

    def test_ambiguous_bugs_are_not_complained_about(
        self, mock_hosting: MockHostingClient
    ) -> None:
        mock_hosting.pull_requests = [
            create_mock_pull_request(
                issues=[create_mock_bug(bug_id=1), create_mock_bug(bug_id=2)]
            )
        ]

        outcomes = Processor(mock_hosting).run()

        assert outcomes[0].result == Result()
        assert mock_hosting.comments == []

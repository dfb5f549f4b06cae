"""
Property-based tests for the verdict accumulator.

Feature: pullgate
"""

import dataclasses

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pullgate.result import ComplaintMessages, Result

complaint_strategy = st.text(min_size=1, max_size=50)
operation_strategy = st.lists(
    st.tuples(st.sampled_from(["add", "mark"]), complaint_strategy),
    max_size=10,
)


@given(operations=operation_strategy)
@settings(max_examples=100)
def test_property_not_mergeable_is_sticky(operations: list[tuple[str, str]]) -> None:
    """
    Property: sticky not-mergeable

    For any sequence of operations applied after mark_not_mergeable, the
    result SHALL stay not mergeable and keep every earlier complaint.
    """
    result = Result().mark_not_mergeable("first")

    for operation, complaint in operations:
        if operation == "add":
            result = result.add_complaint(complaint)
        else:
            result = result.mark_not_mergeable(complaint)

    assert not result.mergeable
    assert result.complaints[0] == "first"
    assert result.complaints[1:] == tuple(complaint for _, complaint in operations)


@given(complaints=st.lists(complaint_strategy, max_size=5))
@settings(max_examples=100)
def test_property_operations_do_not_mutate(complaints: list[str]) -> None:
    """
    Property: immutability

    Operations SHALL return new results and leave the original untouched.
    """
    original = Result()

    for complaint in complaints:
        original.add_complaint(complaint)
        original.mark_not_mergeable(complaint)

    assert original == Result(mergeable=True, complaints=())


def test_fields_are_frozen() -> None:
    result = Result()

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.mergeable = False  # type: ignore[misc]


def test_add_complaint_keeps_verdict() -> None:
    result = Result().add_complaint("note")

    assert result.mergeable
    assert result.complaints == ("note",)


def test_mark_without_complaint() -> None:
    result = Result().mark_not_mergeable()

    assert not result.mergeable
    assert result.complaints == ()


def test_description_joins_complaints() -> None:
    result = Result().mark_not_mergeable("a").add_complaint("b")

    assert result.description == "a\nb"


def test_complaint_messages_name_their_subjects() -> None:
    assert "1001" in ComplaintMessages.multiple_releases(1001)
    assert "1001" in ComplaintMessages.milestone_not_set(1001)
    assert "1.3.GA" in ComplaintMessages.milestone_not_exist_or_closed("1.3.GA")
    message = ComplaintMessages.milestone_doesnt_match("1.4.GA", "1.3.GA")
    assert message.index("1.4.GA") < message.index("1.3.GA")

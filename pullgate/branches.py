"""
Branch-to-release pattern matching.

A target branch title such as ``1.x`` or ``6.4.x`` stands for a family of
releases. Only two wildcarded shapes are recognized; anything else is
reported as unusable (``None``), which callers must never treat as
"matches everything".
"""

import re

DEFAULT_WILDCARD = "x"

# Short form "<major>.x": the wildcard digit may not be lower than the
# number of already established branches.
_SHORT_FORM_LENGTH = 3
# Long form "<major>.<minor>.x": any digit sequence.
_LONG_FORM_LENGTH = 5


def branch_regex(
    target_branch: str,
    known_branches: int,
    wildcard: str = DEFAULT_WILDCARD,
) -> re.Pattern[str] | None:
    """
    Derive the release pattern for a target branch title.

    Args:
        target_branch: Target branch title (e.g., "1.x", "6.4.x")
        known_branches: Number of branches known to the hosting system
        wildcard: Placeholder character in the branch title

    Returns:
        Compiled pattern, or None when the branch title is unusable

    Example:
        ```python
        pattern = branch_regex("1.x", known_branches=2)
        assert release_matches(pattern, "1.3")
        assert not release_matches(pattern, "1.1")
        ```
    """
    if wildcard not in target_branch:
        return None

    if len(target_branch) == _SHORT_FORM_LENGTH:
        if known_branches > 9:
            return None
        digits = f"[{max(known_branches, 0)}-9]+"
    elif len(target_branch) == _LONG_FORM_LENGTH:
        digits = "[0-9]+"
    else:
        return None

    parts = [re.escape(part) for part in target_branch.split(wildcard)]
    return re.compile(digits.join(parts))


def release_matches(pattern: re.Pattern[str] | None, release: str) -> bool:
    """True when the release contains a match for the branch pattern."""
    if pattern is None:
        return False
    return pattern.search(release) is not None


__all__ = ["DEFAULT_WILDCARD", "branch_regex", "release_matches"]

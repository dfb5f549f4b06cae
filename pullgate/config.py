"""
Evaluator configuration.

Collects the tracker and hosting conventions the merge policy relies on so
the rules can run against alternate conventions.
"""

import os
from dataclasses import dataclass

from pullgate.branches import DEFAULT_WILDCARD
from pullgate.exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid {name}: {value!r}. Must be a boolean")


def _parse_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class EvaluatorConfig:
    """Conventions used by the merge policy."""

    hold_milestone: str = "on hold"
    unset_milestone_sentinels: tuple[str, ...] = ("---", "Pending")
    wildcard: str = DEFAULT_WILDCARD
    closed_state: str = "closed"
    dry_run: bool = False

    @classmethod
    def from_env(cls) -> "EvaluatorConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            PULLGATE_DRY_RUN: Skip milestone mutations (optional, default: false)
            PULLGATE_HOLD_MILESTONE: Milestone title that bypasses all checks
                (optional, default: "on hold")
            PULLGATE_UNSET_MILESTONES: Comma separated bug target milestones
                meaning "unset" (optional, default: "---,Pending")

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        defaults = cls()
        dry_run = _parse_bool(
            "PULLGATE_DRY_RUN", os.environ.get("PULLGATE_DRY_RUN", "false")
        )
        hold_milestone = os.environ.get("PULLGATE_HOLD_MILESTONE", defaults.hold_milestone)

        sentinels = defaults.unset_milestone_sentinels
        raw_sentinels = os.environ.get("PULLGATE_UNSET_MILESTONES")
        if raw_sentinels is not None:
            sentinels = _parse_list(raw_sentinels)
            if not sentinels:
                raise ConfigurationError(
                    "PULLGATE_UNSET_MILESTONES must list at least one value"
                )

        return cls(
            hold_milestone=hold_milestone,
            unset_milestone_sentinels=sentinels,
            dry_run=dry_run,
        )
